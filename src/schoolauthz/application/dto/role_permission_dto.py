"""Role permission DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from schoolauthz.domain.entities import RolePermission
from schoolauthz.domain.services import RolePermissionStats
from schoolauthz.domain.value_objects import StaffRole


@dataclass
class RolePermissionsView:
    """Output DTO for a role's permission page."""

    role: StaffRole
    permissions: list[RolePermission]
    stats: RolePermissionStats
    affected_users: int


@dataclass
class BulkCopyResult:
    """Classified outcome of copying one role's permissions onto another.

    Partial success is a normal terminal state, not a failure.
    """

    source_role: StaffRole
    target_role: StaffRole
    added: list[RolePermission] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "added": len(self.added),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }


@dataclass
class BulkApplyResult:
    """Classified outcome of a bulk add/remove against one role."""

    role: StaffRole
    added: list[RolePermission] = field(default_factory=list)
    removed: list[UUID] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }


@dataclass
class SeedResult:
    """Outcome of seeding the default role baseline."""

    added: int = 0
    skipped: int = 0
    roles: list[StaffRole] = field(default_factory=list)
