"""Audit DTOs."""

from dataclasses import dataclass, field

from schoolauthz.domain.services import OverrideStats, RolePermissionStats
from schoolauthz.domain.value_objects import StaffRole


@dataclass
class RoleAuditEntry:
    role: StaffRole
    stats: RolePermissionStats
    affected_users: int


@dataclass
class PermissionAuditView:
    """Store-wide aggregates for the audit dashboard."""

    roles: list[RoleAuditEntry] = field(default_factory=list)
    overrides_by_user: dict[str, OverrideStats] = field(default_factory=dict)
    total_grants: int = 0
    total_denials: int = 0
