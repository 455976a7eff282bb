"""Role permission entity - baseline capability attached to a role."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
    PermissionSource,
    StaffRole,
)


@dataclass
class RolePermission:
    """RolePermission - (role, resource, action, scope) with provenance and audit stamps.

    role, resource and action never change after creation; only scope is updated in place.
    """

    id: UUID
    role: StaffRole
    resource: PermissionResource
    action: PermissionAction
    scope: PermissionScope
    source: PermissionSource
    created_at: datetime
    updated_at: datetime
    created_by: str | None = None
    updated_by: str | None = None

    @property
    def key(self) -> PermissionKey:
        return PermissionKey(resource=self.resource, action=self.action, scope=self.scope)
