"""User permission DTOs."""

from dataclasses import dataclass
from datetime import datetime

from schoolauthz.domain.entities import PermissionOverride, RolePermission, StaffUser
from schoolauthz.domain.services import EffectivePermissionSet, EffectiveSource
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    PermissionScope,
)


@dataclass
class OverrideCreateInput:
    """Input for granting or denying a capability to one user."""

    user_id: str
    resource: PermissionResource | str
    action: PermissionAction | str
    scope: PermissionScope | str
    effect: str  # "grant" | "deny"
    reason: str
    expires_at: datetime | None = None


@dataclass
class UserPermissionsView:
    """Role baseline, overrides and resolved set for one user."""

    user: StaffUser
    role_permissions: list[RolePermission]
    overrides: list[PermissionOverride]
    effective: EffectivePermissionSet


@dataclass
class PermissionCheckResult:
    """Answer to one entry of a batch check."""

    resource: str
    action: str
    scope: str
    granted: bool
    source: EffectiveSource | None = None
    reason: str | None = None
