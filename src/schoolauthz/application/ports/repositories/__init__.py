"""Repository ports."""

from schoolauthz.application.ports.repositories.override_repository import (
    PermissionOverrideRepository,
)
from schoolauthz.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)
from schoolauthz.application.ports.repositories.staff_user_repository import (
    StaffUserRepository,
)

__all__ = [
    "PermissionOverrideRepository",
    "RolePermissionRepository",
    "StaffUserRepository",
]
