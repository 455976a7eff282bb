"""Domain entities."""

from schoolauthz.domain.entities.permission_override import PermissionOverride
from schoolauthz.domain.entities.role_permission import RolePermission
from schoolauthz.domain.entities.staff_user import StaffUser

__all__ = [
    "PermissionOverride",
    "RolePermission",
    "StaffUser",
]
