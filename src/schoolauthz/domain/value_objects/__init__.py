"""Domain value objects."""

from schoolauthz.domain.value_objects.permission_action import PermissionAction
from schoolauthz.domain.value_objects.permission_key import PermissionKey
from schoolauthz.domain.value_objects.permission_resource import PermissionResource
from schoolauthz.domain.value_objects.permission_scope import PermissionScope
from schoolauthz.domain.value_objects.permission_source import PermissionSource
from schoolauthz.domain.value_objects.staff_role import StaffRole

__all__ = [
    "PermissionAction",
    "PermissionKey",
    "PermissionResource",
    "PermissionScope",
    "PermissionSource",
    "StaffRole",
]
