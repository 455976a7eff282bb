"""Permission key - the (resource, action, scope) tuple."""

from dataclasses import dataclass

from schoolauthz.domain.value_objects.permission_action import PermissionAction
from schoolauthz.domain.value_objects.permission_resource import PermissionResource
from schoolauthz.domain.value_objects.permission_scope import PermissionScope


@dataclass(frozen=True, order=True)
class PermissionKey:
    """Hashable capability tuple used as the element of effective sets."""

    resource: PermissionResource
    action: PermissionAction
    scope: PermissionScope

    def __str__(self) -> str:
        return f"{self.resource}:{self.action}:{self.scope}"

    def with_scope(self, scope: PermissionScope) -> "PermissionKey":
        return PermissionKey(resource=self.resource, action=self.action, scope=scope)
