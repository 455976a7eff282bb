"""Permission checker port - the capability every business feature consumes."""

from typing import Protocol

from schoolauthz.domain.services import EffectivePermissionSet
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    PermissionScope,
)


class PermissionChecker(Protocol):
    """Port for answering "may user U do (resource, action, scope)?"."""

    async def check(
        self,
        user_id: str,
        resource: PermissionResource,
        action: PermissionAction,
        scope: PermissionScope = PermissionScope.ALL,
    ) -> bool: ...

    async def check_admin(
        self,
        user_id: str,
        resource: PermissionResource,
        action: PermissionAction,
    ) -> bool:
        """Like check with scope "all", but bootstrap roles always pass."""
        ...

    async def effective_for(self, user_id: str) -> EffectivePermissionSet | None:
        """Resolved set for the user, or None when the user is unknown."""
        ...
