"""Permission check use case - single and batch."""

from collections.abc import Iterable, Mapping
from typing import Any

from schoolauthz.application.dto.user_permissions_dto import PermissionCheckResult
from schoolauthz.application.ports import PermissionChecker
from schoolauthz.domain.catalog import validate_key
from schoolauthz.domain.exceptions import AuthorizationError, ValidationError
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    PermissionScope,
)


class CheckPermissionsUseCase:
    """Answer "may user U do (resource, action, scope)?" for one or many tuples.

    Users may always check themselves; checking someone else requires the
    override viewing capability.
    """

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def _authorize(self, actor_id: str, user_id: str) -> None:
        if actor_id == user_id:
            return
        has_view = await self._permission_checker.check_admin(
            actor_id, PermissionResource.PERMISSION_OVERRIDES, PermissionAction.VIEW
        )
        if not has_view:
            raise AuthorizationError("User cannot inspect other users' permissions")

    async def execute(
        self,
        actor_id: str,
        user_id: str,
        resource: Any,
        action: Any,
        scope: Any = PermissionScope.ALL,
    ) -> bool:
        await self._authorize(actor_id, user_id)
        key = validate_key(resource, action, scope)
        return await self._permission_checker.check(user_id, key.resource, key.action, key.scope)

    async def execute_batch(
        self,
        actor_id: str,
        user_id: str,
        checks: Iterable[Mapping[str, Any]],
    ) -> list[PermissionCheckResult]:
        """Evaluate every check against one effective set; invalid entries are denied."""
        await self._authorize(actor_id, user_id)
        effective = await self._permission_checker.effective_for(user_id)

        results: list[PermissionCheckResult] = []
        for check in checks:
            resource = check.get("resource")
            action = check.get("action")
            scope = check.get("scope") or PermissionScope.ALL.value
            try:
                key = validate_key(resource, action, scope)
            except ValidationError as e:
                results.append(
                    PermissionCheckResult(
                        resource=str(resource),
                        action=str(action),
                        scope=str(scope),
                        granted=False,
                        reason=str(e),
                    )
                )
                continue

            match = effective.match(key.resource, key.action, key.scope) if effective else None
            results.append(
                PermissionCheckResult(
                    resource=key.resource.value,
                    action=key.action.value,
                    scope=key.scope.value,
                    granted=match is not None,
                    source=match.source if match else None,
                    reason=None if match else (
                        "Unknown user" if effective is None else "Not in effective permissions"
                    ),
                )
            )
        return results
