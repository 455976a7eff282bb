"""Get user permissions use case."""

from datetime import UTC, datetime

from schoolauthz.application.dto.user_permissions_dto import UserPermissionsView
from schoolauthz.application.ports import PermissionChecker
from schoolauthz.domain.exceptions import AuthorizationError, NotFound
from schoolauthz.domain.services import compute_effective
from schoolauthz.domain.value_objects import PermissionAction, PermissionResource


class GetUserPermissionsUseCase:
    """Role baseline, overrides and effective set for one user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, user_id: str) -> UserPermissionsView:
        if actor_id != user_id:
            has_view = await self._permission_checker.check_admin(
                actor_id, PermissionResource.PERMISSION_OVERRIDES, PermissionAction.VIEW
            )
            if not has_view:
                raise AuthorizationError("User cannot view permission overrides")

        async with self._uow_factory() as uow:
            user = await uow.staff_users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)
            role_permissions = (
                await uow.role_permissions.list_by_role(user.staff_role)
                if user.staff_role
                else []
            )
            overrides = await uow.overrides.list_by_user(user_id)

        overrides.sort(key=lambda o: (o.resource.value, o.action.value, o.scope.value))
        return UserPermissionsView(
            user=user,
            role_permissions=role_permissions,
            overrides=overrides,
            effective=compute_effective(role_permissions, overrides, now=datetime.now(UTC)),
        )
