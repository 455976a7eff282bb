"""Get role permissions use case."""

from schoolauthz.application.dto.role_permission_dto import RolePermissionsView
from schoolauthz.application.ports import PermissionChecker
from schoolauthz.domain.catalog import parse_role
from schoolauthz.domain.exceptions import AuthorizationError
from schoolauthz.domain.services import role_stats
from schoolauthz.domain.value_objects import PermissionAction, PermissionResource, StaffRole


class GetRolePermissionsUseCase:
    """Role baseline with provenance counts and the number of users holding the role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, role: StaffRole | str) -> RolePermissionsView:
        has_view = await self._permission_checker.check_admin(
            actor_id, PermissionResource.ROLE_ASSIGNMENT, PermissionAction.VIEW
        )
        if not has_view:
            raise AuthorizationError("User cannot view role permissions")

        staff_role = parse_role(role)
        async with self._uow_factory() as uow:
            permissions = await uow.role_permissions.list_by_role(staff_role)
            affected = await uow.staff_users.count_by_role(staff_role)

        permissions.sort(key=lambda p: (p.resource.value, p.action.value, p.scope.value))
        return RolePermissionsView(
            role=staff_role,
            permissions=permissions,
            stats=role_stats(permissions),
            affected_users=affected,
        )
