"""Permission audit use case."""

from schoolauthz.application.dto.audit_dto import PermissionAuditView, RoleAuditEntry
from schoolauthz.application.ports import PermissionChecker
from schoolauthz.domain.exceptions import AuthorizationError
from schoolauthz.domain.services import override_stats, override_stats_by_user, role_stats
from schoolauthz.domain.value_objects import PermissionAction, PermissionResource, StaffRole


class GetPermissionAuditUseCase:
    """Store-wide counts: per-role provenance, affected users, grants vs denials."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str) -> PermissionAuditView:
        has_view = await self._permission_checker.check_admin(
            actor_id, PermissionResource.AUDIT_LOGS, PermissionAction.VIEW
        )
        if not has_view:
            raise AuthorizationError("User cannot view the permission audit")

        async with self._uow_factory() as uow:
            permissions = await uow.role_permissions.list_all()
            overrides = await uow.overrides.list_all()
            users_by_role = await uow.staff_users.count_all_by_role()

        by_role: dict[StaffRole, list] = {role: [] for role in StaffRole}
        for p in permissions:
            by_role[p.role].append(p)

        totals = override_stats(overrides)
        return PermissionAuditView(
            roles=[
                RoleAuditEntry(
                    role=role,
                    stats=role_stats(perms),
                    affected_users=users_by_role.get(role, 0),
                )
                for role, perms in by_role.items()
            ],
            overrides_by_user=override_stats_by_user(overrides),
            total_grants=totals.grants,
            total_denials=totals.denials,
        )
