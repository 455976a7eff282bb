"""Remove role permission use case."""

import logging
from uuid import UUID

from schoolauthz.application.ports import PermissionCache, PermissionChecker
from schoolauthz.domain.catalog import parse_role
from schoolauthz.domain.default_permissions import TRANSVERSAL_ROLES
from schoolauthz.domain.exceptions import AuthorizationError, NotFound, ValidationError
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    PermissionSource,
    StaffRole,
)

logger = logging.getLogger(__name__)


class RemoveRolePermissionUseCase:
    """Delete a permission from a role's baseline.

    Overrides on the same tuple are left in place; a deny on a tuple the role no
    longer holds is inert.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        permission_cache: PermissionCache | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._cache = permission_cache

    async def execute(
        self,
        actor_id: str,
        permission_id: UUID,
        role: StaffRole | str | None = None,
    ) -> None:
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.ROLE_ASSIGNMENT, PermissionAction.UPDATE
        )
        if not has_admin:
            raise AuthorizationError("User cannot modify role permissions")

        expected_role = parse_role(role) if role is not None else None

        async with self._uow_factory() as uow:
            existing = await uow.role_permissions.get_by_id(permission_id)
            if not existing:
                raise NotFound("Permission", str(permission_id))
            if expected_role is not None and existing.role != expected_role:
                raise ValidationError(
                    f"Permission {permission_id} does not belong to role {expected_role}",
                    field="role",
                    value=expected_role.value,
                )
            if not await uow.role_permissions.delete(permission_id):
                raise NotFound("Permission", str(permission_id))

        if existing.role in TRANSVERSAL_ROLES and existing.source == PermissionSource.SEEDED:
            logger.warning(
                "Seeded %s permission %s deleted by %s", existing.role, existing.key, actor_id
            )
        if self._cache is not None:
            self._cache.invalidate_role(existing.role)
        logger.info("Role %s lost %s (removed by %s)", existing.role, existing.key, actor_id)
