"""Add role permission use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from schoolauthz.application.ports import PermissionCache, PermissionChecker, UnitOfWork
from schoolauthz.domain.catalog import parse_role, validate_key
from schoolauthz.domain.entities import RolePermission
from schoolauthz.domain.exceptions import AuthorizationError, DuplicatePermission
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionSource,
    StaffRole,
)

logger = logging.getLogger(__name__)


async def create_role_permission(
    uow: UnitOfWork,
    role: StaffRole,
    key: PermissionKey,
    source: PermissionSource,
    actor_id: str | None,
) -> RolePermission:
    """Compare-and-insert one role permission; raise DuplicatePermission on conflict."""
    now = datetime.now(UTC)
    permission = RolePermission(
        id=uuid4(),
        role=role,
        resource=key.resource,
        action=key.action,
        scope=key.scope,
        source=source,
        created_at=now,
        updated_at=now,
        created_by=actor_id,
        updated_by=actor_id,
    )
    created = await uow.role_permissions.create_if_absent(permission)
    if created is None:
        existing = await uow.role_permissions.find(role, key)
        raise DuplicatePermission(role, key, existing.id if existing else None)
    return created


class AddRolePermissionUseCase:
    """Add a manual permission to a role's baseline."""

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
        role: StaffRole | str,
        resource: PermissionResource | str,
        action: PermissionAction | str,
        scope: str,
    ) -> RolePermission:
        """Validate the tuple against the catalog and insert it with source=manual."""
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.ROLE_ASSIGNMENT, PermissionAction.UPDATE
        )
        if not has_admin:
            raise AuthorizationError("User cannot modify role permissions")

        staff_role = parse_role(role)
        key = validate_key(resource, action, scope)

        async with self._uow_factory() as uow:
            created = await create_role_permission(
                uow, staff_role, key, PermissionSource.MANUAL, actor_id
            )

        if self._cache is not None:
            self._cache.invalidate_role(staff_role)
        logger.info("Role %s granted %s by %s", staff_role, key, actor_id)
        return created
