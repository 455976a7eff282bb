"""Update role permission scope use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from schoolauthz.application.ports import PermissionCache, PermissionChecker
from schoolauthz.domain.catalog import parse_role, parse_scope
from schoolauthz.domain.entities import RolePermission
from schoolauthz.domain.exceptions import (
    AuthorizationError,
    DuplicatePermission,
    NotFound,
    ValidationError,
)
from schoolauthz.domain.value_objects import PermissionAction, PermissionResource, StaffRole

logger = logging.getLogger(__name__)


class UpdateRolePermissionScopeUseCase:
    """Change only the scope of an existing role permission."""

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
        new_scope: str,
        role: StaffRole | str | None = None,
    ) -> RolePermission:
        """Update scope and updater stamps. Role, resource and action stay as they are."""
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.ROLE_ASSIGNMENT, PermissionAction.UPDATE
        )
        if not has_admin:
            raise AuthorizationError("User cannot modify role permissions")

        scope = parse_scope(new_scope)
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

            updated = replace(
                existing,
                scope=scope,
                updated_by=actor_id,
                updated_at=datetime.now(UTC),
            )
            if not await uow.role_permissions.update(updated):
                conflict = await uow.role_permissions.find(existing.role, updated.key)
                raise DuplicatePermission(
                    existing.role, updated.key, conflict.id if conflict else None
                )

        if self._cache is not None:
            self._cache.invalidate_role(updated.role)
        logger.info(
            "Role %s permission %s scope %s -> %s by %s",
            updated.role,
            permission_id,
            existing.scope,
            scope,
            actor_id,
        )
        return updated
