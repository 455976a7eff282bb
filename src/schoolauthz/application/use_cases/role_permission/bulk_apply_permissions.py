"""Bulk add/remove role permissions use case."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from schoolauthz.application.dto.role_permission_dto import BulkApplyResult
from schoolauthz.application.ports import PermissionCache, PermissionChecker
from schoolauthz.application.use_cases.role_permission.add_role_permission import (
    create_role_permission,
)
from schoolauthz.domain.catalog import parse_role, validate_key
from schoolauthz.domain.exceptions import (
    AuthorizationError,
    DuplicatePermission,
    ValidationError,
)
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    PermissionSource,
    StaffRole,
)

logger = logging.getLogger(__name__)


class BulkApplyPermissionsUseCase:
    """Apply a batch of removals then additions to one role, best effort per item."""

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
        add: Iterable[Mapping[str, Any]] = (),
        remove: Iterable[UUID | str] = (),
    ) -> BulkApplyResult:
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.ROLE_ASSIGNMENT, PermissionAction.UPDATE
        )
        if not has_admin:
            raise AuthorizationError("User cannot modify role permissions")

        staff_role = parse_role(role)
        result = BulkApplyResult(role=staff_role)

        for raw_id in remove:
            try:
                permission_id = raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id))
            except ValueError:
                result.errors.append(f"Invalid permission id {raw_id}")
                continue
            async with self._uow_factory() as uow:
                existing = await uow.role_permissions.get_by_id(permission_id)
                if not existing:
                    result.errors.append(f"Permission {permission_id} not found")
                    continue
                if existing.role != staff_role:
                    result.errors.append(
                        f"Permission {permission_id} does not belong to {staff_role}"
                    )
                    continue
                if await uow.role_permissions.delete(permission_id):
                    result.removed.append(permission_id)
                else:
                    result.errors.append(f"Permission {permission_id} not found")

        for item in add:
            try:
                key = validate_key(item.get("resource"), item.get("action"), item.get("scope"))
            except ValidationError as e:
                result.errors.append(str(e))
                continue
            try:
                async with self._uow_factory() as uow:
                    created = await create_role_permission(
                        uow, staff_role, key, PermissionSource.MANUAL, actor_id
                    )
            except DuplicatePermission:
                result.skipped.append(str(key))
                continue
            result.added.append(created)

        if (result.added or result.removed) and self._cache is not None:
            self._cache.invalidate_role(staff_role)
        logger.info("Bulk update of %s by %s: %s", staff_role, actor_id, result.summary)
        return result
