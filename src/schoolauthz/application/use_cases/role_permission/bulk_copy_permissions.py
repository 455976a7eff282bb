"""Bulk copy role permissions use case."""

import logging

from schoolauthz.application.dto.role_permission_dto import BulkCopyResult
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


class BulkCopyPermissionsUseCase:
    """Copy every permission of one role onto another, item by item.

    Each item is inserted in its own unit of work; there is no atomicity across
    items. Tuples the target already holds are skipped, tuples outside the catalog
    are reported as errors.
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
        source_role: StaffRole | str,
        target_role: StaffRole | str,
    ) -> BulkCopyResult:
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.ROLE_ASSIGNMENT, PermissionAction.UPDATE
        )
        if not has_admin:
            raise AuthorizationError("User cannot modify role permissions")

        source = parse_role(source_role)
        target = parse_role(target_role)
        if source == target:
            raise ValidationError(
                "Source and target role must differ", field="sourceRole", value=source.value
            )

        async with self._uow_factory() as uow:
            candidates = await uow.role_permissions.list_keys_by_role(source)

        result = BulkCopyResult(source_role=source, target_role=target)
        for resource, action, scope in candidates:
            label = f"{resource}:{action}:{scope}"
            try:
                key = validate_key(resource, action, scope)
            except ValidationError as e:
                logger.warning("Skipping invalid %s permission %s: %s", source, label, e)
                result.errors.append(f"{label}: {e}")
                continue
            try:
                async with self._uow_factory() as uow:
                    created = await create_role_permission(
                        uow, target, key, PermissionSource.MANUAL, actor_id
                    )
            except DuplicatePermission:
                result.skipped.append(str(key))
                continue
            result.added.append(created)

        if result.added and self._cache is not None:
            self._cache.invalidate_role(target)
        logger.info(
            "Copied permissions %s -> %s by %s: %s",
            source,
            target,
            actor_id,
            result.summary,
        )
        return result
