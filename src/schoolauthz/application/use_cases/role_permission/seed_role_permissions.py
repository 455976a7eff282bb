"""Seed default role permissions use case."""

import logging
from collections.abc import Iterable

from schoolauthz.application.dto.role_permission_dto import SeedResult
from schoolauthz.application.ports import PermissionCache
from schoolauthz.application.use_cases.role_permission.add_role_permission import (
    create_role_permission,
)
from schoolauthz.domain.default_permissions import default_permissions_for
from schoolauthz.domain.exceptions import DuplicatePermission
from schoolauthz.domain.value_objects import PermissionSource, StaffRole

logger = logging.getLogger(__name__)


class SeedRolePermissionsUseCase:
    """Insert the default baseline with source=seeded. Safe to run repeatedly."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCache | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(
        self,
        roles: Iterable[StaffRole] | None = None,
        actor_id: str | None = None,
    ) -> SeedResult:
        result = SeedResult()
        for role in roles if roles is not None else list(StaffRole):
            added = 0
            async with self._uow_factory() as uow:
                for key in default_permissions_for(role):
                    try:
                        await create_role_permission(
                            uow, role, key, PermissionSource.SEEDED, actor_id
                        )
                    except DuplicatePermission:
                        result.skipped += 1
                        continue
                    added += 1
            result.added += added
            result.roles.append(role)
            if added and self._cache is not None:
                self._cache.invalidate_role(role)
            logger.info("Seeded %d permissions for %s", added, role)
        return result
