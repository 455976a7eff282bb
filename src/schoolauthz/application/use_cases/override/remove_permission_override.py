"""Remove permission override use case."""

import logging
from uuid import UUID

from schoolauthz.application.ports import PermissionCache, PermissionChecker
from schoolauthz.domain.exceptions import AuthorizationError, NotFound, ValidationError
from schoolauthz.domain.value_objects import PermissionAction, PermissionResource

logger = logging.getLogger(__name__)


class RemovePermissionOverrideUseCase:
    """Delete an override, returning the user to the role baseline for that tuple."""

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
        override_id: UUID,
        user_id: str | None = None,
    ) -> None:
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.PERMISSION_OVERRIDES, PermissionAction.DELETE
        )
        if not has_admin:
            raise AuthorizationError("User cannot manage permission overrides")

        async with self._uow_factory() as uow:
            existing = await uow.overrides.get_by_id(override_id)
            if not existing:
                raise NotFound("Override", str(override_id))
            if user_id is not None and existing.user_id != user_id:
                raise ValidationError(
                    f"Override {override_id} does not belong to user {user_id}",
                    field="userId",
                    value=user_id,
                )
            if not await uow.overrides.delete(override_id):
                raise NotFound("Override", str(override_id))

        if self._cache is not None:
            self._cache.invalidate_user(existing.user_id)
        logger.info(
            "Override on %s for user %s removed by %s",
            existing.key,
            existing.user_id,
            actor_id,
        )
