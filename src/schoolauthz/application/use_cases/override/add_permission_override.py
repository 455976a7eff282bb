"""Grant or deny a capability to one user."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from schoolauthz.application.dto.user_permissions_dto import OverrideCreateInput
from schoolauthz.application.ports import PermissionCache, PermissionChecker
from schoolauthz.domain.catalog import validate_key
from schoolauthz.domain.entities import PermissionOverride
from schoolauthz.domain.exceptions import (
    AuthorizationError,
    DuplicateOverride,
    NotFound,
    ValidationError,
)
from schoolauthz.domain.value_objects import PermissionAction, PermissionResource

logger = logging.getLogger(__name__)

EFFECTS = {"grant": True, "deny": False}


class AddPermissionOverrideUseCase:
    """Create a grant or deny override.

    Overrides are never upserted: an existing override on the same tuple must be
    removed first so the audit trail stays unambiguous.
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

    async def execute(self, actor_id: str, input_data: OverrideCreateInput) -> PermissionOverride:
        has_admin = await self._permission_checker.check_admin(
            actor_id, PermissionResource.PERMISSION_OVERRIDES, PermissionAction.CREATE
        )
        if not has_admin:
            raise AuthorizationError("User cannot manage permission overrides")

        key = validate_key(input_data.resource, input_data.action, input_data.scope)
        if not isinstance(input_data.effect, str) or input_data.effect not in EFFECTS:
            raise ValidationError(
                f"Invalid effect: {input_data.effect!r}", field="effect", value=input_data.effect
            )
        if input_data.reason is not None and not isinstance(input_data.reason, str):
            raise ValidationError("Reason must be text", field="reason")
        reason = (input_data.reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required for overrides", field="reason")

        now = datetime.now(UTC)
        if input_data.expires_at is not None and input_data.expires_at <= now:
            raise ValidationError(
                "Expiry must be in the future",
                field="expiresAt",
                value=input_data.expires_at.isoformat(),
            )

        async with self._uow_factory() as uow:
            user = await uow.staff_users.get_by_id(input_data.user_id)
            if not user:
                raise NotFound("User", input_data.user_id)

            override = PermissionOverride(
                id=uuid4(),
                user_id=user.id,
                resource=key.resource,
                action=key.action,
                scope=key.scope,
                granted=EFFECTS[input_data.effect],
                reason=reason,
                granted_by=actor_id,
                granted_at=now,
                expires_at=input_data.expires_at,
            )
            created = await uow.overrides.create_if_absent(override)
            if created is None:
                existing = await uow.overrides.find(user.id, key)
                raise DuplicateOverride(user.id, key, existing.id if existing else None)

        if self._cache is not None:
            self._cache.invalidate_user(user.id)
        logger.info(
            "Override %s %s for user %s by %s: %s",
            input_data.effect,
            key,
            user.id,
            actor_id,
            reason,
        )
        return created
