"""Permission checker implementation - resolves against the role and override stores."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from schoolauthz.domain.default_permissions import TRANSVERSAL_ROLES
from schoolauthz.domain.entities import PermissionOverride, StaffUser
from schoolauthz.domain.services import EffectivePermissionSet, compute_effective
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    PermissionScope,
    StaffRole,
)
from schoolauthz.infrastructure.cache.effective_cache import EffectivePermissionCache

logger = logging.getLogger(__name__)


def _seconds_to_next_expiry(overrides: Iterable[PermissionOverride], now: datetime) -> float | None:
    upcoming = [
        (ov.expires_at - now).total_seconds()
        for ov in overrides
        if ov.expires_at is not None and ov.expires_at > now
    ]
    return min(upcoming) if upcoming else None


class SchoolPermissionChecker:
    """Checks capabilities by merging the user's role baseline with their overrides."""

    def __init__(
        self,
        unit_of_work_factory: type,
        cache: EffectivePermissionCache | None = None,
        bootstrap_roles: Iterable[StaffRole] = TRANSVERSAL_ROLES,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = cache
        self._bootstrap_roles = frozenset(bootstrap_roles)

    async def _resolve(self, user_id: str) -> tuple[StaffUser, EffectivePermissionSet] | None:
        if self._cache is not None:
            cached = self._cache.get(user_id)
            if cached is not None:
                return cached.user, cached.effective

        version = self._cache.snapshot(user_id) if self._cache is not None else None
        async with self._uow_factory() as uow:
            user = await uow.staff_users.get_by_id(user_id)
            if not user:
                return None
            role_permissions = (
                await uow.role_permissions.list_by_role(user.staff_role)
                if user.staff_role
                else []
            )
            overrides = await uow.overrides.list_by_user(user_id)

        now = datetime.now(UTC)
        effective = compute_effective(role_permissions, overrides, now=now)
        if self._cache is not None:
            self._cache.put(
                user,
                effective,
                max_age=_seconds_to_next_expiry(overrides, now),
                version=version,
            )
        return user, effective

    async def effective_for(self, user_id: str) -> EffectivePermissionSet | None:
        resolved = await self._resolve(user_id)
        return resolved[1] if resolved else None

    async def check(
        self,
        user_id: str,
        resource: PermissionResource,
        action: PermissionAction,
        scope: PermissionScope = PermissionScope.ALL,
    ) -> bool:
        """Check if user holds (resource, action, scope), honoring scope dominance."""
        resolved = await self._resolve(user_id)
        if resolved is None:
            logger.debug("Permission check for unknown user %s", user_id)
            return False
        _, effective = resolved
        return effective.allows(resource, action, scope)

    async def check_admin(
        self,
        user_id: str,
        resource: PermissionResource,
        action: PermissionAction,
    ) -> bool:
        """Administrative check; bootstrap roles always pass so they cannot be locked out."""
        resolved = await self._resolve(user_id)
        if resolved is None:
            return False
        user, effective = resolved
        if user.staff_role in self._bootstrap_roles:
            return True
        return effective.allows(resource, action, PermissionScope.ALL)
