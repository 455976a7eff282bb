"""In-process cache of effective permission sets."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from schoolauthz.domain.entities import StaffUser
from schoolauthz.domain.services import EffectivePermissionSet
from schoolauthz.domain.value_objects import StaffRole

logger = logging.getLogger(__name__)


@dataclass
class CachedEffective:
    user: StaffUser
    effective: EffectivePermissionSet
    valid_until: float


@dataclass(frozen=True)
class CacheVersion:
    """Invalidation counters observed before a store read."""

    user_version: int
    role_versions: dict[StaffRole, int]


class EffectivePermissionCache:
    """Effective sets keyed by user id, with a role index for broadcast invalidation.

    A role mutation drops the entry of every cached user holding that role; an
    override mutation drops only the affected user. ``ttl_seconds=0`` disables caching.

    Every invalidation also bumps a per-user or per-role counter. A reader takes
    a ``snapshot`` before loading the stores and passes it to ``put``; if an
    invalidation for that user or their role happened in between, the loaded set
    may predate the mutation and is not cached.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CachedEffective] = {}
        self._by_role: dict[StaffRole | None, set[str]] = {}
        self._user_versions: dict[str, int] = {}
        self._role_versions: dict[StaffRole, int] = {}

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, user_id: str) -> CachedEffective | None:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if entry.valid_until <= self._clock():
            self._drop(user_id)
            return None
        return entry

    def snapshot(self, user_id: str) -> CacheVersion:
        return CacheVersion(
            user_version=self._user_versions.get(user_id, 0),
            role_versions=dict(self._role_versions),
        )

    def _is_current(self, user: StaffUser, version: CacheVersion) -> bool:
        if self._user_versions.get(user.id, 0) != version.user_version:
            return False
        if user.staff_role is None:
            return True
        return self._role_versions.get(user.staff_role, 0) == version.role_versions.get(
            user.staff_role, 0
        )

    def put(
        self,
        user: StaffUser,
        effective: EffectivePermissionSet,
        max_age: float | None = None,
        version: CacheVersion | None = None,
    ) -> None:
        """Cache a set for at most the TTL, or ``max_age`` seconds if that is shorter.

        Nothing is stored when ``version`` shows an invalidation since the snapshot.
        """
        if not self.enabled:
            return
        if version is not None and not self._is_current(user, version):
            logger.debug("Not caching permission set for %s: invalidated during load", user.id)
            return
        ttl = self._ttl if max_age is None else min(self._ttl, max_age)
        if ttl <= 0:
            return
        self._drop(user.id)
        self._entries[user.id] = CachedEffective(
            user=user, effective=effective, valid_until=self._clock() + ttl
        )
        self._by_role.setdefault(user.staff_role, set()).add(user.id)

    def _drop(self, user_id: str) -> None:
        entry = self._entries.pop(user_id, None)
        if entry is None:
            return
        members = self._by_role.get(entry.user.staff_role)
        if members is not None:
            members.discard(user_id)

    def invalidate_user(self, user_id: str) -> None:
        self._user_versions[user_id] = self._user_versions.get(user_id, 0) + 1
        self._drop(user_id)

    def invalidate_role(self, role: StaffRole) -> None:
        self._role_versions[role] = self._role_versions.get(role, 0) + 1
        members = self._by_role.pop(role, set())
        for user_id in members:
            self._entries.pop(user_id, None)
        if members:
            logger.debug("Dropped %d cached permission sets for role %s", len(members), role)

    def clear(self) -> None:
        self._entries.clear()
        self._by_role.clear()
