"""Resolution engine - merges a role baseline with a user's overrides.

Everything here is pure: callers pass snapshots of the role permission store and
the override store, and get back an effective permission set.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from schoolauthz.domain.entities import PermissionOverride, RolePermission
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
)


class EffectiveSource(StrEnum):
    """Where an effective permission comes from."""

    ROLE = "role"
    GRANTED = "granted"


@dataclass(frozen=True)
class EffectivePermission:
    """One entry of an effective permission set."""

    key: PermissionKey
    source: EffectiveSource
    role_permission_id: UUID | None = None
    override_id: UUID | None = None


class EffectivePermissionSet:
    """Effective permissions keyed by (resource, action, scope) for O(1) lookup."""

    def __init__(self, entries: dict[PermissionKey, EffectivePermission] | None = None) -> None:
        self._entries: dict[PermissionKey, EffectivePermission] = dict(entries or {})

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[EffectivePermission]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> set[PermissionKey]:
        return set(self._entries)

    def get(self, key: PermissionKey) -> EffectivePermission | None:
        return self._entries.get(key)

    def match(
        self,
        resource: PermissionResource,
        action: PermissionAction,
        scope: PermissionScope,
    ) -> EffectivePermission | None:
        """Return the entry that satisfies the request, or None.

        The exact tuple is preferred; otherwise an ``all`` entry for the same
        resource/action satisfies any requested scope.
        """
        requested = PermissionKey(resource=resource, action=action, scope=scope)
        exact = self._entries.get(requested)
        if exact is not None and exact.key.scope.satisfies(scope):
            return exact
        broad = self._entries.get(requested.with_scope(PermissionScope.ALL))
        if broad is not None:
            return broad
        return None

    def allows(
        self,
        resource: PermissionResource,
        action: PermissionAction,
        scope: PermissionScope,
    ) -> bool:
        return self.match(resource, action, scope) is not None

    def sorted(self) -> list[EffectivePermission]:
        return [self._entries[k] for k in sorted(self._entries)]


def compute_effective(
    role_permissions: Iterable[RolePermission],
    overrides: Iterable[PermissionOverride],
    now: datetime | None = None,
) -> EffectivePermissionSet:
    """Effective set = (role tuples ∪ granted override tuples) − denied override tuples.

    Denies are applied after grants so a deny on a tuple always removes it, whatever
    the input order. A deny only removes its exact tuple: a deny on a narrower scope
    leaves a broader role grant in place. Overrides expired at ``now`` are ignored.
    """
    entries: dict[PermissionKey, EffectivePermission] = {}
    for rp in role_permissions:
        entries[rp.key] = EffectivePermission(
            key=rp.key, source=EffectiveSource.ROLE, role_permission_id=rp.id
        )

    active = [ov for ov in overrides if now is None or not ov.is_expired(now)]
    for ov in active:
        if ov.granted:
            entries[ov.key] = EffectivePermission(
                key=ov.key, source=EffectiveSource.GRANTED, override_id=ov.id
            )
    for ov in active:
        if not ov.granted:
            entries.pop(ov.key, None)

    return EffectivePermissionSet(entries)


def has_permission(
    effective: EffectivePermissionSet,
    resource: PermissionResource,
    action: PermissionAction,
    scope: PermissionScope,
) -> bool:
    """Membership check with scope dominance."""
    return effective.allows(resource, action, scope)
