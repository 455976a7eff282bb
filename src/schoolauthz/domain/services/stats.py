"""Read-only aggregates derived from the permission stores."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from schoolauthz.domain.entities import PermissionOverride, RolePermission
from schoolauthz.domain.value_objects import PermissionSource


@dataclass
class RolePermissionStats:
    """Counts for one role's permission set."""

    total: int = 0
    seeded: int = 0
    manual: int = 0
    by_resource: dict[str, int] = field(default_factory=dict)


@dataclass
class OverrideStats:
    """Grant and denial counts for one user's overrides."""

    grants: int = 0
    denials: int = 0


def role_stats(permissions: Iterable[RolePermission]) -> RolePermissionStats:
    stats = RolePermissionStats()
    by_resource: Counter[str] = Counter()
    for p in permissions:
        stats.total += 1
        if p.source == PermissionSource.SEEDED:
            stats.seeded += 1
        else:
            stats.manual += 1
        by_resource[p.resource.value] += 1
    stats.by_resource = dict(sorted(by_resource.items()))
    return stats


def override_stats(overrides: Iterable[PermissionOverride]) -> OverrideStats:
    stats = OverrideStats()
    for ov in overrides:
        if ov.granted:
            stats.grants += 1
        else:
            stats.denials += 1
    return stats


def override_stats_by_user(
    overrides: Iterable[PermissionOverride],
) -> dict[str, OverrideStats]:
    grouped: dict[str, list[PermissionOverride]] = {}
    for ov in overrides:
        grouped.setdefault(ov.user_id, []).append(ov)
    return {user_id: override_stats(items) for user_id, items in sorted(grouped.items())}
