"""Pure domain services."""

from schoolauthz.domain.services.resolution import (
    EffectivePermission,
    EffectivePermissionSet,
    EffectiveSource,
    compute_effective,
    has_permission,
)
from schoolauthz.domain.services.stats import (
    OverrideStats,
    RolePermissionStats,
    override_stats,
    override_stats_by_user,
    role_stats,
)

__all__ = [
    "EffectivePermission",
    "EffectivePermissionSet",
    "EffectiveSource",
    "OverrideStats",
    "RolePermissionStats",
    "compute_effective",
    "has_permission",
    "override_stats",
    "override_stats_by_user",
    "role_stats",
]
