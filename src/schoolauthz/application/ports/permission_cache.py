"""Permission cache port - invalidation hooks for mutations."""

from typing import Protocol

from schoolauthz.domain.value_objects import StaffRole


class PermissionCache(Protocol):
    """Port for dropping cached effective sets after a store mutation."""

    def invalidate_user(self, user_id: str) -> None: ...

    def invalidate_role(self, role: StaffRole) -> None: ...
