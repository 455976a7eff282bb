"""Staff user repository port (read-only)."""

from typing import Protocol

from schoolauthz.domain.entities import StaffUser
from schoolauthz.domain.value_objects import StaffRole


class StaffUserRepository(Protocol):
    """Port for looking up staff users and their roles."""

    async def get_by_id(self, user_id: str) -> StaffUser | None: ...

    async def count_by_role(self, role: StaffRole) -> int: ...

    async def count_all_by_role(self) -> dict[StaffRole, int]: ...
