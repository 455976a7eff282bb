"""Permission override repository port."""

from typing import Protocol
from uuid import UUID

from schoolauthz.domain.entities import PermissionOverride
from schoolauthz.domain.value_objects import PermissionKey


class PermissionOverrideRepository(Protocol):
    """Port for per-user override persistence."""

    async def get_by_id(self, override_id: UUID) -> PermissionOverride | None: ...

    async def find(self, user_id: str, key: PermissionKey) -> PermissionOverride | None: ...

    async def list_by_user(self, user_id: str) -> list[PermissionOverride]: ...

    async def list_all(self) -> list[PermissionOverride]: ...

    async def create_if_absent(self, override: PermissionOverride) -> PermissionOverride | None:
        """Insert unless the user already has an override on the tuple; None on conflict."""
        ...

    async def delete(self, override_id: UUID) -> bool: ...
