"""Role permission repository port."""

from typing import Protocol
from uuid import UUID

from schoolauthz.domain.entities import RolePermission
from schoolauthz.domain.value_objects import PermissionKey, StaffRole


class RolePermissionRepository(Protocol):
    """Port for role permission persistence."""

    async def get_by_id(self, permission_id: UUID) -> RolePermission | None: ...

    async def find(self, role: StaffRole, key: PermissionKey) -> RolePermission | None: ...

    async def list_by_role(self, role: StaffRole) -> list[RolePermission]: ...

    async def list_keys_by_role(self, role: StaffRole) -> list[tuple[str, str, str]]:
        """Raw (resource, action, scope) values as stored, including any outside the catalog."""
        ...

    async def list_all(self) -> list[RolePermission]: ...

    async def create_if_absent(self, permission: RolePermission) -> RolePermission | None:
        """Insert unless the (role, resource, action, scope) tuple exists; None on conflict."""
        ...

    async def update(self, permission: RolePermission) -> bool:
        """Persist scope/updater changes; False if the new tuple collides with another row."""
        ...

    async def delete(self, permission_id: UUID) -> bool: ...
