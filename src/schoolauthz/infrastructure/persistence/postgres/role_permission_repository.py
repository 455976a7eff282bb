"""PostgreSQL role permission repository implementation."""

import logging
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from schoolauthz.domain.entities import RolePermission
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
    PermissionSource,
    StaffRole,
)

_COLUMNS = (
    "id, role, resource, action, scope, source, created_at, updated_at, created_by, updated_by"
)

logger = logging.getLogger(__name__)


def _to_entity(r: tuple) -> RolePermission:
    return RolePermission(
        id=r[0],
        role=StaffRole(r[1]),
        resource=PermissionResource(r[2]),
        action=PermissionAction(r[3]),
        scope=PermissionScope(r[4]),
        source=PermissionSource(r[5]),
        created_at=r[6],
        updated_at=r[7],
        created_by=r[8],
        updated_by=r[9],
    )


def _to_entities(rows: list[tuple]) -> list[RolePermission]:
    """Map rows, skipping any whose values fall outside the catalog."""
    entities = []
    for r in rows:
        try:
            entities.append(_to_entity(r))
        except ValueError as e:
            logger.warning("Ignoring role permission %s outside the catalog: %s", r[0], e)
    return entities


class PostgresRolePermissionRepository:
    """Role permission repository backed by the role_permissions table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> RolePermission | None:
        """Get role permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role_permissions WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        mapped = _to_entities([r]) if r else []
        return mapped[0] if mapped else None

    async def find(self, role: StaffRole, key: PermissionKey) -> RolePermission | None:
        """Get role permission by its unique tuple."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role_permissions "
            "WHERE role = %s AND resource = %s AND action = %s AND scope = %s",
            (role.value, key.resource.value, key.action.value, key.scope.value),
        )
        r = await cur.fetchone()
        return _to_entity(r) if r else None

    async def list_by_role(self, role: StaffRole) -> list[RolePermission]:
        """List permissions for role."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role_permissions WHERE role = %s "
            "ORDER BY resource, action, scope",
            (role.value,),
        )
        return _to_entities(await cur.fetchall())

    async def list_keys_by_role(self, role: StaffRole) -> list[tuple[str, str, str]]:
        """Raw (resource, action, scope) values for role, unvalidated."""
        cur = await self._conn.execute(
            "SELECT resource, action, scope FROM role_permissions WHERE role = %s "
            "ORDER BY resource, action, scope",
            (role.value,),
        )
        return [(r[0], r[1], r[2]) for r in await cur.fetchall()]

    async def list_all(self) -> list[RolePermission]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role_permissions ORDER BY role, resource, action, scope"
        )
        return _to_entities(await cur.fetchall())

    async def create_if_absent(self, permission: RolePermission) -> RolePermission | None:
        """Insert permission; the unique index decides concurrent duplicates."""
        cur = await self._conn.execute(
            f"INSERT INTO role_permissions ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (role, resource, action, scope) DO NOTHING "
            "RETURNING id",
            (
                permission.id,
                permission.role.value,
                permission.resource.value,
                permission.action.value,
                permission.scope.value,
                permission.source.value,
                permission.created_at,
                permission.updated_at,
                permission.created_by,
                permission.updated_by,
            ),
        )
        r = await cur.fetchone()
        return permission if r else None

    async def update(self, permission: RolePermission) -> bool:
        """Update scope and updater stamps; False when the new tuple already exists."""
        try:
            async with self._conn.transaction():
                cur = await self._conn.execute(
                    "UPDATE role_permissions SET scope = %s, updated_at = %s, updated_by = %s "
                    "WHERE id = %s",
                    (
                        permission.scope.value,
                        permission.updated_at,
                        permission.updated_by,
                        permission.id,
                    ),
                )
        except UniqueViolation:
            return False
        return cur.rowcount > 0

    async def delete(self, permission_id: UUID) -> bool:
        """Delete permission."""
        cur = await self._conn.execute(
            "DELETE FROM role_permissions WHERE id = %s",
            (permission_id,),
        )
        return cur.rowcount > 0
