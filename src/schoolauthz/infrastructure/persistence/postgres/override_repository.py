"""PostgreSQL permission override repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from schoolauthz.domain.entities import PermissionOverride
from schoolauthz.domain.value_objects import (
    PermissionAction,
    PermissionKey,
    PermissionResource,
    PermissionScope,
)

_COLUMNS = (
    "id, user_id, resource, action, scope, granted, reason, granted_by, granted_at, expires_at"
)


def _to_entity(r: tuple) -> PermissionOverride:
    return PermissionOverride(
        id=r[0],
        user_id=r[1],
        resource=PermissionResource(r[2]),
        action=PermissionAction(r[3]),
        scope=PermissionScope(r[4]),
        granted=r[5],
        reason=r[6],
        granted_by=r[7],
        granted_at=r[8],
        expires_at=r[9],
    )


class PostgresPermissionOverrideRepository:
    """Override repository backed by the permission_overrides table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, override_id: UUID) -> PermissionOverride | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_overrides WHERE id = %s",
            (override_id,),
        )
        r = await cur.fetchone()
        return _to_entity(r) if r else None

    async def find(self, user_id: str, key: PermissionKey) -> PermissionOverride | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_overrides "
            "WHERE user_id = %s AND resource = %s AND action = %s AND scope = %s",
            (user_id, key.resource.value, key.action.value, key.scope.value),
        )
        r = await cur.fetchone()
        return _to_entity(r) if r else None

    async def list_by_user(self, user_id: str) -> list[PermissionOverride]:
        """List overrides for user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_overrides WHERE user_id = %s "
            "ORDER BY resource, action, scope",
            (user_id,),
        )
        return [_to_entity(r) for r in await cur.fetchall()]

    async def list_all(self) -> list[PermissionOverride]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_overrides ORDER BY user_id, resource, action"
        )
        return [_to_entity(r) for r in await cur.fetchall()]

    async def create_if_absent(self, override: PermissionOverride) -> PermissionOverride | None:
        """Insert override; the unique index decides concurrent duplicates."""
        cur = await self._conn.execute(
            f"INSERT INTO permission_overrides ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (user_id, resource, action, scope) DO NOTHING "
            "RETURNING id",
            (
                override.id,
                override.user_id,
                override.resource.value,
                override.action.value,
                override.scope.value,
                override.granted,
                override.reason,
                override.granted_by,
                override.granted_at,
                override.expires_at,
            ),
        )
        r = await cur.fetchone()
        return override if r else None

    async def delete(self, override_id: UUID) -> bool:
        cur = await self._conn.execute(
            "DELETE FROM permission_overrides WHERE id = %s",
            (override_id,),
        )
        return cur.rowcount > 0
