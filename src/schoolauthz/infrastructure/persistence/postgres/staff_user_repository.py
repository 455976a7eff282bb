"""PostgreSQL staff user repository implementation."""

from psycopg import AsyncConnection

from schoolauthz.domain.entities import StaffUser
from schoolauthz.domain.value_objects import StaffRole


class PostgresStaffUserRepository:
    """Read-only access to staff users and their roles."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> StaffUser | None:
        """Get staff user by id."""
        cur = await self._conn.execute(
            "SELECT id, staff_role, name, email FROM staff_users WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return StaffUser(
            id=r[0],
            staff_role=StaffRole(r[1]) if r[1] else None,
            name=r[2],
            email=r[3],
        )

    async def count_by_role(self, role: StaffRole) -> int:
        """Count users currently assigned the role."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM staff_users WHERE staff_role = %s",
            (role.value,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def count_all_by_role(self) -> dict[StaffRole, int]:
        cur = await self._conn.execute(
            "SELECT staff_role, count(*) FROM staff_users "
            "WHERE staff_role IS NOT NULL GROUP BY staff_role"
        )
        return {StaffRole(r[0]): r[1] for r in await cur.fetchall()}
