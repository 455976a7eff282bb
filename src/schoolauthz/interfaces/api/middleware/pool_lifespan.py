"""Pool lifespan middleware - ties the connection pool to the ASGI lifespan."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from schoolauthz.infrastructure.cache.effective_cache import EffectivePermissionCache

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the pool on startup; on shutdown closes it and drops cached permission sets."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        cache: EffectivePermissionCache | None = None,
    ) -> None:
        self._pool = pool
        self._cache = cache

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        logger.info("Database pool opened")

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        if self._cache is not None:
            self._cache.clear()
        await self._pool.close()
        logger.info("Database pool closed")
