"""Health check resource."""

import logging

import falcon.asgi
from psycopg_pool import AsyncConnectionPool

from schoolauthz import __version__

logger = logging.getLogger(__name__)


class HealthResource:
    """GET /v1/health - liveness; GET /v1/health/ready - database reachability."""

    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self._pool = pool

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"status": "ok", "version": __version__}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if self._pool is None:
            resp.media = {"status": "ready"}
            resp.status = falcon.HTTP_200
            return
        try:
            async with self._pool.connection(timeout=2.0) as conn:
                await conn.execute("SELECT 1")
        except Exception as e:
            logger.warning("Readiness probe failed: %s", e)
            resp.media = {"status": "unavailable"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
