"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    name: str = "schoolauthz",
) -> AsyncConnectionPool:
    """Build the shared pool without opening it.

    The HTTP app opens it from the ASGI lifespan; the seed command opens and
    closes its own. Connections are health-checked on checkout so a database
    restart does not surface as failed permission checks.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name=name,
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
