import asyncpg
import structlog

from podmetrics.config.constants import BACKGROUND_REFRESH_LOCK_ID

log = structlog.get_logger()


class AdvisoryRunLock:
    """Session-level Postgres advisory lock serializing background runs.

    The lock lives on a dedicated pooled connection for the duration of the
    run and is released with it, so a crashed worker frees it too.
    """

    def __init__(self, pool: asyncpg.Pool, lock_id: int = BACKGROUND_REFRESH_LOCK_ID) -> None:
        self.pool = pool
        self.lock_id = lock_id
        self._conn: asyncpg.Connection | None = None

    async def acquire(self) -> bool:
        conn = await self.pool.acquire()
        try:
            acquired = await conn.fetchval("SELECT pg_try_advisory_lock($1)", self.lock_id)
        except BaseException:
            await self.pool.release(conn)
            raise
        if not acquired:
            await self.pool.release(conn)
            return False
        self._conn = conn
        return True

    async def release(self) -> None:
        if self._conn is None:
            return
        try:
            await self._conn.execute("SELECT pg_advisory_unlock($1)", self.lock_id)
        finally:
            await self.pool.release(self._conn)
            self._conn = None
