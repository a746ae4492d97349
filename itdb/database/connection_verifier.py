"""
Database Connection Verifier

Polls the test database with a sentinel query until it answers, backing off
between attempts, and tears the environment down when it never does.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

import asyncpg

from itdb.config.config_manager import ItDatabaseConfig
from itdb.models.verification import VerificationResult

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10
INITIAL_WAIT_MS = 500


class DatabaseConnectionError(Exception):
    """Raised when a single readiness attempt fails."""
    pass


def next_wait_ms(wait_ms: int) -> int:
    """Grow a backoff wait by half of itself, rounding halves up."""
    return wait_ms + (wait_ms + 1) // 2


class ConnectionVerifier:
    """
    Verifies that the test database accepts queries.

    The connect and sleep callables are injected so tests can drive the retry
    loop without a database or real waiting.
    """

    def __init__(
        self,
        config: ItDatabaseConfig,
        connect: Callable[..., Awaitable[Any]] = asyncpg.connect,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        max_attempts: int = MAX_ATTEMPTS,
        initial_wait_ms: int = INITIAL_WAIT_MS,
        connect_timeout: float = 10.0
    ):
        """
        Initialize ConnectionVerifier.

        Args:
            config: Test database configuration
            connect: Coroutine function opening a database connection
            sleep: Coroutine function sleeping for a number of seconds
            max_attempts: Attempts before giving up
            initial_wait_ms: Wait after the first failed attempt
            connect_timeout: Timeout of a single connection attempt in seconds
        """
        self.config = config
        self._connect = connect
        self._sleep = sleep
        self.max_attempts = max_attempts
        self.initial_wait_ms = initial_wait_ms
        self.connect_timeout = connect_timeout
        self.last_result: Optional[VerificationResult] = None

    @property
    def sentinel_query(self) -> str:
        return f"SELECT id FROM {self.config.marker_table} LIMIT 1"

    async def check_once(self) -> None:
        """
        Run the sentinel query on a fresh connection.

        Raises:
            DatabaseConnectionError: If connecting or querying fails, or the
                query does not return exactly one row
        """
        params = self.config.connection_parameters()
        connection = None
        try:
            connection = await self._connect(
                host=params.host,
                port=int(params.port),
                user=params.user,
                password=params.password,
                database=params.database,
                timeout=self.connect_timeout,
            )
            rows = await connection.fetch(self.sentinel_query)
        except DatabaseConnectionError:
            raise
        except Exception as e:
            raise DatabaseConnectionError(f"{type(e).__name__}: {e}") from e
        finally:
            if connection is not None:
                await self._close_quietly(connection)

        if len(rows) != 1:
            raise DatabaseConnectionError(f"Invalid length: expected 1 row, got {len(rows)}")

    async def _close_quietly(self, connection) -> None:
        try:
            await connection.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing connection: {e}")

    async def verify(self, on_failure: Optional[Callable[[], Awaitable[Any]]] = None) -> bool:
        """
        Wait until the database answers the sentinel query.

        Args:
            on_failure: Coroutine function called once when every attempt failed

        Returns:
            True if the database is ready (or verification is disabled),
            False if all attempts failed
        """
        result = VerificationResult()
        self.last_result = result

        if not self.config.verify_db_connection:
            result.verified = True
            result.skipped = True
            return True

        wait_ms = self.initial_wait_ms
        start = time.time()

        for attempt in range(1, self.max_attempts + 1):
            result.attempts = attempt
            try:
                await self.check_once()
            except DatabaseConnectionError as e:
                result.last_error = str(e)
                logger.debug(f"DB connection attempt {attempt}/{self.max_attempts} failed: {e}")
            else:
                result.verified = True
                result.elapsed_ms = int((time.time() - start) * 1000)
                logger.info(f"DB Connection verified in : {result.elapsed_ms} ms.")
                return True

            if attempt < self.max_attempts:
                result.waits_ms.append(wait_ms)
                await self._sleep(wait_ms / 1000)
                wait_ms = next_wait_ms(wait_ms)

        result.elapsed_ms = int((time.time() - start) * 1000)
        logger.warning(f"DB connection failed: {result.last_error}")
        if on_failure is not None:
            await on_failure()
        return False
