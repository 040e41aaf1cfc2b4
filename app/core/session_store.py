# app/core/session_store.py

from loguru import logger
import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.config import settings


class StorageUnavailableError(RuntimeError):
    """Raised when the session backend cannot serve a read or write."""


# ----------------------------------------------------------------
# 1. SESSION-SCOPED KEY/VALUE CONTRACT
# ----------------------------------------------------------------
class SessionStore:
    """
    Key-value store scoped to a single session id.
    Mirrors the browser's sessionStorage: get / set / remove of string values.
    """

    backend_name = "abstract"

    def __init__(self, session_id: str):
        self.session_id = session_id

    async def get(self, key: str) -> str | None:
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def remove(self, key: str) -> None:
        raise NotImplementedError


# ----------------------------------------------------------------
# 2. IN-MEMORY BACKEND (dev, tests, Redis fail-over)
# ----------------------------------------------------------------
class InMemorySessionStore(SessionStore):
    backend_name = "memory"

    def __init__(self, session_id: str, buckets: dict[str, dict[str, str]]):
        super().__init__(session_id)
        self._buckets = buckets

    async def get(self, key: str) -> str | None:
        return self._buckets.get(self.session_id, {}).get(key)

    async def set(self, key: str, value: str) -> None:
        self._buckets.setdefault(self.session_id, {})[key] = value

    async def remove(self, key: str) -> None:
        bucket = self._buckets.get(self.session_id)
        if bucket is None:
            return
        bucket.pop(key, None)
        if not bucket:
            self._buckets.pop(self.session_id, None)


# ----------------------------------------------------------------
# 3. REDIS BACKEND
# ----------------------------------------------------------------
class RedisSessionStore(SessionStore):
    """
    Keys look like '<prefix>:<session_id>:<key>' and expire after the
    configured TTL, so abandoned sessions vanish like a closed tab.
    """

    backend_name = "redis"

    def __init__(self, session_id: str, client: redis.Redis, prefix: str, ttl_seconds: int):
        super().__init__(session_id)
        self._client = client
        self._prefix = prefix
        self._ttl = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{self.session_id}:{key}"

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(self._key(key))
        except RedisError as e:
            logger.error(f"Redis GET failed for session {self.session_id}: {e}")
            raise StorageUnavailableError("Session storage read failed") from e

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self._client.set(self._key(key), value, ex=self._ttl)
        except RedisError as e:
            logger.error(f"Redis SET failed for session {self.session_id}: {e}")
            raise StorageUnavailableError("Session storage write failed") from e

    async def remove(self, key: str) -> None:
        try:
            await self._client.delete(self._key(key))
        except RedisError as e:
            logger.error(f"Redis DEL failed for session {self.session_id}: {e}")
            raise StorageUnavailableError("Session storage delete failed") from e


# ----------------------------------------------------------------
# 4. BACKEND SELECTION WITH FAIL-OVER
# ----------------------------------------------------------------
class SessionBackend:
    """Builds a SessionStore for each incoming session id."""

    def __init__(self, client: redis.Redis | None = None):
        self.client = client
        self._memory: dict[str, dict[str, str]] = {}

    @property
    def name(self) -> str:
        return "redis" if self.client is not None else "memory"

    def for_session(self, session_id: str) -> SessionStore:
        if self.client is not None:
            return RedisSessionStore(
                session_id,
                self.client,
                prefix=settings.SESSION_KEY_PREFIX,
                ttl_seconds=settings.SESSION_TTL_SECONDS,
            )
        return InMemorySessionStore(session_id, self._memory)

    async def ping(self) -> bool:
        if self.client is None:
            return True
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False


def build_session_backend(redis_url: str | None) -> SessionBackend:
    if not redis_url:
        logger.warning("⚠️ REDIS_URL not found. Falling back to in-memory session storage.")
        return SessionBackend()

    try:
        logger.info("⚡ Initializing session storage with Redis")
        client = redis.from_url(redis_url, decode_responses=True, socket_connect_timeout=5)
        return SessionBackend(client)
    except Exception as e:
        logger.error(f"❌ Failed to configure Redis session storage: {e}")
        # Keep the form usable without Redis
        return SessionBackend()


session_backend = build_session_backend(settings.REDIS_URL)
