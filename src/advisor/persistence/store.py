"""Session persistence collaborators.

A SessionStore treats a Session as an opaque, fully-serialisable snapshot.
Every save is a full-state overwrite keyed by ``session_id`` (last write
wins), so re-submitting the same or an older snapshot is harmless.

Two implementations:
- InMemorySessionStore: process-local dict of JSON snapshots (default,
  and the store used in tests).
- RedisSessionStore: ``{prefix}:session:{id}`` string keys holding the JSON
  snapshot plus a ``{prefix}:sessions`` sorted set scored by
  ``last_updated_at`` for latest/list lookups.

Store failures surface as PersistenceError so the outbox can report an
"unsynced" status without knowing which backend is in use.
Unreadable snapshots raise PersistenceError from ``load`` and are skipped
(with a warning) by ``list_sessions``.
"""

from __future__ import annotations

import abc

import redis.asyncio as aioredis
import structlog
from pydantic import ValidationError

from src.advisor.config import SessionStoreBackend, Settings, get_settings
from src.advisor.interview.schemas import Session

logger = structlog.get_logger(__name__)


class PersistenceError(RuntimeError):
    """Raised when a session cannot be written to or read from storage."""

    def __init__(self, operation: str, session_id: str | None, cause: Exception) -> None:
        self.operation = operation
        self.session_id = session_id
        self.cause = cause
        super().__init__(f"Session {operation} failed for {session_id or 'latest'}: {cause}")


class SessionStore(abc.ABC):
    """Persistence contract for interview sessions."""

    @abc.abstractmethod
    async def save(self, session: Session) -> None:
        """Overwrite the stored snapshot for ``session.session_id``."""

    @abc.abstractmethod
    async def load(self, session_id: str | None = None) -> Session | None:
        """Load a session by id, or the most recently updated one when id is None."""

    @abc.abstractmethod
    async def delete(self, session_id: str) -> None:
        """Remove a stored session. Missing ids are ignored."""

    @abc.abstractmethod
    async def list_sessions(self, limit: int = 20) -> list[Session]:
        """Return up to ``limit`` sessions, most recently updated first."""


# ── In-memory ───────────────────────────────────────────────────────────────


class InMemorySessionStore(SessionStore):
    """Process-local store holding JSON snapshots.

    Stores serialised JSON rather than model instances so a caller mutating
    its Session after save cannot change what was persisted.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, str] = {}
        self._updated_at: dict[str, float] = {}

    async def save(self, session: Session) -> None:
        self._snapshots[session.session_id] = session.model_dump_json()
        self._updated_at[session.session_id] = session.last_updated_at.timestamp()

    async def load(self, session_id: str | None = None) -> Session | None:
        if session_id is None:
            ordered = self._ordered_ids()
            if not ordered:
                return None
            session_id = ordered[0]
        raw = self._snapshots.get(session_id)
        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError("load", session_id, exc) from exc

    async def delete(self, session_id: str) -> None:
        self._snapshots.pop(session_id, None)
        self._updated_at.pop(session_id, None)

    async def list_sessions(self, limit: int = 20) -> list[Session]:
        sessions: list[Session] = []
        for sid in self._ordered_ids()[:limit]:
            try:
                sessions.append(Session.model_validate_json(self._snapshots[sid]))
            except ValidationError as exc:
                logger.warning("session_store.corrupt_snapshot", session_id=sid, error=str(exc))
        return sessions

    def _ordered_ids(self) -> list[str]:
        return sorted(self._updated_at, key=lambda sid: self._updated_at[sid], reverse=True)


# ── Redis ───────────────────────────────────────────────────────────────────

_redis_pool: aioredis.Redis | None = None


def get_redis_pool() -> aioredis.Redis:
    """Get or create the Redis connection pool singleton."""
    global _redis_pool
    if _redis_pool is None:
        settings = get_settings()
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
        )
    return _redis_pool


class RedisSessionStore(SessionStore):
    """Redis-backed session store.

    Args:
        redis_client: Async Redis client created with ``decode_responses=True``.
        prefix: Key namespace (``SESSION_KEY_PREFIX``).
        ttl_seconds: Expiry applied to every snapshot; 0 disables expiry.
    """

    def __init__(
        self,
        redis_client: aioredis.Redis,
        *,
        prefix: str = "advisor",
        ttl_seconds: int = 0,
    ) -> None:
        self._redis = redis_client
        self._prefix = prefix
        self._ttl = ttl_seconds

    def _key(self, session_id: str) -> str:
        """Generate a session key: {prefix}:session:{session_id}."""
        return f"{self._prefix}:session:{session_id}"

    @property
    def _index_key(self) -> str:
        return f"{self._prefix}:sessions"

    async def save(self, session: Session) -> None:
        try:
            await self._redis.set(
                self._key(session.session_id),
                session.model_dump_json(),
                ex=self._ttl or None,
            )
            await self._redis.zadd(
                self._index_key,
                {session.session_id: session.last_updated_at.timestamp()},
            )
        except aioredis.RedisError as exc:
            raise PersistenceError("save", session.session_id, exc) from exc

    async def load(self, session_id: str | None = None) -> Session | None:
        try:
            if session_id is None:
                latest = await self._redis.zrevrange(self._index_key, 0, 0)
                if not latest:
                    return None
                session_id = latest[0]
            raw = await self._redis.get(self._key(session_id))
        except aioredis.RedisError as exc:
            raise PersistenceError("load", session_id, exc) from exc

        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError("load", session_id, exc) from exc

    async def delete(self, session_id: str) -> None:
        try:
            await self._redis.delete(self._key(session_id))
            await self._redis.zrem(self._index_key, session_id)
        except aioredis.RedisError as exc:
            raise PersistenceError("delete", session_id, exc) from exc

    async def list_sessions(self, limit: int = 20) -> list[Session]:
        try:
            session_ids = await self._redis.zrevrange(self._index_key, 0, limit - 1)
            sessions: list[Session] = []
            for session_id in session_ids:
                raw = await self._redis.get(self._key(session_id))
                if raw is None:
                    # Snapshot expired but index entry remains
                    logger.debug("session_store.stale_index_entry", session_id=session_id)
                    continue
                try:
                    sessions.append(Session.model_validate_json(raw))
                except ValidationError as exc:
                    logger.warning(
                        "session_store.corrupt_snapshot",
                        session_id=session_id,
                        error=str(exc),
                    )
        except aioredis.RedisError as exc:
            raise PersistenceError("list", None, exc) from exc
        return sessions


def build_session_store(settings: Settings | None = None) -> SessionStore:
    """Create the SessionStore selected by ``SESSION_STORE``."""
    settings = settings or get_settings()
    if settings.SESSION_STORE == SessionStoreBackend.redis:
        return RedisSessionStore(
            get_redis_pool(),
            prefix=settings.SESSION_KEY_PREFIX,
            ttl_seconds=settings.SESSION_TTL_SECONDS,
        )
    return InMemorySessionStore()
