"""Session persistence: storage collaborators and the fire-and-forget outbox.

Exports:
    SessionStore: Abstract persistence contract.
    InMemorySessionStore: Process-local store.
    RedisSessionStore: redis.asyncio-backed store.
    PersistenceError: Wrapped storage failure.
    build_session_store: Factory driven by SESSION_STORE.
    SessionOutbox: Snapshot queue drained off the interactive path.
    SyncStatus: Outbox status enum.
"""

from __future__ import annotations

from src.advisor.persistence.outbox import SessionOutbox, SyncStatus
from src.advisor.persistence.store import (
    InMemorySessionStore,
    PersistenceError,
    RedisSessionStore,
    SessionStore,
    build_session_store,
)

__all__ = [
    "InMemorySessionStore",
    "PersistenceError",
    "RedisSessionStore",
    "SessionOutbox",
    "SessionStore",
    "SyncStatus",
    "build_session_store",
]
