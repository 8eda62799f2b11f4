"""Fire-and-forget session persistence outbox.

The state machine hands a snapshot to the outbox after every mutating
operation. In-memory state is always updated first; the outbox then writes the
snapshot to the SessionStore on the running event loop without blocking the
next state transition. Errors are logged and surfaced through ``status`` /
``last_error`` but never raised to the caller and never roll back in-memory
state. Retrying is the caller's job (submit again).

Pending snapshots are coalesced per session id: only the newest snapshot of a
session is written, since every write is a full-state overwrite. Drains are
serialised by a lock so an older snapshot never lands after a newer one.

Exports:
    SyncStatus: idle / syncing / synced / error.
    SessionOutbox: Snapshot queue with background drain.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from enum import Enum

import structlog

from src.advisor.interview.schemas import Session
from src.advisor.persistence.store import SessionStore

logger = structlog.get_logger(__name__)


class SyncStatus(str, Enum):
    """Persistence status reported to the presentation layer."""

    IDLE = "idle"
    SYNCING = "syncing"
    SYNCED = "synced"
    ERROR = "error"


class SessionOutbox:
    """Queue of session snapshots drained to a SessionStore.

    When ``submit`` is called with an asyncio loop running, a drain task is
    scheduled with ``asyncio.create_task``. Without a running loop the
    snapshot waits until ``await flush()``.

    Args:
        store: Persistence collaborator receiving the snapshots.
    """

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._pending: dict[str, Session] = {}
        self._drain_task: asyncio.Task | None = None
        self._drain_lock = asyncio.Lock()
        self.status: SyncStatus = SyncStatus.IDLE
        self.last_error: str | None = None
        self.last_synced_at: datetime | None = None

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def pending_count(self) -> int:
        """Number of snapshots waiting to be written."""
        return len(self._pending)

    def submit(self, session: Session) -> None:
        """Queue a snapshot of ``session`` and schedule a drain if possible."""
        snapshot = session.model_copy(deep=True)
        # Re-insert so the newest snapshot of a session moves to the back
        self._pending.pop(snapshot.session_id, None)
        self._pending[snapshot.session_id] = snapshot

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                "outbox.deferred_no_loop",
                session_id=snapshot.session_id,
                pending=len(self._pending),
            )
            return

        if self._drain_task is None or self._drain_task.done():
            self._drain_task = loop.create_task(self._drain(), name="session_outbox_drain")

    async def flush(self) -> SyncStatus:
        """Wait for any scheduled drain, then write whatever is still pending."""
        task = self._drain_task
        if task is not None and not task.done() and task is not asyncio.current_task():
            await task
        return await self._drain()

    async def _drain(self) -> SyncStatus:
        async with self._drain_lock:
            while self._pending:
                session_id = next(iter(self._pending))
                snapshot = self._pending.pop(session_id)
                self.status = SyncStatus.SYNCING
                try:
                    await self._store.save(snapshot)
                except Exception as exc:
                    # Never raise from the outbox: in-memory state stays authoritative
                    self.status = SyncStatus.ERROR
                    self.last_error = str(exc)
                    logger.warning(
                        "outbox.save_failed",
                        session_id=session_id,
                        error=str(exc),
                    )
                    continue

                self.status = SyncStatus.SYNCED
                self.last_error = None
                self.last_synced_at = datetime.now(timezone.utc)
                logger.debug("outbox.session_saved", session_id=session_id)

            return self.status
