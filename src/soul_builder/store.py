"""SessionStore: in-memory session map with time-based expiry.

The store owns every live :class:`SoulSession`, keyed by its opaque
``session_id``.  Sessions expire a fixed time after **creation**; answering
questions does not extend the window.

Expiry is enforced by :meth:`SessionStore.sweep`, which the background task
started by :meth:`SessionStore.start` calls on a fixed interval.  Tests call
``sweep()`` directly and inject a ``clock`` instead of sleeping.

Concurrency model: the store lives in a single asyncio event loop and the
session map is only touched synchronously, so it is never observed in a
partial state.  Mutations of one session are serialized through
:meth:`SessionStore.lock`, and the sweep skips any session whose lock is
held (it is picked up by the next sweep instead).
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Callable

from soul_builder.constants import SESSION_EXPIRY_SECONDS, SWEEP_INTERVAL_SECONDS
from soul_builder.models.session import SoulSession

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """Owns the mapping from session id to :class:`SoulSession`.

    Args:
        expiry_seconds: maximum session age, measured from ``created_at``
        sweep_interval_seconds: delay between background sweeps
        clock: returns the current time (timezone-aware); injectable for tests
    """

    def __init__(
        self,
        *,
        expiry_seconds: float = SESSION_EXPIRY_SECONDS,
        sweep_interval_seconds: float = SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._expiry = timedelta(seconds=expiry_seconds)
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._sessions: dict[str, SoulSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._sweeper: asyncio.Task | None = None

    @property
    def expiry(self) -> timedelta:
        return self._expiry

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, session_id: str) -> SoulSession:
        """Return the existing session for ``session_id``, or insert a fresh one.

        An existing session is returned unchanged; its progress is never reset.
        """
        existing = self._sessions.get(session_id)
        if existing is not None:
            return existing

        session = SoulSession(session_id=session_id, created_at=self._clock())
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> SoulSession | None:
        return self._sessions.get(session_id)

    def mutate(self, session_id: str, fn: Callable[[SoulSession], None]) -> None:
        """Apply ``fn`` to the stored session in place.  No-op if absent."""
        session = self._sessions.get(session_id)
        if session is None:
            return
        fn(session)

    def delete(self, session_id: str) -> bool:
        """Remove a session.  Returns ``False`` if it did not exist."""
        self._locks.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def count(self) -> int:
        return len(self._sessions)

    def expires_at(self, session: SoulSession) -> datetime:
        return session.created_at + self._expiry

    # ------------------------------------------------------------------
    # Per-session serialization
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def lock(self, session_id: str) -> AsyncIterator[None]:
        """Hold the mutation lock for ``session_id`` for the duration of the block.

        A lock for an id with no stored session is dropped on exit, so
        requests for unknown ids leave no state behind.
        """
        lock = self._locks.setdefault(session_id, asyncio.Lock())
        try:
            async with lock:
                yield
        finally:
            if (
                session_id not in self._sessions
                and not lock.locked()
                and self._locks.get(session_id) is lock
            ):
                del self._locks[session_id]

    def lock_count(self) -> int:
        return len(self._locks)

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def sweep(self) -> int:
        """Evict every session older than the expiry window.

        Sessions with a mutation in flight are skipped.  Returns the number of
        sessions evicted.
        """
        now = self._clock()
        expired = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > self._expiry
        ]

        evicted = 0
        for sid in expired:
            lock = self._locks.get(sid)
            if lock is not None and lock.locked():
                continue
            self.delete(sid)
            evicted += 1

        if evicted:
            logger.info(
                "Session sweep: evicted=%d, remaining=%d", evicted, len(self._sessions),
            )
        return evicted

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            self.sweep()

    def start(self) -> None:
        """Start the background sweeper on the running event loop.  Idempotent."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep_loop())
        logger.info(
            "Session sweeper started: interval=%ss, expiry=%ss",
            self._sweep_interval, int(self._expiry.total_seconds()),
        )

    async def stop(self) -> None:
        """Cancel the background sweeper and wait for it to finish.  Idempotent."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("Session sweeper stopped")

    @property
    def running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()
