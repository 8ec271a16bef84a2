"""
Per-key exclusive locking for attempt submission.

Grading itself is pure and needs no locking. What must not happen is two
concurrent submissions of the same attempt being graded and written at
once; KeyedLock serialises work per attempt id without a global map of
pending futures.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger

from config import Settings

from .grading.engine import AttemptGrade, GradingEngine
from .models import Attempt, Question


class KeyedLock:
    """
    An asyncio lock per key.

    Entries are reference counted and removed once no task holds or waits
    for the key, so the table only ever contains keys in use.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._locks

    def __len__(self) -> int:
        return len(self._locks)

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]


_submission_locks = KeyedLock()


async def grade_attempt_async(
    questions: Sequence[Question | Mapping[str, Any]],
    attempt: Attempt | Mapping[str, Any],
    *,
    settings: Settings | None = None,
    locks: KeyedLock | None = None,
    passing_score: int | None = None,
) -> AttemptGrade:
    """
    Grade an attempt from async code.

    Submissions of the same attempt id are serialised; the synchronous
    engine runs in a worker thread so the event loop stays responsive.
    """
    attempt = Attempt.from_record(attempt)
    locks = locks if locks is not None else _submission_locks
    engine = GradingEngine(settings)

    if locks.locked(attempt.attempt_id):
        logger.debug(f"Attempt {attempt.attempt_id} is already being graded; waiting")
    async with locks.hold(attempt.attempt_id):
        return await asyncio.to_thread(engine.grade_attempt, questions, attempt, passing_score)
