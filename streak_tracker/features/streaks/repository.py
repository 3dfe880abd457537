from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from streak_tracker.models.streak import CheckInLog


class InMemoryCheckInRepository:
    """Process-local owner of the check-in log.

    Sync FastAPI routes run on a thread pool, so every read-modify-write goes
    through ``transaction()`` which holds a single lock for its duration.
    """

    def __init__(self, log: CheckInLog | None = None):
        self._log = log or CheckInLog()
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[CheckInLog]:
        with self._lock:
            yield self._log

    def load(self) -> CheckInLog:
        with self._lock:
            return self._log

    def save(self, log: CheckInLog) -> None:
        with self._lock:
            self._log = log

    def clear(self) -> None:
        with self._lock:
            self._log = CheckInLog()
