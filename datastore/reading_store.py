from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Callable, Deque, List, Optional

from models.records import Reading
from settings import get_settings

logger = logging.getLogger(__name__)

HistoryListener = Callable[["ReadingStore"], None]


@dataclass(frozen=True)
class StoreState:
    history: tuple[Reading, ...]
    connected: bool
    last_update: Optional[datetime]


class ReadingStore:
    """Bounded, append-only history of readings plus connection state.

    The store is the only writer of its history. Readers get tuple snapshots
    that never change after they are handed out.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be a positive integer.")
        self.capacity = capacity
        self._history: Deque[Reading] = deque()
        self._connected = False
        self._last_update: Optional[datetime] = None
        self._listeners: List[HistoryListener] = []
        self._lock = Lock()

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._connected

    @property
    def last_update(self) -> Optional[datetime]:
        with self._lock:
            return self._last_update

    def append(self, reading: Reading) -> None:
        """Store a reading as-is, evicting the oldest entries past capacity."""
        evicted = 0
        with self._lock:
            self._history.append(reading)
            while len(self._history) > self.capacity:
                self._history.popleft()
                evicted += 1
            self._connected = True
            self._last_update = datetime.now(timezone.utc)
            size = len(self._history)

        if evicted:
            logger.debug(
                "Evicted oldest readings",
                extra={"evicted": evicted, "capacity": self.capacity, "history_size": size},
            )
        self._notify()

    def mark_disconnected(self) -> None:
        """Record the data source's "no data" signal; history stays visible."""
        with self._lock:
            was_connected = self._connected
            self._connected = False
        if was_connected:
            logger.info("Data source reported no data", extra={"connected": False})
        self._notify()

    def current(self) -> Optional[Reading]:
        with self._lock:
            if not self._history:
                return None
            return self._history[-1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def snapshot(self) -> tuple[Reading, ...]:
        with self._lock:
            return tuple(self._history)

    def state(self) -> StoreState:
        """History, connection flag and last update read under one lock."""
        with self._lock:
            return StoreState(
                history=tuple(self._history),
                connected=self._connected,
                last_update=self._last_update,
            )

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a callback run after every append or disconnect.

        Returns a callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
            size = len(self._history)
        for listener in listeners:
            try:
                listener(self)
            except Exception:
                logger.exception("History listener failed", extra={"history_size": size})


@lru_cache
def build_default_store(capacity: Optional[int] = None) -> ReadingStore:
    settings = get_settings()
    history_capacity = settings.history_capacity if capacity is None else capacity
    return ReadingStore(capacity=history_capacity)
