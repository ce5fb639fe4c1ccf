"""
Bulk snapshot cache for the Streamlit client.

The client fetches the whole catalog once (up to a fixed batch size) and
filters, sorts and paginates it locally. This module owns that snapshot:
it is created on first use, replaced only by an explicit refresh, and never
expires on its own.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Snapshot = List[Dict[str, Any]]


class SnapshotError(Exception):
    """Raised when the bulk fetch keeps failing after every retry."""


class SnapshotCache:
    """
    Holds the client's bulk snapshot of properties.

    Meant to be created by the UI composition root and kept in session
    state, so each browser session has its own snapshot.
    """

    def __init__(
        self,
        fetch: Callable[[], Snapshot],
        retry_count: int = 3,
        retry_interval: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the cache.

        Args:
            fetch: Callable returning the full bulk snapshot.
            retry_count: Total fetch attempts before giving up.
            retry_interval: Seconds to wait between attempts.
            clock: Monotonic time source.
            sleep: Sleep function used between attempts.
        """
        if retry_count < 1:
            raise ValueError("retry_count must be at least 1")
        self._fetch = fetch
        self.retry_count = retry_count
        self.retry_interval = retry_interval
        self._generation = 0
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._snapshot: Optional[Snapshot] = None
        self.fetched_at: Optional[float] = None
        self.last_error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def get(self) -> Snapshot:
        """Return the cached snapshot, fetching it on first use."""
        with self._lock:
            if self._snapshot is None:
                self._load()
            return self._snapshot

    def refresh(self) -> Snapshot:
        """
        Re-fetch the snapshot.

        Always goes back to the API, except for callers that were blocked
        behind a fetch that completed while they waited: those reuse it.
        """
        seen_generation = self._generation
        with self._lock:
            if self._generation != seen_generation and self._snapshot is not None:
                logger.debug("Refresh shared an in-flight fetch")
                return self._snapshot
            self._load()
            return self._snapshot

    def _load(self) -> None:
        last_exc: Optional[Exception] = None

        for attempt in range(1, self.retry_count + 1):
            try:
                snapshot = self._fetch()
            except Exception as e:
                last_exc = e
                logger.warning(
                    "Bulk fetch attempt %d/%d failed: %s",
                    attempt,
                    self.retry_count,
                    e,
                )
                if attempt < self.retry_count:
                    self._sleep(self.retry_interval)
                continue

            self._snapshot = list(snapshot)
            self.fetched_at = self._clock()
            self._generation += 1
            self.last_error = None
            logger.info("Loaded snapshot of %d properties", len(self._snapshot))
            return

        self.last_error = str(last_exc)
        raise SnapshotError(
            f"Could not load properties after {self.retry_count} attempts: {last_exc}"
        ) from last_exc
