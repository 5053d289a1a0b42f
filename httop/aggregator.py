"""httop - Live aggregation engine"""

import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .models import AggregateEntry, AggregateKey, CounterOverflow, GlobalStats, LogRecord, SortKey
from .patterns import MAX_COUNTER

Row = Tuple[AggregateKey, AggregateEntry]


def _sort_value(sort_key: SortKey, row: Row):
    key, entry = row
    if sort_key is SortKey.COUNT:
        return (-entry.count, key)
    if sort_key is SortKey.STATUS:
        return (-key.status, key)
    if sort_key is SortKey.PATH:
        return (key.path, key)
    if sort_key is SortKey.IP:
        return (key.remote_address, key)
    return (key.user_agent, key)


class Aggregator:
    """Folds log records into per-signature counts and global totals.

    A single lock guards the entry table and the totals; it is held for one
    upsert in ingest() and for the copy step of snapshot() and stats(), never
    while sorting.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[AggregateKey, AggregateEntry] = {}
        self._stats = GlobalStats()
        self.first_ingest_at: Optional[float] = None

    def ingest(self, record: LogRecord):
        key = AggregateKey.from_record(record)
        with self._lock:
            stats = self._stats
            if (stats.total_requests + 1 > MAX_COUNTER
                    or stats.total_bytes + record.bytes_sent > MAX_COUNTER):
                raise CounterOverflow(
                    f"Counter overflow after {stats.total_requests} requests"
                )

            stats.total_requests += 1
            stats.total_bytes += record.bytes_sent
            stats.status_histogram[record.status] = stats.status_histogram.get(record.status, 0) + 1

            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = AggregateEntry()
            entry.count += 1
            entry.last_seen = record.timestamp

            if self.first_ingest_at is None:
                self.first_ingest_at = self._clock()

    def record_drop(self):
        with self._lock:
            self._stats.dropped_lines += 1

    def snapshot(self, sort_key: SortKey, limit: int) -> List[Row]:
        """Sorted, truncated copy of the entry table."""
        if limit <= 0:
            return []
        with self._lock:
            rows = [(key, AggregateEntry(entry.count, entry.last_seen))
                    for key, entry in self._entries.items()]
        rows.sort(key=lambda row: _sort_value(sort_key, row))
        return rows[:limit]

    def stats(self) -> GlobalStats:
        with self._lock:
            return self._stats.copy()

    def __len__(self):
        with self._lock:
            return len(self._entries)


class RateTracker:
    """Requests per second derived from the aggregator's running total"""

    def __init__(self, aggregator: Aggregator, clock: Callable[[], float] = time.monotonic):
        self.aggregator = aggregator
        self._clock = clock
        self._last_time = clock()
        self._last_total = 0

    def sample(self) -> float:
        """Average rate since the first successful ingest."""
        started = self.aggregator.first_ingest_at
        if started is None:
            return 0.0
        elapsed = self._clock() - started
        if elapsed <= 0:
            return 0.0
        return self.aggregator.stats().total_requests / elapsed

    def instantaneous(self) -> float:
        """Rate since the previous call."""
        now = self._clock()
        total = self.aggregator.stats().total_requests
        elapsed = now - self._last_time
        rate = (total - self._last_total) / elapsed if elapsed > 0 else 0.0
        self._last_time = now
        self._last_total = total
        return rate
