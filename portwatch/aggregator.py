"""Single-writer aggregation of probe samples into host snapshots."""

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime

from PySide6.QtCore import QObject, Signal, Slot

from portwatch.config import RECENT_WINDOW
from portwatch.models import CheckSample, HostSnapshot, HostStatus
from portwatch.store import SnapshotStore

logger = logging.getLogger(__name__)


def average_latency(latencies: Iterable[int]) -> int:
    """Truncating integer mean; 0 stands for "no data".

    Examples:
        >>> average_latency([10, 11])
        10
        >>> average_latency([])
        0
    """
    values = list(latencies)
    if not values:
        return 0
    return sum(values) // len(values)


def classify(recent_total: int, recent_failures: int) -> HostStatus:
    """Classify a host from its trailing-window counts."""
    if recent_total == 0:
        return HostStatus.UNKNOWN
    if recent_failures == 0:
        return HostStatus.ONLINE
    if recent_failures == recent_total:
        return HostStatus.OFFLINE
    return HostStatus.UNSTABLE


def summarize(hostname: str, log: Sequence[CheckSample], now: datetime) -> HostSnapshot:
    """Derive a host snapshot from its full sample log (pure function).

    Samples with ts strictly after ``now - RECENT_WINDOW`` are recent, all
    others are historical. The session average only covers historical
    samples, so the trailing window never contributes to it. Failed samples
    count towards the failure total and are excluded from both averages.

    Args:
        hostname: Host the log belongs to
        log: Samples in arrival order
        now: Reference instant for the trailing window

    Returns:
        HostSnapshot computed from scratch over the whole log
    """
    cutoff = now - RECENT_WINDOW
    recent_total = 0
    recent_latencies = []
    session_latencies = []
    last_seen = None

    for sample in log:
        if not sample.failed:
            last_seen = sample.ts

        if sample.ts > cutoff:
            recent_total += 1
            if not sample.failed:
                recent_latencies.append(sample.latency_ms)
        elif not sample.failed:
            session_latencies.append(sample.latency_ms)

    recent_failures = recent_total - len(recent_latencies)

    return HostSnapshot(
        hostname=hostname,
        status=classify(recent_total, recent_failures),
        last_seen=last_seen,
        session_average_latency=average_latency(session_latencies),
        five_minute_average_latency=average_latency(recent_latencies),
        five_minute_failures=recent_failures,
    )


class Aggregator(QObject):
    """Sole consumer of probe samples and sole writer of the snapshot store.

    Lives on the main thread. Probers reach record() through a queued
    connection, so samples are applied one at a time in arrival order and no
    lock is needed.

    Every update recomputes the host snapshot over the whole log, which costs
    O(log length). Logs grow for the lifetime of the process.
    """

    snapshot_updated = Signal(str)  # (hostname)

    def __init__(
        self,
        store: SnapshotStore,
        clock: Callable[[], datetime] = datetime.now,
        parent=None,
    ):
        super().__init__(parent)
        self.store = store
        self._clock = clock
        self._logs = {hostname: [] for hostname in store.hostnames()}

    @Slot(str, object)
    def record(self, hostname: str, sample: CheckSample):
        """Append a sample and republish the host snapshot.

        Args:
            hostname: Host the sample was taken from
            sample: Probe result
        """
        log = self._logs[hostname]
        log.append(sample)

        snapshot = summarize(hostname, log, self._clock())
        self.store.publish(snapshot)

        logger.debug(
            "Host updated: host=%s, status=%s, samples=%d, avg5m=%dms, failures5m=%d",
            hostname,
            snapshot.status.value,
            len(log),
            snapshot.five_minute_average_latency,
            snapshot.five_minute_failures,
        )
        self.snapshot_updated.emit(hostname)

    def log(self, hostname: str) -> tuple[CheckSample, ...]:
        """Get a copy of a host's sample log."""
        return tuple(self._logs[hostname])

    def sample_count(self, hostname: str) -> int:
        return len(self._logs[hostname])
