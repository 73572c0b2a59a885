"""Wiring of probers, the sample channel and the aggregator."""

import logging
from collections.abc import Callable
from datetime import datetime

from PySide6.QtCore import QObject, QThreadPool, Qt, Signal

from portwatch.aggregator import Aggregator
from portwatch.config import MonitorConfig
from portwatch.probe import Probe
from portwatch.store import SnapshotStore
from portwatch.workers import ProbeWorker

logger = logging.getLogger(__name__)


class PortMonitor(QObject):
    """Runs one prober per host and folds their samples into a SnapshotStore.

    Key features:
    - One ProbeWorker per host, each holding a pool thread for its lifetime
    - Samples travel over queued signal connections into the main thread,
      which preserves per-host order and serializes all writes
    - A single Aggregator owns the logs and publishes snapshots

    Requires a running Qt event loop on the thread that owns this object.
    """

    snapshot_updated = Signal(str)  # (hostname)

    def __init__(
        self,
        config: MonitorConfig,
        probe: Probe,
        clock: Callable[[], datetime] = datetime.now,
        parent=None,
    ):
        """Initialize monitor.

        Args:
            config: Validated session configuration
            probe: Probe used by every worker
            clock: Time source for the session start and trailing window
            parent: Qt parent object
        """
        super().__init__(parent)

        self.config = config
        self.probe = probe

        self.store = SnapshotStore(
            session_start=clock(), port=config.port, hostnames=config.hosts
        )
        self.aggregator = Aggregator(self.store, clock=clock, parent=self)
        self.aggregator.snapshot_updated.connect(self.snapshot_updated)

        # Probers never return, so every host needs its own thread
        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(max(1, len(config.hosts)))

        self._workers = {}  # {hostname: ProbeWorker}
        self.is_monitoring = False

    def start_monitoring(self):
        """Start one prober per configured host."""
        if self.is_monitoring:
            return

        self.is_monitoring = True
        for host in self.config.host_configs():
            worker = ProbeWorker(
                self.probe, host.hostname, host.port, self.config.interval_seconds
            )
            worker.signals.sample_ready.connect(
                self.aggregator.record, Qt.ConnectionType.QueuedConnection
            )
            self._workers[host.hostname] = worker
            self.thread_pool.start(worker)

        logger.info(
            "Monitoring started: %d hosts, port=%d, interval=%dms",
            len(self._workers),
            self.config.port,
            self.config.interval_ms,
        )

    def stop_monitoring(self, timeout_ms: int = 2000) -> bool:
        """Stop all probers and wait for their threads.

        Args:
            timeout_ms: How long to wait for in-flight attempts to finish

        Returns:
            True if every prober exited within the timeout
        """
        if not self.is_monitoring:
            return True

        self.is_monitoring = False
        for worker in self._workers.values():
            worker.stop()

        finished = self.thread_pool.waitForDone(timeout_ms)
        self._workers.clear()
        logger.info("Monitoring stopped (clean=%s)", finished)
        return finished

    def get_stats(self):
        """Get monitor statistics.

        Returns:
            Dict with monitor state info
        """
        return {
            "hosts": len(self.config.hosts),
            "workers": len(self._workers),
            "port": self.config.port,
            "interval_ms": self.config.interval_ms,
            "monitoring": self.is_monitoring,
        }
