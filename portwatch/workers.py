"""Per-host probing loop executed on a worker thread."""

import logging
import threading
from datetime import datetime

from PySide6.QtCore import QObject, QRunnable, Signal

from portwatch.models import CheckSample
from portwatch.probe import Probe

logger = logging.getLogger(__name__)


class ProbeSignals(QObject):
    """Signals for communicating between prober threads and the main thread."""

    sample_ready = Signal(str, object)  # Emits (hostname, CheckSample)


class ProbeWorker(QRunnable):
    """Worker that probes one host forever at a fixed cadence.

    Each iteration makes exactly one connection attempt, emits exactly one
    sample, then waits for the interval. The wait is interruptible through
    stop() so the pool can be drained on exit.
    """

    def __init__(self, probe: Probe, hostname: str, port: int, interval_s: float):
        super().__init__()
        self.probe = probe
        self.hostname = hostname
        self.port = port
        self.interval_s = interval_s
        self.signals = ProbeSignals()
        self.iterations = 0
        self._stop = threading.Event()
        # PortMonitor keeps a reference to every worker for stop()
        self.setAutoDelete(False)

    def probe_once(self) -> CheckSample:
        """Run a single probe iteration and emit its sample."""
        try:
            sample = self.probe.probe(self.hostname, self.port)
        except Exception as e:
            logger.exception(
                "Probe exception: host=%s, port=%d, error=%s", self.hostname, self.port, str(e)
            )
            sample = CheckSample(ts=datetime.now(), latency_ms=None)

        self.iterations += 1
        self.signals.sample_ready.emit(self.hostname, sample)
        return sample

    def run(self):
        """Probe until stopped."""
        logger.debug(
            "Prober starting: host=%s, port=%d, interval=%.1fs",
            self.hostname,
            self.port,
            self.interval_s,
        )
        while not self._stop.is_set():
            self.probe_once()
            self._stop.wait(self.interval_s)
        logger.debug("Prober stopped: host=%s, iterations=%d", self.hostname, self.iterations)

    def stop(self):
        """Ask the loop to exit after the current iteration."""
        self._stop.set()

    @property
    def is_stopped(self) -> bool:
        return self._stop.is_set()
