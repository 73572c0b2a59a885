"""Entry point for PortWatch."""

import argparse
import logging
import os
import signal
import sys
from portwatch.config import DEFAULT_INTERVAL_MS, DEFAULT_PORT, ConfigError, MonitorConfig
from portwatch.logging_config import LOG_LEVELS, configure_logging, log_host_update

logger = logging.getLogger(__name__)

PROBE_ENV = "PORTWATCH_PROBE"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portwatch",
        description="Continuously check TCP reachability of a port on a set of hosts.",
    )
    parser.add_argument(
        "--hosts",
        default="",
        help="A space-delimited list of hosts to monitor.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"The port to monitor on each host. Defaults to {DEFAULT_PORT}.",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=DEFAULT_INTERVAL_MS,
        help=(
            "The interval on which to check each host in milliseconds. "
            f"Must be above 1000. Defaults to {DEFAULT_INTERVAL_MS}."
        ),
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and log every host update.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level. Defaults to PORTWATCH_LOG_LEVEL, then INFO.",
    )
    return parser


def parse_config(argv=None) -> tuple[MonitorConfig, argparse.Namespace]:
    """Parse and validate command-line options.

    Exits with status 2 through ``parser.error`` on invalid input, before any
    probe is created.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = MonitorConfig.from_values(args.hosts, args.port, args.interval)
    except ConfigError as e:
        parser.error(str(e))
    return config, args


def select_probe():
    """Pick the real TCP probe unless the simulated one is requested."""
    if os.environ.get(PROBE_ENV, "").lower() == "fake":
        from portwatch.fake_probe import FakeProbe

        logger.info("Using FakeProbe (%s=fake)", PROBE_ENV)
        return FakeProbe()

    from portwatch.probe import TcpProbe

    return TcpProbe()


def main(argv=None):
    """Main entry point for the PortWatch application."""
    config, args = parse_config(argv)
    configure_logging(args.log_level)
    # No graceful shutdown; Ctrl+C terminates like any other kill
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    logger.info(
        "Preparing to monitor port %d every %d milliseconds on hosts %s",
        config.port,
        config.interval_ms,
        " ".join(config.hosts),
    )

    from portwatch.monitor import PortMonitor

    if args.headless:
        from PySide6.QtCore import QCoreApplication

        app = QCoreApplication(sys.argv[:1])
        monitor = PortMonitor(config, select_probe())

        monitor.snapshot_updated.connect(
            lambda hostname: log_host_update(monitor.store.get(hostname))
        )
        monitor.start_monitoring()
        sys.exit(app.exec())

    from PySide6.QtWidgets import QApplication
    from portwatch.ui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    monitor = PortMonitor(config, select_probe())
    window = MainWindow(monitor)
    monitor.start_monitoring()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
