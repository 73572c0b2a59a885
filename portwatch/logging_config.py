"""Logging setup for PortWatch and the headless host-update log."""

import logging
import os
import sys

from portwatch.models import HostSnapshot

LOG_LEVEL_ENV = "PORTWATCH_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

update_logger = logging.getLogger("portwatch.updates")


def resolve_log_level(explicit: str | None = None) -> int:
    """Pick the log level: command line first, then PORTWATCH_LOG_LEVEL, then INFO.

    Unrecognized names fall through to the next source instead of failing,
    so a stale environment variable never keeps the monitor from starting.

    Examples:
        >>> resolve_log_level("debug") == logging.DEBUG
        True
    """
    for candidate in (explicit, os.environ.get(LOG_LEVEL_ENV)):
        if candidate and candidate.upper() in LOG_LEVELS:
            return logging.getLevelName(candidate.upper())
    return logging.INFO


def configure_logging(level: str | None = None) -> int:
    """Configure application-wide logging to stderr.

    Args:
        level: Level name from ``--log-level``; None defers to the environment

    Returns:
        The numeric level that was applied

    Examples:
        # Log every connection attempt
        $ python -m portwatch --hosts "db1 db2" --port 5432 --log-level DEBUG

        # Same, from the environment
        $ PORTWATCH_LOG_LEVEL=DEBUG python -m portwatch --hosts "db1 db2" --port 5432
    """
    log_level = resolve_log_level(level)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s", logging.getLevelName(log_level)
    )
    return log_level


def format_host_update(host: HostSnapshot) -> str:
    """Render one host snapshot as a single log line."""
    last_seen = host.last_seen.isoformat(timespec="seconds") if host.last_seen else "never"
    return (
        f"{host.hostname}: status={host.status.value}, last_seen={last_seen}, "
        f"avg_session={host.session_average_latency}ms, "
        f"avg_5m={host.five_minute_average_latency}ms, "
        f"failures_5m={host.five_minute_failures}"
    )


def log_host_update(host: HostSnapshot) -> None:
    """Emit the headless-mode line for an updated host at INFO."""
    update_logger.info(format_host_update(host))
