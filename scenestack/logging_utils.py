"""
Logging utilities: root logging setup, structured log lines, graceful shutdown.
"""
import json
import logging
import signal
from typing import Any

logger = logging.getLogger(__name__)

_shutdown_requested = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


def request_shutdown() -> bool:
    """Check if shutdown was requested (e.g. SIGTERM)."""
    return _shutdown_requested


def _set_shutdown_requested(*_args: Any) -> None:
    global _shutdown_requested
    _shutdown_requested = True


def reset_shutdown() -> None:
    global _shutdown_requested
    _shutdown_requested = False


def setup_graceful_shutdown() -> None:
    """Register SIGTERM/SIGINT handlers that set the shutdown flag."""
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            signal.signal(sig, _set_shutdown_requested)
        except (AttributeError, ValueError):
            pass  # Windows, or not on the main thread


def log_structured(level: str, **kwargs: Any) -> None:
    """Emit one structured (JSON) log line."""
    record = {"level": level, **kwargs}
    line = json.dumps(record, default=str)
    if level == "error":
        logger.error("%s", line)
    elif level == "warning":
        logger.warning("%s", line)
    elif level == "debug":
        logger.debug("%s", line)
    else:
        logger.info("%s", line)
