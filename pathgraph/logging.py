"""Package-wide logging setup for pathgraph.

All modules log through children of the ``pathgraph`` logger obtained with
``get_logger(__name__)``. The root package logger gets exactly one handler,
writing to stderr so that command output on stdout stays machine-readable.
The initial level can be set with the ``PATHGRAPH_LOG_LEVEL`` environment
variable (a level name such as ``DEBUG`` or ``WARNING``).
"""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "pathgraph"
LOG_LEVEL_ENV = "PATHGRAPH_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def resolve_level(level: Union[int, str, None], default: int = logging.INFO) -> int:
    """Turn a level name or number into a logging level.

    Args:
        level: Level number, case-insensitive level name, or None.
        default: Level returned for None or an empty string.

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If a name does not match a known logging level.
    """
    if level is None or level == "":
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single pathgraph handler. Later calls are no-ops.

    Args:
        level: Logging level; defaults to ``PATHGRAPH_LOG_LEVEL`` or INFO.
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        handler: Handler to install; defaults to a stderr StreamHandler.
    """
    global _configured

    if _configured:
        return

    if level is None:
        level = resolve_level(os.environ.get(LOG_LEVEL_ENV))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # propagate so pytest's caplog sees records
    root_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the pathgraph hierarchy.

    Child loggers carry no handlers or level of their own; they inherit both
    from the ``pathgraph`` logger.

    Args:
        name: Logger name, usually ``__name__``.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Change the level of the pathgraph logger and its handlers."""
    setup_root_logger()
    numeric = resolve_level(level)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric)
    for handler in root_logger.handlers:
        handler.setLevel(numeric)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the pathgraph handler so the next call configures afresh (tests)."""
    global _configured
    _configured = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
