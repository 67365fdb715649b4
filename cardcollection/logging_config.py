"""
Logging setup.

Configures the root logger once with a console handler. Modules log through
``logging.getLogger(__name__)`` and pass structured context via ``extra=``.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Accepted level names, including "none" to silence everything
LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "none": logging.CRITICAL + 1,
}


def resolve_level(level: str) -> int:
    """Map a level name to a logging level, defaulting to INFO."""
    return LOG_LEVELS.get(level.strip().lower(), logging.INFO)


def setup_logging(level: str = "info") -> None:
    """
    Configure the root logger.

    Attaches a console handler only if the root logger has none yet, so
    building several apps (as the tests do) does not duplicate output.
    The level is always applied.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    root.addHandler(handler)
