"""Logging setup for the Ocypus display monitor.

All modules log under the ``ocypus`` namespace; ``configure()`` attaches a
single stderr handler to it when the monitor starts.
"""

import logging
import sys

_configured = False

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"


def resolve_level(level: int | str) -> int | None:
    """Turn a level name such as ``"debug"`` into its numeric value.

    Returns None for unknown names.
    """
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.strip().upper())


def configure(level: int | str = logging.INFO) -> None:
    """Send ``ocypus.*`` records to stderr at the given level.

    Only the first call has an effect. Unknown level names fall back to
    INFO with a warning.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    resolved = resolve_level(level)
    root = logging.getLogger("ocypus")
    root.setLevel(logging.INFO if resolved is None else resolved)
    root.addHandler(handler)
    _configured = True

    if resolved is None:
        root.warning("Unknown log level %r, using INFO", level)


def get_logger(name: str) -> logging.Logger:
    """Return the ``ocypus.<name>`` logger."""
    return logging.getLogger(f"ocypus.{name}")
