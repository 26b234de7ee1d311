import logging
from typing import Any

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def resolve_level(level: Any) -> int:
    """Map a level name or number to a logging level; unknown values give INFO."""
    if level is None:
        return logging.WARNING
    if isinstance(level, str):
        level = getattr(logging, level.upper(), None)
    if isinstance(level, bool) or not isinstance(level, int):
        return logging.INFO
    return level


def setup_logging(level: Any = None) -> None:
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Flask's request log is noisy at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
