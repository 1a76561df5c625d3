from __future__ import annotations

import logging
import sys

_LEVELS_BY_VERBOSE = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def setup_logging(verbose_count: int = 0, logger_name: str | None = None) -> logging.Logger:
    """
    Configure the root (or named) logger from a -v count.

    -v  -> INFO
    -vv -> DEBUG
    default -> WARNING

    Idempotent: calling it again only adjusts the level.
    """
    level = _LEVELS_BY_VERBOSE.get(verbose_count, logging.DEBUG)
    logger = logging.getLogger(logger_name or "")
    logger.setLevel(level)

    already_configured = any(getattr(h, "_blackjack_trainer_handler", False) for h in logger.handlers)
    if not already_configured:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._blackjack_trainer_handler = True  # type: ignore[attr-defined]
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    if level > logging.DEBUG:
        logging.getLogger("matplotlib").setLevel(logging.WARNING)

    return logger
