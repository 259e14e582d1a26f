import logging
import sys
import json

from .core.config import settings


def get_logger(name: str = __name__) -> logging.Logger:
    """Return a JSON-configured logger.

    Reuses existing handlers to avoid duplicates when called multiple times.
    The level is taken from ``XMPPTRACE_LOG_LEVEL``.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    fmt = json.dumps(
        {
            "ts": "%(asctime)s",
            "lvl": "%(levelname)s",
            "mod": "%(name)s",
            "msg": "%(message)s",
        }
    )
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(settings.log_level.upper())
    return logger
