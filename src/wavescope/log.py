from __future__ import annotations
import logging, sys

DEFAULT_FORMAT = "[%(name)s] %(levelname)s %(message)s"


def setup_logging(level: str = "INFO", name: str = "wavescope", fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Attach one stderr handler to the package logger, once."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return logger
