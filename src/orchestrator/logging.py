"""Logging for the build.

Every logger lives under the `quasar` namespace (`quasar.orchestrator.build`,
`quasar.pipes.css`, ...). Only that namespace is configured, so host
applications embedding the runner keep their own root logger.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os


ROOT_LOGGER = "quasar"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

_configured = False


def _root() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER)


def configure_logging(level: str | None = None, log_file: Path | None = None) -> logging.Logger:
    """Set the build log level and optionally mirror the log to a rotating file.

    The level defaults to `QUASAR_LOG_LEVEL` (INFO when unset).
    """
    global _configured
    root = _root()
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True
    name = (level or os.getenv("QUASAR_LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, name, logging.INFO))
    # Do not duplicate handlers if already set
    if log_file and not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)
    return root


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        configure_logging()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
