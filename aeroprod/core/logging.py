"""Logging setup shared by the API entrypoint and scripts."""

import hashlib
import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
AUDIT_LOGGER_NAME = "aeroprod.audit"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def get_audit_logger(path: Path) -> logging.Logger:
    """
    Return the audit logger writing to ``path``.

    Each audit file gets its own child of ``aeroprod.audit`` with a single
    file handler.
    """
    target = str(Path(path).resolve())
    digest = hashlib.sha1(target.encode("utf-8")).hexdigest()[:12]
    logger = logging.getLogger(f"{AUDIT_LOGGER_NAME}.{digest}")
    logger.setLevel(logging.INFO)
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger

    Path(target).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s | %(message)s"))
    logger.addHandler(handler)
    return logger
