"""Logging setup: per-run log file, stderr echo, and secret redaction."""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

REDACTION_MARKER = "<REDACTED>"

# Long token-like runs (API keys, bearer tokens, session ids)
_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]{20,}")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

logger = logging.getLogger("multiai")


def mask_sensitive(text: str, enabled: bool = True) -> str:
    """Replace every run of 20+ token characters with the redaction marker."""
    if not enabled or not text:
        return text
    return _TOKEN_PATTERN.sub(REDACTION_MARKER, text)


class RedactingFilter(logging.Filter):
    """Rewrite each record's final message with secrets masked."""

    def __init__(self, enabled: bool = True):
        super().__init__()
        self.enabled = enabled

    def filter(self, record: logging.LogRecord) -> bool:
        if self.enabled:
            record.msg = mask_sensitive(record.getMessage())
            record.args = None
        return True


def get_logger() -> logging.Logger:
    return logger


def log_file_path(log_dir: Path, now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S")
    return Path(log_dir) / f"multi-ai-chat.{stamp}.log"


def setup_logging(log_dir: Path, mask_keys: bool = True, level: int = logging.DEBUG) -> Path:
    """
    Attach the file and stderr handlers to the multiai logger.

    Args:
        log_dir: Directory for the per-run log file (created if missing)
        mask_keys: Redact token-like substrings before anything is written
        level: Minimum level for the log file; stderr only shows INFO and up

    Returns:
        Path of the log file for this run
    """
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    path = log_file_path(log_dir)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    redactor = RedactingFilter(mask_keys)

    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    file_handler.setLevel(level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.INFO)

    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
        handler.addFilter(redactor)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return path
