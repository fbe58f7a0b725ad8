"""Logging configuration utilities."""

import json
import logging
import sys
import time
from typing import Optional

__all__ = ["LOGGER_NAME", "JsonFormatter", "setup_logger"]

LOGGER_NAME = "di2hap"


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single-line JSON object."""
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
        }
        return json.dumps(payload, ensure_ascii=False)


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[str] = None,
    format_type: str = "text",
    verbose: bool = True,
) -> logging.Logger:
    """Configure and return a logger that writes to stderr.

    Records go to stderr; stdout is reserved for VCF output.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR) or None for default
        format_type: Output format: "text" or "json"
        verbose: Whether to use verbose logging (INFO vs WARNING default)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)

        if format_type == "json":
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

        logger.addHandler(handler)
        logger.propagate = False

    level_name = (level or ("INFO" if verbose else "WARNING")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    return logger
