"""Utility modules for infrastructure and helpers."""

from .memory_monitor import MemoryMonitor
from .logging_setup import LOGGER_NAME, setup_logger
from .validation import validate_cli_arguments

__all__ = [
    "MemoryMonitor",
    "LOGGER_NAME",
    "setup_logger",
    "validate_cli_arguments",
]
