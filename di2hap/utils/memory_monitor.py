"""Memory usage monitoring and warning system."""

import logging

import psutil

__all__ = ["MemoryMonitor"]


class MemoryMonitor:
    """Reports process memory and warns when it approaches system limits."""

    # Percentages of total system memory
    WARNING_THRESHOLD_PERCENT = 50.0
    CRITICAL_THRESHOLD_PERCENT = 90.0

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.process = psutil.Process()

        total_memory_mb = psutil.virtual_memory().total / 1024 / 1024
        self.warning_threshold_mb = total_memory_mb * (
            self.WARNING_THRESHOLD_PERCENT / 100
        )
        self.critical_threshold_mb = total_memory_mb * (
            self.CRITICAL_THRESHOLD_PERCENT / 100
        )

    def get_memory_usage_mb(self) -> float:
        """Get current resident memory of this process in MB."""
        rss: int = self.process.memory_info().rss
        return float(rss / 1024 / 1024)

    def get_available_memory_mb(self) -> float:
        """Get available system memory in MB."""
        available: int = psutil.virtual_memory().available
        return float(available / 1024 / 1024)

    def check_memory_and_warn(self, operation: str = "operation") -> None:
        """Check current memory usage and warn if approaching limits.

        Args:
            operation: Name of operation being performed (for logging context)

        Example:
            >>> monitor = MemoryMonitor(logger)
            >>> monitor.check_memory_and_warn("record streaming")
        """
        current_mb = self.get_memory_usage_mb()

        if current_mb > self.critical_threshold_mb:
            self.logger.warning(
                f"CRITICAL: High memory usage during {operation}: {current_mb:.1f}MB "
                f"(>{self.critical_threshold_mb:.1f}MB threshold). "
                f"Available: {self.get_available_memory_mb():.1f}MB."
            )
        elif current_mb > self.warning_threshold_mb:
            self.logger.warning(
                f"WARNING: Elevated memory usage during {operation}: {current_mb:.1f}MB "
                f"(>{self.warning_threshold_mb:.1f}MB threshold). "
                f"Available: {self.get_available_memory_mb():.1f}MB."
            )
        else:
            self.logger.debug(f"Memory usage during {operation}: {current_mb:.1f}MB")

