"""
Centralized logging configuration for TalentHub.

Provides a context logger that tags messages with the listed resource and
the request sequence number, so interleaved page fetches can be told apart.
Supports a global debug mode (DEBUG_MODE env var) for verbose logging.
"""

import logging
import os
import sys
from typing import Optional


# Global debug mode flag - can be set via environment or at runtime
_GLOBAL_DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"


def set_global_debug_mode(enabled: bool) -> None:
    """Set global debug mode."""
    global _GLOBAL_DEBUG_MODE
    _GLOBAL_DEBUG_MODE = enabled


def is_debug_mode() -> bool:
    """Check if debug mode is enabled globally."""
    return _GLOBAL_DEBUG_MODE


class ListLogger:
    """
    Logger for list fetches.

    Adds contextual information like resource and request sequence to all
    log messages.
    """

    def __init__(
        self,
        name: str,
        resource: Optional[str] = None,
        debug_mode: Optional[bool] = None,
    ):
        """
        Initialize list logger.

        Args:
            name: Logger name (usually __name__)
            resource: Resource path being listed (e.g., "/jobs")
            debug_mode: If True, enables DEBUG level for this logger.
                       If None, uses global debug mode setting.
        """
        self.logger = logging.getLogger(name)
        self.resource = resource
        self._debug_mode = debug_mode if debug_mode is not None else is_debug_mode()

        if self._debug_mode:
            self.logger.setLevel(logging.DEBUG)

    @property
    def level(self) -> int:
        return self.logger.level

    def _format_message(self, message: str, seq: Optional[int] = None) -> str:
        """Add contextual prefix to message."""
        prefix_parts = []
        if self.resource:
            prefix_parts.append(f"[{self.resource}]")
        if seq is not None:
            prefix_parts.append(f"[req:{seq}]")

        if prefix_parts:
            return f"{' '.join(prefix_parts)} {message}"
        return message

    def debug(self, message: str, seq: Optional[int] = None, **kwargs):
        self.logger.debug(self._format_message(message, seq), **kwargs)

    def info(self, message: str, seq: Optional[int] = None, **kwargs):
        self.logger.info(self._format_message(message, seq), **kwargs)

    def warning(self, message: str, seq: Optional[int] = None, **kwargs):
        self.logger.warning(self._format_message(message, seq), **kwargs)

    def error(self, message: str, seq: Optional[int] = None, **kwargs):
        self.logger.error(self._format_message(message, seq), **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format == "json":
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    resource: Optional[str] = None,
    debug_mode: Optional[bool] = None,
) -> ListLogger:
    """Get a list logger instance."""
    return ListLogger(name, resource, debug_mode)
