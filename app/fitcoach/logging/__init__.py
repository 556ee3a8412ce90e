"""Structured logging for FitCoach.

Exports:
    configure_logging: Initialize logging
    get_module_logger: Get logger for calling module
    logger: Module-level logger instance
"""

from fitcoach.logging.setup import (
    configure_logging,
    get_module_logger,
    logger,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "logger",
]
