"""Utility modules for logging."""

from mhtml2html.utils.logging import OperationLogger, logger, setup_logging

__all__ = [
    "logger",
    "setup_logging",
    "OperationLogger",
]
