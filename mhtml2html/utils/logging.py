"""Logging configuration and utilities."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# Create module logger
logger = logging.getLogger("mhtml2html")


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    verbose: bool = False,
) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path to log file.
        verbose: If True, include debug information.
    """
    # Set level
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if verbose:
        console_format = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        console_format = logging.Formatter("%(message)s")

    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always verbose in file

        file_format = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)


class OperationLogger:
    """Structured logging for conversions with JSONL output."""

    def __init__(self, log_path: Path | None = None) -> None:
        """Initialize operation logger.

        Args:
            log_path: Path to JSONL log file.
        """
        self.log_path = log_path
        if log_path:
            log_path.parent.mkdir(parents=True, exist_ok=True)

    def log_operation(
        self,
        operation: str,
        archive: str,
        success: bool,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log operation with structured data.

        Args:
            operation: Operation name (convert, inspect).
            archive: Archive file name.
            success: Whether operation succeeded.
            details: Additional details.
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "operation": operation,
            "archive": archive,
            "success": success,
            "details": details or {},
        }

        if success:
            logger.info(f"{operation}: {archive} - success")
        else:
            logger.warning(f"{operation}: {archive} - failed")

        self._append(entry)

    def log_error(
        self,
        operation: str,
        archive: str,
        error: Exception,
    ) -> None:
        """Log a failed operation.

        Args:
            operation: Operation that failed.
            archive: Archive file name.
            error: Exception that occurred.
        """
        details = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "line": getattr(error, "line", None),
        }

        self.log_operation(operation, archive, success=False, details=details)
        logger.error(f"{operation} failed for {archive}: {error}")

    def log_batch_complete(
        self,
        successful: int,
        failed: int,
        duration_seconds: float,
    ) -> None:
        """Log completion of a batch of conversions.

        Args:
            successful: Number of archives converted.
            failed: Number of archives that failed.
            duration_seconds: Total processing time.
        """
        logger.info(
            f"Batch complete: {successful} converted, {failed} failed "
            f"in {duration_seconds:.1f}s"
        )

        self._append({
            "timestamp": datetime.now().isoformat(),
            "event": "batch_complete",
            "successful": successful,
            "failed": failed,
            "duration_seconds": duration_seconds,
        })

    def _append(self, entry: dict[str, Any]) -> None:
        if self.log_path:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
