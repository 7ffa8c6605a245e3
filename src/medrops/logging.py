"""Logging system for medrops using Loguru.

Provides structured logging with configurable levels and file rotation.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from .config import get_config


class MedropsLogger:
    """medrops logging system with structured, component-bound loggers."""

    def __init__(self):
        self._configured = False

    def configure(self, config=None) -> None:
        """Configure logging based on provided config."""
        if config is None:
            config = get_config()

        # Remove default and previously installed handlers
        logger.remove()

        logger.add(
            sys.stdout,
            level=config.logging.level,
            format=config.logging.format,
            colorize=True,
        )

        if config.logging.file_path:
            file_path = Path(config.logging.file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(file_path),
                level=config.logging.level,
                format=config.logging.format,
                rotation=config.logging.max_file_size,
                retention=config.logging.retention,
                encoding="utf-8",
                enqueue=True,
            )

        self._configured = True
        logger.debug(
            "medrops logging configured (level={level}, file={file})",
            level=config.logging.level,
            file=str(config.logging.file_path) if config.logging.file_path else None,
        )

    def log_rollout_summary(self, kind: str, summary: Dict[str, Any]) -> None:
        """Log reward statistics of a finished rollout."""
        logger.bind(component="rollout").info(
            "{kind} rollout finished: total={total:.4f} mean={mean:.4f} min={min:.4f} max={max:.4f}",
            kind=kind,
            **summary,
        )

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Log error with context."""
        logger.error(
            "medrops error occurred: {error_type}: {error_message}",
            error_type=type(error).__name__,
            error_message=str(error),
            context=context or {},
        )

    def create_child_logger(self, name: str) -> "MedropsChildLogger":
        """Create a child logger with specific context."""
        return MedropsChildLogger(name, self)


class MedropsChildLogger:
    """Child logger with specific context."""

    def __init__(self, name: str, parent: MedropsLogger):
        self.name = name
        self.parent = parent
        self.logger = logger.bind(component=name)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(message, *args, **kwargs)


# Global logger instance
medrops_logger = MedropsLogger()


def get_logger(name: Optional[str] = None) -> MedropsChildLogger:
    """Get a logger instance for a specific component."""
    if name:
        return medrops_logger.create_child_logger(name)
    return MedropsChildLogger("medrops", medrops_logger)


def setup_logging(config=None) -> None:
    """Setup logging for the entire medrops package."""
    medrops_logger.configure(config)


def log_rollout_summary(kind: str, summary: Dict[str, Any]) -> None:
    """Log rollout reward statistics."""
    medrops_logger.log_rollout_summary(kind, summary)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log error with context."""
    medrops_logger.log_error(error, context)


# Configure on import
setup_logging()
