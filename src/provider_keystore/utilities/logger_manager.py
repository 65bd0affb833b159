"""Logger manager with coloured console output, optional rotation and JSON records.

Library modules log through ``logging.getLogger(__name__)``; the CLI wires the
``provider_keystore`` logger to handlers built here.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import datetime
import json
import logging
from logging import Filter, Handler, Logger, LogRecord, getLevelName
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import Any, ClassVar

import colorlog

ROOT_LOGGER_NAME = "provider_keystore"


@dataclass
class LoggerConfig:
    """Configuration for LoggerManager."""

    log_dir: Path | None = None
    log_level: str = "WARNING"
    log_file_name: str = "provider_keystore.log"
    max_file_size_mb: int = 5
    backup_count: int = 3
    structured_logging: bool = False
    log_colors: dict[str, str] | None = None

    DEFAULT_LOG_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "red,bg_white",
    }

    def __post_init__(self) -> None:
        """Normalize and validate configuration."""
        self.log_level = self.log_level.upper()
        if not isinstance(getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir).resolve()
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_colors = self.log_colors or self.DEFAULT_LOG_COLORS


class _ContextFilter(Filter):
    """Stamps the active context mapping onto every record."""

    def __init__(self) -> None:
        super().__init__()
        self.context: dict[str, Any] = {}

    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = dict(self.context)
        return True


class StructuredFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: LogRecord) -> str:
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
            "context": getattr(record, "context", {}),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


class LoggerSettings:
    """Builds handlers with format and rotation settings."""

    def __init__(self, config: LoggerConfig) -> None:
        self.config = config

    def get_handlers(self) -> list[Handler]:
        """Return the console handler plus a file handler when log_dir is set."""
        handlers = [self._get_console_handler()]
        file_handler = self._get_file_handler()
        if file_handler:
            handlers.append(file_handler)
        return handlers

    def _get_console_handler(self) -> Handler:
        handler = colorlog.StreamHandler(sys.stderr)
        formatter = (
            StructuredFormatter()
            if self.config.structured_logging
            else colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors=self.config.log_colors,
            )
        )
        handler.setFormatter(formatter)
        return handler

    def _get_file_handler(self) -> RotatingFileHandler | None:
        if self.config.log_dir is None:
            return None
        file_path = self.config.log_dir / self.config.log_file_name
        try:
            handler = RotatingFileHandler(
                file_path,
                maxBytes=self.config.max_file_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Failed to create RotatingFileHandler: {e}", file=sys.stderr)
            return None
        handler.setFormatter(
            StructuredFormatter()
            if self.config.structured_logging
            else logging.Formatter(
                "%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        return handler


class LoggerManager:
    """Owns the handlers of the package logger and its contextual data."""

    def __init__(
        self,
        config: LoggerConfig | None = None,
        name: str = ROOT_LOGGER_NAME,
    ) -> None:
        self.name = name
        self.config = config or LoggerConfig()
        self.settings = LoggerSettings(self.config)
        self._context_filter = _ContextFilter()
        self._handlers: list[Handler] = []
        self._logger = self._configure_logger()

    def get_logger(self) -> Logger:
        """Return the configured logger."""
        return self._logger

    def _configure_logger(self) -> Logger:
        logger = logging.getLogger(self.name)
        for handler in list(logger.handlers):
            if getattr(handler, "_keystore_managed", False):
                logger.removeHandler(handler)
                handler.close()

        logger.setLevel(getLevelName(self.config.log_level))
        for handler in self.settings.get_handlers():
            handler._keystore_managed = True  # type: ignore[attr-defined]
            handler.addFilter(self._context_filter)
            logger.addHandler(handler)
            self._handlers.append(handler)
        logger.propagate = False
        return logger

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[Logger]:
        """Attach contextual fields to records emitted inside the block."""
        previous = self._context_filter.context
        self._context_filter.context = {**previous, **context_kwargs}
        try:
            yield self._logger
        finally:
            self._context_filter.context = previous

    def flush(self) -> None:
        """Flush all handlers to ensure logs are written."""
        for handler in self._handlers:
            handler.flush()

    def close(self) -> None:
        """Detach and close the handlers installed by this manager."""
        for handler in self._handlers:
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self._logger.propagate = True


__all__ = [
    "ROOT_LOGGER_NAME",
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
    "StructuredFormatter",
]
