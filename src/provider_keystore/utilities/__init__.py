"""Utilities package for the key store.

Holds the logging setup shared by the CLI and embedding applications.
"""

from __future__ import annotations

from .logger_manager import LoggerConfig, LoggerManager, LoggerSettings

__all__ = [
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
]
