"""Configuration helpers for the key store."""

from __future__ import annotations

from .env import load_environment
from .settings import KeystoreSettings, load_settings, read_config_file

__all__ = [
    "KeystoreSettings",
    "load_environment",
    "load_settings",
    "read_config_file",
]
