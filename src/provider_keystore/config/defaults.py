"""Explicit default settings for the key store."""

from __future__ import annotations

from provider_keystore.constants import (
    DEFAULT_ENV_FILE,
    ENV_FILE_HEADER,
    PLACEHOLDER_PREFIX,
)

KEYSTORE_DEFAULTS: dict[str, object] = {
    "env_file": DEFAULT_ENV_FILE,
    "placeholder_prefix": PLACEHOLDER_PREFIX,
    "file_header": ENV_FILE_HEADER,
    "reload_after_save": True,
}
