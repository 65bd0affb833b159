"""Global constants shared by the key store and its CLI."""

from __future__ import annotations

DEFAULT_ENV_FILE = ".env"
"""Relative path of the persisted key file, resolved against the working directory."""
PLACEHOLDER_PREFIX = "your-"
"""Values starting with this prefix are unfilled templates, not real keys."""
ENV_FILE_HEADER = "# LLM API Keys"
"""Comment written as the first line of a freshly created key file."""
ENV_FILE_OVERRIDE_VAR = "PROVIDER_KEYSTORE_ENV_FILE"
"""Environment variable that relocates the key file."""
CONFIG_SECTION = "keystore"
"""Top-level YAML mapping that holds the key store settings."""
