"""Provider API key lookup, presence checks and persistence to the key file."""

from __future__ import annotations

from collections.abc import MutableMapping
import logging
import os
from pathlib import Path

from provider_keystore.config.settings import KeystoreSettings
from provider_keystore.enums import KeySource
from provider_keystore.envfile import (
    apply_snapshot,
    is_usable_value,
    iter_entries,
    load_snapshot,
    read_lines,
    render_lines,
    upsert_entry,
    write_atomic,
)
from provider_keystore.registry import api_key_name_for_provider

logger = logging.getLogger(__name__)

_FORBIDDEN_NAME_CHARS = frozenset("=#")


def _valid_variable_name(name: str) -> bool:
    return bool(name) and not any(
        ch.isspace() or ch in _FORBIDDEN_NAME_CHARS for ch in name
    )


def mask_secret(value: str, visible: int = 4) -> str:
    """Hide all but the edges of a secret for display."""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return f"{value[:visible]}...{value[-visible:]}"


class ProviderKeyStore:
    """Checks and persists provider API keys.

    Lookups consult ``environ`` first and then the key file; the file is read
    afresh on every call. Saves rewrite the whole file and, unless disabled in
    the settings, apply the file's values back onto ``environ``. Concurrent
    saves are not coordinated; callers must serialize them.
    """

    def __init__(
        self,
        settings: KeystoreSettings | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self.settings = settings or KeystoreSettings()
        self.environ = os.environ if environ is None else environ

    @property
    def env_file(self) -> Path:
        return self.settings.env_file

    def _usable(self, value: str | None) -> bool:
        return is_usable_value(value, self.settings.placeholder_prefix)

    def locate_key(self, variable_name: str) -> KeySource:
        """Report where a usable value for ``variable_name`` lives."""
        if self._usable(self.environ.get(variable_name)):
            return KeySource.ENVIRONMENT
        try:
            lines = read_lines(self.env_file)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read key file %s: %s", self.env_file, exc)
            return KeySource.MISSING
        if lines is None:
            return KeySource.MISSING
        for entry in iter_entries(lines):
            if entry.key == variable_name and self._usable(entry.value):
                return KeySource.ENV_FILE
        return KeySource.MISSING

    def key_exists(self, variable_name: str) -> bool:
        return self.locate_key(variable_name) is not KeySource.MISSING

    def key_exists_for_provider(self, provider_id: str) -> bool:
        """True when the provider's key is present or it needs none."""
        variable_name = api_key_name_for_provider(provider_id)
        if not variable_name:
            return True
        return self.key_exists(variable_name)

    def save_key(self, variable_name: str, value: str) -> bool:
        """Write ``variable_name=value`` into the key file; never raises."""
        if not _valid_variable_name(variable_name):
            logger.error("Refusing to save invalid variable name %r", variable_name)
            return False
        if "\n" in value or "\r" in value:
            logger.error("Refusing to save %s: value spans lines", variable_name)
            return False

        path = self.env_file
        try:
            existing = read_lines(path)
            if existing is None:
                lines = [self.settings.file_header, f"{variable_name}={value}"]
                replaced = False
            else:
                lines, replaced = upsert_entry(existing, variable_name, value)
            write_atomic(path, render_lines(lines))
            if self.settings.reload_after_save:
                apply_snapshot(load_snapshot(path), self.environ, override=True)
                # The saved text wins over python-dotenv quoting rules.
                self.environ[variable_name] = value
        except Exception as exc:
            logger.error("Failed to save %s to %s: %s", variable_name, path, exc)
            return False

        logger.info(
            "%s %s in %s",
            "Updated" if replaced else "Added",
            variable_name,
            path,
        )
        return True

    def save_key_for_provider(self, provider_id: str, value: str) -> bool:
        variable_name = api_key_name_for_provider(provider_id)
        if not variable_name:
            logger.warning("Provider %r has no API key variable to save", provider_id)
            return False
        return self.save_key(variable_name, value)


__all__ = ["ProviderKeyStore", "mask_secret"]
