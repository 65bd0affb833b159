"""Module-level key operations bound to the default key file and ``os.environ``.

Each call builds a fresh :class:`ProviderKeyStore` from :func:`load_settings`, so
the working directory and ``PROVIDER_KEYSTORE_ENV_FILE`` are resolved at call
time and nothing is cached between calls.
"""

from __future__ import annotations

from provider_keystore.config.settings import load_settings
from provider_keystore.keystore import ProviderKeyStore
from provider_keystore.registry import api_key_name_for_provider, provider_display_name


def _store() -> ProviderKeyStore:
    return ProviderKeyStore(load_settings())


def get_api_key_name_for_provider(provider_id: str) -> str | None:
    return api_key_name_for_provider(provider_id)


def get_provider_display_name(provider_id: str) -> str:
    return provider_display_name(provider_id)


def check_api_key_exists_for_provider(provider_id: str) -> bool:
    return _store().key_exists_for_provider(provider_id)


def check_api_key_exists(api_key_name: str) -> bool:
    return _store().key_exists(api_key_name)


def save_api_key_to_env(api_key_name: str, api_key_value: str) -> bool:
    return _store().save_key(api_key_name, api_key_value)


def save_api_key_for_provider(provider_id: str, api_key: str) -> bool:
    return _store().save_key_for_provider(provider_id, api_key)


__all__ = [
    "check_api_key_exists",
    "check_api_key_exists_for_provider",
    "get_api_key_name_for_provider",
    "get_provider_display_name",
    "save_api_key_for_provider",
    "save_api_key_to_env",
]
