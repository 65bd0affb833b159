"""Provider API key lookup and persistence for multi-provider LLM clients."""

from __future__ import annotations

from .api import (
    check_api_key_exists,
    check_api_key_exists_for_provider,
    get_api_key_name_for_provider,
    get_provider_display_name,
    save_api_key_for_provider,
    save_api_key_to_env,
)
from .config import KeystoreSettings, load_environment, load_settings
from .keystore import ProviderKeyStore
from .registry import PROVIDER_REGISTRY, ProviderRecord
from .report import provider_status_report

__version__ = "0.1.0"

__all__ = [
    "PROVIDER_REGISTRY",
    "KeystoreSettings",
    "ProviderKeyStore",
    "ProviderRecord",
    "check_api_key_exists",
    "check_api_key_exists_for_provider",
    "get_api_key_name_for_provider",
    "get_provider_display_name",
    "load_environment",
    "load_settings",
    "provider_status_report",
    "save_api_key_for_provider",
    "save_api_key_to_env",
]
