"""Builds provider status reports from a key store."""

from __future__ import annotations

from provider_keystore.config.settings import load_settings
from provider_keystore.enums import KeyState
from provider_keystore.keystore import ProviderKeyStore
from provider_keystore.registry import ProviderRecord, registered_providers
from provider_keystore.schema.status import ProviderStatus, StatusReport


def provider_status(store: ProviderKeyStore, record: ProviderRecord) -> ProviderStatus:
    source = (
        store.locate_key(record.key_variable_name)
        if record.key_variable_name
        else None
    )
    return ProviderStatus(
        provider_id=record.id,
        display_name=record.display_name,
        key_variable=record.key_variable_name,
        state=KeyState.for_source(source),
        source=source,
    )


def provider_status_report(store: ProviderKeyStore | None = None) -> StatusReport:
    """Report the key state of every registered provider."""
    store = store or ProviderKeyStore(load_settings())
    return StatusReport(
        env_file=str(store.env_file),
        env_file_exists=store.env_file.exists(),
        providers=[provider_status(store, record) for record in registered_providers()],
    )


__all__ = ["provider_status", "provider_status_report"]
