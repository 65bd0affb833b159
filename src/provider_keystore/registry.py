"""Static registry of LLM providers and the variables that hold their keys."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class ProviderRecord:
    """Describes how a provider exposes its API key in the environment."""

    id: str
    display_name: str
    key_variable_name: str | None = None

    @property
    def requires_key(self) -> bool:
        return self.key_variable_name is not None


_PROVIDERS: tuple[ProviderRecord, ...] = (
    ProviderRecord("openai", "OpenAI", "OPENAI_API_KEY"),
    ProviderRecord("anthropic", "Anthropic", "ANTHROPIC_API_KEY"),
    ProviderRecord("google", "Google", "GOOGLE_API_KEY"),
    ProviderRecord("xai", "xAI", "XAI_API_KEY"),
    ProviderRecord("deepseek", "DeepSeek", "DEEPSEEK_API_KEY"),
    ProviderRecord("openrouter", "OpenRouter", "OPENROUTER_API_KEY"),
    ProviderRecord("ollama", "Ollama"),
)

PROVIDER_REGISTRY: MappingProxyType[str, ProviderRecord] = MappingProxyType(
    {record.id: record for record in _PROVIDERS}
)


def get_provider(provider_id: str) -> ProviderRecord | None:
    """Return the registered record for ``provider_id``, if any."""
    return PROVIDER_REGISTRY.get(provider_id)


def registered_providers() -> tuple[ProviderRecord, ...]:
    """List registered providers in registration order."""
    return tuple(PROVIDER_REGISTRY.values())


def provider_display_name(provider_id: str) -> str:
    """Return the display name, falling back to the raw id for unknown providers."""
    record = PROVIDER_REGISTRY.get(provider_id)
    return record.display_name if record else provider_id


def api_key_name_for_provider(provider_id: str) -> str | None:
    """Return the key variable name, or None when no key is needed or known."""
    record = PROVIDER_REGISTRY.get(provider_id)
    return record.key_variable_name if record else None


__all__ = [
    "PROVIDER_REGISTRY",
    "ProviderRecord",
    "api_key_name_for_provider",
    "get_provider",
    "provider_display_name",
    "registered_providers",
]
