"""Centralized semantic enums for the provider key store."""

from __future__ import annotations

from enum import Enum


class KeySource(str, Enum):
    """Where a usable API key value was found."""

    ENVIRONMENT = "environment"
    ENV_FILE = "env_file"
    MISSING = "missing"


class KeyState(str, Enum):
    """Qualitative key status reported for a provider."""

    CONFIGURED = "configured"
    MISSING = "missing"
    NOT_REQUIRED = "not_required"

    @classmethod
    def for_source(cls, source: KeySource | None) -> KeyState:
        if source is None:
            return cls.NOT_REQUIRED
        if source is KeySource.MISSING:
            return cls.MISSING
        return cls.CONFIGURED
