"""Pydantic models exposed by the key store."""

from __future__ import annotations

from .status import ProviderStatus, StatusReport

__all__ = ["ProviderStatus", "StatusReport"]
