"""Status report models describing which provider keys are configured."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from provider_keystore.enums import KeySource, KeyState


class ProviderStatus(BaseModel):
    """Key state for one registered provider. Never carries the secret itself."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider_id: str = Field(..., min_length=1)
    display_name: str
    key_variable: str | None = None
    state: KeyState
    source: KeySource | None = None

    @property
    def ready(self) -> bool:
        return self.state is not KeyState.MISSING


class StatusReport(BaseModel):
    """Snapshot of every provider's key state against one key file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    env_file: str
    env_file_exists: bool
    providers: list[ProviderStatus] = Field(default_factory=list)

    @property
    def missing(self) -> list[str]:
        return [p.provider_id for p in self.providers if not p.ready]
