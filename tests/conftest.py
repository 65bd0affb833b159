from __future__ import annotations

import os
from pathlib import Path

import pytest

from provider_keystore.config.settings import KeystoreSettings
from provider_keystore.constants import ENV_FILE_OVERRIDE_VAR
from provider_keystore.keystore import ProviderKeyStore
from provider_keystore.registry import registered_providers
from provider_keystore.utilities.logger_manager import LoggerConfig, LoggerManager

TEST_VARIABLES = ("FOO_KEY", "FOO", "BAR", "BAZ_KEY")


@pytest.fixture(autouse=True)
def isolated_environ(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Give each test a private environment and working directory."""
    environ = os.environ.copy()
    for record in registered_providers():
        if record.key_variable_name:
            environ.pop(record.key_variable_name, None)
    for name in (*TEST_VARIABLES, ENV_FILE_OVERRIDE_VAR):
        environ.pop(name, None)
    monkeypatch.setattr(os, "environ", environ)
    monkeypatch.chdir(tmp_path)
    return environ


@pytest.fixture
def env_path(tmp_path: Path) -> Path:
    return tmp_path / ".env"


@pytest.fixture
def store(env_path: Path) -> ProviderKeyStore:
    return ProviderKeyStore(KeystoreSettings(env_file=env_path), environ={})


@pytest.fixture
def logger_manager(tmp_path: Path):
    manager = LoggerManager(LoggerConfig(log_dir=tmp_path / "logs", log_level="DEBUG"))
    yield manager
    manager.close()
