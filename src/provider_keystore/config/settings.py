"""Key store settings built from defaults, a YAML file and the environment."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from provider_keystore.config.defaults import KEYSTORE_DEFAULTS
from provider_keystore.constants import CONFIG_SECTION, ENV_FILE_OVERRIDE_VAR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeystoreSettings:
    """Where keys are persisted and how stored values are judged."""

    env_file: Path = Path(str(KEYSTORE_DEFAULTS["env_file"]))
    placeholder_prefix: str = str(KEYSTORE_DEFAULTS["placeholder_prefix"])
    file_header: str = str(KEYSTORE_DEFAULTS["file_header"])
    reload_after_save: bool = bool(KEYSTORE_DEFAULTS["reload_after_save"])

    def __post_init__(self) -> None:
        if not isinstance(self.env_file, (str, os.PathLike)) or not str(self.env_file):
            raise ValueError(f"env_file must be a path, got {self.env_file!r}")
        object.__setattr__(self, "env_file", Path(self.env_file))
        for name in ("placeholder_prefix", "file_header"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")
        if not isinstance(self.reload_after_save, bool):
            raise ValueError(
                "reload_after_save must be true or false, "
                f"got {self.reload_after_save!r}"
            )
        if not self.placeholder_prefix:
            raise ValueError("placeholder_prefix must not be empty")
        if "\n" in self.file_header or not self.file_header.startswith("#"):
            raise ValueError("file_header must be a single '#' comment line")

    def with_overrides(self, **overrides: Any) -> KeystoreSettings:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return KeystoreSettings(**values)


def read_config_file(config_path: str | Path) -> dict[str, Any]:
    """Load the key store section of a YAML configuration file."""
    path = Path(config_path)
    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return {}
    try:
        with open(path, encoding="utf-8") as file:
            config = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as exc:
        raise ValueError(f"Failed to load config file {path}: {exc}") from exc
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a dictionary, got {type(config)}")
    section = config.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ValueError(f"'{CONFIG_SECTION}' section must be a dictionary")
    return section


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> KeystoreSettings:
    """Build settings from defaults, then the YAML file, then the environment."""
    overrides: dict[str, Any] = {}
    if config_path is not None:
        overrides.update(read_config_file(config_path))

    known = {f.name for f in fields(KeystoreSettings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown keystore settings: {', '.join(unknown)}")

    env = os.environ if environ is None else environ
    env_file = env.get(ENV_FILE_OVERRIDE_VAR)
    if env_file:
        overrides["env_file"] = env_file
    return KeystoreSettings().with_overrides(**overrides)


__all__ = ["KeystoreSettings", "load_settings", "read_config_file"]
