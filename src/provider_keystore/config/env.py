"""Loads the persisted key file into the process environment at startup."""

from __future__ import annotations

from collections.abc import MutableMapping
import logging
import os
from pathlib import Path

from provider_keystore.constants import DEFAULT_ENV_FILE
from provider_keystore.envfile import apply_snapshot, load_snapshot

logger = logging.getLogger(__name__)


def load_environment(
    dotenv_path: str | Path | None = None,
    *,
    override: bool = False,
    environ: MutableMapping[str, str] | None = None,
) -> bool:
    """Load the key file when available to seed API key lookups.

    Values already present in the environment win unless ``override`` is set.
    Returns False when there is no file to load.
    """
    path = Path(dotenv_path) if dotenv_path else Path(DEFAULT_ENV_FILE)
    if not path.exists():
        logger.debug("No key file at %s; environment left untouched", path)
        return False
    target = os.environ if environ is None else environ
    applied = apply_snapshot(load_snapshot(path), target, override=override)
    logger.info("Loaded %d variable(s) from %s", len(applied), path)
    return True


__all__ = ["load_environment"]
