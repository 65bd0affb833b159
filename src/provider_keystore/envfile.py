"""Line codec for dotenv-style key files and process-environment snapshots.

The codec only understands the unquoted ``KEY=VALUE`` shape: a line is trimmed,
blank and ``#`` lines are skipped, and the remainder is split on the first ``=``.
Rewrites go through :func:`upsert_entry`, which keeps every other line verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import shutil
import tempfile

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

NEW_FILE_MODE = 0o600


@dataclass(frozen=True)
class EnvEntry:
    """A parsed ``KEY=VALUE`` line."""

    key: str
    value: str


@dataclass(frozen=True)
class EnvSnapshot:
    """Values parsed from a key file, ready to be applied to an environment."""

    source: Path
    values: Mapping[str, str] = field(default_factory=dict)


def is_comment_or_blank(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def parse_line(line: str) -> EnvEntry | None:
    """Parse one file line, returning None for blank, comment and malformed lines."""
    stripped = line.strip()
    if is_comment_or_blank(stripped) or "=" not in stripped:
        return None
    key, _, value = stripped.partition("=")
    return EnvEntry(key=key.strip(), value=value.strip())


def is_usable_value(value: str | None, placeholder_prefix: str) -> bool:
    """Return True for non-blank values that are not template placeholders."""
    if value is None:
        return False
    trimmed = value.strip()
    return bool(trimmed) and not trimmed.startswith(placeholder_prefix)


def iter_entries(lines: Iterable[str]) -> Iterable[EnvEntry]:
    for line in lines:
        entry = parse_line(line)
        if entry is not None:
            yield entry


def split_lines(content: str) -> list[str]:
    """Split file content into lines without a phantom entry for the final newline."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: Path) -> list[str] | None:
    """Read a key file, returning None when it does not exist."""
    if not path.exists():
        return None
    return split_lines(path.read_text(encoding="utf-8"))


def upsert_entry(
    lines: Iterable[str], key: str, value: str
) -> tuple[list[str], bool]:
    """Replace every ``key`` line with ``key=value`` or append one if absent.

    Returns the new lines and whether an existing line was replaced.
    """
    rendered = f"{key}={value}"
    updated: list[str] = []
    replaced = False
    for line in lines:
        entry = parse_line(line)
        if entry is not None and entry.key == key:
            updated.append(rendered)
            replaced = True
        else:
            updated.append(line)
    if not replaced:
        updated.append(rendered)
    return updated, replaced


def render_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines) + "\n"


def write_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` via a temporary file in the same directory."""
    # Write through a symlinked key file to its target.
    if path.is_symlink():
        path = path.resolve()
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=directory,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(handle.name)
    try:
        with handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if path.exists():
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, NEW_FILE_MODE)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def load_snapshot(path: Path) -> EnvSnapshot:
    """Parse ``path`` with python-dotenv, without variable expansion.

    Names without a value are dropped.
    """
    raw = dotenv_values(dotenv_path=path, interpolate=False, encoding="utf-8")
    values = {key: value for key, value in raw.items() if value is not None}
    return EnvSnapshot(source=path, values=values)


def apply_snapshot(
    snapshot: EnvSnapshot,
    environ: MutableMapping[str, str],
    *,
    override: bool = True,
) -> list[str]:
    """Copy snapshot values into ``environ`` and return the names that were set."""
    applied: list[str] = []
    for key, value in snapshot.values.items():
        if not override and key in environ:
            continue
        environ[key] = value
        applied.append(key)
    logger.debug("Applied %d variable(s) from %s", len(applied), snapshot.source)
    return applied


__all__ = [
    "EnvEntry",
    "EnvSnapshot",
    "apply_snapshot",
    "is_comment_or_blank",
    "is_usable_value",
    "iter_entries",
    "load_snapshot",
    "parse_line",
    "read_lines",
    "render_lines",
    "split_lines",
    "upsert_entry",
    "write_atomic",
]
