from __future__ import annotations

import os
from pathlib import Path
import stat

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
import pytest

from provider_keystore.envfile import (
    EnvEntry,
    EnvSnapshot,
    apply_snapshot,
    is_usable_value,
    load_snapshot,
    parse_line,
    read_lines,
    render_lines,
    split_lines,
    upsert_entry,
    write_atomic,
)

key_names = st.from_regex(r"[A-Z][A-Z0-9_]{0,15}", fullmatch=True)
plain_values = st.text(
    alphabet=st.characters(min_codepoint=33, max_codepoint=126),
    min_size=1,
    max_size=30,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("FOO=1", EnvEntry("FOO", "1")),
        ("  FOO = bar  ", EnvEntry("FOO", "bar")),
        ("TOKEN=a=b=c", EnvEntry("TOKEN", "a=b=c")),
        ("EMPTY=", EnvEntry("EMPTY", "")),
        ("", None),
        ("   ", None),
        ("# FOO=1", None),
        ("   # indented comment", None),
        ("not a pair", None),
    ],
)
def test_parse_line(line: str, expected: EnvEntry | None) -> None:
    assert parse_line(line) == expected


@pytest.mark.parametrize(
    ("value", "usable"),
    [
        ("sk-123", True),
        ("  sk-123  ", True),
        ("", False),
        ("   ", False),
        (None, False),
        ("your-api-key", False),
        ("  your-key-here", False),
        ("yours-truly", True),
    ],
)
def test_is_usable_value(value: str | None, usable: bool) -> None:
    assert is_usable_value(value, "your-") is usable


def test_split_lines_drops_only_the_final_terminator() -> None:
    assert split_lines("A=1\n\nB=2\n") == ["A=1", "", "B=2"]
    assert split_lines("A=1\nB=2") == ["A=1", "B=2"]
    assert split_lines("") == []
    assert split_lines("\n\n") == ["", ""]


def test_read_lines_missing_file(tmp_path: Path) -> None:
    assert read_lines(tmp_path / "absent.env") is None


def test_upsert_replaces_in_place_and_keeps_other_lines() -> None:
    lines = ["# header", "", "FOO=1", "  # note", "BAR=old", "garbage line"]
    updated, replaced = upsert_entry(lines, "BAR", "new")
    assert replaced is True
    assert updated == ["# header", "", "FOO=1", "  # note", "BAR=new", "garbage line"]


def test_upsert_appends_when_absent() -> None:
    updated, replaced = upsert_entry(["# header", "", "FOO=1"], "BAR", "2")
    assert replaced is False
    assert updated == ["# header", "", "FOO=1", "BAR=2"]


def test_upsert_replaces_every_match() -> None:
    updated, _ = upsert_entry(["FOO=1", "X=y", " FOO = 2"], "FOO", "3")
    assert updated == ["FOO=3", "X=y", "FOO=3"]


def test_upsert_ignores_commented_out_key() -> None:
    updated, replaced = upsert_entry(["# FOO=old"], "FOO", "new")
    assert replaced is False
    assert updated == ["# FOO=old", "FOO=new"]


@settings(database=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    existing=st.lists(
        st.one_of(
            st.just(""),
            st.just("# comment"),
            st.builds(lambda k, v: f"{k}={v}", key_names, plain_values),
        ),
        max_size=8,
    ),
    key=key_names,
    value=plain_values,
)
def test_upsert_is_idempotent(existing: list[str], key: str, value: str) -> None:
    once, _ = upsert_entry(existing, key, value)
    twice, replaced = upsert_entry(once, key, value)
    assert twice == once
    assert replaced is True
    assert f"{key}={value}" in once
    rendered = render_lines(once)
    assert split_lines(rendered) == once


@settings(database=None)
@given(key=key_names, value=plain_values)
def test_rendered_entry_parses_back(key: str, value: str) -> None:
    assert parse_line(f"{key}={value}") == EnvEntry(key, value)


def test_write_atomic_creates_private_file(tmp_path: Path) -> None:
    target = tmp_path / "nested" / ".env"
    write_atomic(target, "A=1\n")
    assert target.read_text(encoding="utf-8") == "A=1\n"
    if os.name == "posix":
        assert stat.S_IMODE(target.stat().st_mode) == 0o600
    assert [p.name for p in target.parent.iterdir()] == [".env"]


def test_write_atomic_keeps_existing_mode(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_text("A=1\n", encoding="utf-8")
    os.chmod(target, 0o640)
    write_atomic(target, "A=2\n")
    assert target.read_text(encoding="utf-8") == "A=2\n"
    if os.name == "posix":
        assert stat.S_IMODE(target.stat().st_mode) == 0o640


def test_load_snapshot_parses_with_dotenv(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_text("# c\nFOO=1\nQUOTED=\"a b\"\nBARE\n", encoding="utf-8")
    snapshot = load_snapshot(target)
    assert snapshot.source == target
    assert dict(snapshot.values) == {"FOO": "1", "QUOTED": "a b"}


def test_apply_snapshot_override_semantics() -> None:
    snapshot = EnvSnapshot(source=Path(".env"), values={"A": "file", "B": "file"})
    environ = {"A": "process"}
    assert apply_snapshot(snapshot, environ, override=False) == ["B"]
    assert environ == {"A": "process", "B": "file"}
    assert apply_snapshot(snapshot, environ) == ["A", "B"]
    assert environ == {"A": "file", "B": "file"}


def test_load_snapshot_does_not_expand_references(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_text("HOME_REF=sk-${HOME}x\nBARE_REF=$USER\n", encoding="utf-8")
    snapshot = load_snapshot(target)
    assert snapshot.values["HOME_REF"] == "sk-${HOME}x"
    assert snapshot.values["BARE_REF"] == "$USER"


def test_write_atomic_writes_through_symlink(tmp_path: Path) -> None:
    real = tmp_path / "real.env"
    real.write_text("A=1\n", encoding="utf-8")
    link = tmp_path / ".env"
    try:
        link.symlink_to(real)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not available on this platform")
    write_atomic(link, "A=2\n")
    assert link.is_symlink()
    assert real.read_text(encoding="utf-8") == "A=2\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == [".env", "real.env"]
