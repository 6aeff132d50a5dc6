from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from authledger.infrastructure.storage import RecordFile, ensure_exists_writably
from authledger.shared.errors import FormatError, PersistenceError


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


def test_ensure_exists_creates_private_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"

    ensure_exists_writably(path)

    assert path.read_bytes() == b""
    assert _mode(path) & 0o077 == 0
    assert _mode(path) & 0o600 == 0o600


def test_ensure_exists_leaves_existing_file_alone(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"
    path.write_text("alice,x\n", encoding="utf-8")
    path.chmod(0o644)

    ensure_exists_writably(path)

    assert path.read_text(encoding="utf-8") == "alice,x\n"


def test_ensure_exists_rejects_read_only_file(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"
    path.touch()
    path.chmod(0o400)

    with pytest.raises(PersistenceError) as exc_info:
        ensure_exists_writably(path)

    assert "is not read/writeable" in str(exc_info.value)
    assert exc_info.value.context["path"] == str(path)


def test_ensure_exists_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError):
        ensure_exists_writably(tmp_path)


def test_ensure_exists_reports_uncreatable_path(tmp_path: Path) -> None:
    path = tmp_path / "missing-dir" / "users.csv"

    with pytest.raises(PersistenceError) as exc_info:
        ensure_exists_writably(path)

    assert exc_info.value.context == {"path": str(path), "operation": "create"}


def test_write_rows_quotes_separators(tmp_path: Path) -> None:
    records = RecordFile(tmp_path / "users.csv")

    written = records.write_rows([("a,b", 'say "hi"'), ("plain", "x")])

    assert written == 2
    assert (tmp_path / "users.csv").read_text(encoding="utf-8") == (
        '"a,b","say ""hi"""\nplain,x\n'
    )
    assert records.read_rows(2) == [["a,b", 'say "hi"'], ["plain", "x"]]


def test_write_rows_replaces_atomically(tmp_path: Path) -> None:
    path = tmp_path / "keys.csv"
    path.write_text("old,1,tok\n", encoding="utf-8")
    records = RecordFile(path)

    records.write_rows([("new", "2", "tok2")])

    assert path.read_text(encoding="utf-8") == "new,2,tok2\n"
    assert not (tmp_path / "keys.csv.tmp").exists()
    assert _mode(path) & 0o077 == 0


def test_write_rows_failure_keeps_previous_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "keys.csv"
    path.write_text("old,1,tok\n", encoding="utf-8")
    records = RecordFile(path)

    def broken_replace(src, dst) -> None:
        raise OSError("disk on fire")

    monkeypatch.setattr(os, "replace", broken_replace)

    with pytest.raises(PersistenceError) as exc_info:
        records.write_rows([("new", "2", "tok2")])

    assert "disk on fire" in str(exc_info.value)
    assert path.read_text(encoding="utf-8") == "old,1,tok\n"
    assert not (tmp_path / "keys.csv.tmp").exists()


def test_read_rows_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"
    path.write_text("\nalice,x\n\nbob,y,extra\n", encoding="utf-8")

    assert RecordFile(path).read_rows(2) == [["alice", "x"], ["bob", "y", "extra"]]


def test_read_rows_rejects_short_rows(tmp_path: Path) -> None:
    path = tmp_path / "keys.csv"
    path.write_text("alice,1,tok\nbob,2\n", encoding="utf-8")

    with pytest.raises(FormatError) as exc_info:
        RecordFile(path).read_rows(3)

    assert exc_info.value.code == "format_error"
    assert exc_info.value.context == {"path": str(path), "line": 2}


def test_read_rows_rejects_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"
    path.write_bytes(b"alice,\xff\xfe\n")

    with pytest.raises(FormatError):
        RecordFile(path).read_rows(2)


def test_line_breaks_inside_fields_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"
    records = RecordFile(path)
    rows = [("a\rb", "x"), ("c\nd", "y\r\nz"), ("plain", "w")]

    assert records.write_rows(rows) == 3

    assert path.read_bytes() == b'"a\rb",x\r\n"c\nd","y\r\nz"\r\nplain,w\r\n'
    assert records.read_rows(2) == [list(row) for row in rows]


def test_unencodable_field_reports_write_error(tmp_path: Path) -> None:
    path = tmp_path / "users.csv"
    path.write_text("old,x\n", encoding="utf-8")
    records = RecordFile(path)

    with pytest.raises(PersistenceError) as exc_info:
        records.write_rows([("\udcff", "x")])

    assert exc_info.value.context == {"path": str(path), "operation": "write"}
    assert path.read_text(encoding="utf-8") == "old,x\n"
    assert not (tmp_path / "users.csv.tmp").exists()


def test_unexpected_failure_still_removes_temp_file(tmp_path: Path) -> None:
    def rows():
        yield ("alice", "x")
        raise RuntimeError("generator blew up")

    with pytest.raises(RuntimeError):
        RecordFile(tmp_path / "users.csv").write_rows(rows())

    assert not (tmp_path / "users.csv.tmp").exists()
