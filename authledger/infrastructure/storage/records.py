# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flat CSV record files: one record per row, no header.

Fields holding separators, quotes or line breaks are quoted, so any string
round-trips.
"""

from __future__ import annotations

import csv
import os
import stat
import threading
from collections.abc import Iterable, Sequence
from contextlib import suppress
from pathlib import Path

from authledger.shared.errors import FormatError, PersistenceError
from authledger.shared.logging import logger

_OWNER_RW = stat.S_IRUSR | stat.S_IWUSR


def _discard(tmp: Path) -> None:
    with suppress(OSError):
        os.remove(tmp)


def ensure_exists_writably(path: str | Path) -> None:
    """Create ``path`` empty with mode 0600 if missing, else require owner rw bits."""
    p = Path(path)
    try:
        st = p.stat()
    except FileNotFoundError:
        logger.info(f"records: file {str(p)!r} does not exist; creating")
        try:
            fd = os.open(p, os.O_CREAT | os.O_WRONLY, 0o600)
        except OSError as e:
            raise PersistenceError(
                f"error creating file {str(p)!r}: {e}", path=p, operation="create"
            ) from e
        try:
            os.close(fd)
        except OSError as e:
            raise PersistenceError(
                f"error closing file {str(p)!r}: {e}", path=p, operation="close"
            ) from e
        return
    except OSError as e:
        raise PersistenceError(f"unable to stat {str(p)!r}: {e}", path=p, operation="stat") from e

    if not stat.S_ISREG(st.st_mode):
        raise PersistenceError(f"{str(p)!r} is not a regular file", path=p, operation="stat")
    if (st.st_mode & _OWNER_RW) != _OWNER_RW:
        raise PersistenceError(f"{str(p)!r} is not read/writeable", path=p, operation="stat")


class RecordFile:
    """A delimited record file guarded by the persistence lock.

    The persistence lock may be shared between several files; it is always
    the innermost lock, so callers may hold a store lock while calling in.
    """

    def __init__(self, path: str | Path, lock: threading.Lock | None = None) -> None:
        self._path = Path(path)
        self._lock = lock or threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def read_rows(self, min_fields: int) -> list[list[str]]:
        """Read every non-blank row; any row shorter than ``min_fields`` fails the read."""
        rows: list[list[str]] = []
        with self._lock:
            try:
                with open(self._path, newline="", encoding="utf-8") as f:
                    reader = csv.reader(f)
                    for row in reader:
                        if not row:
                            continue
                        if len(row) < min_fields:
                            raise FormatError(self._path, line=reader.line_num)
                        rows.append(row)
            except csv.Error as e:
                raise FormatError(self._path) from e
            except UnicodeDecodeError as e:
                raise FormatError(self._path) from e
            except OSError as e:
                raise PersistenceError(
                    f"Error reading file {str(self._path)!r}: {e}",
                    path=self._path,
                    operation="read",
                ) from e
        logger.debug(f"records: read rows={len(rows)} path={self._path}")
        return rows

    def write_rows(self, rows: Iterable[Sequence[str]]) -> int:
        """Atomically replace the file with ``rows``; returns the number written."""
        tmp = self._path.with_name(self._path.name + ".tmp")
        written = 0
        with self._lock:
            try:
                fd = os.open(tmp, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
                with open(fd, "w", newline="", encoding="utf-8") as f:
                    writer = csv.writer(f)
                    for row in rows:
                        writer.writerow(row)
                        written += 1
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp, self._path)
            except (OSError, UnicodeError) as e:
                _discard(tmp)
                raise PersistenceError(
                    f"Error writing file {str(self._path)!r}: {e}",
                    path=self._path,
                    operation="write",
                ) from e
            except BaseException:
                _discard(tmp)
                raise
        logger.debug(f"records: wrote rows={written} path={self._path}")
        return written


__all__ = ["RecordFile", "ensure_exists_writably"]
