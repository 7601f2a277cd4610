"""Fix executor: backup-then-rewrite application of quick fixes."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from diag_assist.fixes.registry import FixProcedure, get_fix

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_SUFFIX = ".bak"
SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"

AppliedHook = Callable[[Path, Path], None]


class FixExecutor:
    """Applies named quick fixes to files, one at a time per path.

    ``on_applied`` is called with ``(path, backup_path)`` after a successful
    write so hosts can refresh whatever caches the file.
    """

    def __init__(
        self,
        *,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
        on_applied: AppliedHook | None = None,
    ) -> None:
        if not backup_suffix:
            raise ValueError("backup_suffix must be a non-empty string")
        self.backup_suffix = backup_suffix
        self._on_applied = on_applied
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def backup_path(self, path: str | Path) -> Path:
        """Return the sibling backup path for ``path``."""
        return Path(f"{path}{self.backup_suffix}")

    def apply_fix(self, fix_id: str, path: str | Path | None) -> bool:
        """Apply ``fix_id`` to the file at ``path``.

        Returns False when the fix id is unknown or the target is missing; in
        both cases nothing is read or written. Read/write failures on an
        existing target raise ``OSError``.
        """
        procedure = get_fix(fix_id)
        if procedure is None:
            logger.warning("Unknown quick fix id: %s", fix_id)
            return False
        target = _existing_target(path)
        if target is None:
            logger.info("Quick fix %s not applicable: no file at %r", fix_id, path)
            return False

        with self._lock_for(target):
            backup = self._rewrite(procedure, target)

        logger.info("Applied %s to %s. Backup: %s", fix_id, target, backup)
        if self._on_applied is not None:
            self._on_applied(target, backup)
        return True

    def preview(self, fix_id: str, path: str | Path | None) -> str | None:
        """Return the contents ``fix_id`` would produce, without writing anything."""
        procedure = get_fix(fix_id)
        target = _existing_target(path)
        if procedure is None or target is None:
            return None
        return procedure.transform(read_source_text(target))

    def _rewrite(self, procedure: FixProcedure, target: Path) -> Path:
        original = read_source_text(target)
        backup = self.backup_path(target)
        _write_text(backup, original)
        _write_text(target, procedure.transform(original))
        return backup

    def _lock_for(self, target: Path) -> threading.Lock:
        key = target.resolve()
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock


def _existing_target(path: str | Path | None) -> Path | None:
    if path is None or not str(path):
        return None
    target = Path(path)
    if not target.is_file():
        return None
    return target


def read_source_text(path: str | Path) -> str:
    """Read ``path`` exactly as the fixes see it.

    Line endings are kept as-is and bytes that are not valid UTF-8 decode to
    lone surrogates, which ``_write_text`` turns back into the same bytes.
    """
    with _open_source(Path(path), "r") as file_obj:
        return file_obj.read()


def _write_text(path: Path, text: str) -> None:
    with _open_source(path, "w") as file_obj:
        file_obj.write(text)


def _open_source(path: Path, mode: str) -> TextIO:
    return path.open(mode, encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS, newline="")
