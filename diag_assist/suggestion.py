"""Suggestion model shared by rules, fixes, and output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Suggestion:
    """A single actionable finding produced by a classification rule."""

    id: str
    title: str
    details: str
    quick_fix_ids: tuple[str, ...] = ()
    file_path: str = ""
    line: int = 0

    @property
    def actionable(self) -> bool:
        """True when a quick fix exists and there is a file to patch."""
        return bool(self.quick_fix_ids) and bool(self.file_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "details": self.details,
            "quick_fix_ids": list(self.quick_fix_ids),
            "file_path": self.file_path,
            "line": self.line,
            "actionable": self.actionable,
        }
