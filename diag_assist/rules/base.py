"""Base rule protocol and regex rule helper."""

from __future__ import annotations

from re import Match, Pattern
from typing import Protocol

from diag_assist.ingest import DiagnosticRecord
from diag_assist.suggestion import Suggestion


class Rule(Protocol):
    """Protocol for deterministic classification rules."""

    rule_id: str

    def evaluate(self, record: DiagnosticRecord) -> Suggestion | None:
        """Return a suggestion when the record matches, else None."""


class RegexRule:
    """Rule that fires when ``pattern`` is found anywhere in the message."""

    rule_id: str = ""
    pattern: Pattern[str]
    fix_ids: tuple[str, ...] = ()

    def evaluate(self, record: DiagnosticRecord) -> Suggestion | None:
        match = self.pattern.search(record.message or "")
        if match is None:
            return None
        return self.build(match, record)

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        raise NotImplementedError
