"""Rule classifier: map diagnostic messages to suggestions."""

from __future__ import annotations

import logging

from diag_assist.ingest import DiagnosticRecord, parse_record
from diag_assist.rules import default_rules
from diag_assist.rules.base import Rule
from diag_assist.suggestion import Suggestion

logger = logging.getLogger(__name__)


class RuleClassifier:
    """Evaluates every rule against a diagnostic and collects all matches.

    Instances hold only their immutable rule list, so a single classifier can
    be shared between callers and threads.
    """

    def __init__(self, rules: list[Rule] | None = None) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules if rules is not None else default_rules())

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self._rules]

    def classify(
        self,
        message: str | None,
        stack: str = "",
        path_hint: str = "",
        line: int = 0,
    ) -> list[Suggestion]:
        """Return one suggestion per matching rule, in rule order."""
        record = DiagnosticRecord(
            message=message or "",
            stack=stack or "",
            path=path_hint or "",
            line=line,
        )
        return self.classify_record(record)

    def classify_record(self, record: DiagnosticRecord) -> list[Suggestion]:
        """Classify an ingested record, using its path and line as hints."""
        suggestions: list[Suggestion] = []
        if not record.message:
            return suggestions
        for rule in self._rules:
            suggestion = rule.evaluate(record)
            if suggestion is not None:
                suggestions.append(suggestion)
        logger.debug(
            "Classified message into %d suggestion(s): %s",
            len(suggestions),
            [item.id for item in suggestions],
        )
        return suggestions

    def classify_text(self, message: str, stack: str = "") -> list[Suggestion]:
        """Classify a raw message, deriving the path hint from the message itself."""
        return self.classify_record(parse_record(message, stack))
