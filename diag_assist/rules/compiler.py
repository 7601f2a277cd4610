"""Compiler diagnostic rules."""

from __future__ import annotations

from re import Match, compile

from diag_assist.ingest import DiagnosticRecord
from diag_assist.rules.base import RegexRule
from diag_assist.suggestion import Suggestion


class MissingTypeRule(RegexRule):
    """Reports CS0246 type or namespace lookups that failed."""

    rule_id = "cs0246_missing_type"
    # Quote style differs between compilers: 'Foo', `Foo' and "Foo" all occur.
    # Generic names keep their brackets, e.g. 'List<>' or 'Dictionary<,>'.
    pattern = compile(r"CS0246\b(?:.*?[`'\"](?P<type>[^`'\"\r\n]+)['\"])?")

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        type_name = match.group("type")
        title = "Type or namespace not found"
        return Suggestion(
            id=self.rule_id,
            title=f"{title}: {type_name}" if type_name else title,
            details=(
                "Add the correct using directive or install/enable the package that "
                "defines this type; check asmdef references."
            ),
        )
