"""XR Interaction Toolkit interface-mismatch rule."""

from __future__ import annotations

from re import Match, compile

from diag_assist.ingest import DiagnosticRecord
from diag_assist.rules.base import RegexRule
from diag_assist.suggestion import Suggestion


class XriHoverSelectRule(RegexRule):
    """Flags hovered interactables assigned where a select interactable is required."""

    rule_id = "xri_ixr_hover_select"
    pattern = compile(r"CS0266.*IXRHoverInteractable.*IXRSelectInteractable")

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="XRI 3: hovered is IXRHoverInteractable; need IXRSelectInteractable",
            details=(
                "Filter the hovered list to IXRSelectInteractable and cast. Example: "
                "var best = interactor.interactablesHovered"
                ".FirstOrDefault(i => i is IXRSelectInteractable) as IXRSelectInteractable;"
            ),
        )
