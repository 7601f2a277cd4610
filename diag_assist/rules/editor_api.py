"""Editor scripting API rules: removed Handles caps, scene GUI, import-time calls."""

from __future__ import annotations

from re import IGNORECASE, Match, compile

from diag_assist.ingest import DiagnosticRecord
from diag_assist.rules.base import RegexRule
from diag_assist.suggestion import Suggestion


def handle_cap_name(cap_name: str) -> str:
    """Map a legacy ``<X>Cap`` member to its ``<X>HandleCap`` replacement."""
    return cap_name.removesuffix("Cap") + "HandleCap"


class HandlesCapRenameRule(RegexRule):
    """Detects calls to Handles cap functions removed in favor of *HandleCap."""

    rule_id = "handles_cap_rename"
    pattern = compile(r"'Handles' does not contain a definition for '(?P<cap>\w+Cap)'")
    fix_ids = ("fix_handles_caps",)

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        old_cap = match.group("cap")
        new_cap = handle_cap_name(old_cap)
        return Suggestion(
            id=self.rule_id,
            title=f"Replace Handles.{old_cap} → Handles.{new_cap}",
            details=(
                "The old Cap drawing functions were removed. Use the *HandleCap "
                "variants and pass an EventType argument."
            ),
            quick_fix_ids=self.fix_ids,
            file_path=record.path,
            line=record.line,
        )


class SceneGuiSerializedObjectRule(RegexRule):
    """Warns about SerializedObject use inside OnSceneGUI/OnPreviewGUI."""

    rule_id = "editor_onScene_serialized"
    pattern = compile(
        r"serializedObject should not be used inside On(Scene|Preview)GUI", IGNORECASE
    )

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="Don't use SerializedObject in OnSceneGUI/OnPreviewGUI",
            details=(
                "Cast `(MyComp)target` and use direct field access with "
                "Undo.RecordObject; keep SerializedObject inside OnInspectorGUI only."
            ),
            file_path=record.path,
            line=record.line,
        )


class TransientArtifactRule(RegexRule):
    """Detects asset database calls made while an import is in progress."""

    rule_id = "editor_transient_artifacts"
    pattern = compile(r"TransientArtifactProvider::IsTransientArtifact")

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="AssetDatabase called during import; defer the work",
            details=(
                "Guard with EditorApplication.isUpdating/isCompiling and wrap "
                "AssetDatabase operations in EditorApplication.delayCall."
            ),
        )
