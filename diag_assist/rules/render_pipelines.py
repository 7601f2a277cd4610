"""Shader include and redefinition rules for the scriptable render pipelines."""

from __future__ import annotations

from re import Match, compile

from diag_assist.ingest import DiagnosticRecord
from diag_assist.rules.base import RegexRule
from diag_assist.suggestion import Suggestion


class HdrpIncludeRule(RegexRule):
    """Detects the HDRP ShaderVariables include that moved to SRP Core."""

    rule_id = "hdrp_include_core"
    pattern = compile(
        r"Couldn't open include file 'Packages/com\.unity\.render-pipelines\.high-definition"
        r"/Runtime/ShaderLibrary/ShaderVariables\.hlsl'"
    )
    fix_ids = ("fix_hdrp_include",)

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="Update HDRP include path → SRP Core",
            details="Replace the HDRP include with the SRP Core path for ShaderVariables.hlsl.",
            quick_fix_ids=self.fix_ids,
            file_path=record.path,
            line=record.line,
        )


class UrpDepthTexelRule(RegexRule):
    """Detects manual declarations clashing with URP's depth texture header."""

    rule_id = "urp_depth_texel_redef"
    pattern = compile(r"redefinition of '_CameraDepthTexture_TexelSize'")
    fix_ids = ("fix_urp_texel_redef",)

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="Remove manual _CameraDepthTexture_TexelSize declaration",
            details=(
                "URP already declares it via DeclareDepthTexture.hlsl; delete the manual "
                "declarations and include the header."
            ),
            quick_fix_ids=self.fix_ids,
            file_path=record.path,
            line=record.line,
        )
