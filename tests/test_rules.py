"""Tests for individual rules and the rule registry."""

from __future__ import annotations

import pytest

from diag_assist.fixes import get_fix
from diag_assist.ingest import DiagnosticRecord
from diag_assist.rules import build_rules, default_rules, list_rule_info
from diag_assist.rules.editor_api import (
    HandlesCapRenameRule,
    SceneGuiSerializedObjectRule,
    TransientArtifactRule,
    handle_cap_name,
)
from diag_assist.rules.netcode import NetworkTransformRule, ServerRpcRule
from diag_assist.rules.render_pipelines import HdrpIncludeRule, UrpDepthTexelRule
from diag_assist.rules.xr_interaction import XriHoverSelectRule

EXPECTED_ORDER = [
    "xri_ixr_hover_select",
    "handles_cap_rename",
    "editor_onScene_serialized",
    "hdrp_include_core",
    "urp_depth_texel_redef",
    "editor_transient_artifacts",
    "ngo_serverrpc",
    "ngo_networktransform",
    "cs0246_missing_type",
]


def test_default_rules_follow_declared_order() -> None:
    assert [rule.rule_id for rule in default_rules()] == EXPECTED_ORDER
    assert [info.rule_id for info in list_rule_info()] == EXPECTED_ORDER


def test_every_rule_fix_id_is_registered() -> None:
    for info in list_rule_info():
        for fix_id in info.fix_ids:
            assert get_fix(fix_id) is not None


def test_build_rules_keeps_declared_order_for_enabled_ids() -> None:
    rules = build_rules(enabled_rule_ids=["cs0246_missing_type", "handles_cap_rename"])
    assert [rule.rule_id for rule in rules] == ["handles_cap_rename", "cs0246_missing_type"]


def test_build_rules_rejects_unknown_ids() -> None:
    with pytest.raises(ValueError, match="Unknown rule ids: nope"):
        build_rules(disabled_rule_ids=["nope"])


def test_handle_cap_name_inserts_handle_before_trailing_cap() -> None:
    assert handle_cap_name("ScaleCap") == "ScaleHandleCap"
    assert handle_cap_name("CapCap") == "CapHandleCap"


def test_xri_rule_requires_both_interfaces() -> None:
    rule = XriHoverSelectRule()
    hit = _record(
        "error CS0266: Cannot implicitly convert type "
        "'UnityEngine.XR.Interaction.Toolkit.Interactables.IXRHoverInteractable' to "
        "'UnityEngine.XR.Interaction.Toolkit.Interactables.IXRSelectInteractable'"
    )
    assert rule.evaluate(hit) is not None
    assert rule.evaluate(_record("error CS0266: IXRHoverInteractable to int")) is None


def test_handles_rule_ignores_other_members() -> None:
    rule = HandlesCapRenameRule()
    assert rule.evaluate(_record("'Handles' does not contain a definition for 'Label'")) is None


def test_scene_gui_rule_is_case_insensitive_and_keeps_path() -> None:
    rule = SceneGuiSerializedObjectRule()
    suggestion = rule.evaluate(
        _record(
            "SerializedObject should not be used inside OnPreviewGUI",
            path="Assets/Editor/Inspector.cs",
        )
    )
    assert suggestion is not None
    assert suggestion.file_path == "Assets/Editor/Inspector.cs"
    assert suggestion.quick_fix_ids == ()


def test_render_pipeline_rules_carry_their_fixes() -> None:
    hdrp = HdrpIncludeRule().evaluate(
        _record(
            "Shader error in 'Custom/Foo': Couldn't open include file "
            "'Packages/com.unity.render-pipelines.high-definition/Runtime/ShaderLibrary/"
            "ShaderVariables.hlsl'. at line 12",
            path="Assets/Shaders/Foo.shader",
        )
    )
    urp = UrpDepthTexelRule().evaluate(
        _record(
            "Shader error in 'Custom/Foo': redefinition of '_CameraDepthTexture_TexelSize'",
            path="Assets/Shaders/Foo.shader",
        )
    )
    assert hdrp is not None and hdrp.quick_fix_ids == ("fix_hdrp_include",)
    assert urp is not None and urp.quick_fix_ids == ("fix_urp_texel_redef",)
    assert hdrp.actionable and urp.actionable


def test_informational_rules_have_no_fix_or_path() -> None:
    messages = {
        TransientArtifactRule(): "Assertion failed: TransientArtifactProvider::IsTransientArtifact",
        ServerRpcRule(): "ServerRpc can only be used in classes deriving from NetworkBehaviour",
        NetworkTransformRule(): "The type or namespace 'NetworkTransform' could not be found",
    }
    for rule, message in messages.items():
        suggestion = rule.evaluate(_record(message, path="Assets/Foo.cs"))
        assert suggestion is not None
        assert suggestion.id == rule.rule_id
        assert suggestion.quick_fix_ids == ()
        assert suggestion.file_path == ""


def _record(message: str, path: str = "") -> DiagnosticRecord:
    return DiagnosticRecord(message=message, path=path)
