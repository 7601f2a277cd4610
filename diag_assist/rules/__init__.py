"""Rules package."""

from collections.abc import Callable
from dataclasses import dataclass

from diag_assist.rules.base import RegexRule, Rule
from diag_assist.rules.compiler import MissingTypeRule
from diag_assist.rules.editor_api import (
    HandlesCapRenameRule,
    SceneGuiSerializedObjectRule,
    TransientArtifactRule,
)
from diag_assist.rules.netcode import NetworkTransformRule, ServerRpcRule
from diag_assist.rules.render_pipelines import HdrpIncludeRule, UrpDepthTexelRule
from diag_assist.rules.xr_interaction import XriHoverSelectRule

__all__ = ["RegexRule", "Rule", "RuleInfo", "build_rules", "default_rules", "list_rule_info"]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    fix_ids: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[], Rule]
    name: str
    description: str
    fix_ids: tuple[str, ...]


def default_rules() -> list[Rule]:
    """Return the full rule set in evaluation order."""
    return build_rules()


def build_rules(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
) -> list[Rule]:
    """Build rule instances applying enable/disable filters.

    Evaluation order is always the declaration order below, regardless of the
    order ids are listed in ``enabled_rule_ids``.
    """
    specs = _ordered_rule_specs()
    registry = {spec.rule_id: spec for spec in specs}
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])

    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else set(registry)
    disabled_set = set(disabled_rule_ids or [])
    return [
        spec.factory()
        for spec in specs
        if spec.rule_id in enabled_set and spec.rule_id not in disabled_set
    ]


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known rules."""
    return [
        RuleInfo(
            rule_id=spec.rule_id,
            name=spec.name,
            description=spec.description,
            fix_ids=spec.fix_ids,
        )
        for spec in _ordered_rule_specs()
    ]


def _ordered_rule_specs() -> list[_RuleSpec]:
    return [
        _spec(XriHoverSelectRule),
        _spec(HandlesCapRenameRule),
        _spec(SceneGuiSerializedObjectRule),
        _spec(HdrpIncludeRule),
        _spec(UrpDepthTexelRule),
        _spec(TransientArtifactRule),
        _spec(ServerRpcRule),
        _spec(NetworkTransformRule),
        _spec(MissingTypeRule),
    ]


def _spec(rule_cls: type[RegexRule]) -> _RuleSpec:
    return _RuleSpec(
        rule_id=rule_cls.rule_id,
        factory=rule_cls,
        name=rule_cls.__name__,
        description=(rule_cls.__doc__ or "").strip(),
        fix_ids=rule_cls.fix_ids,
    )
