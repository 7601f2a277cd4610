"""Netcode for GameObjects rules."""

from __future__ import annotations

from re import Match, compile

from diag_assist.ingest import DiagnosticRecord
from diag_assist.rules.base import RegexRule
from diag_assist.suggestion import Suggestion


class ServerRpcRule(RegexRule):
    """Detects ServerRpc methods declared outside a NetworkBehaviour."""

    rule_id = "ngo_serverrpc"
    pattern = compile(r"ServerRpc can only be used.*NetworkBehaviour")

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="ServerRpc requires NetworkBehaviour",
            details=(
                "Change the class base to NetworkBehaviour and ensure a NetworkObject "
                "exists on the GameObject."
            ),
        )


class NetworkTransformRule(RegexRule):
    """Detects a missing NetworkTransform component type."""

    rule_id = "ngo_networktransform"
    pattern = compile(r"'NetworkTransform' could not be found")

    def build(self, match: Match[str], record: DiagnosticRecord) -> Suggestion:
        return Suggestion(
            id=self.rule_id,
            title="Missing NetworkTransform (optional)",
            details=(
                "Install the package that provides Unity.Netcode.Components.NetworkTransform "
                "or remove the dependency."
            ),
        )
