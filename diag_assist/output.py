"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click

from diag_assist import __version__
from diag_assist.ingest import DiagnosticRecord
from diag_assist.suggestion import Suggestion

ScanResult = tuple[DiagnosticRecord, list[Suggestion]]


def render_human(suggestions: list[Suggestion]) -> str:
    """Render suggestions as a compact colorized list."""
    if not suggestions:
        return click.style("No known issue matched this message.", fg="green")

    lines: list[str] = []
    for index, suggestion in enumerate(suggestions, start=1):
        lines.extend(_suggestion_lines(index, suggestion))
    return "\n".join(lines)


def render_scan_human(results: list[ScanResult]) -> str:
    """Render per-record scan results, skipping records with no suggestions."""
    matched = [(record, items) for record, items in results if items]
    lines = [
        click.style(
            f"Scanned {len(results)} diagnostic(s); {len(matched)} with suggestions.",
            bold=True,
        )
    ]
    for record, suggestions in matched:
        color = "red" if record.level == "error" else "yellow"
        lines.append(click.style(f"[{record.level}] {_clip(record.message)}", fg=color))
        if record.path:
            lines.append(f"   at {record.path}:{record.line}")
        for index, suggestion in enumerate(suggestions, start=1):
            lines.extend(f"   {line}" for line in _suggestion_lines(index, suggestion))
    return "\n".join(lines)


def render_json(suggestions: list[Suggestion], *, input_source: str) -> str:
    """Render stable JSON output for automation."""
    payload = {
        "suggestions": [item.to_dict() for item in suggestions],
        "meta": _meta(input_source),
    }
    return json.dumps(payload, sort_keys=True)


def render_scan_json(results: list[ScanResult], *, input_source: str) -> str:
    payload = {
        "records": [
            {
                "message": record.message,
                "stack": record.stack,
                "path": record.path,
                "line": record.line,
                "level": record.level,
                "suggestions": [item.to_dict() for item in suggestions],
            }
            for record, suggestions in results
        ],
        "meta": _meta(input_source),
    }
    return json.dumps(payload, sort_keys=True)


def render_fix_result(fix_id: str, path: str, applied: bool, backup: Path | None) -> str:
    if not applied:
        return click.style(f"Quick fix {fix_id} failed or not applicable: {path}", fg="yellow")
    return click.style(f"Applied {fix_id} to {path}. Backup: {backup}", fg="green")


def _suggestion_lines(index: int, suggestion: Suggestion) -> list[str]:
    lines = [
        f"{index}. " + click.style(f"[{suggestion.id}] {suggestion.title}", bold=True),
        f"   {suggestion.details}",
    ]
    if suggestion.file_path:
        location = suggestion.file_path
        if suggestion.line > 0:
            location = f"{location}:{suggestion.line}"
        lines.append(f"   file: {location}")
    if suggestion.actionable:
        for fix_id in suggestion.quick_fix_ids:
            lines.append(
                "   quick fix: "
                + click.style(f"diag-assist fix {fix_id} {suggestion.file_path}", fg="cyan")
            )
    return lines


def _meta(input_source: str) -> dict[str, Any]:
    return {
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "input_source": input_source,
        "version": __version__,
    }


def _clip(content: str, max_len: int = 120) -> str:
    stripped = content.strip()
    if len(stripped) <= max_len:
        return stripped
    return stripped[: max_len - 3] + "..."
