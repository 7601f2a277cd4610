"""CLI entrypoint for diag-assist."""

from __future__ import annotations

import difflib
import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from diag_assist import __version__
from diag_assist.classifier import RuleClassifier
from diag_assist.config import AppConfig, default_config_template, load_app_config
from diag_assist.fixes import FixExecutor, get_fix, list_fixes, read_source_text
from diag_assist.ingest import (
    DiagnosticRecord,
    filter_records,
    latest_record,
    parse_record,
    read_log_records,
)
from diag_assist.output import (
    ScanResult,
    render_fix_result,
    render_human,
    render_json,
    render_scan_human,
    render_scan_json,
)
from diag_assist.rules import build_rules, list_rule_info
from diag_assist.rules.base import Rule

app = typer.Typer(
    name="diag-assist",
    no_args_is_help=True,
    help="Classify build diagnostics and apply deterministic quick fixes.",
)

RootOption = Annotated[Path, typer.Option(help="Project root used to find config files.")]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config TOML file."),
]
FormatOption = Annotated[
    str | None, typer.Option(help="Output format: human|json.", show_default="human")
]


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Root command callback."""
    _ = version
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("analyze")
def analyze_command(
    message: Annotated[str, typer.Argument(help="Diagnostic message text.")],
    stack: Annotated[str, typer.Option(help="Stack trace text.")] = "",
    path: Annotated[
        str | None,
        typer.Option(help="File associated with the message (parsed from it if omitted)."),
    ] = None,
    line: Annotated[int | None, typer.Option(help="1-based line hint.")] = None,
    format: FormatOption = None,
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Classify a single diagnostic message."""
    app_config = _load_config_or_raise(root, config_file)
    output_format = _resolve_format(format, app_config)
    classifier = RuleClassifier(_build_configured_rules_or_raise(app_config))

    record = parse_record(message, stack)
    if path is not None:
        record.path = path
    if line is not None:
        record.line = line
    suggestions = classifier.classify_record(record)

    if output_format == "json":
        typer.echo(render_json(suggestions, input_source="argument"))
    else:
        typer.echo(render_human(suggestions))


@app.command("scan")
def scan_command(
    log_file: Annotated[
        Path | None, typer.Option(help="Path to a console or Editor.log file.")
    ] = None,
    stdin: Annotated[bool, typer.Option(help="Read log text from stdin.")] = False,
    filter: Annotated[
        str | None,
        typer.Option(help="Keep records whose level or message contains this text."),
    ] = None,
    include_logs: Annotated[
        bool | None,
        typer.Option("--include-logs/--no-include-logs", help="Also classify plain log lines."),
    ] = None,
    last: Annotated[bool, typer.Option("--last", help="Only analyze the last record.")] = False,
    format: FormatOption = None,
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Ingest diagnostics from a log and classify each of them."""
    app_config = _load_config_or_raise(root, config_file)
    output_format = _resolve_format(format, app_config)

    if log_file is not None and stdin:
        raise typer.BadParameter("Use either --log-file or --stdin, not both.")
    if log_file is None and not stdin:
        raise typer.BadParameter("Provide --log-file or --stdin.")

    if log_file is not None:
        text = log_file.read_text(encoding="utf-8", errors="replace")
        input_source = f"log_file:{log_file}"
    else:
        text = sys.stdin.read()
        input_source = "stdin"

    records = filter_records(
        read_log_records(text),
        filter if filter is not None else app_config.filter,
        include_logs=include_logs if include_logs is not None else app_config.include_logs,
    )
    if last:
        newest = latest_record(records)
        records = [newest] if newest is not None else []

    classifier = RuleClassifier(_build_configured_rules_or_raise(app_config))
    results = _classify_records(classifier, records)

    if output_format == "json":
        typer.echo(render_scan_json(results, input_source=input_source))
    else:
        typer.echo(render_scan_human(results))


@app.command("fix")
def fix_command(
    fix_id: Annotated[str, typer.Argument(help="Quick fix identifier.")],
    path: Annotated[str, typer.Argument(help="File to patch.")],
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print a diff instead of writing.")
    ] = False,
    format: FormatOption = None,
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Apply a quick fix to a file, keeping a backup of the original."""
    app_config = _load_config_or_raise(root, config_file)
    output_format = _resolve_format(format, app_config)
    if get_fix(fix_id) is None:
        choices = ", ".join(item.fix_id for item in list_fixes())
        raise typer.BadParameter(
            f"Unknown fix id. Expected one of: {choices}", param_hint="FIX_ID"
        )

    executor = FixExecutor(backup_suffix=app_config.backup_suffix)
    try:
        if dry_run:
            _echo_preview(executor, fix_id, path)
            return
        applied = executor.apply_fix(fix_id, path)
    except OSError as exc:
        typer.echo(f"Quick fix {fix_id} failed on {path}: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    backup = executor.backup_path(path) if applied else None
    if output_format == "json":
        typer.echo(
            json.dumps(
                {
                    "fix_id": fix_id,
                    "path": path,
                    "applied": applied,
                    "backup": str(backup) if backup is not None else None,
                },
                sort_keys=True,
            )
        )
    else:
        typer.echo(render_fix_result(fix_id, path, applied, backup))

    if not applied:
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """List classification rules and whether they are enabled."""
    output_format = _check_format(format)
    app_config = _load_config_or_raise(root, config_file)
    active_ids = {rule.rule_id for rule in _build_configured_rules_or_raise(app_config)}
    rule_info = list_rule_info()

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "name": item.name,
                    "description": item.description,
                    "fix_ids": list(item.fix_ids),
                    "enabled": item.rule_id in active_ids,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        fixes = f" (fixes: {', '.join(item.fix_ids)})" if item.fix_ids else ""
        lines.append(f"- {item.rule_id} [{status}] - {item.description}{fixes}")
    typer.echo("\n".join(lines))


@app.command("fixes")
def fixes_command(
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """List available quick fixes."""
    output_format = _check_format(format)
    procedures = list_fixes()
    if output_format == "json":
        payload = {
            "fixes": [
                {"fix_id": item.fix_id, "description": item.description} for item in procedures
            ]
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available quick fixes:"]
    lines.extend(f"- {item.fix_id} - {item.description}" for item in procedures)
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Show resolved configuration."""
    output_format = _check_format(format)
    app_config = _load_config_or_raise(root, config_file)
    active_rules = _build_configured_rules_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_rule_ids"] = [rule.rule_id for rule in active_rules]

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- backup_suffix: {payload['backup_suffix']}",
        f"- filter: {payload['filter']}",
        f"- include_logs: {payload['include_logs']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".diag-assist.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def _echo_preview(executor: FixExecutor, fix_id: str, path: str) -> None:
    preview = executor.preview(fix_id, path)
    if preview is None:
        typer.echo(render_fix_result(fix_id, path, False, None))
        raise typer.Exit(code=1)
    diff = difflib.unified_diff(
        read_source_text(path).splitlines(keepends=True),
        preview.splitlines(keepends=True),
        fromfile=path,
        tofile=f"{path} ({fix_id})",
    )
    typer.echo(_printable("".join(diff)) or "No changes.", nl=False)


def _printable(text: str) -> str:
    # Undecodable source bytes are shown as U+FFFD.
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _classify_records(
    classifier: RuleClassifier, records: list[DiagnosticRecord]
) -> list[ScanResult]:
    return [(record, classifier.classify_record(record)) for record in records]


def _load_config_or_raise(root: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(root, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_rules_or_raise(app_config: AppConfig) -> list[Rule]:
    try:
        return build_rules(
            enabled_rule_ids=app_config.rule_enable,
            disabled_rule_ids=app_config.rule_disable,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _resolve_format(value: str | None, app_config: AppConfig) -> str:
    return _check_format(value or app_config.format)


def _check_format(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format
