"""Configuration loading for diag-assist."""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from diag_assist.fixes import DEFAULT_BACKUP_SUFFIX

CONFIG_FILENAMES = (".diag-assist.toml", "diag-assist.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("diag_assist", "diag-assist")
OUTPUT_FORMATS = ("human", "json")


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX
    filter: str = "error"
    include_logs: bool = False
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "backup_suffix": self.backup_suffix,
            "filter": self.filter,
            "include_logs": self.include_logs,
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "source": self.source,
        }


def load_app_config(root: Path, config_path: Path | None = None) -> AppConfig:
    """Resolve the project configuration.

    An explicit ``config_path`` wins and must exist. Otherwise the first of
    ``.diag-assist.toml``, ``diag-assist.toml`` and a ``[tool.diag_assist]``
    table in ``pyproject.toml`` is used. Defaults apply when none is found.
    """
    root = root.resolve()
    if config_path is not None:
        explicit = config_path if config_path.is_absolute() else root / config_path
        if not explicit.exists():
            raise ValueError(f"Config file does not exist: {explicit}")
        return _config_from_table(_settings_table(explicit) or {}, source=str(explicit))

    for candidate in _candidate_files(root):
        table = _settings_table(candidate)
        # An empty tool table in pyproject.toml does not claim the project.
        if table or (table is not None and candidate.name != PYPROJECT_FILENAME):
            return _config_from_table(table, source=str(candidate))
    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "human"',
            'backup_suffix = ".bak"',
            'filter = "error"',
            "include_logs = false",
            "",
            "[rules]",
            "# enable = [",
            '#   "xri_ixr_hover_select",',
            '#   "handles_cap_rename",',
            '#   "editor_onScene_serialized",',
            '#   "hdrp_include_core",',
            '#   "urp_depth_texel_redef",',
            '#   "editor_transient_artifacts",',
            '#   "ngo_serverrpc",',
            '#   "ngo_networktransform",',
            '#   "cs0246_missing_type",',
            "# ]",
            "disable = []",
            "",
        ]
    )


def _candidate_files(root: Path) -> Iterator[Path]:
    for name in (*CONFIG_FILENAMES, PYPROJECT_FILENAME):
        candidate = root / name
        if candidate.is_file():
            yield candidate


def _settings_table(path: Path) -> dict[str, Any] | None:
    """Return the diag-assist settings held in ``path``.

    ``pyproject.toml`` only contributes its tool table, so None means the
    file has nothing for us. Dedicated files may be flat or use the same
    tool table.
    """
    try:
        with path.open("rb") as file_obj:
            document = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc

    tool = document.get("tool")
    if isinstance(tool, dict):
        for key in PYPROJECT_TOOL_KEYS:
            if isinstance(tool.get(key), dict):
                return tool[key]
    if path.name == PYPROJECT_FILENAME:
        return None
    return document


def _config_from_table(table: dict[str, Any], *, source: str) -> AppConfig:
    rules = table.get("rules", {})
    if not isinstance(rules, dict):
        raise ValueError("rules must be a table/object")

    output_format = _typed(table, "format", str, "human").lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"format must be one of: {', '.join(OUTPUT_FORMATS)}")

    backup_suffix = _typed(table, "backup_suffix", str, DEFAULT_BACKUP_SUFFIX)
    if len(backup_suffix) < 2 or not backup_suffix.startswith("."):
        raise ValueError("backup_suffix must start with '.' and name an extension, e.g. '.bak'")

    enabled = _rule_ids(rules.get("enable"), "rules.enable")
    return AppConfig(
        format=output_format,
        backup_suffix=backup_suffix,
        filter=_typed(table, "filter", str, "error"),
        include_logs=_typed(table, "include_logs", bool, False),
        rule_enable=enabled,
        rule_disable=_rule_ids(rules.get("disable"), "rules.disable") or [],
        source=source,
    )


_TYPE_NAMES = {str: "a string", bool: "a boolean"}


def _typed(table: dict[str, Any], key: str, expected: type, default: Any) -> Any:
    value = table.get(key, default)
    if not isinstance(value, expected):
        raise ValueError(f"{key} must be {_TYPE_NAMES[expected]}")
    return value


def _rule_ids(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return list(value)
