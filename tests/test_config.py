"""Tests for config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from diag_assist.config import default_config_template, load_app_config


def test_defaults_without_config_files(tmp_path: Path) -> None:
    config = load_app_config(tmp_path)
    assert config.format == "human"
    assert config.backup_suffix == ".bak"
    assert config.filter == "error"
    assert config.include_logs is False
    assert config.rule_enable is None
    assert config.source is None


def test_dot_file_takes_precedence_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(["[tool.diag_assist]", 'format = "human"', 'backup_suffix = ".old"']),
        encoding="utf-8",
    )
    (tmp_path / ".diag-assist.toml").write_text(
        "\n".join(
            [
                'format = "json"',
                'backup_suffix = ".orig"',
                'filter = "warning"',
                "include_logs = true",
                "",
                "[rules]",
                'disable = ["ngo_networktransform"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(tmp_path)
    assert config.format == "json"
    assert config.backup_suffix == ".orig"
    assert config.filter == "warning"
    assert config.include_logs is True
    assert config.rule_disable == ["ngo_networktransform"]
    assert config.source == str(tmp_path.resolve() / ".diag-assist.toml")


def test_pyproject_hyphenated_tool_key(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(
            [
                '[tool."diag-assist"]',
                'format = "json"',
                "",
                '[tool."diag-assist".rules]',
                'enable = ["cs0246_missing_type"]',
            ]
        ),
        encoding="utf-8",
    )
    config = load_app_config(tmp_path)
    assert config.format == "json"
    assert config.rule_enable == ["cs0246_missing_type"]


def test_explicit_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        load_app_config(tmp_path, config_path=Path("nope.toml"))


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ('backup_suffix = ""', "backup_suffix"),
        ('backup_suffix = "bak"', "backup_suffix"),
        ("include_logs = 1", "include_logs"),
        ("filter = 3", "filter"),
        ("rules = 3", "rules"),
        ('format = "xml"', "format must be one of"),
        ("[rules]\nenable = [1]", "rules.enable"),
        ('[rules]\ndisable = "ngo_serverrpc"', "rules.disable"),
        ("format = [", "Invalid TOML"),
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str, message: str) -> None:
    (tmp_path / ".diag-assist.toml").write_text(body, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_default_template_loads(tmp_path: Path) -> None:
    (tmp_path / "diag-assist.toml").write_text(default_config_template(), encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.backup_suffix == ".bak"
    assert config.rule_enable is None
    assert config.rule_disable == []


def test_pyproject_without_tool_table_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "game"\n', encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.source is None
    assert config.format == "human"


def test_dedicated_file_may_use_tool_table(tmp_path: Path) -> None:
    (tmp_path / "diag-assist.toml").write_text(
        '[tool.diag_assist]\nfilter = "warning"\n', encoding="utf-8"
    )
    config = load_app_config(tmp_path)
    assert config.filter == "warning"
    assert config.source == str(tmp_path.resolve() / "diag-assist.toml")
