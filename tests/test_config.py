from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from nous_markdown.config import (
    ConfigError,
    RenderConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".nous-markdown.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.nous-markdown]
        lists = false
        bold = false
        escape_text = true
        max_file_size = 2048
        """,
    )

    config = load_config(tmp_path)

    assert config == RenderConfig(lists=False, bold=False, escape_text=True, max_file_size=2048)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [nous-markdown]
        bold = false
        """,
    )

    assert load_config(tmp_path) == RenderConfig(bold=False)


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.nous-markdown]
        lists = false
        """,
    )

    assert load_config(tmp_path) == RenderConfig(lists=False)


def test_dashed_keys_are_accepted(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.nous-markdown]
        escape-text = true
        max-file-size = 10
        """,
    )

    assert load_config(tmp_path) == RenderConfig(escape_text=True, max_file_size=10)


def test_config_is_found_in_parent_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.nous-markdown]
        bold = false
        """,
    )
    nested = tmp_path / "notes" / "2024"
    nested.mkdir(parents=True)

    assert load_config(nested) == RenderConfig(bold=False)


def test_pyproject_without_table_falls_through_to_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        value = 1
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [nous-markdown]
        lists = false
        """,
    )

    assert load_config(tmp_path) == RenderConfig(lists=False)


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.nous-markdown\n", encoding="utf-8")

    assert load_config(tmp_path) == RenderConfig()


def test_unknown_key_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.nous-markdown]
        italics = true
        """,
    )

    with pytest.raises(ConfigError, match="Invalid"):
        load_config(tmp_path)


def test_non_table_setting_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        nous-markdown = "yes"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        RenderConfig(lists="yes"),
        RenderConfig(bold=1),
        RenderConfig(escape_text=None),
        RenderConfig(max_file_size=0),
        RenderConfig(max_file_size=True),
        RenderConfig(max_file_size="big"),
    ],
)
def test_validate_config_rejects_bad_values(config: RenderConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_apply_overrides_ignores_none():
    config = RenderConfig(bold=False)

    assert apply_overrides(config, bold=None, lists=None) is config
    assert apply_overrides(config, lists=False) == RenderConfig(bold=False, lists=False)


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.nous-markdown]
        bold = false
        max_file_size = 0
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)
    assert build_config(tmp_path, max_file_size=5, bold=True) == RenderConfig(max_file_size=5)
