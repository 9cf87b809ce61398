from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from txt2tags_lite.config import (
    ConfigError,
    ConvertConfig,
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
    path = base / ".txt2tags-lite.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "man"
        max_file_size = 1
        max-line-length = 2
        """,
    )

    config = load_config(tmp_path)

    assert config == ConvertConfig(target="man", max_file_size=1, max_line_length=2)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [txt2tags-lite]
        target = "wiki"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.target == "wiki"


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.txt2tags-lite]
        max_line_length = 80
        """,
    )

    assert load_config(tmp_path).max_line_length == 80


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "man"
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.target == "man"


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "man"
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.txt2tags-lite]
        """,
    )

    config = load_config(child)

    assert config.target == ConvertConfig().target


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == ConvertConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "wiki"
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.target == "wiki"


def test_load_config_errors_on_invalid_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "html"
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_normalizes_target(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = " MAN "
        """,
    )

    assert load_config(tmp_path).target == "man"


def test_apply_overrides_ignores_none_values():
    config = ConvertConfig(target="man")

    assert apply_overrides(config, target=None) is config
    assert apply_overrides(config, target="wiki").target == "wiki"


def test_build_config_applies_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "man"
        max_line_length = 120
        """,
    )

    config = build_config(tmp_path, target="Wiki")

    assert config.target == "wiki"
    assert config.max_line_length == 120


def test_build_config_rejects_unknown_target(tmp_path: Path):
    with pytest.raises(ConfigError, match="target"):
        build_config(tmp_path, target="latex")


@pytest.mark.parametrize(
    "config",
    [
        ConvertConfig(target="latex"),
        ConvertConfig(target=""),
        ConvertConfig(max_file_size=0),
        ConvertConfig(max_line_length=-1),
    ],
)
def test_validate_config_rejects_invalid_values(config: ConvertConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


@pytest.mark.parametrize(
    "config",
    [
        ConvertConfig(max_file_size="big"),  # type: ignore[arg-type]
        ConvertConfig(max_line_length="long"),  # type: ignore[arg-type]
        ConvertConfig(max_line_length=True),
        ConvertConfig(target=3),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_non_numeric_limits(config: ConvertConfig):
    with pytest.raises(ConfigError):
        validate_config(config)
