from __future__ import annotations

import os
import textwrap
import uuid
from pathlib import Path

import pytest

import txt2tags_lite.cli as cli_module
from txt2tags_lite.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_prints_html_by_default(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(
        tmp_path,
        "doc.t2t",
        """
        = Title =
        Some **bold** text
        """,
    )

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code == 0
    assert result.output == "<h1>Title</h1>\n<p>\nSome <strong>bold</strong> text\n</p>\n"


def test_cli_target_option(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(
        tmp_path,
        "doc.t2t",
        """
        - one
        - two
        """,
    )

    result = cli_runner.invoke(cli, ["--target", "WIKI", str(source)])

    assert result.exit_code == 0
    assert result.output == "* one\n* two\n"


def test_cli_rejects_unknown_target(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "doc.t2t", "text\n")

    result = cli_runner.invoke(cli, ["-t", "latex", str(source)])

    assert result.exit_code != 0
    assert "latex" in result.output


def test_cli_writes_output_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "page.t2t", "= NAME =\n")
    destination = tmp_path / "page.1"

    result = cli_runner.invoke(cli, ["-t", "man", "-o", str(destination), str(source)])

    assert result.exit_code == 0
    assert result.output == ""
    assert destination.read_text(encoding="utf-8") == ".TH NAME\n"


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "man"
        """,
    )
    source = _write(tmp_path, "configured.t2t", "== Usage ==\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code == 0
    assert result.output == ".SH Usage\n"


def test_cli_flag_overrides_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "man"
        """,
    )
    source = _write(tmp_path, "override.t2t", "== Usage ==\n")

    result = cli_runner.invoke(cli, ["--target", "wiki", str(source)])

    assert result.exit_code == 0
    assert result.output == "== Usage ==\n"


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.txt2tags-lite]
        target = "pdf"
        """,
    )
    source = _write(tmp_path, "bad.t2t", "text\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "`target` must be one of" in result.output


def test_cli_rejects_non_source_files(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "notes.md", "# Heading\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "not a txt2tags source file" in result.output


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_cli_rejects_symlinks(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "source.t2t", "text\n")
    link = tmp_path / "alias.t2t"
    try:
        os.symlink(source, link, target_is_directory=False)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    result = cli_runner.invoke(cli_module.cli, [str(link)])

    assert result.exit_code != 0
    assert "Symlinks" in result.output


def test_cli_prevents_path_traversal(cli_runner, tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    outside = tmp_path / f"outside-{uuid.uuid4().hex}.t2t"
    outside.write_text("text\n", encoding="utf-8")

    result = cli_runner.invoke(cli, [str(outside)])

    assert result.exit_code != 0
    assert "outside of the working directory" in result.output


def test_cli_file_size_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TXT2TAGS_LITE_MAX_FILE_SIZE", "10")
    source = _write(tmp_path, "large.t2t", "x" * 64 + "\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "exceeds the maximum allowed size" in result.output


def test_cli_line_length_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TXT2TAGS_LITE_MAX_LINE_LENGTH", "20")
    source = _write(tmp_path, "long.t2t", "short\n" + "y" * 40 + "\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "line at line 2" in result.output


def test_cli_invalid_environment_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TXT2TAGS_LITE_MAX_LINE_LENGTH", "many")
    source = _write(tmp_path, "doc.t2t", "text\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "TXT2TAGS_LITE_MAX_LINE_LENGTH" in result.output


def test_cli_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "binary.t2t"
    source.write_bytes(b"\xff\xfe\xfa\n")

    result = cli_runner.invoke(cli, [str(source)])

    assert result.exit_code != 0
    assert "Invalid UTF-8" in result.output


def test_cli_public_api():
    assert cli_module.__all__ == ["cli"]
