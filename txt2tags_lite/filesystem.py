"""Filesystem helpers for txt2tags-lite."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, SOURCE_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "TXT2TAGS_LITE_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "TXT2TAGS_LITE_MAX_LINE_LENGTH"
NEW_FILE_MODE = 0o644


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{name} must be a positive integer, got {value}."
        raise ValueError(error_message)

    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum source file size in bytes.

    Raises:
        ValueError: If `TXT2TAGS_LITE_MAX_FILE_SIZE` is set but is not a
            positive integer.

    Examples:
        os.environ["TXT2TAGS_LITE_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum source line length from `TXT2TAGS_LITE_MAX_LINE_LENGTH`."""
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def contains_symlink(path: Path) -> bool:
    """Tell whether `path` or any of its parent directories is a symlink."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate a source filepath under a base directory.

    Args:
        raw_path: User-supplied path to a txt2tags source file (absolute or relative).
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the source file.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("docs/manual.t2t", Path.cwd())
        normalize_filepath("~/notes.txt", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    if resolved.suffix.lower() not in SOURCE_EXTENSIONS:
        error_message = f"{resolved} is not a txt2tags source file.\n"
        error_message += f"Supported extensions are: {', '.join(SOURCE_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat `filepath` without following symlinks, accepting only regular files.

    Raises:
        IOError: If the path cannot be stat-ed, is a symlink or is not a regular
            file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Raise IOError when the file behind `stat_result` is larger than `max_size` bytes."""
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a UTF-8 source for reading, reporting access problems as IOError.

    Examples:
        with safe_read(Path("manual.t2t")) as handle:
            content = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def write_output(
    filepath: Path,
    content: str,
    warn: Callable[[str], None] | None = None,
):
    """Atomically write converted output to a file.

    An existing target keeps its permissions and, when privileges allow, its
    ownership. New files are created with mode 0644.

    Args:
        filepath: Destination path.
        content: Converted document.
        warn: Optional callback for emitting non-fatal warnings (e.g., ownership preservation).

    Returns:
        None.

    Raises:
        IOError: If the destination is a symlink or not a regular file, its
            directory is missing, or the file cannot be written.

    Examples:
        write_output(Path("manual.html"), convert_file(Path("manual.t2t")))
    """
    try:
        existing_stat: os.stat_result | None = collect_file_stat(filepath)
    except IOError:
        if os.path.lexists(filepath):
            raise
        existing_stat = None

    if not filepath.parent.is_dir():
        error_message = f"{filepath.parent} is not a directory."
        raise IOError(error_message)

    permissions = stat.S_IMODE(existing_stat.st_mode) if existing_stat else NEW_FILE_MODE

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)

            # The file must reach the disk with its final mode before the swap
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

            # Needs privileges
            if existing_stat is not None and hasattr(os, "chown"):
                try:
                    os.chown(tmp_file.name, existing_stat.st_uid, existing_stat.st_gid)
                except PermissionError:
                    if warn is not None:
                        warn(
                            f"Warning: Could not preserve file ownership for {filepath.name} "
                            "(requires elevated privileges)"
                        )

        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                Path(temp_path).unlink(missing_ok=True)
            except OSError:
                pass
