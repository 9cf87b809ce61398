"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

SUPPORTED_TARGETS = ("html", "man", "wiki")
CONFIG_TABLE = "txt2tags-lite"


@dataclass
class ConvertConfig:
    """Configuration for converting txt2tags sources.

    Attributes:
        target: Output format, one of ``"html"``, ``"man"`` or ``"wiki"``.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum source line length allowed during conversion.

    Examples:
        ConvertConfig(target="wiki", max_line_length=2_000)
    """

    target: str = "html"

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 10_000


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`target` must be one of: html, man, wiki")
    """


def load_config(search_path: Path) -> ConvertConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.txt2tags-lite]`` table from `pyproject.toml` and the
    ``[txt2tags-lite]`` or ``[tool.txt2tags-lite]`` table from
    `.txt2tags-lite.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConvertConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / f".{CONFIG_TABLE}.toml",
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConvertConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ConvertConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ConvertConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return ConvertConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys use dashes, dataclass fields use underscores
    fields = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ConvertConfig(**fields)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: ConvertConfig) -> ConvertConfig:
    if isinstance(config.target, str):
        target = config.target.strip().lower()
        if target != config.target:
            return replace(config, target=target)
    return config


def validate_config(config: ConvertConfig) -> None:
    """Validate a `ConvertConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the target is unknown or numeric limits are not
            positive integers.

    Examples:
        validate_config(ConvertConfig(target="man"))
    """
    config = normalize_config(config)

    if not isinstance(config.target, str) or config.target not in SUPPORTED_TARGETS:
        raise ConfigError(f"`target` must be one of: {', '.join(SUPPORTED_TARGETS)}")

    limits = {
        "max_file_size": config.max_file_size,
        "max_line_length": config.max_line_length,
    }
    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: ConvertConfig, **overrides: object) -> ConvertConfig:
    """Apply override values to a `ConvertConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConvertConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ConvertConfig`.

    Examples:
        updated = apply_overrides(config, target="wiki")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConvertConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConvertConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), target="man")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
