"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

TOOL_NAME = "nous-markdown"


@dataclass
class RenderConfig:
    """Configuration for rendering notes to HTML.

    Attributes:
        lists: Render ``- `` items as ``<ul>``/``<li>``; when False they stay
            literal text.
        bold: Pair ``*`` markers into ``<b>``/``</b>``; when False they stay
            literal text.
        escape_text: HTML-escape the content of text runs. Off by default so
            notes may carry raw HTML.
        max_file_size: Maximum note file size in bytes that will be processed.

    Examples:
        RenderConfig(lists=False, escape_text=True)
    """

    # Syntax
    lists: bool = True
    bold: bool = True

    # Output
    escape_text: bool = False

    # Limits
    max_file_size: int = 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.nous-markdown]`` table from `pyproject.toml` and the
    ``[nous-markdown]`` or ``[tool.nous-markdown]`` table from
    `.nous-markdown.toml` when present. Returns defaults when no configuration is
    found. TOML files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RenderConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("notes"))
    """
    root = search_path.resolve()
    for directory in (root, *root.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            data = _read_toml(config_file)
            if data is None:
                continue
            for table_path in table_paths:
                raw_config = _lookup(data, table_path)
                if raw_config is not _MISSING:
                    return _build_config_from_raw(raw_config, config_file, table_path)

    return RenderConfig()


# File name, then the tables tried inside it, in lookup order
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", TOOL_NAME),)),
    (f".{TOOL_NAME}.toml", ((TOOL_NAME,), ("tool", TOOL_NAME))),
)

_MISSING = object()


def _read_toml(config_file: Path) -> dict | None:
    try:
        return tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None


def _lookup(data: dict, table_path: tuple[str, ...]) -> object:
    node: object = data
    for key in table_path:
        node = node.get(key, _MISSING) if isinstance(node, dict) else _MISSING
    return node


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys are usually dashed
    options = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return RenderConfig(**options)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RenderConfig) -> None:
    """Validate a `RenderConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a switch is not a boolean or the size limit is not a
            positive integer.

    Examples:
        validate_config(RenderConfig(max_file_size=4096))
    """
    for key in ("lists", "bold", "escape_text"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    if isinstance(config.max_file_size, bool) or not isinstance(config.max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Apply override values to a `RenderConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RenderConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RenderConfig`.

    Examples:
        updated = apply_overrides(config, lists=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RenderConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), bold=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
