"""Configuration loading and management for typescope.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.typescope.toml)
    3. Project config (./typescope.toml)
    4. Explicit config file
    5. Environment variables (TYPESCOPE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, strict_parsing=False)
    >>> config.verbosity
    'verbose'
    >>> config.strict_parsing
    False
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["rich", "json", "graph"]

_VERBOSITIES = ("quiet", "normal", "verbose")
_OUTPUT_FORMATS = ("rich", "json", "graph")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a scan.

    Attributes:
        File discovery:
            extensions: Source file extensions to analyze
            skip_dirs: Directory names never descended into
            allow_hidden_files: Include hidden files and directories
            follow_symlinks: Follow symbolic links to directories

        Parsing:
            strict_parsing: Treat a syntax tree containing error nodes as a
                parse failure (aborts the scan)

        Output control:
            output_format: Report format (rich, json, graph)
            verbosity: Logging verbosity level
    """

    # File discovery
    extensions: list[str] = field(default_factory=lambda: [".swift"])
    skip_dirs: list[str] = field(
        default_factory=lambda: [
            ".git",
            ".build",
            ".swiftpm",
            "DerivedData",
            "Pods",
            "Carthage",
        ]
    )
    allow_hidden_files: bool = False
    follow_symlinks: bool = False

    # Parsing
    strict_parsing: bool = True

    # Output control
    output_format: OutputFormat = "rich"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension is required")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")
        if self.output_format not in _OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, f"expected one of {', '.join(_OUTPUT_FORMATS)}"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )

    @property
    def extension_set(self) -> frozenset[str]:
        """Extensions as a set for O(1) suffix lookups."""
        return frozenset(self.extensions)


default_config = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are folded into ``verbosity``.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".typescope.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "typescope.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from TYPESCOPE_* environment variables.

    List fields (extensions, skip_dirs) take comma-separated values.
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"TYPESCOPE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    # Literal types (verbosity, output_format) are validated by the dataclass
    return value


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, accepting either top-level keys or a [typescope] table."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("typescope")
    if isinstance(section, dict):
        return section
    return data
