"""Configuration loading and management for docobjects.

Configuration sources are merged in priority order:
    1. Defaults (defined in RegistryConfig)
    2. Global config (~/.docobjects.toml)
    3. Project config (./docobjects.toml)
    4. Explicit config file
    5. Environment variables (DOCOBJECTS_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(instance_separator="#", verbose=True)
    >>> config.verbosity
    'verbose'
    >>> config.separators.instance
    '#'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VISIBILITIES = ("public", "protected", "private")
_VERBOSITIES = ("quiet", "normal", "verbose")
_STRING_FIELDS = (
    "namespace_separator",
    "class_method_separator",
    "instance_separator",
    "default_visibility",
    "verbosity",
)


@dataclass(frozen=True)
class Separators:
    """The three strings that join a name onto its namespace path."""

    namespace: str = "::"
    class_method: str = "."
    instance: str = "#"


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for a registry session.

    Attributes:
        Path separators:
            namespace_separator: Between nested namespaces, and before
                class methods owned by the root namespace
            class_method_separator: Before class methods of a nested namespace
            instance_separator: Before instance methods

        Defaults:
            default_visibility: Visibility given to new methods

        Output control:
            verbosity: Logging verbosity level
            log_file: Optional file that also receives log records
    """

    namespace_separator: str = "::"
    class_method_separator: str = "."
    instance_separator: str = "#"

    default_visibility: str = "public"

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for field_name in _STRING_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise ValueError(f"{field_name} must be a string, got {type(value).__name__}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ValueError(f"log_file must be a string, got {type(self.log_file).__name__}")

        for field_name in _STRING_FIELDS[:3]:
            if not getattr(self, field_name):
                raise ValueError(f"{field_name} must not be empty")

        # Paths of class and instance methods with the same name must differ
        if self.instance_separator in (self.namespace_separator, self.class_method_separator):
            raise ValueError("instance_separator must differ from the class separators")
        # Otherwise Foo::bar (nested namespace) and Foo::bar (class method) collide
        if self.class_method_separator == self.namespace_separator:
            raise ValueError("class_method_separator must differ from namespace_separator")

        if self.default_visibility not in _VISIBILITIES:
            raise ValueError(f"default_visibility must be one of {', '.join(_VISIBILITIES)}")
        if self.verbosity not in _VERBOSITIES:
            raise ValueError(f"verbosity must be one of {', '.join(_VERBOSITIES)}")

    @property
    def separators(self) -> Separators:
        """Separator set handed to the path resolver."""
        return Separators(
            namespace=self.namespace_separator,
            class_method=self.class_method_separator,
            instance=self.instance_separator,
        )


DEFAULT_CONFIG = RegistryConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> RegistryConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``verbose``
            and ``quiet`` booleans are mapped onto ``verbosity``

    Returns:
        Validated RegistryConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".docobjects.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "docobjects.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    unknown = sorted(set(merged) - set(RegistryConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    try:
        return RegistryConfig(**merged)
    except ValueError as e:
        key = str(e).split(" ", 1)[0]
        raise InvalidConfigError(key, merged.get(key), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DOCOBJECTS_* environment variables.

    Every RegistryConfig field can be set, e.g. DOCOBJECTS_INSTANCE_SEPARATOR
    or DOCOBJECTS_VERBOSITY.

    Returns:
        Dict of field_name -> parsed_value for any DOCOBJECTS_* vars found.
    """
    type_hints = get_type_hints(RegistryConfig)

    result: dict[str, Any] = {}

    for field_name in RegistryConfig.__dataclass_fields__:
        env_key = f"DOCOBJECTS_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        parsed = _parse_env_value(env_value, type_hint)
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Every RegistryConfig field is a string (or Optional/Literal string), so
    the raw value is returned for those and None for anything else.
    """
    origin = getattr(type_hint, "__origin__", None)

    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Only the ``[docobjects]`` table is used when present; otherwise the
    top-level keys are taken as-is.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data.get("docobjects", data)
