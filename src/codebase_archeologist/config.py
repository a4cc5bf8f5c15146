"""Configuration loading and management for Codebase Archeologist.

Configuration sources are merged in priority order:
    1. Defaults (defined in ArcheologistConfig)
    2. Project config (<project>/archeologist.toml)
    3. Explicit config file
    4. Environment variables (ARCHEOLOGIST_* prefix)
    5. Call-site overrides (passed as kwargs)

Example:
    >>> config = load_config(god_class_max_methods=30)
    >>> config.god_class_max_methods
    30
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

PROJECT_CONFIG_NAME = "archeologist.toml"
ENV_PREFIX = "ARCHEOLOGIST_"

# Build output, editor state and vendored code never hold first-party debt.
DEFAULT_EXCLUDE_DIRS = (
    "Intermediate",
    "Binaries",
    "Saved",
    "DerivedDataCache",
    "ThirdParty",
    ".git",
    "node_modules",
    ".vs",
    ".vscode",
)


@dataclass(frozen=True)
class ArcheologistConfig:
    """Configuration for one archeologist scan.

    Attributes:
        Source tree:
            source_dir: Native source directory, relative to the project root
            header_extensions: Extensions treated as headers
            source_extensions: Extensions treated as implementation files
            exclude_dirs: Directory names skipped at any depth

        Collector bounds:
            max_depth: Deepest directory level the collector descends into
            max_files: Safety cap on collected files
            read_batch_size: Files read concurrently per batch

        Detector thresholds:
            generated_body_lookahead: Characters searched for GENERATED_BODY()
            god_class_max_lines: Body lines above which a class is a god class
            god_class_max_methods: Method count above which a class is flagged
            newobject_context_lines: Lines searched for UPROPERTY before NewObject
            max_include_chain: Longest include chain followed by cycle search

        Git:
            git_max_commits: History window for churn and shotgun surgery
            churn_top_files: Most-changed files kept in the churn list
            shotgun_min_files: Files changed by one commit to count as surgery
            git_timeout_seconds: Timeout for a single git subprocess

        Output:
            backlog_limit: Refactoring backlog length
            verbosity: Logging verbosity level
    """

    # Source tree
    source_dir: str = "Source"
    header_extensions: tuple[str, ...] = (".h", ".hpp")
    source_extensions: tuple[str, ...] = (".cpp", ".cc")
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS

    # Collector bounds
    max_depth: int = 8
    max_files: int = 2000
    read_batch_size: int = 20

    # Detector thresholds
    generated_body_lookahead: int = 2000
    god_class_max_lines: int = 1000
    god_class_max_methods: int = 20
    newobject_context_lines: int = 5
    max_include_chain: int = 6

    # Git
    git_max_commits: int = 200
    churn_top_files: int = 50
    shotgun_min_files: int = 10
    git_timeout_seconds: int = 30

    # Output
    backlog_limit: int = 50
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._check_types()

        if not self.source_dir or Path(self.source_dir).is_absolute():
            raise InvalidConfigError(
                "source_dir", self.source_dir, "must be a non-empty relative path"
            )

        for name in ("header_extensions", "source_extensions"):
            exts = getattr(self, name)
            if not exts:
                raise InvalidConfigError(name, exts, "must list at least one extension")
            for ext in exts:
                if not ext.startswith("."):
                    raise InvalidConfigError(name, ext, "extensions must start with '.'")

        positive = (
            "max_depth",
            "max_files",
            "read_batch_size",
            "generated_body_lookahead",
            "god_class_max_lines",
            "god_class_max_methods",
            "newobject_context_lines",
            "git_max_commits",
            "churn_top_files",
            "shotgun_min_files",
            "git_timeout_seconds",
            "backlog_limit",
        )
        for name in positive:
            value = getattr(self, name)
            if value < 1:
                raise InvalidConfigError(name, value, "must be at least 1")

        # A cycle needs at least two headers in its chain.
        if self.max_include_chain < 2:
            raise InvalidConfigError(
                "max_include_chain", self.max_include_chain, "must be at least 2"
            )

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    def _check_types(self) -> None:
        """Reject values of the wrong type, e.g. strings read from TOML."""
        type_hints = get_type_hints(type(self))
        for f in fields(self):
            value = getattr(self, f.name)
            hint = type_hints[f.name]
            origin = getattr(hint, "__origin__", None)

            if hint is int:
                # bool is an int subclass but never a valid count
                if not isinstance(value, int) or isinstance(value, bool):
                    raise InvalidConfigError(f.name, value, "must be an integer")
            elif origin is tuple:
                if not isinstance(value, tuple) or not all(isinstance(v, str) for v in value):
                    raise InvalidConfigError(f.name, value, "must be a list of strings")
            elif not isinstance(value, str):
                raise InvalidConfigError(f.name, value, "must be a string")

    @property
    def all_extensions(self) -> frozenset[str]:
        """Lower-cased header and implementation extensions."""
        return frozenset(e.lower() for e in self.header_extensions + self.source_extensions)


DEFAULT_CONFIG = ArcheologistConfig()


def load_config(
    config_file: Optional[Path] = None,
    project_root: Optional[Path] = None,
    **overrides: Any,
) -> ArcheologistConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        project_root: Project whose archeologist.toml is picked up, if present
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated ArcheologistConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid
    """
    merged: dict[str, Any] = {}

    if project_root is not None:
        project_config = Path(project_root) / PROJECT_CONFIG_NAME
        if project_config.is_file():
            merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not Path(config_file).is_file():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(Path(config_file)))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ArcheologistConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            details={"known": ", ".join(sorted(known))},
        )

    # TOML arrays arrive as lists; the frozen config stores tuples.
    for key, value in list(merged.items()):
        if isinstance(value, list):
            merged[key] = tuple(value)

    return ArcheologistConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ARCHEOLOGIST_* environment variables.

    Scalar fields only; tuple fields are configured through TOML.
    """
    type_hints = get_type_hints(ArcheologistConfig)
    result: dict[str, Any] = {}

    for field_name in ArcheologistConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file, accepting either top-level keys or an [archeologist] table."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("archeologist")
    if isinstance(section, dict):
        return dict(section)
    return data
