"""Configuration loading and management for codebase-metrics.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.codebase-metrics.toml)
    3. Project config (./codebase-metrics.toml)
    4. Explicit config file
    5. Environment variables (CODEBASE_METRICS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4, lint_enabled=False)
    >>> config.workers
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "CODEBASE_METRICS_"
CONFIG_FILENAME = "codebase-metrics.toml"

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")


def _default_workers() -> int:
    # CPU count capped at 8; ESLint subprocesses are the heavy part.
    return min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a batch analysis run.

    Attributes:
        Performance tuning:
            workers: Number of parallel file workers (None = auto-detect)
            timeout_seconds: Per-file wait before routing to fallback analysis
            max_tree_depth: Syntax tree depth treated as malformed

        File discovery:
            max_file_size_mb: Files larger than this are per-file failures
            follow_symlinks: Follow symbolic links during discovery
            skip_dirs: Directory names that are never entered

        Parser grammar extensions:
            enable_jsx: Accept JSX syntax; when off, JSX in any file is a parse failure
            enable_typescript: Parse .ts/.tsx files

        Lint collaborator:
            lint_enabled: Run ESLint on every parsed file
            lint_command: Command prefix used to invoke ESLint
            lint_timeout_seconds: Timeout for one ESLint invocation
            lint_serialized: Serialize ESLint invocations across workers

        Output control:
            folder_name: Name used for the folder summary report
            verbosity: Logging verbosity level (quiet, normal or verbose)
            log_file: Also append log records to this file
    """

    # Performance tuning
    workers: Optional[int] = None
    timeout_seconds: int = 30
    max_tree_depth: int = 5000

    # File discovery
    max_file_size_mb: float = 10.0
    follow_symlinks: bool = False
    skip_dirs: list[str] = field(default_factory=lambda: ["node_modules", ".git"])

    # Parser grammar extensions
    enable_jsx: bool = True
    enable_typescript: bool = True

    # Lint collaborator
    lint_enabled: bool = True
    lint_command: list[str] = field(default_factory=lambda: ["npx", "--no-install", "eslint"])
    lint_timeout_seconds: int = 60
    lint_serialized: bool = False

    # Output control
    folder_name: str = "codebase"
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.timeout_seconds < 1:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be at least 1")
        if self.max_tree_depth < 1:
            raise InvalidConfigError("max_tree_depth", self.max_tree_depth, "must be at least 1")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.lint_timeout_seconds < 1:
            raise InvalidConfigError(
                "lint_timeout_seconds", self.lint_timeout_seconds, "must be at least 1"
            )
        if self.lint_enabled and not self.lint_command:
            raise InvalidConfigError("lint_command", self.lint_command, "must not be empty")
        if not self.folder_name or "/" in self.folder_name:
            raise InvalidConfigError("folder_name", self.folder_name, "must be a plain name")
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITY_LEVELS)}"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def effective_workers(self) -> int:
        """Worker count with auto-detection resolved."""
        return self.workers if self.workers is not None else _default_workers()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / CONFIG_FILENAME
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

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODEBASE_METRICS_* environment variables.

    List-valued fields (skip_dirs, lint_command) accept comma-separated
    values; booleans accept true/false/1/0/yes/no/on/off.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the type is not supported

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
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

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
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
    # Allow settings either at top level or under [analysis]
    section = data.get("analysis")
    return dict(section) if isinstance(section, dict) else dict(data)
