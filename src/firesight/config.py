"""Configuration loading and management for FireSight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.firesight.toml)
    3. Project config (./firesight.toml)
    4. Explicit config file
    5. Environment variables (FIRESIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(time_range_days=90)
    >>> config.time_range_days
    90
    >>> config.scoring.decay_rate
    0.01
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class ScoringConfig:
    """Heat scoring and dead-code tuning parameters.

    Attributes:
        Heat score:
            decay_rate: Per-day exponential decay applied to each change.
                0.01 means a change 100 days old weighs ~37% of one made today.
            min_score: Score every file receives when nothing changed in the batch
            author_bonus_step: Raw score boost per distinct author
            author_bonus_cap: Upper bound on the author boost (0.5 = +50%)

        Dead-code heuristic:
            dead_code_stale_months: No change for this many months counts as stale
            dead_code_few_changes_below: Fewer total changes than this counts as "few"
            dead_code_min_signals: Signals required to call a file dead
    """

    decay_rate: float = 0.01
    min_score: float = 1.0
    author_bonus_step: float = 0.1
    author_bonus_cap: float = 0.5

    dead_code_stale_months: int = 6
    dead_code_few_changes_below: int = 3
    dead_code_min_signals: int = 2

    def __post_init__(self) -> None:
        if self.decay_rate < 0:
            raise ValueError("decay_rate must be non-negative")
        if not 0.0 <= self.min_score <= 100.0:
            raise ValueError("min_score must be between 0.0 and 100.0")
        if self.author_bonus_step < 0 or self.author_bonus_cap < 0:
            raise ValueError("author bonus parameters must be non-negative")
        if self.dead_code_stale_months < 0:
            raise ValueError("dead_code_stale_months must be non-negative")
        if self.dead_code_few_changes_below < 0:
            raise ValueError("dead_code_few_changes_below must be non-negative")
        if not 1 <= self.dead_code_min_signals <= 3:
            raise ValueError("dead_code_min_signals must be between 1 and 3")


DEFAULT_SCORING = ScoringConfig()

# Roughly a century; wider windows push the git cutoff past datetime.min.
MAX_TIME_RANGE_DAYS = 36500


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run and the services around it.

    Attributes:
        History window:
            default_branch: Branch analyzed when a request names none
            fallback_branch: Branch tried when the requested one is missing
            time_range_days: Days of history analyzed when a request names none
            git_max_commits: Cap on commits read from git log (0 = unlimited)

        Execution:
            timeout_seconds: Deadline for clone + history collection
            temp_dir: Parent directory for clones (None = system temp)

        Server:
            host: Interface the HTTP server binds to
            port: Port the HTTP server listens on

        Output control:
            verbosity: Logging verbosity level
    """

    default_branch: str = "main"
    fallback_branch: str = "master"
    time_range_days: int = 180
    git_max_commits: int = 0

    timeout_seconds: int = 300
    temp_dir: Optional[str] = None

    host: str = "127.0.0.1"
    port: int = 8080

    verbosity: Verbosity = "normal"

    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    def __post_init__(self) -> None:
        if not self.default_branch:
            raise ValueError("default_branch must not be empty")
        if not 1 <= self.time_range_days <= MAX_TIME_RANGE_DAYS:
            raise ValueError(f"time_range_days must be between 1 and {MAX_TIME_RANGE_DAYS}")
        if self.git_max_commits < 0:
            raise ValueError("git_max_commits must be non-negative")
        if self.timeout_seconds < 1:
            raise ValueError("timeout_seconds must be at least 1")
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or malformed
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".firesight.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "firesight.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    scoring = merged.pop("scoring", None)
    if isinstance(scoring, dict):
        try:
            merged["scoring"] = ScoringConfig(**scoring)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [scoring] config: {e}")
        except ValueError as e:
            raise InvalidConfigError("scoring", scoring, str(e))
    elif isinstance(scoring, ScoringConfig):
        merged["scoring"] = scoring

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise InvalidConfigError("config", merged, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from FIRESIGHT_* environment variables.

    Every scalar AnalysisConfig field is supported, e.g. FIRESIGHT_PORT,
    FIRESIGHT_TIME_RANGE_DAYS, FIRESIGHT_TEMP_DIR, FIRESIGHT_VERBOSITY.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"FIRESIGHT_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot come from the environment (nested
    config), so the caller skips them.
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

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

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, wrapping parse errors in ConfigurationError."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
