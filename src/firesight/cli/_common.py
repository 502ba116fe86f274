"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    **overrides,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)


def heat_style(score: float) -> str:
    """Rich style for a 0-100 heat score."""
    if score >= 75:
        return "bold red"
    if score >= 50:
        return "dark_orange"
    if score >= 25:
        return "yellow"
    if score >= 5:
        return "cyan"
    return "blue"
