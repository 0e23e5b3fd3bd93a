"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def risk_color(risk: str) -> str:
    return {
        "Low": "green",
        "Moderate": "yellow",
        "High": "red",
        "Very High": "bold red",
    }.get(risk, "dim")


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    no_lint: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if no_lint:
        overrides["lint_enabled"] = False
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    if log_file is not None:
        overrides["log_file"] = str(log_file)
    return load_config(config_file=config, **overrides)
