"""``analyze`` command: batch metrics for a source tree."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..analysis import BatchAnalyzer, BatchResult
from ..exceptions import CodebaseMetricsError, RootNotFoundError
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import console, resolve_config
from .progress import AnalysisProgress, create_files_table, create_summary_table


def _output_json(batch: BatchResult) -> None:
    """Machine-readable JSON output."""
    output = {
        "summary": batch.summary.to_dict() if batch.summary is not None else None,
        "failures": [f.to_dict() for f in batch.failures],
        "runDir": str(batch.run_dir) if batch.run_dir is not None else None,
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))


def _output_rich(batch: BatchResult) -> None:
    console.print()
    console.print("[bold cyan]CODEBASE METRICS[/]")
    console.print(f"[dim]{batch.root}[/]")
    console.print()
    console.print(create_summary_table(batch))
    if batch.results:
        console.print()
        console.print(create_files_table(batch))
    if batch.failures:
        console.print()
        console.print("[bold red]Failed files[/]")
        for failure in batch.failures:
            console.print(f"  [red]•[/] {failure.file} [dim]{failure.reason}[/]")
    if batch.run_dir is not None and batch.summary is not None:
        console.print()
        console.print(f"Reports written to [bold]{batch.run_dir}[/]")
    elif not batch.results:
        console.print()
        console.print("[yellow]No files analyzed; no summary written.[/yellow]")


@app.command()
def analyze(
    source_root: Path = typer.Argument(..., help="Directory of source files to analyze"),
    output_root: Path = typer.Argument(Path("reports"), help="Directory for JSON reports"),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=64,
    ),
    no_lint: bool = typer.Option(
        False,
        "--no-lint",
        help="Skip ESLint static analysis",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the folder summary as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Compute size, structural, McCabe and Halstead metrics for every
    JavaScript/TypeScript file under SOURCE_ROOT.

    Per-file reports and a folder summary are written to
    OUTPUT_ROOT/individual-files/<timestamp>/.

    [bold cyan]Examples:[/bold cyan]

      codebase-metrics analyze src

      codebase-metrics analyze src out --no-lint --json
    """
    logger = get_logger()

    try:
        settings = resolve_config(
            config=config,
            workers=workers,
            no_lint=no_lint,
            verbose=verbose,
            quiet=quiet,
            log_file=log_file,
        )
        logger = setup_logging(settings.verbosity, settings.log_file)
        quiet = settings.verbosity == "quiet"

        runner = BatchAnalyzer(settings)
        with AnalysisProgress(console, enabled=not (json_output or quiet)) as progress:
            batch = runner.run(source_root, output_root=output_root, progress_callback=progress.update)

        if json_output:
            _output_json(batch)
        elif not quiet:
            _output_rich(batch)

    except RootNotFoundError as e:
        logger.error(str(e))
        console.print(f"[red]Error:[/red] source root not found: {e.path}")
        raise typer.Exit(1)

    except CodebaseMetricsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
