"""CLI interface for Audo_Comp."""

import logging
from pathlib import Path

import typer

from .errors import AnalysisError, NotFoundError, ToolUnavailableError, ValidationError
from .interfaces.cli_handlers import analyze_file, format_outcome, format_stats, process_directory
from .utils.config import load_batch_config

app = typer.Typer(help="Audo_Comp batch loudness analysis and compression")


def _configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("process")
def process_command(
    root: Path = typer.Argument(..., help="Directory containing the audio files to process."),
    concurrency_limit: int | None = typer.Option(
        None,
        "--concurrency-limit",
        "-j",
        help="Maximum number of files processed in parallel (default from config, 4).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Optional JSON or YAML batch configuration.",
    ),
    log_level: str = typer.Option("warning", "--log-level", help="Python logging level."),
) -> None:
    """Analyze every eligible file in ROOT and compress the ones that need it."""

    _configure_logging(log_level)
    try:
        batch_config = load_batch_config(config)
        result = process_directory(root, batch_config, concurrency_limit=concurrency_limit)
    except (ValidationError, NotFoundError, ToolUnavailableError, ValueError, OSError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    if not result.outcomes:
        typer.echo(f"No eligible audio files found in {root}")
        return

    for outcome in result.outcomes:
        typer.echo(format_outcome(outcome))

    summary = result.summary()
    typer.echo(
        "Summary: "
        f"total={summary['total']} "
        f"succeeded={summary['succeeded']} "
        f"failed={summary['failed']}"
    )
    if result.metadata_path is not None:
        typer.echo(f"Metadata written to: {result.metadata_path}")
    if result.persistence_error is not None:
        typer.echo(f"Warning: {result.persistence_error}", err=True)


@app.command("analyze")
def analyze_command(
    path: Path = typer.Argument(..., help="Audio file to measure."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Optional JSON or YAML batch configuration."),
) -> None:
    """Measure one file and print its loudness stats and compression decision."""

    try:
        stats = analyze_file(path, load_batch_config(config))
    except (AnalysisError, ToolUnavailableError, ValueError, OSError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    for line in format_stats(path, stats):
        typer.echo(line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
