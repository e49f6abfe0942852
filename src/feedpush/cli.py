"""
FeedPush CLI - Command-line interface.

Push packages and their symbol packages to a feed from the terminal.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from feedpush.core.config import PushConfig
from feedpush.core.exceptions import ArtifactNotFoundError, ConfigurationError
from feedpush.orchestrator.core import PushOrchestrator
from feedpush.reporting.reporter import SessionReporter

app = typer.Typer(
    name="feedpush",
    help="FeedPush - Publish packages and symbol packages to a package feed",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def push(
    paths: List[str] = typer.Argument(..., help="Package files or glob patterns to push"),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Feed upload URL (env: FEEDPUSH_SOURCE)"
    ),
    symbol_source: Optional[str] = typer.Option(
        None, "--symbol-source", help="Symbol package upload URL (env: FEEDPUSH_SYMBOL_SOURCE)"
    ),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", "-k", help="API key for the feed (env: FEEDPUSH_API_KEY)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Per-upload timeout in seconds (env: FEEDPUSH_TIMEOUT)"
    ),
    skip_duplicate: bool = typer.Option(
        False, "--skip-duplicate", help="Treat packages that already exist as skipped"
    ),
    stop_on_error: bool = typer.Option(
        False, "--stop-on-error", help="Stop at the first failed upload"
    ),
    report: Optional[Path] = typer.Option(
        None, "--report", "-o", help="Write a JSON session report"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Push packages to a feed."""
    _configure_logging(verbose)

    try:
        config = PushConfig.load(
            source=source,
            symbol_source=symbol_source,
            api_key=api_key,
            timeout_seconds=timeout,
            skip_duplicate=skip_duplicate,
            stop_on_error=stop_on_error,
        )
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)

    if verbose:
        console.print(
            Panel.fit(
                f"[bold blue]FeedPush[/bold blue]\n"
                f"Source: {config.source}\n"
                f"Symbol source: {config.symbol_source or '-'}\n"
                f"Timeout: {config.timeout_seconds:g}s",
            )
        )

    reporter = SessionReporter(console)
    orchestrator = PushOrchestrator(config.target(), config.options())

    try:
        session = orchestrator.push(
            paths,
            on_attempt=reporter.attempt,
            on_result=reporter.result,
        )
    except ArtifactNotFoundError as e:
        reporter.file_not_found(str(e))
        raise typer.Exit(1)

    exit_code = reporter.summary(session)

    if report:
        try:
            output_path = reporter.write_report(session, report)
        except OSError as e:
            message = f"Could not write report to {report}: {e.strerror or e}"
            console.print(f"[red]{escape(message)}[/red]")
            raise typer.Exit(1)
        console.print(f"\n[green]Report saved to:[/green] {output_path}")

    if exit_code:
        raise typer.Exit(exit_code)


@app.command()
def version():
    """Show FeedPush version."""
    from feedpush import __version__

    console.print(f"FeedPush v{__version__}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
