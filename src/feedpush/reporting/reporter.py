"""
Session reporting for FeedPush.

Turns push attempts into console lines, a process exit code and an
optional JSON report.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from feedpush.core.models import Artifact, ArtifactResult, SessionResult

PUSHED_MESSAGE = "Your package was pushed."
ALREADY_EXISTS_MESSAGE = "Package '{name}' already exists at feed '{endpoint}'."
SKIP_DUPLICATE_HINT = "To skip already published packages, use the option --skip-duplicate"


class SessionReporter:
    """
    Prints push progress as it happens and summarizes the session.

    Designed to be wired into PushOrchestrator through its
    on_attempt / on_result callbacks.
    """

    def __init__(self, console: Console | None = None):
        """Initialize the reporter with the console to print to."""
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def attempt(self, artifact: Artifact, endpoint: str) -> None:
        """Announce an upload before it starts."""
        self._print(f"Pushing {escape(artifact.name)} to '{escape(endpoint)}'...")

    def result(self, result: ArtifactResult) -> None:
        """Report the outcome of one upload."""
        outcome = result.outcome
        name = escape(result.artifact.name)
        endpoint = escape(result.endpoint)

        if outcome.is_created():
            elapsed = f" {outcome.elapsed_ms:.0f}ms" if outcome.elapsed_ms is not None else ""
            self._print(f"  [dim]Created {endpoint}{elapsed}[/dim]")
            self._print(f"[green]{PUSHED_MESSAGE}[/green]")
        elif outcome.is_duplicate() and result.duplicate_skipped:
            message = ALREADY_EXISTS_MESSAGE.format(name=name, endpoint=endpoint)
            self._print(f"[yellow]{message}[/yellow]")
        elif outcome.is_duplicate():
            self._print(f"[red]Conflict: {escape(outcome.message or '')}[/red]")
            self._print(SKIP_DUPLICATE_HINT)
        else:
            self._print(f"[red]{escape(outcome.message or 'Upload failed.')}[/red]")

    def summary(self, session: SessionResult) -> int:
        """
        Print a one-line summary and return the process exit code.

        Returns:
            0 if the session succeeded, 1 otherwise
        """
        style = "green" if session.success else "red"
        line = (
            f"[{style}]{len(session.pushed)} pushed, {len(session.skipped)} skipped, "
            f"{len(session.failed)} failed[/{style}]"
        )
        if session.stopped_early:
            line += " [dim](stopped at first error)[/dim]"
        self._print(line)
        return self.exit_code(session)

    def file_not_found(self, message: str) -> None:
        """Report an argument that resolved to nothing."""
        self._print(f"[red]{escape(message)}[/red]")

    @staticmethod
    def exit_code(session: SessionResult) -> int:
        """Return 0 for an overall successful session, 1 otherwise."""
        return 0 if session.success else 1

    @staticmethod
    def write_report(session: SessionResult, output_path: Path) -> Path:
        """Persist the session result as JSON."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        data = session.to_dict()
        data["generated_at"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        output_path.write_text(json.dumps(data, indent=2))
        return output_path

    def _print(self, text: str) -> None:
        self._console.print(text, soft_wrap=True, highlight=False)
