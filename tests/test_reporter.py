"""Tests for session reporting."""

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from feedpush.core.models import Artifact, ArtifactResult, SessionResult, UploadOutcome
from feedpush.reporting.reporter import (
    PUSHED_MESSAGE,
    SKIP_DUPLICATE_HINT,
    SessionReporter,
)
from feedpush.transport.client import NO_SUCCESS_MESSAGE, status_message

ENDPOINT = "http://feed/push"


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> SessionReporter:
    return SessionReporter(Console(file=output, width=60, color_system=None))


def _result(outcome: UploadOutcome, skipped: bool = False, name: str = "A.1.0.0.nupkg") -> ArtifactResult:
    return ArtifactResult(
        artifact=Artifact.from_path(Path("/pkgs") / name),
        endpoint=ENDPOINT,
        outcome=outcome,
        duplicate_skipped=skipped,
    )


class TestResultLines:
    """Tests for per-attempt output."""

    def test_attempt(self, reporter: SessionReporter, output: io.StringIO) -> None:
        reporter.attempt(Artifact.from_path(Path("/pkgs/A.1.0.0.nupkg")), ENDPOINT)
        assert f"Pushing A.1.0.0.nupkg to '{ENDPOINT}'..." in output.getvalue()

    def test_created(self, reporter: SessionReporter, output: io.StringIO) -> None:
        reporter.result(_result(UploadOutcome.created(elapsed_ms=42.4)))
        text = output.getvalue()
        assert PUSHED_MESSAGE in text
        assert f"Created {ENDPOINT} 42ms" in text

    def test_skipped_duplicate(self, reporter: SessionReporter, output: io.StringIO) -> None:
        reporter.result(_result(UploadOutcome.duplicate(status_message(409)), skipped=True))
        text = output.getvalue()
        assert f"Package 'A.1.0.0.nupkg' already exists at feed '{ENDPOINT}'." in text
        assert PUSHED_MESSAGE not in text
        assert NO_SUCCESS_MESSAGE not in text
        assert SKIP_DUPLICATE_HINT not in text

    def test_fatal_duplicate(self, reporter: SessionReporter, output: io.StringIO) -> None:
        """A conflict reads as a conflict and advertises --skip-duplicate."""
        reporter.result(_result(UploadOutcome.duplicate(status_message(409))))
        text = output.getvalue()
        assert "Conflict" in text
        assert NO_SUCCESS_MESSAGE in text
        assert SKIP_DUPLICATE_HINT in text
        assert "already exists at feed" not in text

    def test_failure(self, reporter: SessionReporter, output: io.StringIO) -> None:
        reporter.result(_result(UploadOutcome.failed(status_message(500), status_code=500)))
        text = output.getvalue()
        assert f"{NO_SUCCESS_MESSAGE}: 500 (Internal Server Error)." in text
        assert SKIP_DUPLICATE_HINT not in text
        assert PUSHED_MESSAGE not in text

    def test_markup_in_names_is_escaped(self, reporter: SessionReporter, output: io.StringIO) -> None:
        reporter.attempt(Artifact.from_path(Path("/pkgs/[red]odd.nupkg")), ENDPOINT)
        assert "[red]odd.nupkg" in output.getvalue()


class TestSummary:
    """Tests for the session summary and exit code."""

    def test_success_exit_code(self, reporter: SessionReporter, output: io.StringIO) -> None:
        session = SessionResult()
        session.record(_result(UploadOutcome.created()))
        assert reporter.summary(session) == 0
        assert "1 pushed, 0 skipped, 0 failed" in output.getvalue()

    def test_skipped_duplicate_exit_code(self, reporter: SessionReporter) -> None:
        session = SessionResult(skip_duplicate=True)
        session.record(_result(UploadOutcome.duplicate(), skipped=True))
        assert reporter.summary(session) == 0

    def test_failure_exit_code(self, reporter: SessionReporter, output: io.StringIO) -> None:
        session = SessionResult(stopped_early=True)
        session.record(_result(UploadOutcome.failed("boom")))
        assert reporter.summary(session) == 1
        assert "stopped at first error" in output.getvalue()

    def test_file_not_found(self, reporter: SessionReporter, output: io.StringIO) -> None:
        reporter.file_not_found("File does not exist (*.snupkg)")
        assert "File does not exist (*.snupkg)" in output.getvalue()


class TestWriteReport:
    """Tests for the JSON report."""

    def test_write_report(self, temp_dir: Path) -> None:
        session = SessionResult()
        session.record(_result(UploadOutcome.created(elapsed_ms=5.0)))
        session.record(_result(UploadOutcome.failed("boom", 500), name="B.1.0.0.nupkg"))

        path = SessionReporter.write_report(session, temp_dir / "out" / "report.json")

        data = json.loads(path.read_text())
        assert data["success"] is False
        assert data["summary"] == {"pushed": 1, "skipped": 0, "failed": 1}
        assert [r["outcome"] for r in data["results"]] == ["created", "failed"]
        assert "generated_at" in data
