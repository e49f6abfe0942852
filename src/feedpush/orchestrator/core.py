"""
Orchestrator Core - push session sequencing.

Pushes every primary package first, then the symbol packages that go
with them, recording one outcome per (artifact, endpoint) attempt.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Protocol

from feedpush.artifacts.resolver import ArtifactResolver
from feedpush.core.exceptions import FeedPushError
from feedpush.core.models import (
    Artifact,
    ArtifactCategory,
    ArtifactResult,
    PushOptions,
    PushTarget,
    SessionResult,
    SessionState,
    UploadOutcome,
)
from feedpush.transport.client import UploadClient

logger = logging.getLogger(__name__)


class Uploader(Protocol):
    """Anything that can push one artifact to one endpoint."""

    def upload(self, artifact: Artifact, endpoint: str) -> UploadOutcome:
        ...


class _SessionStopped(Exception):
    """Internal signal raised when stop_on_error ends the session."""


class PushOrchestrator:
    """
    Push session engine.

    One instance drives one session through the states
    idle -> pushing_primaries -> pushing_companions -> done.

    Rules:
    - Every primary is attempted, regardless of earlier failures,
      unless stop_on_error is set
    - A primary that failed outright does not get its companion pushed;
      a duplicate primary still does
    - Companions are only discovered when the feed has a symbol endpoint
    - Upload faults never escape: they become FAILED outcomes
    """

    def __init__(
        self,
        target: PushTarget,
        options: PushOptions | None = None,
        uploader: Uploader | None = None,
        resolver: ArtifactResolver | None = None,
    ):
        """Initialize orchestrator with feed endpoints, options and collaborators."""
        self._target = target
        self._options = options or PushOptions()
        self._uploader = uploader
        self._resolver = resolver or ArtifactResolver()
        self._state = SessionState.IDLE

    @property
    def state(self) -> SessionState:
        """Current session state."""
        return self._state

    def push(
        self,
        arguments: Iterable[str],
        on_attempt: Callable[[Artifact, str], None] | None = None,
        on_result: Callable[[ArtifactResult], None] | None = None,
    ) -> SessionResult:
        """
        Resolve push arguments and push the resulting artifacts.

        Args:
            arguments: File names or glob patterns
            on_attempt: Optional callback before each upload
            on_result: Optional callback after each upload

        Returns:
            SessionResult with every attempt in order

        Raises:
            ArtifactNotFoundError: If an argument matches nothing; no upload
                is attempted in that case
        """
        artifacts = self._resolver.resolve_all(arguments)
        return self.push_artifacts(artifacts, on_attempt=on_attempt, on_result=on_result)

    def push_artifacts(
        self,
        artifacts: list[Artifact],
        on_attempt: Callable[[Artifact, str], None] | None = None,
        on_result: Callable[[ArtifactResult], None] | None = None,
    ) -> SessionResult:
        """Push already resolved artifacts."""
        if self._state is not SessionState.IDLE:
            raise FeedPushError(
                "Push session already started",
                details={"state": self._state.value},
            )

        session = SessionResult(skip_duplicate=self._options.skip_duplicate)

        if self._uploader is not None:
            self._run(artifacts, self._uploader, session, on_attempt, on_result)
        else:
            with UploadClient(self._options) as client:
                self._run(artifacts, client, session, on_attempt, on_result)

        self._state = SessionState.DONE
        logger.info(
            "Push session done: %d pushed, %d skipped, %d failed",
            len(session.pushed),
            len(session.skipped),
            len(session.failed),
        )
        return session

    def _run(
        self,
        artifacts: list[Artifact],
        uploader: Uploader,
        session: SessionResult,
        on_attempt: Callable[[Artifact, str], None] | None,
        on_result: Callable[[ArtifactResult], None] | None,
    ) -> None:
        primaries = [a for a in artifacts if a.category is ArtifactCategory.PRIMARY]
        explicit_companions = [a for a in artifacts if a.category is ArtifactCategory.COMPANION]

        def attempt(artifact: Artifact, endpoint: str) -> ArtifactResult:
            result = self._attempt(artifact, endpoint, uploader, on_attempt)
            session.record(result)
            if on_result:
                on_result(result)
            if self._options.stop_on_error and result.is_fatal():
                raise _SessionStopped()
            return result

        try:
            self._state = SessionState.PUSHING_PRIMARIES
            primary_results = [
                attempt(primary, self._target.primary_endpoint) for primary in primaries
            ]

            self._state = SessionState.PUSHING_COMPANIONS
            pushed: set[Path] = set()

            if self._target.symbol_endpoint:
                for result in primary_results:
                    if result.outcome.is_failed():
                        logger.debug(
                            "Not pushing symbols for %s: package push failed",
                            result.artifact.name,
                        )
                        continue
                    companion = self._resolver.find_companion(result.artifact)
                    if companion is None:
                        continue
                    pushed.add(companion.path.resolve())
                    attempt(companion, self._target.symbol_endpoint)

            for companion in explicit_companions:
                if companion.path.resolve() in pushed:
                    continue
                attempt(companion, self._target.endpoint_for(companion.category))
        except _SessionStopped:
            session.stopped_early = True
            logger.info("Stopping push session after first error")

    def _attempt(
        self,
        artifact: Artifact,
        endpoint: str,
        uploader: Uploader,
        on_attempt: Callable[[Artifact, str], None] | None,
    ) -> ArtifactResult:
        if on_attempt:
            on_attempt(artifact, endpoint)

        try:
            outcome = uploader.upload(artifact, endpoint)
        except Exception as e:
            # Wrap unexpected exceptions
            logger.warning("Unexpected error pushing %s: %s", artifact.name, e)
            outcome = UploadOutcome.failed(f"Unexpected error: {e}")

        return ArtifactResult(
            artifact=artifact,
            endpoint=endpoint,
            outcome=outcome,
            duplicate_skipped=outcome.is_duplicate() and self._options.skip_duplicate,
        )
