"""
Core data models for FeedPush.

Artifacts, push targets, per-attempt outcomes and the session result
are plain immutable values created fresh for every push session.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

PRIMARY_EXTENSION = ".nupkg"
COMPANION_EXTENSION = ".snupkg"


class ArtifactCategory(Enum):
    """Kinds of artifacts a push session handles."""

    PRIMARY = "primary"
    COMPANION = "companion"

    @property
    def extension(self) -> str:
        """File extension that identifies this category."""
        if self is ArtifactCategory.COMPANION:
            return COMPANION_EXTENSION
        return PRIMARY_EXTENSION

    @classmethod
    def for_name(cls, name: str) -> "ArtifactCategory":
        """Classify a file name or pattern by its extension."""
        if name.lower().endswith(COMPANION_EXTENSION):
            return cls.COMPANION
        return cls.PRIMARY


class OutcomeKind(Enum):
    """Tri-state result of a single upload attempt."""

    CREATED = "created"
    DUPLICATE = "duplicate"
    FAILED = "failed"


class SessionState(Enum):
    """States of the push orchestrator."""

    IDLE = "idle"
    PUSHING_PRIMARIES = "pushing_primaries"
    PUSHING_COMPANIONS = "pushing_companions"
    DONE = "done"


@dataclass(frozen=True)
class Artifact:
    """A local file selected for upload."""

    path: Path
    category: ArtifactCategory
    identity: str
    explicit: bool = True
    # False for companions discovered next to a primary artifact

    @property
    def name(self) -> str:
        """File name without directory."""
        return self.path.name

    @staticmethod
    def identity_for(path: Path) -> str:
        """Derive the extension-independent identity (package id + version)."""
        name = path.name
        lowered = name.lower()
        for extension in (COMPANION_EXTENSION, PRIMARY_EXTENSION):
            if lowered.endswith(extension):
                name = name[: -len(extension)]
                break
        else:
            name = path.stem
        return name.lower()

    @classmethod
    def from_path(cls, path: Path, *, explicit: bool = True) -> "Artifact":
        """Build an artifact, classifying it by extension."""
        return cls(
            path=path,
            category=ArtifactCategory.for_name(path.name),
            identity=cls.identity_for(path),
            explicit=explicit,
        )


@dataclass(frozen=True)
class PushTarget:
    """Upload URLs of the feed for one session."""

    primary_endpoint: str
    symbol_endpoint: str | None = None

    def endpoint_for(self, category: ArtifactCategory) -> str:
        """Return the endpoint an explicitly requested artifact goes to."""
        if category is ArtifactCategory.COMPANION and self.symbol_endpoint:
            return self.symbol_endpoint
        return self.primary_endpoint


@dataclass(frozen=True)
class PushOptions:
    """Immutable options applied to every upload attempt."""

    timeout_seconds: float = 300.0
    skip_duplicate: bool = False
    stop_on_error: bool = False
    api_key: str | None = None


@dataclass(frozen=True)
class UploadOutcome:
    """Outcome of one (artifact, endpoint) upload attempt."""

    kind: OutcomeKind
    status_code: int | None = None
    message: str | None = None
    elapsed_ms: float | None = None

    @classmethod
    def created(cls, status_code: int = 201, elapsed_ms: float | None = None) -> "UploadOutcome":
        return cls(OutcomeKind.CREATED, status_code=status_code, elapsed_ms=elapsed_ms)

    @classmethod
    def duplicate(cls, message: str | None = None, elapsed_ms: float | None = None) -> "UploadOutcome":
        return cls(
            OutcomeKind.DUPLICATE,
            status_code=409,
            message=message,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def failed(
        cls,
        message: str,
        status_code: int | None = None,
        elapsed_ms: float | None = None,
    ) -> "UploadOutcome":
        return cls(
            OutcomeKind.FAILED,
            status_code=status_code,
            message=message,
            elapsed_ms=elapsed_ms,
        )

    def is_created(self) -> bool:
        return self.kind is OutcomeKind.CREATED

    def is_duplicate(self) -> bool:
        return self.kind is OutcomeKind.DUPLICATE

    def is_failed(self) -> bool:
        return self.kind is OutcomeKind.FAILED


@dataclass(frozen=True)
class ArtifactResult:
    """An artifact paired with the outcome of pushing it to one endpoint."""

    artifact: Artifact
    endpoint: str
    outcome: UploadOutcome
    duplicate_skipped: bool = False

    def is_fatal(self) -> bool:
        """Return True if this result fails the session."""
        if self.outcome.is_failed():
            return True
        return self.outcome.is_duplicate() and not self.duplicate_skipped


@dataclass
class SessionResult:
    """Append-only log of every attempt made during a push session."""

    results: list[ArtifactResult] = field(default_factory=list)
    skip_duplicate: bool = False
    stopped_early: bool = False

    def record(self, result: ArtifactResult) -> None:
        """Append one attempt."""
        self.results.append(result)

    @property
    def success(self) -> bool:
        """Overall success: no failures and no duplicates that were not skipped."""
        return not any(r.is_fatal() for r in self.results)

    @property
    def pushed(self) -> list[ArtifactResult]:
        return [r for r in self.results if r.outcome.is_created()]

    @property
    def skipped(self) -> list[ArtifactResult]:
        return [r for r in self.results if r.outcome.is_duplicate() and r.duplicate_skipped]

    @property
    def failed(self) -> list[ArtifactResult]:
        return [r for r in self.results if r.is_fatal()]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "success": self.success,
            "skip_duplicate": self.skip_duplicate,
            "stopped_early": self.stopped_early,
            "summary": {
                "pushed": len(self.pushed),
                "skipped": len(self.skipped),
                "failed": len(self.failed),
            },
            "results": [
                {
                    "artifact": str(r.artifact.path),
                    "category": r.artifact.category.value,
                    "explicit": r.artifact.explicit,
                    "endpoint": r.endpoint,
                    "outcome": r.outcome.kind.value,
                    "status_code": r.outcome.status_code,
                    "message": r.outcome.message,
                    "elapsed_ms": r.outcome.elapsed_ms,
                    "duplicate_skipped": r.duplicate_skipped,
                }
                for r in self.results
            ],
        }
