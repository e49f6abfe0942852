"""
FeedPush Core Module.

Provides the data model, configuration and exceptions for push sessions.
"""

__all__ = [
    "Artifact",
    "ArtifactCategory",
    "ArtifactResult",
    "OutcomeKind",
    "PushConfig",
    "PushOptions",
    "PushTarget",
    "SessionResult",
    "SessionState",
    "UploadOutcome",
    # Exceptions
    "FeedPushError",
    "ArtifactNotFoundError",
    "UploadError",
    "ConfigurationError",
]

from feedpush.core.config import PushConfig
from feedpush.core.exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    FeedPushError,
    UploadError,
)
from feedpush.core.models import (
    Artifact,
    ArtifactCategory,
    ArtifactResult,
    OutcomeKind,
    PushOptions,
    PushTarget,
    SessionResult,
    SessionState,
    UploadOutcome,
)
