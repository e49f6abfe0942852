"""
FeedPush Reporting Module.

Console and JSON reporting for push sessions.
"""

__all__ = [
    "SessionReporter",
    "PUSHED_MESSAGE",
    "ALREADY_EXISTS_MESSAGE",
    "SKIP_DUPLICATE_HINT",
]

from feedpush.reporting.reporter import (
    ALREADY_EXISTS_MESSAGE,
    PUSHED_MESSAGE,
    SKIP_DUPLICATE_HINT,
    SessionReporter,
)
