"""
FeedPush Transport Module.

Performs single-attempt uploads of artifacts to feed endpoints.
"""

__all__ = ["UploadClient", "status_message", "API_KEY_HEADER", "NO_SUCCESS_MESSAGE"]

from feedpush.transport.client import (
    API_KEY_HEADER,
    NO_SUCCESS_MESSAGE,
    UploadClient,
    status_message,
)
