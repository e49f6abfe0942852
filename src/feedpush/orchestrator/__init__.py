"""
FeedPush Orchestrator Module.

Provides the push session state machine.
"""

__all__ = ["PushOrchestrator", "Uploader"]

from feedpush.orchestrator.core import PushOrchestrator, Uploader
