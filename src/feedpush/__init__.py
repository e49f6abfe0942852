"""
FeedPush - Package publishing client.

Uploads package files, and the symbol packages that accompany them,
to a remote package feed.
"""

__version__ = "0.1.0"

__all__ = []
