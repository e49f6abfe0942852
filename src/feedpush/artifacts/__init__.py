"""
FeedPush Artifacts Module.

Resolves push arguments into primary and companion artifacts.
"""

__all__ = ["ArtifactResolver", "is_pattern"]

from feedpush.artifacts.resolver import ArtifactResolver, is_pattern
