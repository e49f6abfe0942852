"""
Artifact Resolver - expands push arguments into local files.

An argument is either an exact file name or a glob pattern. Only the
category the caller asked for must exist on disk; companions found next
to primary packages are optional.
"""

import glob
import logging
from pathlib import Path
from typing import Iterable

from feedpush.core.exceptions import ArtifactNotFoundError
from feedpush.core.models import Artifact, ArtifactCategory, COMPANION_EXTENSION

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?", "[")


def is_pattern(argument: str) -> bool:
    """Return True if the argument contains glob wildcards."""
    return any(ch in argument for ch in _GLOB_CHARS)


class ArtifactResolver:
    """
    Resolves push arguments relative to a base directory.

    Resolution is read-only and deterministic: the same pattern against an
    unchanged directory always yields the same ordered list.
    """

    def __init__(self, base_dir: Path | None = None):
        """Initialize with the directory relative arguments are resolved from."""
        self._base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def resolve(self, argument: str) -> list[Artifact]:
        """
        Resolve one push argument.

        Args:
            argument: Exact file name or glob pattern

        Returns:
            Matching artifacts in path order

        Raises:
            ArtifactNotFoundError: If nothing matches, carrying the literal argument
        """
        category = ArtifactCategory.for_name(argument)

        literal = self._absolute(argument)
        if literal.is_file():
            paths = [literal]
        elif is_pattern(argument):
            paths = self._expand(argument, category)
        else:
            paths = []

        if not paths:
            logger.debug("No %s files match %r in %s", category.value, argument, self._base_dir)
            raise ArtifactNotFoundError(
                argument,
                details={"category": category.value, "base_dir": str(self._base_dir)},
            )

        logger.debug("Resolved %r to %d file(s)", argument, len(paths))
        return [Artifact.from_path(p) for p in paths]

    def resolve_all(self, arguments: Iterable[str]) -> list[Artifact]:
        """
        Resolve several arguments into one ordered, de-duplicated list.

        Every argument is resolved before anything is returned, so a
        missing file fails the whole request up front.
        """
        seen: set[Path] = set()
        artifacts: list[Artifact] = []

        for argument in arguments:
            for artifact in self.resolve(argument):
                key = artifact.path.resolve()
                if key in seen:
                    continue
                seen.add(key)
                artifacts.append(artifact)

        return artifacts

    def find_companion(self, primary: Artifact) -> Artifact | None:
        """
        Look for the symbol package that belongs to a primary package.

        The companion lives in the same directory and shares the primary's
        identity. A missing companion is not an error.
        """
        if primary.category is not ArtifactCategory.PRIMARY:
            return None

        directory = primary.path.parent
        wanted = f"{primary.identity}{COMPANION_EXTENSION}"
        try:
            candidates = sorted(directory.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s while looking for %s: %s", directory, wanted, e)
            return None

        for candidate in candidates:
            if candidate.name.lower() == wanted and candidate.is_file():
                return Artifact.from_path(candidate, explicit=False)
        return None

    def _absolute(self, argument: str) -> Path:
        path = Path(argument).expanduser()
        if not path.is_absolute():
            path = self._base_dir / path
        return path

    def _expand(self, pattern: str, category: ArtifactCategory) -> list[Path]:
        extension = category.extension
        pattern = _fold_extension(pattern, extension)
        expanded = Path(pattern).expanduser()
        if expanded.is_absolute():
            full_pattern = str(expanded)
        else:
            full_pattern = str(Path(glob.escape(str(self._base_dir))) / pattern)

        matches = {
            Path(match)
            for match in glob.glob(full_pattern, recursive=True)
            if match.lower().endswith(extension) and Path(match).is_file()
        }
        return sorted(matches)


def _fold_extension(pattern: str, extension: str) -> str:
    """Make a trailing package extension in a glob pattern match any case."""
    if not pattern.lower().endswith(extension):
        return pattern
    folded = "".join(
        f"[{ch.lower()}{ch.upper()}]" if ch.isalpha() else glob.escape(ch)
        for ch in extension
    )
    return pattern[: -len(extension)] + folded
