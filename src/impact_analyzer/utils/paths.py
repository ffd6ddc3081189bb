"""Path utilities for repository-relative path filtering."""

import pathspec


class PathFilter:
    """
    Filter repository-relative paths by include and exclude patterns.

    Uses pathspec gitwildmatch semantics. A path passes when it matches
    at least one include pattern (or no include patterns are configured)
    and no exclude pattern.
    """

    def __init__(
        self,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        """
        Initialize filter.

        Args:
            include_patterns: Paths or globs to keep, e.g. ``src/app``.
            exclude_patterns: Paths or globs to drop, e.g. ``**/*.spec.ts``.
        """
        self._include = (
            pathspec.PathSpec.from_lines("gitwildmatch", include_patterns)
            if include_patterns
            else None
        )
        self._exclude = (
            pathspec.PathSpec.from_lines("gitwildmatch", exclude_patterns)
            if exclude_patterns
            else None
        )

    def is_included(self, file_path: str) -> bool:
        """Check whether a relative path passes the filter."""
        if self._include is not None and not self._include.match_file(file_path):
            return False
        return not (self._exclude is not None and self._exclude.match_file(file_path))

    def filter(self, file_paths: list[str]) -> list[str]:
        """Keep the paths that pass the filter, preserving order."""
        return [p for p in file_paths if self.is_included(p)]
