"""Fixtures for analyzer tests."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from impact_analyzer.config.models import RepositoryConfig
from impact_analyzer.services.git import GitClient


@pytest.fixture
def repo_config(tmp_path: Path) -> Callable[..., RepositoryConfig]:
    """Factory for a repository rooted in the test's tmp_path."""

    def _make(
        name: str = "repo",
        repo_type: str = "go",
        analyzers: list[str] | None = None,
        **overrides: object,
    ) -> RepositoryConfig:
        return RepositoryConfig.model_validate(
            {
                "name": name,
                "path": str(tmp_path),
                "type": repo_type,
                "analyzers": analyzers or ["go-ast"],
                **overrides,
            }
        )

    return _make


@pytest.fixture
def fake_git(tmp_path: Path) -> Callable[..., MagicMock]:
    """
    Factory for a git client double.

    Changed files, per-file diffs and per-ref file contents are served
    from dicts; working-tree reads go to tmp_path.
    """

    def _make(
        changed: list[str],
        diffs: dict[str, str] | None = None,
        refs: dict[tuple[str, str], str] | None = None,
    ) -> MagicMock:
        git = MagicMock(spec=GitClient)
        git.changed_files = AsyncMock(return_value=changed)
        git.file_diff = AsyncMock(
            side_effect=lambda path, base, head: (diffs or {}).get(path, "")
        )
        git.show_file = AsyncMock(side_effect=lambda ref, path: (refs or {}).get((ref, path)))
        git.read_file = MagicMock(side_effect=GitClient(tmp_path).read_file)
        return git

    return _make
