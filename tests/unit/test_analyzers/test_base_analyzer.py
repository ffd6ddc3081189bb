"""Tests for BaseAnalyzer helpers."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from impact_analyzer.analyzers.base import BaseAnalyzer
from impact_analyzer.config.models import RepositoryConfig
from impact_analyzer.errors import AnalyzerError, GitError
from impact_analyzer.models.impact import ImpactItem, ReasonType


class ListingAnalyzer(BaseAnalyzer):
    """Reports every changed file as a component."""

    @property
    def name(self) -> str:
        return "listing"

    async def analyze(self) -> list[ImpactItem]:
        return [
            self.create_impact(f, f, ReasonType.DIRECT, f, "changed")
            for f in await self.get_changed_files()
        ]


class TestBaseAnalyzer:
    """Test shared analyzer behavior."""

    @pytest.mark.asyncio
    async def test_changed_files_filtered(
        self,
        repo_config: Callable[..., RepositoryConfig],
        fake_git: Callable[..., MagicMock],
    ) -> None:
        config = repo_config(include_paths=["src/"], exclude_paths=["**/*_test.go"])
        git = fake_git(["src/a.go", "src/a_test.go", "docs/readme.md"])

        analyzer = ListingAnalyzer(config, "main", "HEAD", git)

        assert await analyzer.get_changed_files() == ["src/a.go"]
        git.changed_files.assert_awaited_once_with("main", "HEAD")

    @pytest.mark.asyncio
    async def test_git_failure_becomes_analyzer_error(
        self,
        repo_config: Callable[..., RepositoryConfig],
        fake_git: Callable[..., MagicMock],
    ) -> None:
        git = fake_git([])
        git.changed_files.side_effect = GitError("unknown revision", "/repo")

        with pytest.raises(AnalyzerError, match="unknown revision") as exc_info:
            await ListingAnalyzer(repo_config(), "main", "HEAD", git).analyze()

        assert exc_info.value.analyzer == "listing"
        assert exc_info.value.recoverable is True
        assert isinstance(exc_info.value.__cause__, GitError)

    def test_create_impact(
        self,
        repo_config: Callable[..., RepositoryConfig],
    ) -> None:
        analyzer = ListingAnalyzer(repo_config("lambdas"), "main", "HEAD", MagicMock())

        impact = analyzer.create_impact(
            "Lambda: Handle", "main.go", ReasonType.DIRECT, "main.go", "modified", line=12
        )

        assert impact.repo == "lambdas"
        assert impact.line == 12
        assert [(r.type, r.source, r.description) for r in impact.reasons] == [
            (ReasonType.DIRECT, "main.go", "modified")
        ]

    def test_filters(self) -> None:
        files = ["a.go", "b.graphql", "src/c.gql", "src/d.ts"]

        assert BaseAnalyzer.filter_by_extension(files, ".graphql", ".gql") == [
            "b.graphql",
            "src/c.gql",
        ]
        assert BaseAnalyzer.filter_by_path(files, "src/") == ["src/c.gql", "src/d.ts"]

    def test_default_git_client_uses_repo_path(
        self,
        repo_config: Callable[..., RepositoryConfig],
    ) -> None:
        config = repo_config()

        analyzer = ListingAnalyzer(config, "main", "HEAD")

        assert analyzer.git.repo_path == config.path
