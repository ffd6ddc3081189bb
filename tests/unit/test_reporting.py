"""Tests for report rendering."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from impact_analyzer.models.impact import ImpactItem, Reason, ReasonType
from impact_analyzer.models.relations import CrossRepoImpact, RelationKind
from impact_analyzer.models.results import AnalysisMeta, AnalysisResult, RepoResult, build_summary
from impact_analyzer.reporting import (
    render_github_comment,
    render_json,
    render_markdown,
    write_reports,
)


@pytest.fixture
def result() -> AnalysisResult:
    repos = [
        RepoResult(
            name="api",
            changed_files=1,
            impacts=[
                ImpactItem(
                    component="User.email",
                    repo="api",
                    file="schema.graphql",
                    reasons=(
                        Reason(
                            type=ReasonType.SCHEMA,
                            source="schema-diff",
                            description="[BREAKING] Field 'email' was removed from 'User'",
                        ),
                    ),
                )
            ],
        ),
        RepoResult(name="web", errors=["ts-morph: not supported"]),
    ]
    return AnalysisResult(
        meta=AnalysisMeta(
            timestamp=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
            base_ref="origin/develop",
            head_ref="HEAD",
            version="0.1.0",
        ),
        summary=build_summary(repos),
        repos=repos,
        cross_repo_impacts=[
            CrossRepoImpact(
                source_repo="api",
                source_component="User.email",
                target_repo="web",
                target_components=("UserList", "Profile"),
                relation=RelationKind.GRAPHQL_SCHEMA,
            )
        ],
    )


@pytest.fixture
def empty_result() -> AnalysisResult:
    return AnalysisResult(
        meta=AnalysisMeta(base_ref="a", head_ref="b", version="0.1.0"),
        summary=build_summary([RepoResult(name="api")]),
        repos=[RepoResult(name="api")],
    )


class TestRenderJson:
    """Test JSON output."""

    def test_round_trips_key_fields(self, result: AnalysisResult) -> None:
        data = json.loads(render_json(result))

        assert data["meta"]["base_ref"] == "origin/develop"
        assert data["summary"]["has_breaking_changes"] is True
        assert data["repos"][0]["impacts"][0]["reasons"][0]["type"] == "schema"
        assert data["cross_repo_impacts"][0]["relation"] == "graphql-schema"
        assert data["cross_repo_impacts"][0]["target_components"] == ["UserList", "Profile"]

    def test_parses_back_into_model(self, result: AnalysisResult) -> None:
        assert AnalysisResult.model_validate_json(render_json(result)) == result


class TestRenderMarkdown:
    """Test Markdown report."""

    def test_sections(self, result: AnalysisResult) -> None:
        md = render_markdown(result)

        assert md.startswith("# Impact Analysis Report\n")
        assert "**Base:** `origin/develop`" in md
        assert "| Breaking Changes | Yes |" in md
        assert "| api | 1 | 1 |" in md
        assert "#### User.email" in md
        assert "  - [schema] [BREAKING] Field 'email' was removed from 'User'" in md
        assert "### web (errors)" in md
        assert "### api -> web" in md
        assert "  - UserList\n  - Profile\n" in md

    def test_no_cross_repo_section_when_empty(self, empty_result: AnalysisResult) -> None:
        md = render_markdown(empty_result)

        assert "Cross-Repository Impacts" not in md
        assert "| Breaking Changes | No |" in md


class TestRenderGithubComment:
    """Test pull request comment."""

    def test_collapsed_sections(self, result: AnalysisResult) -> None:
        comment = render_github_comment(result)

        assert comment.startswith("## Impact Analysis\n")
        assert "<summary>Impacted Components (1)</summary>" in comment
        assert "- **User.email** (`schema.graphql`)" in comment
        assert "<summary>Cross-Repository Impacts (1)</summary>" in comment
        assert "- **May affect:** UserList, Profile" in comment
        assert comment.rstrip().endswith("v0.1.0*")

    def test_no_impacts(self, empty_result: AnalysisResult) -> None:
        comment = render_github_comment(empty_result)

        assert "**No component impacts detected.**" in comment
        assert "<details>" not in comment


class TestWriteReports:
    """Test writing reports to disk."""

    def test_writes_requested_formats(self, tmp_path: Path, result: AnalysisResult) -> None:
        out = tmp_path / "out"

        written = write_reports(result, out, ["json", "markdown", "github", "json"])

        assert written == [out / "impact.json", out / "impact.md", out / "github-comment.md"]
        assert all(p.is_file() for p in written)
        assert json.loads((out / "impact.json").read_text())["meta"]["head_ref"] == "HEAD"

    def test_unknown_format(self, tmp_path: Path, result: AnalysisResult) -> None:
        with pytest.raises(ValueError, match="pdf"):
            write_reports(result, tmp_path, ["json", "pdf"])

        assert not (tmp_path / "impact.json").exists()
