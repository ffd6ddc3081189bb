"""Tests for analysis result models and summary helpers."""

from impact_analyzer.models.impact import ImpactItem, Reason, ReasonType
from impact_analyzer.models.results import (
    TOOL_NAME,
    AnalysisMeta,
    RepoResult,
    build_summary,
    has_breaking_changes,
)


def _impact(reason_type: ReasonType, description: str, file: str = "f") -> ImpactItem:
    return ImpactItem(
        component="C",
        repo="r",
        file=file,
        reasons=(Reason(type=reason_type, source=file, description=description),),
    )


class TestHasBreakingChanges:
    """Test breaking change detection."""

    def test_schema_reason_is_breaking(self) -> None:
        assert has_breaking_changes([_impact(ReasonType.SCHEMA, "Struct changed")]) is True

    def test_breaking_in_description_case_insensitive(self) -> None:
        assert has_breaking_changes([_impact(ReasonType.DIRECT, "[BREAKING] Field removed")])

    def test_plain_change_not_breaking(self) -> None:
        assert has_breaking_changes([_impact(ReasonType.DIRECT, "Component modified")]) is False

    def test_empty(self) -> None:
        assert has_breaking_changes([]) is False


class TestBuildSummary:
    """Test summary construction."""

    def test_totals_and_per_repo_rows(self) -> None:
        repos = [
            RepoResult(
                name="api",
                changed_files=2,
                impacts=[_impact(ReasonType.DIRECT, "x", "a"), _impact(ReasonType.DIRECT, "y", "b")],
            ),
            RepoResult(name="web", changed_files=1, impacts=[_impact(ReasonType.SCHEMA, "z")]),
            RepoResult(name="empty"),
        ]

        summary = build_summary(repos)

        assert summary.total_changed_files == 3
        assert summary.total_impacted_components == 3
        assert summary.has_breaking_changes is True
        assert [(r.name, r.changed_files, r.impact_count) for r in summary.repos] == [
            ("api", 2, 2),
            ("web", 1, 1),
            ("empty", 0, 0),
        ]


class TestAnalysisMeta:
    """Test metadata defaults."""

    def test_defaults(self) -> None:
        meta = AnalysisMeta(base_ref="main", head_ref="HEAD", version="1.0.0")

        assert meta.tool == TOOL_NAME
        assert meta.timestamp.tzinfo is not None
        assert meta.pr_url is None
