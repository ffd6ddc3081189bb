"""Analysis result models.

These are the aggregate structures handed to the reporting layer:
per-repository impacts, cross-repository impacts and a summary.
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from impact_analyzer.models.impact import ImpactItem, ReasonType
from impact_analyzer.models.relations import CrossRepoImpact

TOOL_NAME = "impact-analyzer"


class RepoResult(BaseModel):
    """Result of analyzing a single repository."""

    name: str
    changed_files: int = 0
    impacts: list[ImpactItem] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class RepoSummary(BaseModel):
    """Per-repository counts for the summary table."""

    name: str
    changed_files: int
    impact_count: int


class Summary(BaseModel):
    """Aggregate statistics over all repositories."""

    total_changed_files: int = 0
    total_impacted_components: int = 0
    has_breaking_changes: bool = False
    repos: list[RepoSummary] = Field(default_factory=list)


class AnalysisMeta(BaseModel):
    """Metadata about one analysis run."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    base_ref: str
    head_ref: str
    tool: str = TOOL_NAME
    version: str
    pr_url: str | None = None


class AnalysisResult(BaseModel):
    """Complete output of an analysis run."""

    meta: AnalysisMeta
    summary: Summary
    repos: list[RepoResult] = Field(default_factory=list)
    cross_repo_impacts: list[CrossRepoImpact] = Field(default_factory=list)


def has_breaking_changes(impacts: Iterable[ImpactItem]) -> bool:
    """Schema reasons, or any description mentioning "breaking", flag a breaking change."""
    return any(
        reason.type == ReasonType.SCHEMA or "breaking" in reason.description.lower()
        for impact in impacts
        for reason in impact.reasons
    )


def build_summary(repos: list[RepoResult]) -> Summary:
    """Build the summary block from per-repository results."""
    return Summary(
        total_changed_files=sum(r.changed_files for r in repos),
        total_impacted_components=sum(len(r.impacts) for r in repos),
        has_breaking_changes=has_breaking_changes(i for r in repos for i in r.impacts),
        repos=[
            RepoSummary(name=r.name, changed_files=r.changed_files, impact_count=len(r.impacts))
            for r in repos
        ],
    )
