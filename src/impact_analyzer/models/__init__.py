"""Domain models for impact analysis."""

from impact_analyzer.models.impact import (
    ImpactItem,
    Reason,
    ReasonType,
    RepoImpacts,
    merge_impacts,
)
from impact_analyzer.models.relations import CrossRepoImpact, RelationKind
from impact_analyzer.models.results import (
    AnalysisMeta,
    AnalysisResult,
    RepoResult,
    RepoSummary,
    Summary,
    build_summary,
    has_breaking_changes,
)

__all__ = [
    "AnalysisMeta",
    "AnalysisResult",
    "CrossRepoImpact",
    "ImpactItem",
    "Reason",
    "ReasonType",
    "RelationKind",
    "RepoImpacts",
    "RepoResult",
    "RepoSummary",
    "Summary",
    "build_summary",
    "has_breaking_changes",
    "merge_impacts",
]
