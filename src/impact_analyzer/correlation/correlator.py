"""Cross-repository impact correlation.

Projects per-repository impacts across the declared relation graph:
for each relation, the matcher for its kind compares the source and
target repositories' impacts, and the collected records are merged.
"""

from collections.abc import Sequence

from loguru import logger

from impact_analyzer.config.models import RelationConfig
from impact_analyzer.correlation.dedup import dedupe
from impact_analyzer.correlation.registry import MatcherRegistry
from impact_analyzer.models.impact import RepoImpacts
from impact_analyzer.models.relations import CrossRepoImpact


class CrossRepoCorrelator:
    """
    Detects cross-repository impacts based on configured relations.

    Synchronous and side-effect free. Relations naming a repository that
    is not among the supplied impacts, or a kind without a matcher, are
    skipped without error.
    """

    def __init__(
        self,
        relations: Sequence[RelationConfig],
        repo_impacts: Sequence[RepoImpacts],
        registry: MatcherRegistry | None = None,
    ) -> None:
        """Initialize correlator with relations, impacts and matcher registry."""
        self.relations = list(relations)
        self.repo_impacts = list(repo_impacts)
        self.registry = registry or MatcherRegistry.create_default()

    def analyze(self) -> list[CrossRepoImpact]:
        """Correlate every relation in declaration order and merge the results."""
        records: list[CrossRepoImpact] = []

        for relation in self.relations:
            records.extend(self.analyze_relation(relation))

        merged = dedupe(records)
        logger.debug(
            "Cross-repo correlation complete: relations={} raw={} merged={}",
            len(self.relations),
            len(records),
            len(merged),
        )
        return merged

    def analyze_relation(self, relation: RelationConfig) -> list[CrossRepoImpact]:
        """Run the matcher for a single relation, returning raw records."""
        source = self._find_repo(relation.from_)
        target = self._find_repo(relation.to)

        if source is None or target is None:
            logger.debug(
                "Skipping relation {} -> {} ({}): repository not analyzed",
                relation.from_,
                relation.to,
                relation.via,
            )
            return []

        matcher = self.registry.get_matcher(relation.via)
        if matcher is None:
            logger.debug("Skipping relation with unknown kind: {}", relation.via)
            return []

        return matcher(source, target, relation)

    def _find_repo(self, name: str) -> RepoImpacts | None:
        return next((r for r in self.repo_impacts if r.name == name), None)


def analyze(
    relations: Sequence[RelationConfig],
    repo_impacts: Sequence[RepoImpacts],
) -> list[CrossRepoImpact]:
    """Correlate impacts across repositories with the default matchers."""
    return CrossRepoCorrelator(relations, repo_impacts).analyze()
