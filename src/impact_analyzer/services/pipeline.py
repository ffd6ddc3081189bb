"""Analysis pipeline.

Runs the configured analyzers for every repository concurrently,
projects the results across the relation graph and assembles the
final ``AnalysisResult``.
"""

import asyncio

from loguru import logger

from impact_analyzer import __version__
from impact_analyzer.analyzers.registry import AnalyzerRegistry
from impact_analyzer.config.models import Config, RepositoryConfig
from impact_analyzer.correlation.correlator import CrossRepoCorrelator
from impact_analyzer.correlation.registry import MatcherRegistry
from impact_analyzer.errors import AnalyzerError
from impact_analyzer.models.impact import ImpactItem, RepoImpacts, merge_impacts
from impact_analyzer.models.results import AnalysisMeta, AnalysisResult, RepoResult, build_summary


class AnalysisPipeline:
    """
    End-to-end impact analysis for one base/head comparison.

    Analyzer failures are recorded on the repository result and never
    abort the run.
    """

    def __init__(
        self,
        config: Config,
        registry: AnalyzerRegistry | None = None,
        matchers: MatcherRegistry | None = None,
    ) -> None:
        """Initialize pipeline with configuration and registries."""
        self.config = config
        self.registry = registry or AnalyzerRegistry.create_default()
        self.matchers = matchers or MatcherRegistry.create_default()

    async def run(self, base_ref: str, head_ref: str, pr_url: str | None = None) -> AnalysisResult:
        """
        Analyze all repositories and correlate their impacts.

        Args:
            base_ref: Base git ref (e.g. ``origin/develop``).
            head_ref: Head git ref (e.g. ``HEAD``).
            pr_url: Optional pull request URL recorded in the metadata.

        Returns:
            Complete analysis result.
        """
        logger.info(
            "Analyzing {} repositories: {}...{}", len(self.config.repos), base_ref, head_ref
        )

        repo_results = list(
            await asyncio.gather(
                *(self.analyze_repository(repo, base_ref, head_ref) for repo in self.config.repos)
            )
        )

        repo_impacts = [RepoImpacts(name=r.name, impacts=tuple(r.impacts)) for r in repo_results]
        correlator = CrossRepoCorrelator(self.config.relations, repo_impacts, self.matchers)
        cross_repo_impacts = correlator.analyze()

        summary = build_summary(repo_results)
        logger.info(
            "Analysis complete: {} impacted components, {} cross-repo impacts",
            summary.total_impacted_components,
            len(cross_repo_impacts),
        )

        return AnalysisResult(
            meta=AnalysisMeta(
                base_ref=base_ref,
                head_ref=head_ref,
                version=__version__,
                pr_url=pr_url,
            ),
            summary=summary,
            repos=repo_results,
            cross_repo_impacts=cross_repo_impacts,
        )

    async def analyze_repository(
        self,
        repo: RepositoryConfig,
        base_ref: str,
        head_ref: str,
    ) -> RepoResult:
        """Run every configured analyzer for one repository."""
        log = logger.bind(repo=repo.name)

        if not repo.path.exists():
            log.warning("Repository path not found: {}", repo.path)
            return RepoResult(name=repo.name, errors=[f"Repository path not found: {repo.path}"])

        impacts: list[ImpactItem] = []
        errors: list[str] = []

        for analyzer_type in repo.analyzers:
            analyzer = self.registry.create(analyzer_type, repo, base_ref, head_ref)
            if analyzer is None:
                continue

            try:
                found = await analyzer.analyze()
            except AnalyzerError as e:
                if not e.recoverable:
                    raise
                log.warning("Analyzer {} failed: {}", e.analyzer, e)
                errors.append(f"{analyzer_type}: {e}")
                continue
            except Exception as e:
                log.error("Analyzer {} failed: {}", analyzer_type, e)
                errors.append(f"{analyzer_type}: {e}")
                continue

            log.debug("{} found {} impacts", analyzer.name, len(found))
            impacts.extend(found)

        merged = merge_impacts(impacts)
        return RepoResult(
            name=repo.name,
            changed_files=len({i.file for i in merged}),
            impacts=merged,
            errors=errors,
        )
