"""Analyzer registry for routing configured analyzer types to classes."""

from loguru import logger

from impact_analyzer.analyzers.angular import AngularAnalyzer
from impact_analyzer.analyzers.base import BaseAnalyzer
from impact_analyzer.analyzers.go import GoAnalyzer
from impact_analyzer.analyzers.graphql import GraphQLAnalyzer
from impact_analyzer.config.models import AnalyzerType, RepositoryConfig
from impact_analyzer.services.git import GitClient

AnalyzerClass = type[BaseAnalyzer]


def get_default_analyzers() -> dict[AnalyzerType, AnalyzerClass]:
    """Get the built-in analyzer classes keyed by analyzer type.

    Returns:
        Mapping of analyzer type to analyzer class.
    """
    return {
        AnalyzerType.GO_AST: GoAnalyzer,
        AnalyzerType.GRAPHQL_INSPECTOR: GraphQLAnalyzer,
        AnalyzerType.TS_MORPH: AngularAnalyzer,
    }


class AnalyzerRegistry:
    """
    Registry of per-repository analyzers.

    Analyzer types without a registered class are reported as
    unsupported and skipped by the pipeline.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._analyzers: dict[str, AnalyzerClass] = {}

    def register(self, analyzer_type: AnalyzerType | str, analyzer_cls: AnalyzerClass) -> None:
        """Register (or replace) the class for an analyzer type."""
        self._analyzers[str(analyzer_type)] = analyzer_cls

    def register_many(self, analyzers: dict[AnalyzerType, AnalyzerClass]) -> None:
        """Register several analyzer classes at once."""
        for analyzer_type, analyzer_cls in analyzers.items():
            self.register(analyzer_type, analyzer_cls)

    def supports(self, analyzer_type: AnalyzerType | str) -> bool:
        """Check whether an analyzer type has a registered class."""
        return str(analyzer_type) in self._analyzers

    def get_supported_types(self) -> set[str]:
        """Get all analyzer types with a registered class."""
        return set(self._analyzers)

    def create(
        self,
        analyzer_type: AnalyzerType | str,
        config: RepositoryConfig,
        base_ref: str,
        head_ref: str,
        git: GitClient | None = None,
    ) -> BaseAnalyzer | None:
        """
        Instantiate the analyzer for a repository.

        Args:
            analyzer_type: Configured analyzer type.
            config: Repository being analyzed.
            base_ref: Base git ref.
            head_ref: Head git ref.
            git: Optional shared git client for the repository.

        Returns:
            Analyzer instance, or None if the type is not supported
            or does not handle the repository type.
        """
        analyzer_cls = self._analyzers.get(str(analyzer_type))
        if analyzer_cls is None:
            logger.warning(
                "Analyzer {} is not supported, skipping for {}", analyzer_type, config.name
            )
            return None
        if not analyzer_cls.supports_repo(config):
            logger.warning(
                "Analyzer {} does not handle {} repositories, skipping for {}",
                analyzer_type,
                config.type,
                config.name,
            )
            return None
        return analyzer_cls(config, base_ref, head_ref, git)

    @classmethod
    def create_default(cls) -> "AnalyzerRegistry":
        """Create a registry with the built-in analyzers."""
        registry = cls()
        registry.register_many(get_default_analyzers())
        return registry
