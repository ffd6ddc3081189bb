"""Base analyzer classes and protocols."""

from abc import ABC, abstractmethod
from typing import ClassVar, Protocol, runtime_checkable

from impact_analyzer.config.models import RepositoryConfig, RepoType
from impact_analyzer.errors import AnalyzerError, GitError
from impact_analyzer.models.impact import ImpactItem, Reason, ReasonType, merge_impacts
from impact_analyzer.services.git import GitClient
from impact_analyzer.utils.paths import PathFilter


@runtime_checkable
class AnalyzerProtocol(Protocol):
    """Contract for per-repository impact analyzers."""

    @property
    def name(self) -> str:
        """Analyzer name for logging and error reports."""
        ...

    async def analyze(self) -> list[ImpactItem]:
        """
        Analyze the repository between the configured refs.

        Returns:
            Impact items, already merged by (component, file).
        """
        ...


class BaseAnalyzer(ABC):
    """
    Base class for git-diff driven analyzers.

    Provides:
    - Changed-file discovery honoring include/exclude paths
    - Filtering helpers
    - Impact construction and merging
    """

    # Repository types the analyzer understands; empty means any
    repo_types: ClassVar[frozenset[RepoType]] = frozenset()

    def __init__(
        self,
        config: RepositoryConfig,
        base_ref: str,
        head_ref: str,
        git: GitClient | None = None,
    ) -> None:
        """Initialize analyzer for one repository and ref range."""
        self.config = config
        self.base_ref = base_ref
        self.head_ref = head_ref
        self.repo_path = config.path
        self.git = git or GitClient(config.path)
        self.path_filter = PathFilter(config.include_paths, config.exclude_paths)

    @classmethod
    def supports_repo(cls, config: RepositoryConfig) -> bool:
        """Check whether the analyzer handles this repository type."""
        return not cls.repo_types or config.type in cls.repo_types

    @property
    @abstractmethod
    def name(self) -> str:
        """Analyzer name for logging."""
        ...

    @abstractmethod
    async def analyze(self) -> list[ImpactItem]:
        """Run the analysis and return impact items."""
        ...

    # =========================================================================
    # Utility Methods for Subclasses
    # =========================================================================

    async def get_changed_files(self) -> list[str]:
        """
        Files changed between base and head that pass the path filter.

        Raises:
            AnalyzerError: If git cannot list the changed files.
        """
        try:
            changed = await self.git.changed_files(self.base_ref, self.head_ref)
        except GitError as e:
            raise AnalyzerError(f"Cannot list changed files: {e}", self.name) from e
        return self.path_filter.filter(changed)

    async def get_file_diff(self, file_path: str) -> str:
        """Unified diff for one file between base and head."""
        return await self.git.file_diff(file_path, self.base_ref, self.head_ref)

    def read_file(self, file_path: str) -> str | None:
        """Read a file from the working tree."""
        return self.git.read_file(file_path)

    @staticmethod
    def filter_by_extension(files: list[str], *extensions: str) -> list[str]:
        """Keep files ending with any of the extensions."""
        return [f for f in files if f.endswith(extensions)]

    @staticmethod
    def filter_by_path(files: list[str], prefix: str) -> list[str]:
        """Keep files under a path prefix."""
        return [f for f in files if f.startswith(prefix)]

    def create_impact(
        self,
        component: str,
        file: str,
        reason_type: ReasonType,
        source: str,
        description: str,
        line: int | None = None,
    ) -> ImpactItem:
        """Create an impact item with a single reason for this repository."""
        return ImpactItem(
            component=component,
            repo=self.config.name,
            file=file,
            line=line,
            reasons=(Reason(type=reason_type, source=source, description=description),),
        )

    @staticmethod
    def merge_impacts(impacts: list[ImpactItem]) -> list[ImpactItem]:
        """Merge impacts sharing (component, file)."""
        return merge_impacts(impacts)
