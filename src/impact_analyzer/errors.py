"""Impact analyzer error types.

All custom exceptions inherit from ImpactAnalyzerError to allow
catching any analyzer-specific error.
"""


class ImpactAnalyzerError(Exception):
    """Base exception for all impact analyzer errors."""

    pass


class ConfigurationError(ImpactAnalyzerError):
    """Invalid configuration."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class GitError(ImpactAnalyzerError):
    """A git command failed."""

    def __init__(self, message: str, repo_path: str, command: list[str] | None = None) -> None:
        super().__init__(message)
        self.repo_path = repo_path
        self.command = command or []


class AnalyzerError(ImpactAnalyzerError):
    """Per-repository analysis failed."""

    def __init__(self, message: str, analyzer: str, recoverable: bool = True) -> None:
        super().__init__(message)
        self.analyzer = analyzer
        self.recoverable = recoverable
