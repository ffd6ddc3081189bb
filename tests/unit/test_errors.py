"""Tests for impact analyzer error types."""

from impact_analyzer.errors import (
    AnalyzerError,
    ConfigurationError,
    GitError,
    ImpactAnalyzerError,
)


class TestErrorHierarchy:
    """Test error class hierarchy."""

    def test_all_errors_inherit_from_base_error(self) -> None:
        """All custom errors should inherit from ImpactAnalyzerError."""
        assert issubclass(ConfigurationError, ImpactAnalyzerError)
        assert issubclass(GitError, ImpactAnalyzerError)
        assert issubclass(AnalyzerError, ImpactAnalyzerError)

    def test_base_error_inherits_from_exception(self) -> None:
        assert issubclass(ImpactAnalyzerError, Exception)


class TestConfigurationError:
    """Test ConfigurationError specifics."""

    def test_errors_default_to_empty(self) -> None:
        error = ConfigurationError("Invalid config")
        assert error.errors == []
        assert str(error) == "Invalid config"

    def test_errors_are_kept(self) -> None:
        error = ConfigurationError("Invalid config", errors=["repos.0.name: required"])
        assert error.errors == ["repos.0.name: required"]


class TestGitError:
    """Test GitError specifics."""

    def test_git_error_stores_context(self) -> None:
        error = GitError("diff failed", "/repos/api", ["git", "diff", "--name-only"])
        assert error.repo_path == "/repos/api"
        assert error.command == ["git", "diff", "--name-only"]
        assert str(error) == "diff failed"

    def test_command_defaults_to_empty(self) -> None:
        assert GitError("boom", "/repos/api").command == []


class TestAnalyzerError:
    """Test AnalyzerError specifics."""

    def test_recoverable_by_default(self) -> None:
        error = AnalyzerError("Cannot list changed files", "go")
        assert error.analyzer == "go"
        assert error.recoverable is True

    def test_can_be_fatal(self) -> None:
        error = AnalyzerError("Parser unavailable", "go", recoverable=False)
        assert error.recoverable is False
