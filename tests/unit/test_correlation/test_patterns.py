"""Tests for glob pattern matching."""

import pytest

from impact_analyzer.correlation.patterns import glob_to_regex, matches, matches_any


class TestGlobToRegex:
    """Test glob translation."""

    def test_double_star_crosses_directories(self) -> None:
        """Double star should become an unrestricted wildcard."""
        assert glob_to_regex("**") == ".*"

    def test_single_star_stays_in_segment(self) -> None:
        """Single star should not cross a slash."""
        assert glob_to_regex("*.ts") == "[^/]*.ts"

    def test_question_mark(self) -> None:
        """Question mark should match one character."""
        assert glob_to_regex("a?c") == "a.c"

    def test_double_star_not_rewritten_by_single_star_rule(self) -> None:
        """Double star expansion should survive the single-star pass."""
        assert glob_to_regex("**/*.graphql") == ".*/[^/]*.graphql"


class TestMatches:
    """Test path matching semantics."""

    @pytest.mark.parametrize(
        ("path", "pattern", "expected"),
        [
            ("src/queries/getUsers.graphql", "**/*.graphql", True),
            ("src/queries/getUsers.graphql", "*.graphql", False),
            ("schema.graphql", "*.graphql", True),
            ("schema.graphql.bak", "schema.graphql", True),
            ("src/schema.graphql", "schema.graphql", False),
            ("src/app/user.service.ts", "src/**", True),
            ("lib/app/user.service.ts", "src/**", False),
            ("abc", "a?c", True),
            ("ac", "a?c", False),
        ],
    )
    def test_pattern_semantics(self, path: str, pattern: str, expected: bool) -> None:
        """Patterns match from the start of the path without an end anchor."""
        assert matches(path, pattern) is expected

    def test_dot_is_not_escaped(self) -> None:
        """A literal dot in the pattern matches any character."""
        assert matches("schemaXgraphql", "schema.graphql") is True

    def test_invalid_regex_does_not_match(self) -> None:
        """Patterns that translate to invalid regex never match."""
        assert matches("src/a.ts", "src/[") is False


class TestMatchesAny:
    """Test matching against several patterns."""

    def test_none_never_matches(self) -> None:
        assert matches_any("src/a.graphql", None) is False

    def test_empty_never_matches(self) -> None:
        assert matches_any("src/a.graphql", []) is False

    def test_any_pattern_matches(self) -> None:
        assert matches_any("src/a.graphql", ["*.ts", "src/*.graphql"]) is True


class TestStartAnchoring:
    """Patterns are matched from the start of the path, not searched."""

    def test_bare_file_name_does_not_match_nested_path(self) -> None:
        assert matches("src/schema.graphql", "schema.graphql") is False

    def test_leading_double_star_matches_anywhere(self) -> None:
        assert matches("src/schema.graphql", "**/schema.graphql") is True
        assert matches("api/src/graphql/schema.graphql", "**schema.graphql") is True
