"""Matcher registry for routing relations to their matcher."""

from impact_analyzer.correlation.matchers import Matcher, get_default_matchers
from impact_analyzer.models.relations import RelationKind


class MatcherRegistry:
    """
    Registry of relation matchers keyed by relation kind.

    Adding a relation kind means registering one matcher; the
    correlator itself does not change.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._matchers: dict[str, Matcher] = {}

    def register(self, kind: RelationKind | str, matcher: Matcher) -> None:
        """Register (or replace) the matcher for a relation kind."""
        self._matchers[str(kind)] = matcher

    def register_many(self, matchers: dict[RelationKind, Matcher]) -> None:
        """Register several matchers at once."""
        for kind, matcher in matchers.items():
            self.register(kind, matcher)

    def get_matcher(self, kind: RelationKind | str) -> Matcher | None:
        """Get the matcher for a relation kind, or None if unknown."""
        return self._matchers.get(str(kind))

    def get_supported_kinds(self) -> set[str]:
        """Get all relation kinds with a registered matcher."""
        return set(self._matchers)

    @classmethod
    def create_default(cls) -> "MatcherRegistry":
        """Create a registry with the built-in matchers."""
        registry = cls()
        registry.register_many(get_default_matchers())
        return registry
