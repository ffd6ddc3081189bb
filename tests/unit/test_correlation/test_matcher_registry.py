"""Tests for MatcherRegistry."""

from impact_analyzer.correlation.matchers import match_sqs
from impact_analyzer.correlation.registry import MatcherRegistry
from impact_analyzer.models.relations import RelationKind


class TestMatcherRegistry:
    """Tests for MatcherRegistry."""

    def test_create_default_covers_every_kind(self) -> None:
        registry = MatcherRegistry.create_default()

        assert registry.get_supported_kinds() == {kind.value for kind in RelationKind}

    def test_lookup_by_string_or_enum(self) -> None:
        registry = MatcherRegistry.create_default()

        assert registry.get_matcher("sqs") is match_sqs
        assert registry.get_matcher(RelationKind.SQS) is match_sqs

    def test_unknown_kind_returns_none(self) -> None:
        assert MatcherRegistry.create_default().get_matcher("carrier-pigeon") is None

    def test_register_custom_kind(self) -> None:
        registry = MatcherRegistry()

        def matcher(source, target, relation):  # type: ignore[no-untyped-def]
            return []

        registry.register("event-bridge", matcher)

        assert registry.get_matcher("event-bridge") is matcher
        assert registry.get_supported_kinds() == {"event-bridge"}
