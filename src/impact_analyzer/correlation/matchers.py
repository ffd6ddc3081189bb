"""Per-relation matchers.

Each matcher looks for a trigger signal in the source repository's
impacts and a consumer signal in the target repository's impacts. Both
sides must show a signal before a cross-repo impact is emitted.

Matchers are pure: they only read the two impact lists and the
relation's patterns.
"""

from collections.abc import Callable, Iterable
from typing import Protocol

from impact_analyzer.config.models import RelationConfig
from impact_analyzer.correlation.patterns import matches_any
from impact_analyzer.models.impact import ImpactItem, ReasonType, RepoImpacts
from impact_analyzer.models.relations import CrossRepoImpact, RelationKind

ImpactPredicate = Callable[[ImpactItem], bool]


class Matcher(Protocol):
    """Contract shared by all relation matchers."""

    def __call__(
        self,
        source: RepoImpacts,
        target: RepoImpacts,
        relation: RelationConfig,
    ) -> list[CrossRepoImpact]: ...


# =============================================================================
# Signal predicates
# =============================================================================

GRAPHQL_EXTENSIONS = (".graphql", ".gql")
GRAPHQL_PATH_HINTS = ("query", "mutation", "apollo", "graphql")
SHARED_TYPE_PATH_HINTS = ("types", "interfaces", "models")
SHARED_TYPE_NAME_HINTS = ("Type", "Interface", "Struct")
API_NAME_HINTS = ("API", "Handler", "Controller", "Endpoint")
API_PATH_HINTS = ("controller", "handler", "routes")
API_CLIENT_PATH_HINTS = ("service", "api", "http", "fetch")


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(needle in text for needle in needles)


def _has_reason(impact: ImpactItem, reason_type: ReasonType) -> bool:
    return any(r.type == reason_type for r in impact.reasons)


def is_graphql_trigger(impact: ImpactItem) -> bool:
    """Schema reason, GraphQL document, or a Query/Mutation component."""
    return (
        _has_reason(impact, ReasonType.SCHEMA)
        or impact.file.endswith(GRAPHQL_EXTENSIONS)
        or _contains_any(impact.component, ("Query", "Mutation"))
    )


def is_graphql_consumer(impact: ImpactItem) -> bool:
    """GraphQL document or a path hinting at GraphQL client code."""
    return impact.file.endswith(GRAPHQL_EXTENSIONS) or _contains_any(
        impact.file, GRAPHQL_PATH_HINTS
    )


def is_sqs_signal(impact: ImpactItem) -> bool:
    """SQS component name, or "sqs" anywhere in a reason description."""
    return "SQS" in impact.component or any(
        "sqs" in r.description.lower() for r in impact.reasons
    )


def is_shared_type_trigger(impact: ImpactItem) -> bool:
    """Type-definition path or a type-like component name."""
    return _contains_any(impact.file, SHARED_TYPE_PATH_HINTS) or _contains_any(
        impact.component, SHARED_TYPE_NAME_HINTS
    )


def is_api_trigger(impact: ImpactItem) -> bool:
    """API-facing component or a controller/handler/routes path."""
    return _contains_any(impact.component, API_NAME_HINTS) or _contains_any(
        impact.file, API_PATH_HINTS
    )


def is_api_consumer(impact: ImpactItem) -> bool:
    """Client-side code that makes HTTP calls."""
    return _contains_any(impact.file, API_CLIENT_PATH_HINTS) or "Service" in impact.component


def is_dependency_trigger(impact: ImpactItem) -> bool:
    """Dependency reason or a package manifest."""
    return (
        _has_reason(impact, ReasonType.DEPENDENCY)
        or "package.json" in impact.file
        or impact.file.endswith("go.mod")
    )


def any_impact(_impact: ImpactItem) -> bool:
    """Every impacted component counts as a consumer."""
    return True


# =============================================================================
# Shared correlation logic
# =============================================================================


def find_consumers(
    impacts: Iterable[ImpactItem],
    predicate: ImpactPredicate,
    patterns: list[str] | None = None,
) -> list[str]:
    """
    Collect consumer component names, deduplicated in first-seen order.

    Pattern matching is additive: an impact whose file matches any
    pattern is a consumer even if the predicate rejects it.
    """
    consumers: dict[str, None] = {}
    for impact in impacts:
        if predicate(impact) or matches_any(impact.file, patterns):
            consumers.setdefault(impact.component)
    return list(consumers)


def correlate(
    source: RepoImpacts,
    target: RepoImpacts,
    relation: RelationConfig,
    *,
    trigger: ImpactPredicate,
    consumer: ImpactPredicate,
    patterns: list[str] | None = None,
) -> list[CrossRepoImpact]:
    """
    Emit one raw cross-repo impact per triggering source impact.

    Returns an empty list when no source impact triggers or no target
    impact consumes. Records are not merged here.
    """
    triggers = [impact for impact in source.impacts if trigger(impact)]
    if not triggers:
        return []

    targets = tuple(find_consumers(target.impacts, consumer, patterns))
    if not targets:
        return []

    return [
        CrossRepoImpact(
            source_repo=source.name,
            source_component=impact.component,
            target_repo=target.name,
            target_components=targets,
            relation=relation.via,
        )
        for impact in triggers
    ]


# =============================================================================
# Matchers
# =============================================================================


def match_graphql_schema(
    source: RepoImpacts, target: RepoImpacts, relation: RelationConfig
) -> list[CrossRepoImpact]:
    """Schema changes in an API flag GraphQL consumers in the target."""
    return correlate(
        source,
        target,
        relation,
        trigger=is_graphql_trigger,
        consumer=is_graphql_consumer,
        patterns=relation.patterns,
    )


def match_sqs(
    source: RepoImpacts, target: RepoImpacts, relation: RelationConfig
) -> list[CrossRepoImpact]:
    """SQS handling changes flag the other side of the queue."""
    return correlate(source, target, relation, trigger=is_sqs_signal, consumer=is_sqs_signal)


def match_shared_types(
    source: RepoImpacts, target: RepoImpacts, relation: RelationConfig
) -> list[CrossRepoImpact]:
    """Shared type changes may affect anything impacted in the target."""
    return correlate(
        source, target, relation, trigger=is_shared_type_trigger, consumer=any_impact
    )


def match_api_call(
    source: RepoImpacts, target: RepoImpacts, relation: RelationConfig
) -> list[CrossRepoImpact]:
    """Endpoint changes flag clients that make HTTP calls."""
    return correlate(source, target, relation, trigger=is_api_trigger, consumer=is_api_consumer)


def match_npm_package(
    source: RepoImpacts, target: RepoImpacts, relation: RelationConfig
) -> list[CrossRepoImpact]:
    """Dependency manifest changes may affect anything impacted in the target."""
    return correlate(
        source, target, relation, trigger=is_dependency_trigger, consumer=any_impact
    )


def get_default_matchers() -> dict[RelationKind, Matcher]:
    """Return the built-in matcher for every relation kind."""
    return {
        RelationKind.GRAPHQL_SCHEMA: match_graphql_schema,
        RelationKind.SQS: match_sqs,
        RelationKind.SHARED_TYPES: match_shared_types,
        RelationKind.API_CALL: match_api_call,
        RelationKind.NPM_PACKAGE: match_npm_package,
    }
