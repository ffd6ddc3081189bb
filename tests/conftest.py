"""Shared pytest fixtures for impact analyzer tests."""

from collections.abc import Callable

import pytest

from impact_analyzer.config.models import RelationConfig
from impact_analyzer.models.impact import ImpactItem, Reason, ReasonType, RepoImpacts
from impact_analyzer.models.relations import RelationKind

ImpactFactory = Callable[..., ImpactItem]


@pytest.fixture
def make_impact() -> ImpactFactory:
    """Factory for impact items with sensible defaults."""

    def _make(
        component: str,
        file: str,
        repo: str = "repo",
        reason_type: ReasonType = ReasonType.DIRECT,
        description: str = "changed",
        source: str | None = None,
    ) -> ImpactItem:
        return ImpactItem(
            component=component,
            repo=repo,
            file=file,
            reasons=(Reason(type=reason_type, source=source or file, description=description),),
        )

    return _make


@pytest.fixture
def make_repo() -> Callable[..., RepoImpacts]:
    """Factory for a repository's impacts."""

    def _make(name: str, *impacts: ImpactItem) -> RepoImpacts:
        return RepoImpacts(name=name, impacts=impacts)

    return _make


@pytest.fixture
def make_relation() -> Callable[..., RelationConfig]:
    """Factory for relations, accepting ``from`` as ``source``."""

    def _make(
        source: str,
        target: str,
        via: RelationKind | str,
        patterns: list[str] | None = None,
    ) -> RelationConfig:
        return RelationConfig.model_validate(
            {"from": source, "to": target, "via": via, "patterns": patterns}
        )

    return _make
