"""Impact item models.

An ImpactItem is the atomic unit produced by per-repository analyzers:
one affected component, in one repository, with one or more typed reasons.
"""

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ReasonType(StrEnum):
    """Why a component is impacted."""

    DIRECT = "direct"
    DEPENDENCY = "dependency"
    SCHEMA = "schema"
    STYLE = "style"
    CONFIG = "config"
    TEMPLATE = "template"
    MODULE = "module"


class Reason(BaseModel):
    """A single typed reason attached to an impact item."""

    model_config = ConfigDict(frozen=True)

    type: ReasonType
    source: str
    description: str

    @property
    def key(self) -> tuple[str, str]:
        """Identity of a reason within one impact item."""
        return (self.type.value, self.source)


class ImpactItem(BaseModel):
    """
    One impacted component.

    Attributes:
        component: Display name of the affected unit (class, query, struct...).
        repo: Owning repository name.
        file: Path relative to the repository root.
        line: Source line, when known.
        reasons: Ordered reasons, unique by (type, source).
        test_hints: Filled only by the optional enhancement step.
    """

    model_config = ConfigDict(frozen=True)

    component: str
    repo: str
    file: str
    line: int | None = None
    reasons: tuple[Reason, ...] = Field(default_factory=tuple)
    test_hints: tuple[str, ...] | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Deduplication key within a single repository."""
        return (self.component, self.file)


class RepoImpacts(BaseModel):
    """All impacts found in one repository."""

    model_config = ConfigDict(frozen=True)

    name: str
    impacts: tuple[ImpactItem, ...] = Field(default_factory=tuple)


def merge_impacts(items: Iterable[ImpactItem]) -> list[ImpactItem]:
    """
    Merge impact items sharing the same (component, file).

    Reasons are unioned by (type, source), keeping first-seen order.
    Output order is the first-seen order of each key.

    Args:
        items: Impact items from one repository.

    Returns:
        Deduplicated impact items.
    """
    merged: dict[tuple[str, str], ImpactItem] = {}

    for item in items:
        existing = merged.get(item.key)
        if existing is None:
            merged[item.key] = item.model_copy(update={"reasons": _unique_reasons(item.reasons)})
            continue

        seen = {reason.key for reason in existing.reasons}
        extra = [r for r in item.reasons if r.key not in seen]
        if extra:
            merged[item.key] = existing.model_copy(
                update={"reasons": _unique_reasons([*existing.reasons, *extra])}
            )

    return list(merged.values())


def _unique_reasons(reasons: Iterable[Reason]) -> tuple[Reason, ...]:
    unique: dict[tuple[str, str], Reason] = {}
    for reason in reasons:
        unique.setdefault(reason.key, reason)
    return tuple(unique.values())
