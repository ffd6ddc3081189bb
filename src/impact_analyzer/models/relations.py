"""Cross-repository relation models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RelationKind(StrEnum):
    """Mechanisms by which a change propagates between repositories."""

    GRAPHQL_SCHEMA = "graphql-schema"
    SQS = "sqs"
    SHARED_TYPES = "shared-types"
    API_CALL = "api-call"
    NPM_PACKAGE = "npm-package"


class CrossRepoImpact(BaseModel):
    """
    A correlated impact linking one source component to affected target components.

    Target components have set semantics: duplicates are dropped on
    construction while first-seen order is kept for stable output.
    """

    model_config = ConfigDict(frozen=True)

    source_repo: str
    source_component: str
    target_repo: str
    target_components: tuple[str, ...] = Field(default_factory=tuple)
    relation: RelationKind

    @field_validator("target_components", mode="after")
    @classmethod
    def drop_duplicate_targets(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Remove duplicate target components, preserving order."""
        return tuple(dict.fromkeys(v))

    @property
    def key(self) -> tuple[str, str, str, str]:
        """Merge key: (source_repo, source_component, target_repo, relation)."""
        return (
            self.source_repo,
            self.source_component,
            self.target_repo,
            self.relation.value,
        )
