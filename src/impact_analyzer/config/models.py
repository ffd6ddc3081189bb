"""Pydantic configuration models for the impact analyzer."""

from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from impact_analyzer.models.relations import RelationKind


class RepoType(StrEnum):
    """Kind of project a repository holds."""

    ANGULAR = "angular"
    REACT = "react"
    VUE = "vue"
    NEXTJS = "nextjs"
    GRAPHQL_NODE = "graphql-node"
    GO = "go"
    NODE = "node"


class AnalyzerType(StrEnum):
    """Per-repository analyzers that can be configured."""

    NX = "nx"
    TS_MORPH = "ts-morph"
    MADGE = "madge"
    GRAPHQL_INSPECTOR = "graphql-inspector"
    GO_AST = "go-ast"


OutputFormat = Literal["json", "markdown", "github"]


class RepositoryConfig(BaseModel):
    """Single repository configuration."""

    name: str = Field(min_length=1, max_length=100)
    path: Path
    type: RepoType
    analyzers: list[AnalyzerType] = Field(min_length=1)
    include_paths: list[str] | None = None
    exclude_paths: list[str] | None = None

    @field_validator("path", mode="before")
    @classmethod
    def expand_path(cls, v: Path | str) -> Path:
        """Expand user home in repository path."""
        if isinstance(v, str):
            if not v:
                raise ValueError("Repository path is required")
            v = Path(v)
        return v.expanduser()


class RelationConfig(BaseModel):
    """
    Declared directed edge between two repositories.

    ``from`` is a Python keyword, so the attribute is ``from_`` while
    configuration files keep the ``from`` key.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    via: RelationKind
    patterns: list[str] | None = None


class OutputConfig(BaseModel):
    """Report output configuration."""

    directory: Path = Path("./impact-output")
    formats: list[OutputFormat] = Field(default_factory=lambda: ["json", "markdown"])


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["console", "json"] = "console"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for the impact analyzer."""

    repos: list[RepositoryConfig] = Field(default_factory=list)
    relations: list[RelationConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "IMPACT_",
        "env_nested_delimiter": "__",
    }

    @model_validator(mode="after")
    def validate_relation_references(self) -> "Config":
        """Reject duplicate repo names and relations pointing at undefined repos."""
        names = [repo.name for repo in self.repos]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate repository names: {', '.join(duplicates)}")

        known = set(names)
        for relation in self.relations:
            if relation.from_ not in known or relation.to not in known:
                raise ValueError("All relation references must point to defined repositories")
        return self

    def get_repository(self, name: str) -> RepositoryConfig | None:
        """Look up a repository by name."""
        return next((r for r in self.repos if r.name == name), None)
