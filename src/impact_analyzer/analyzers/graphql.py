"""GraphQL analyzer for schema, resolver and operation changes.

Schema changes are found by building the schema at the base and head
refs with graphql-core and comparing them. Breaking and dangerous
changes come from graphql-core's change detection; added types and
fields are reported as non-breaking.
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePosixPath

from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_schema,
    find_breaking_changes,
    find_dangerous_changes,
    is_interface_type,
    is_object_type,
    specified_scalar_types,
)
from loguru import logger

from impact_analyzer.analyzers.base import BaseAnalyzer
from impact_analyzer.config.models import RepositoryConfig
from impact_analyzer.models.impact import ImpactItem, ReasonType
from impact_analyzer.services.git import GitClient

SCHEMA_CANDIDATES = (
    "schema.graphql",
    "src/schema.graphql",
    "src/graphql/schema.graphql",
    "graphql/schema.graphql",
    "src/schema/schema.graphql",
    "schema/schema.graphql",
)
GRAPHQL_EXTENSIONS = (".graphql", ".gql")

# graphql-core describes changes in prose; these recover the affected path.
_MEMBER_PATH_RES = (
    re.compile(r"^(?P<member>\w+) was (?:removed from|added to) enum type (?P<type>\w+)"),
    re.compile(r"^An? (?:required|optional) field (?P<member>\w+) on input type (?P<type>\w+)"),
)
_UNION_PATH_RE = re.compile(r"^\w+ was (?:removed from|added to) union type (?P<type>\w+)")
_DOTTED_PATH_RE = re.compile(r"\b\w+\.\w+\b")
_LEADING_NAME_RE = re.compile(r"^(?:Standard scalar )?(\w+)")

_RESOLVER_DECORATOR_RE = re.compile(r"@(Query|Mutation)\((?:['\"](\w+)['\"])?\)")
_OPERATION_RE = re.compile(r"(?:query|mutation|subscription)\s+(\w+)")


class Criticality(StrEnum):
    BREAKING = "BREAKING"
    DANGEROUS = "DANGEROUS"
    NON_BREAKING = "NON_BREAKING"


class ChangeType(StrEnum):
    """Additions, which graphql-core does not report."""

    TYPE_ADDED = "TYPE_ADDED"
    FIELD_ADDED = "FIELD_ADDED"


@dataclass(frozen=True)
class SchemaChange:
    """
    One difference between two schema versions.

    ``type`` is a ``ChangeType`` value or the name of a graphql-core
    ``BreakingChangeType``/``DangerousChangeType`` member.
    """

    type: str
    message: str
    path: str
    criticality: Criticality


# =============================================================================
# Schema diffing
# =============================================================================


def change_path(description: str) -> str:
    """
    Affected schema path for a graphql-core change description.

    ``Type.field`` for field and argument changes, ``Enum.VALUE`` and
    ``Input.field`` for members, otherwise the type name.
    """
    for pattern in _MEMBER_PATH_RES:
        match = pattern.match(description)
        if match:
            return f"{match['type']}.{match['member']}"

    match = _UNION_PATH_RE.match(description)
    if match:
        return match["type"]

    match = _DOTTED_PATH_RE.search(description)
    if match:
        return match.group(0)

    match = _LEADING_NAME_RE.match(description)
    return match.group(1) if match else ""


def schema_diff(old_sdl: str, new_sdl: str) -> list[SchemaChange]:
    """
    Compare two schema versions.

    Removals, kind and type changes, and new required arguments or input
    fields are breaking. New enum values, union members, optional
    arguments and changed defaults are dangerous. Added types and output
    fields are non-breaking.

    Raises:
        GraphQLError: If either version is not valid SDL.
        TypeError: If either version fails schema validation.
    """
    old_schema = build_schema(old_sdl)
    new_schema = build_schema(new_sdl)

    # An unreferenced standard scalar cannot be used by any operation
    changes = [
        SchemaChange(c.type.name, c.description, change_path(c.description), Criticality.BREAKING)
        for c in find_breaking_changes(old_schema, new_schema)
        if not c.description.startswith("Standard scalar ")
    ]
    changes.extend(
        SchemaChange(c.type.name, c.description, change_path(c.description), Criticality.DANGEROUS)
        for c in find_dangerous_changes(old_schema, new_schema)
    )
    changes.extend(_find_additions(old_schema, new_schema))

    changes.sort(key=lambda c: (c.path, c.type))
    return changes


def _find_additions(old_schema: GraphQLSchema, new_schema: GraphQLSchema) -> list[SchemaChange]:
    additions: list[SchemaChange] = []

    for name, new_type in new_schema.type_map.items():
        if name.startswith("__") or name in specified_scalar_types:
            continue

        old_type = old_schema.type_map.get(name)
        if old_type is None:
            additions.append(
                SchemaChange(
                    ChangeType.TYPE_ADDED, f"Type '{name}' was added", name, Criticality.NON_BREAKING
                )
            )
            continue

        # Input fields are covered by graphql-core (required/optional)
        has_fields = is_object_type(new_type) or is_interface_type(new_type)
        if not has_fields or type(old_type) is not type(new_type):
            continue

        for field_name in new_type.fields.keys() - old_type.fields.keys():  # type: ignore[union-attr]
            additions.append(
                SchemaChange(
                    ChangeType.FIELD_ADDED,
                    f"Field '{field_name}' was added to '{name}'",
                    f"{name}.{field_name}",
                    Criticality.NON_BREAKING,
                )
            )

    return additions


# =============================================================================
# Analyzer
# =============================================================================


class GraphQLAnalyzer(BaseAnalyzer):
    """Analyzer for GraphQL APIs and clients (``graphql-inspector``)."""

    def __init__(
        self,
        config: RepositoryConfig,
        base_ref: str,
        head_ref: str,
        git: GitClient | None = None,
    ) -> None:
        super().__init__(config, base_ref, head_ref, git)
        self.schema_path = self._find_schema_path()

    @property
    def name(self) -> str:
        return "graphql"

    async def analyze(self) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []
        changed_files = await self.get_changed_files()

        graphql_files = self.filter_by_extension(changed_files, *GRAPHQL_EXTENSIONS)
        schema_files = [
            f
            for f in changed_files
            if "schema" in f or "typeDefs" in f or f.endswith(".graphql")
        ]
        resolver_files = [f for f in changed_files if "resolver" in f or "Resolver" in f]

        if not graphql_files and not schema_files and not resolver_files:
            return []

        schema_changes = await self.analyze_schema_changes()
        for change in schema_changes:
            reason_type = (
                ReasonType.SCHEMA if change.criticality == Criticality.BREAKING else ReasonType.DIRECT
            )
            impacts.append(
                self.create_impact(
                    change.path or "GraphQL Schema",
                    self.schema_path,
                    reason_type,
                    "schema-diff",
                    f"[{change.criticality}] {change.message}",
                )
            )

        if not schema_changes:
            for schema_file in schema_files:
                if schema_file.endswith(GRAPHQL_EXTENSIONS):
                    impacts.append(
                        self.create_impact(
                            "GraphQL Schema",
                            schema_file,
                            ReasonType.SCHEMA,
                            schema_file,
                            "GraphQL schema file was modified",
                        )
                    )

        impacts.extend(await self._analyze_resolvers(resolver_files))
        impacts.extend(self._analyze_operations(graphql_files))

        return self.merge_impacts(impacts)

    async def analyze_schema_changes(self) -> list[SchemaChange]:
        """
        Diff the schema file between base and head refs.

        Returns an empty list when either version is missing or cannot be
        built, so the caller falls back to file-level impacts.
        """
        old_schema = await self.git.show_file(self.base_ref, self.schema_path)
        if old_schema is None:
            return []

        new_schema = await self.git.show_file(self.head_ref, self.schema_path)
        if new_schema is None:
            return []

        try:
            changes = schema_diff(old_schema, new_schema)
        except (GraphQLError, TypeError) as e:
            logger.warning("Cannot build schema {} for {}: {}", self.schema_path, self.config.name, e)
            return []
        logger.debug("Schema diff for {}: {} changes", self.config.name, len(changes))
        return changes

    def _find_schema_path(self) -> str:
        for candidate in SCHEMA_CANDIDATES:
            if (self.repo_path / candidate).exists():
                return candidate
        return SCHEMA_CANDIDATES[0]

    async def _analyze_resolvers(self, resolver_files: list[str]) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []

        for file in resolver_files:
            resolver_name = re.sub(r"(\.resolver|Resolver)$", "", PurePosixPath(file).stem)
            impacts.append(
                self.create_impact(
                    f"{resolver_name} Resolver",
                    file,
                    ReasonType.DIRECT,
                    file,
                    f"Resolver {resolver_name} was modified",
                )
            )

            diff = await self.get_file_diff(file)
            for kind, operation in _RESOLVER_DECORATOR_RE.findall(diff):
                operation = operation or "unknown"
                impacts.append(
                    self.create_impact(
                        f"{kind}: {operation}",
                        file,
                        ReasonType.DIRECT,
                        file,
                        f"{kind} {operation} resolver was modified",
                    )
                )

        return impacts

    def _analyze_operations(self, graphql_files: list[str]) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []

        for file in graphql_files:
            if "schema" in file:
                continue

            content = self.read_file(file)
            if not content:
                continue

            operations = _OPERATION_RE.findall(content)
            for operation in operations:
                impacts.append(
                    self.create_impact(
                        operation,
                        file,
                        ReasonType.DIRECT,
                        file,
                        f"GraphQL operation {operation} was modified",
                    )
                )

            if not operations:
                impacts.append(
                    self.create_impact(
                        PurePosixPath(file).name,
                        file,
                        ReasonType.DIRECT,
                        file,
                        "GraphQL file was modified",
                    )
                )

        return impacts
