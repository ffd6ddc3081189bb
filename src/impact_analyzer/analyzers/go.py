"""Go analyzer for Lambda functions and services.

Parses changed Go files with tree-sitter and flags Lambda handlers,
JSON-tagged structs (API contracts), interfaces, SQS and API Gateway
handlers, environment variable usage and module dependency changes.
"""

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from loguru import logger
from tree_sitter import Node

from impact_analyzer.analyzers.base import BaseAnalyzer
from impact_analyzer.analyzers.syntax import TreeSitterSupport
from impact_analyzer.config.models import RepositoryConfig
from impact_analyzer.models.impact import ImpactItem, ReasonType
from impact_analyzer.services.git import GitClient

HANDLER_NAME_RE = re.compile(r"^(Handle|Process|Execute|Run|Handler)")
GETENV_RE = re.compile(r"os\.Getenv\s*\(\s*[\"'](\w+)[\"']\s*\)")
SQS_MARKERS = ("events.SQSEvent", "sqs.")
API_GATEWAY_MARKERS = ("events.APIGatewayProxyRequest", "events.APIGatewayV2HTTPRequest")


@dataclass
class GoFunction:
    name: str
    line: int


@dataclass
class GoStruct:
    name: str
    line: int
    has_json_tags: bool


@dataclass
class GoFileSymbols:
    """Declarations found in one Go file."""

    package: str = "main"
    functions: list[GoFunction] = field(default_factory=list)
    structs: list[GoStruct] = field(default_factory=list)
    interfaces: list[GoFunction] = field(default_factory=list)


class GoAnalyzer(TreeSitterSupport, BaseAnalyzer):
    """Analyzer for Go projects (``go-ast``)."""

    language_name = "go"

    def __init__(
        self,
        config: RepositoryConfig,
        base_ref: str,
        head_ref: str,
        git: GitClient | None = None,
    ) -> None:
        TreeSitterSupport.__init__(self)
        BaseAnalyzer.__init__(self, config, base_ref, head_ref, git)

    @property
    def name(self) -> str:
        return "go"

    async def analyze(self) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []
        changed_files = await self.get_changed_files()

        # Module changes may affect every function
        for file in changed_files:
            if file.endswith(("go.mod", "go.sum")):
                impacts.append(
                    self.create_impact(
                        "Go Dependencies",
                        file,
                        ReasonType.DEPENDENCY,
                        file,
                        "Go module dependencies changed - may affect all functions",
                    )
                )

        go_files = self.filter_by_extension(changed_files, ".go")

        # Symbol tables are scoped to this call
        symbols: dict[str, GoFileSymbols] = {}
        contents: dict[str, str] = {}
        for file in go_files:
            content = self.read_file(file)
            if content is None:
                logger.debug("Skipping deleted Go file: {}", file)
                continue
            contents[file] = content
            symbols[file] = self.scan_file(content)

        for file, content in contents.items():
            diff = await self.get_file_diff(file)
            impacts.extend(self._analyze_file(file, content, diff, symbols[file]))

        return self.merge_impacts(impacts)

    def scan_file(self, content: str) -> GoFileSymbols:
        """Collect package, function, struct and interface declarations."""
        source = content.encode("utf-8")
        root = self.parse(source).root_node
        symbols = GoFileSymbols()

        pkg_node = self._find_child(root, "package_clause")
        if pkg_node:
            pkg_id = self._find_child(pkg_node, "package_identifier")
            if pkg_id:
                symbols.package = self._node_text(pkg_id, source)

        for func in self._find_descendants(root, "function_declaration"):
            name_node = self._find_child(func, "identifier")
            if name_node:
                symbols.functions.append(
                    GoFunction(self._node_text(name_node, source), func.start_point[0] + 1)
                )

        for method in self._find_descendants(root, "method_declaration"):
            name_node = self._find_child(method, "field_identifier")
            if name_node:
                symbols.functions.append(
                    GoFunction(self._node_text(name_node, source), method.start_point[0] + 1)
                )

        for decl in self._find_descendants(root, "type_declaration"):
            for spec in self._find_children(decl, "type_spec"):
                self._add_type(spec, source, symbols)

        return symbols

    def _add_type(self, spec: Node, source: bytes, symbols: GoFileSymbols) -> None:
        name_node = self._find_child(spec, "type_identifier")
        if not name_node:
            return

        name = self._node_text(name_node, source)
        line = spec.start_point[0] + 1

        struct_type = self._find_child(spec, "struct_type")
        if struct_type:
            has_tags = "json:" in self._node_text(struct_type, source)
            symbols.structs.append(GoStruct(name, line, has_tags))
            return

        if self._find_child(spec, "interface_type"):
            symbols.interfaces.append(GoFunction(name, line))

    def _analyze_file(
        self,
        file: str,
        content: str,
        diff: str,
        symbols: GoFileSymbols,
    ) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []
        stem = PurePosixPath(file).stem

        for func in symbols.functions:
            if is_lambda_handler(func.name, content):
                impacts.append(
                    self.create_impact(
                        f"Lambda: {func.name}",
                        file,
                        ReasonType.DIRECT,
                        file,
                        f"Lambda handler {func.name} was modified",
                        line=func.line,
                    )
                )

        for struct in symbols.structs:
            if struct.has_json_tags:
                impacts.append(
                    self.create_impact(
                        f"Struct: {struct.name}",
                        file,
                        ReasonType.SCHEMA,
                        file,
                        f"Data structure {struct.name} was modified - may affect API contract",
                        line=struct.line,
                    )
                )

        for iface in symbols.interfaces:
            impacts.append(
                self.create_impact(
                    f"Interface: {iface.name}",
                    file,
                    ReasonType.DIRECT,
                    file,
                    f"Interface {iface.name} was modified",
                    line=iface.line,
                )
            )

        if any(marker in content for marker in SQS_MARKERS):
            impacts.append(
                self.create_impact(
                    f"SQS Handler: {stem}",
                    file,
                    ReasonType.DIRECT,
                    file,
                    "SQS message handler was modified",
                )
            )

        if any(marker in content for marker in API_GATEWAY_MARKERS):
            impacts.append(
                self.create_impact(
                    f"API Handler: {stem}",
                    file,
                    ReasonType.DIRECT,
                    file,
                    "API Gateway handler was modified",
                )
            )

        if GETENV_RE.search(diff):
            impacts.append(
                self.create_impact(
                    "Environment Config",
                    file,
                    ReasonType.CONFIG,
                    file,
                    f"Environment variable usage changed in {PurePosixPath(file).name}",
                )
            )

        return impacts


def is_lambda_handler(func_name: str, content: str) -> bool:
    """
    Check whether a function looks like a Lambda entry point.

    Matches registration via ``lambda.Start``/``StartWithOptions``, handler
    assignments, context-first signatures, and conventional handler names.
    """
    name = re.escape(func_name)
    patterns = (
        rf"lambda\.Start\s*\(\s*\w*\.?\s*{name}",
        rf"lambda\.StartWithOptions\s*\(\s*\w*\.?\s*{name}",
        rf"Handler\s*[:=]\s*{name}",
        rf"{name}\s*\(\s*ctx\s+context\.Context",
    )
    if any(re.search(p, content) for p in patterns):
        return True
    return HANDLER_NAME_RE.match(func_name) is not None
