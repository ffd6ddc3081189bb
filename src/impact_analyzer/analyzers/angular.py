"""Angular analyzer for component, service and module changes.

Every TypeScript source in the workspace is parsed with tree-sitter to
collect classes decorated with ``@Component``, ``@Directive``, ``@Pipe``,
``@Injectable`` and ``@NgModule``. Changed files are then mapped to the
components they affect:

- component and service sources to the class itself and its dependents
- templates and stylesheets to the component that references them
- module files to every component the module declares
"""

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from loguru import logger
from tree_sitter import Node

from impact_analyzer.analyzers.base import BaseAnalyzer
from impact_analyzer.analyzers.syntax import TreeSitterSupport
from impact_analyzer.config.models import RepositoryConfig, RepoType
from impact_analyzer.models.impact import ImpactItem, ReasonType
from impact_analyzer.services.git import GitClient

SKIPPED_DIRS = frozenset({"node_modules", "dist", ".angular", ".git"})
STYLE_EXTENSIONS = (".scss", ".css")
GLOBAL_STYLE_MARKERS = ("styles", "theme", "global")

_COMPONENT_LIKE = ("Component", "Directive", "Pipe")
_MODULE_LISTS = ("declarations", "imports", "exports", "providers")
_QUOTES = "'\"`"


@dataclass
class AngularComponent:
    """A component, directive or pipe."""

    name: str
    file: str
    line: int
    selector: str | None = None
    template_url: str | None = None
    style_urls: list[str] = field(default_factory=list)


@dataclass
class AngularService:
    name: str
    file: str
    line: int
    provided_in: str | None = None


@dataclass
class AngularModule:
    name: str
    file: str
    line: int
    declarations: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    providers: list[str] = field(default_factory=list)


@dataclass
class AngularProject:
    """
    Symbol tables for one analysis run.

    Attributes:
        components: Components, directives and pipes by class name.
        services: Injectable classes by class name.
        modules: NgModules by class name.
        templates: Template path to owning component name.
        styles: Stylesheet path to owning component name.
        sources: Source text of each file holding a component.
    """

    components: dict[str, AngularComponent] = field(default_factory=dict)
    services: dict[str, AngularService] = field(default_factory=dict)
    modules: dict[str, AngularModule] = field(default_factory=dict)
    templates: dict[str, str] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)

    def dependents_of(self, name: str) -> list[AngularComponent]:
        """Other components declared next to a component that has a selector."""
        component = self.components.get(name)
        if component is None or not component.selector:
            return []

        dependents: list[AngularComponent] = []
        for module in self.modules.values():
            if name not in module.declarations and name not in module.exports:
                continue
            for declaration in module.declarations:
                dependent = self.components.get(declaration)
                if declaration != name and dependent is not None:
                    dependents.append(dependent)
        return dependents

    def consumers_of(self, service: str) -> list[AngularComponent]:
        """Components whose source mentions a service."""
        return [c for c in self.components.values() if service in self.sources.get(c.file, "")]


class AngularAnalyzer(TreeSitterSupport, BaseAnalyzer):
    """Analyzer for Angular workspaces (``ts-morph``)."""

    language_name = "typescript"
    repo_types: ClassVar[frozenset[RepoType]] = frozenset({RepoType.ANGULAR})

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
        return "angular"

    async def analyze(self) -> list[ImpactItem]:
        changed_files = await self.get_changed_files()
        if not changed_files:
            return []

        project = self.scan_project()
        logger.debug(
            "Angular project {}: {} components, {} services, {} modules",
            self.config.name,
            len(project.components),
            len(project.services),
            len(project.modules),
        )

        impacts: list[ImpactItem] = []
        for file in changed_files:
            if file.endswith(".ts") and not file.endswith(".spec.ts"):
                impacts.extend(self._analyze_source(file, project))
            if file.endswith(".html"):
                impacts.extend(self._analyze_template(file, project))
            if file.endswith(STYLE_EXTENSIONS):
                impacts.extend(self._analyze_style(file, project))
            if ".module.ts" in file:
                impacts.extend(self._analyze_module(file, project))

        return self.merge_impacts(impacts)

    # =========================================================================
    # Project scan
    # =========================================================================

    def scan_project(self) -> AngularProject:
        """Collect Angular symbols from every source file in the workspace."""
        project = AngularProject()

        for path in self._source_files():
            file = path.relative_to(self.repo_path).as_posix()
            try:
                source = path.read_bytes()
            except OSError as e:
                logger.warning("Cannot read {}: {}", file, e)
                continue

            root = self.parse(source).root_node
            for class_node in self._find_descendants(root, "class_declaration"):
                self._collect_class(class_node, source, file, project)

        return project

    def _source_files(self) -> list[Path]:
        src = self.repo_path / "src"
        root = src if src.is_dir() else self.repo_path

        files = []
        for path in sorted(root.rglob("*.ts")):
            parts = path.relative_to(self.repo_path).parts
            if SKIPPED_DIRS.intersection(parts) or path.name.endswith((".spec.ts", ".d.ts")):
                continue
            files.append(path)
        return files

    def _collect_class(
        self, node: Node, source: bytes, file: str, project: AngularProject
    ) -> None:
        name_node = self._find_child(node, "type_identifier")
        name = self._node_text(name_node, source) if name_node else "Anonymous"
        line = _outer_node(node).start_point[0] + 1

        for decorator_name, options in self._decorators(node, source):
            if decorator_name in _COMPONENT_LIKE:
                component = AngularComponent(name, file, line)
                if decorator_name == "Component" and options is not None:
                    self._read_component_options(component, options, source, project)
                project.components[name] = component
                project.sources[file] = source.decode("utf-8", errors="replace")
            elif decorator_name == "Injectable":
                service = AngularService(name, file, line)
                if options is not None:
                    provided_in = self._object_property(options, source, "providedIn")
                    if provided_in is not None:
                        service.provided_in = self._string_value(provided_in, source)
                project.services[name] = service
            elif decorator_name == "NgModule":
                module = AngularModule(name, file, line)
                if options is not None:
                    for list_name in _MODULE_LISTS:
                        value = self._object_property(options, source, list_name)
                        if value is not None and value.type == "array":
                            setattr(module, list_name, self._identifier_list(value, source))
                project.modules[name] = module

    def _read_component_options(
        self,
        component: AngularComponent,
        options: Node,
        source: bytes,
        project: AngularProject,
    ) -> None:
        selector = self._object_property(options, source, "selector")
        if selector is not None:
            component.selector = self._string_value(selector, source)

        template_url = self._object_property(options, source, "templateUrl")
        if template_url is not None:
            url = self._string_value(template_url, source)
            if url:
                component.template_url = _resolve(component.file, url)
                project.templates[component.template_url] = component.name

        style_urls = self._object_property(options, source, "styleUrls")
        if style_urls is None:
            style_urls = self._object_property(options, source, "styleUrl")
        if style_urls is not None:
            urls = (
                self._string_list(style_urls, source)
                if style_urls.type == "array"
                else [self._string_value(style_urls, source) or ""]
            )
            for url in filter(None, urls):
                resolved = _resolve(component.file, url)
                component.style_urls.append(resolved)
                project.styles[resolved] = component.name

    # =========================================================================
    # Decorator helpers
    # =========================================================================

    def _decorators(self, class_node: Node, source: bytes) -> list[tuple[str, Node | None]]:
        """Decorator names with their object-literal argument, if any."""
        outer = _outer_node(class_node)
        decorator_nodes = self._find_children(class_node, "decorator")
        if outer is not class_node:
            decorator_nodes = self._find_children(outer, "decorator") + decorator_nodes

        decorators: list[tuple[str, Node | None]] = []
        for decorator in decorator_nodes:
            call = self._find_child(decorator, "call_expression")
            target = call.child_by_field_name("function") if call else None
            if target is None:
                target = next(iter(decorator.named_children), None)
            if target is None:
                continue

            decorator_name = self._node_text(target, source).rsplit(".", 1)[-1]
            options = None
            if call is not None:
                arguments = self._find_child(call, "arguments")
                if arguments is not None:
                    options = self._find_child(arguments, "object")
            decorators.append((decorator_name, options))
        return decorators

    def _object_property(self, obj: Node, source: bytes, key: str) -> Node | None:
        for pair in self._find_children(obj, "pair"):
            key_node = pair.child_by_field_name("key")
            if key_node is not None and self._node_text(key_node, source).strip(_QUOTES) == key:
                return pair.child_by_field_name("value")
        return None

    def _string_value(self, node: Node, source: bytes) -> str | None:
        text = self._node_text(node, source)
        if len(text) >= 2 and text[0] in _QUOTES:
            return text[1:-1]
        return None

    def _string_list(self, array: Node, source: bytes) -> list[str]:
        values = (self._string_value(item, source) for item in array.named_children)
        return [v for v in values if v]

    def _identifier_list(self, array: Node, source: bytes) -> list[str]:
        return [
            self._node_text(item, source)
            for item in array.named_children
            if item.type not in ("string", "template_string", "comment")
        ]

    # =========================================================================
    # Impact rules
    # =========================================================================

    def _analyze_source(self, file: str, project: AngularProject) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []

        for name, component in project.components.items():
            if component.file != file:
                continue
            impacts.append(
                self.create_impact(
                    name,
                    file,
                    ReasonType.DIRECT,
                    file,
                    f"Component {name} was directly modified",
                    line=component.line,
                )
            )
            for dependent in project.dependents_of(name):
                impacts.append(
                    self.create_impact(
                        dependent.name,
                        dependent.file,
                        ReasonType.DEPENDENCY,
                        file,
                        f"Component {dependent.name} depends on modified component {name}",
                    )
                )

        for name, service in project.services.items():
            if service.file != file:
                continue
            impacts.append(
                self.create_impact(
                    name,
                    file,
                    ReasonType.DIRECT,
                    file,
                    f"Service {name} was directly modified",
                    line=service.line,
                )
            )
            for consumer in project.consumers_of(name):
                impacts.append(
                    self.create_impact(
                        consumer.name,
                        consumer.file,
                        ReasonType.DEPENDENCY,
                        file,
                        f"Component {consumer.name} injects modified service {name}",
                    )
                )

        return impacts

    def _analyze_template(self, file: str, project: AngularProject) -> list[ImpactItem]:
        owner = project.templates.get(file)
        component = project.components.get(owner) if owner else None
        if component is None:
            return []

        impacts = [
            self.create_impact(
                component.name,
                component.file,
                ReasonType.TEMPLATE,
                file,
                f"Template for {component.name} was modified",
            )
        ]
        for dependent in project.dependents_of(component.name):
            impacts.append(
                self.create_impact(
                    dependent.name,
                    dependent.file,
                    ReasonType.TEMPLATE,
                    file,
                    f"Template change in {component.name} may affect {dependent.name}",
                )
            )
        return impacts

    def _analyze_style(self, file: str, project: AngularProject) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []

        owner = project.styles.get(file)
        component = project.components.get(owner) if owner else None
        if component is not None:
            impacts.append(
                self.create_impact(
                    component.name,
                    component.file,
                    ReasonType.STYLE,
                    file,
                    f"Styles for {component.name} were modified",
                )
            )

        if any(marker in file for marker in GLOBAL_STYLE_MARKERS):
            impacts.append(
                self.create_impact(
                    "Global Styles",
                    file,
                    ReasonType.STYLE,
                    file,
                    "Global style file was modified - may affect multiple components",
                )
            )

        return impacts

    def _analyze_module(self, file: str, project: AngularProject) -> list[ImpactItem]:
        impacts: list[ImpactItem] = []

        for name, module in project.modules.items():
            if module.file != file:
                continue
            impacts.append(
                self.create_impact(
                    name, file, ReasonType.MODULE, file, f"Module {name} was modified", module.line
                )
            )
            for declaration in module.declarations:
                component = project.components.get(declaration)
                if component is None:
                    continue
                impacts.append(
                    self.create_impact(
                        declaration,
                        component.file,
                        ReasonType.MODULE,
                        file,
                        f"Component {declaration} is declared in modified module {name}",
                    )
                )

        return impacts


def _outer_node(class_node: Node) -> Node:
    """The export statement wrapping a class, which holds its leading decorators."""
    parent = class_node.parent
    if parent is not None and parent.type == "export_statement":
        return parent
    return class_node


def _resolve(from_file: str, relative: str) -> str:
    """Resolve a path referenced from a source file against its directory."""
    return posixpath.normpath(posixpath.join(posixpath.dirname(from_file), relative))
