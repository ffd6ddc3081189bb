"""Tree-sitter parsing support for analyzers."""

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import get_parser


class TreeSitterSupport:
    """
    Mixin giving an analyzer a lazily created tree-sitter parser and
    small node lookup helpers.

    Subclasses set ``language_name`` to a tree-sitter-language-pack name.
    """

    language_name: str = ""

    def __init__(self) -> None:
        self._parser: Parser | None = None

    def parse(self, source: bytes) -> Tree:
        """Parse source bytes, creating the parser on first use."""
        if self._parser is None:
            self._parser = get_parser(self.language_name)  # type: ignore[arg-type]
        return self._parser.parse(source)

    @staticmethod
    def _node_text(node: Node, source: bytes) -> str:
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _find_child(node: Node, type_name: str) -> Node | None:
        return next((c for c in node.children if c.type == type_name), None)

    @staticmethod
    def _find_children(node: Node, type_name: str) -> list[Node]:
        return [c for c in node.children if c.type == type_name]

    @staticmethod
    def _find_descendants(node: Node, type_name: str) -> list[Node]:
        """All nodes of a type below ``node``, in source order."""
        found: list[Node] = []
        pending = list(reversed(node.children))
        while pending:
            current = pending.pop()
            if current.type == type_name:
                found.append(current)
            pending.extend(reversed(current.children))
        return found
