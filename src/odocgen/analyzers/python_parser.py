"""Python parsing via tree-sitter.

tree-sitter gives byte offsets for every node, which is what the extractor
needs for verbatim declaration slices and position lookup.

NOTE: tree-sitter is a required dependency. No fallback parser is
implemented: if the grammar cannot be loaded, extraction fails.
tree-sitter recovers from syntax errors by inserting ERROR/MISSING nodes;
any such node makes the whole file a ParseError. The grammar also accepts
Python 2 `print` and `exec` statements without an error node; those are
rejected as syntax errors too.
"""

from typing import Any

from odocgen.exceptions import ParseError, ParserUnavailableError
from odocgen.utils.logging import get_logger
from odocgen.utils.positions import LineIndex

_logger = get_logger(__name__)

LANGUAGE = "python"

# Python 2 statements the grammar parses cleanly
LEGACY_STATEMENTS = frozenset({"print_statement", "exec_statement"})


def node_text(source: bytes, node: Any) -> str:
    """Return the source text spanned by a node."""
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _first_error(node: Any) -> Any | None:
    """Depth-first search for the first ERROR or MISSING node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _first_legacy_statement(root: Any) -> Any | None:
    """First Python 2 only statement in source order, if any."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in LEGACY_STATEMENTS:
            return node
        stack.extend(reversed(node.named_children))
    return None


class PythonParser:
    """Parses Python source into a tree-sitter syntax tree."""

    def __init__(self) -> None:
        self._parser: Any = None
        self._init_error: str | None = None

    def _ensure_initialized(self) -> None:
        """Load the tree-sitter Python grammar.

        Raises:
            ParserUnavailableError: If tree-sitter cannot be initialized
        """
        if self._parser is not None:
            return

        if self._init_error:
            raise ParserUnavailableError(self._init_error)

        try:
            from tree_sitter_language_pack import get_parser
        except ImportError as e:
            self._init_error = f"tree-sitter-language-pack not installed: {e}"
            raise ParserUnavailableError(self._init_error) from e

        try:
            self._parser = get_parser(LANGUAGE)
        except Exception as e:
            self._init_error = f"Failed to initialize parser for {LANGUAGE}: {e}"
            raise ParserUnavailableError(self._init_error) from e

        _logger.debug("Initialized tree-sitter parser for %s", LANGUAGE)

    def check_available(self) -> bool:
        """Check if the Python grammar can be loaded."""
        try:
            self._ensure_initialized()
            return True
        except ParserUnavailableError:
            return False

    def parse(self, source: bytes, source_file: str, lines: LineIndex | None = None) -> Any:
        """Parse source bytes and return the tree root node.

        Args:
            source: UTF-8 encoded source text
            source_file: Path used in error messages
            lines: Line index of ``source`` (built if not given)

        Returns:
            The ``module`` root node

        Raises:
            ParserUnavailableError: If tree-sitter is not installed
            ParseError: If the source has syntax errors
        """
        self._ensure_initialized()
        tree = self._parser.parse(source)
        root = tree.root_node

        if root.has_error:
            error_node = _first_error(root) or root
        else:
            error_node = _first_legacy_statement(root)

        if error_node is not None:
            line, column = (lines or LineIndex(source)).locate(error_node.start_byte)
            raise ParseError(source_file, line, column)

        return root
