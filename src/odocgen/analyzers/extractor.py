"""Declaration extraction for model classes.

Turns one source file into (model name, fragment, role) triples:

    class SaleOrder(models.Model):
        _name = "sale.order"          # candidate, role ORIGINAL
        state = fields.Selection(...) # field "state"

        def action_confirm(self):     # method "action_confirm"
            "Confirm the order."

    class SaleOrderStock(models.Model):
        _inherit = "sale.order"       # candidate, role EXTENSION
        picking_ids = fields.One2many(...)

Only top-level classes and statements directly in their bodies are
scanned. Nothing is resolved across files here; that is the aggregator's job.
"""

import ast
import logging
from pathlib import Path
from typing import Any

from odocgen.analyzers.decorators import decorator_shape, match_suppression
from odocgen.analyzers.python_parser import PythonParser, node_text
from odocgen.config import MarkerConfig, PolicyConfig
from odocgen.exceptions import FileReadError
from odocgen.models.declarations import (
    Declaration,
    FieldInfo,
    FileExtraction,
    Fragment,
    MethodInfo,
    ModelRole,
)
from odocgen.utils.logging import get_logger
from odocgen.utils.positions import LineIndex

_logger = get_logger(__name__)

STRING_NODES = ("string", "concatenated_string")


def normalize_doc_string(doc: str) -> str:
    """Strip the docstring, then every line of it."""
    return "\n".join(line.strip() for line in doc.strip().split("\n"))


def _unwrap_parentheses(node: Any) -> Any:
    while node.type == "parenthesized_expression" and node.named_children:
        node = node.named_children[0]
    return node


def _single_string(source: bytes, node: Any) -> str | None:
    if any(child.type == "interpolation" for child in node.children):
        return None
    try:
        value = ast.literal_eval(node_text(source, node))
    except (ValueError, SyntaxError):
        return None
    return value if isinstance(value, str) else None


def string_constant(source: bytes, node: Any) -> str | None:
    """Value of a literal ``str`` expression, or None for anything else.

    Parentheses and implicit concatenation are accepted; f-strings, bytes
    and every non-literal expression are not constants.
    """
    node = _unwrap_parentheses(node)
    if node.type == "string":
        return _single_string(source, node)
    if node.type == "concatenated_string":
        parts = [_single_string(source, child) for child in node.named_children
                 if child.type == "string"]
        if not parts or any(part is None for part in parts):
            return None
        return "".join(parts)  # type: ignore[arg-type]
    return None


def _statements(block: Any) -> list[Any]:
    return [child for child in block.named_children if child.type != "comment"]


def _assignment(statement: Any) -> tuple[list[Any], Any] | None:
    """Targets and value of a plain (possibly chained) assignment statement.

    ``a = b = value`` gives ``([a, b], value)``. Annotated assignments are
    not plain assignments and give None.
    """
    if statement.type != "expression_statement" or len(statement.named_children) != 1:
        return None
    node = statement.named_children[0]
    if node.type != "assignment":
        return None

    targets = []
    while node.type == "assignment":
        right = node.child_by_field_name("right")
        if node.child_by_field_name("type") is not None or right is None:
            return None
        targets.append(node.child_by_field_name("left"))
        node = right
    return targets, node


class _ParameterCollector:
    """Splits a ``parameters`` node into positional, variadic and keyword slots."""

    def __init__(self, source: bytes) -> None:
        self.source = source
        self.args: list[str] = []
        self.var_arg: str | None = None
        self.kw_only_args: list[str] = []
        self.kw_arg: str | None = None
        self._after_star = False

    def _name(self, node: Any) -> str:
        if node.type != "identifier" and node.named_children:
            node = node.named_children[0]
        return node_text(self.source, node)

    def _named(self, name: str) -> None:
        if self._after_star:
            self.kw_only_args.append(name)
        else:
            self.args.append(name)

    def collect(self, parameters: Any) -> "_ParameterCollector":
        for param in parameters.named_children:
            kind = param.type
            if kind == "typed_parameter":
                param = param.named_children[0]
                kind = param.type

            if kind == "identifier":
                self._named(node_text(self.source, param))
            elif kind in ("default_parameter", "typed_default_parameter"):
                self._named(node_text(self.source, param.child_by_field_name("name")))
            elif kind == "list_splat_pattern":
                self.var_arg = self._name(param)
                self._after_star = True
            elif kind == "keyword_separator":
                self._after_star = True
            elif kind == "dictionary_splat_pattern":
                self.kw_arg = self._name(param)
        return self


class DeclarationExtractor:
    """Extracts model declarations from Python source files.

    Usage:
        extractor = DeclarationExtractor()
        extraction = extractor.extract_file(Path("sale/models/sale_order.py"))
        for declaration in extraction.declarations:
            ...
    """

    def __init__(
        self,
        markers: MarkerConfig | None = None,
        policy: PolicyConfig | None = None,
        parser: PythonParser | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            markers: Marker names (defaults: _name, _inherit/_inherits, api, model)
            policy: Extraction policies
            parser: Shared parser instance
        """
        self.markers = markers or MarkerConfig()
        self.policy = policy or PolicyConfig()
        self.parser = parser or PythonParser()

    def extract_file(self, path: Path | str) -> FileExtraction:
        """Read, parse and extract one file.

        Raises:
            FileReadError: If the file cannot be read or is not UTF-8
            ParseError: If the file has syntax errors
        """
        try:
            source = Path(path).read_bytes()
            source.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(path, str(e)) from e

        return self.extract_source(source, str(path))

    def extract_source(self, source: bytes | str, source_file: str) -> FileExtraction:
        """Extract declarations from in-memory source.

        Args:
            source: Source text
            source_file: Identifier recorded on every fragment

        Returns:
            FileExtraction with one declaration per (block, model name)
        """
        if isinstance(source, str):
            source = source.encode("utf-8")

        lines = LineIndex(source)
        root = self.parser.parse(source, source_file, lines)

        declarations: list[Declaration] = []
        for statement in root.named_children:
            if statement.type == "decorated_definition":
                statement = statement.child_by_field_name("definition")
            if statement is None or statement.type != "class_definition":
                continue
            declarations.extend(self._extract_class(source, source_file, lines, statement))

        _logger.structured(
            logging.DEBUG,
            f"Extracted {len(declarations)} declaration(s) from {source_file}",
            file=source_file,
            models=[d.model_name for d in declarations],
        )
        return FileExtraction(source_file=source_file, declarations=tuple(declarations))

    def _extract_class(
        self, source: bytes, source_file: str, lines: LineIndex, class_node: Any
    ) -> list[Declaration]:
        body = class_node.child_by_field_name("body")
        if body is None:
            return []

        candidates: list[str] = []
        fields: dict[str, FieldInfo] = {}
        methods: dict[str, MethodInfo] = {}
        is_extension = False

        for statement in _statements(body):
            assignment = _assignment(statement)
            if assignment is not None:
                targets, value = assignment
                for target in targets:
                    if target.type != "identifier":
                        continue
                    name = node_text(source, target)
                    if not name.startswith("_"):
                        line, column = lines.locate(statement.start_byte)
                        fields[name] = FieldInfo(line, column, node_text(source, statement))
                    elif name == self.markers.name:
                        self._add_candidate(candidates, string_constant(source, value))
                    elif name in self.markers.inherit:
                        is_extension = True
                        self._add_candidate(candidates, string_constant(source, value))
                        self._add_list_candidates(source, candidates, value)
                continue

            function = statement
            if statement.type == "decorated_definition":
                function = statement.child_by_field_name("definition")
                if function is None or function.type != "function_definition":
                    continue
                if self._is_suppressed(source, statement):
                    continue
            if function.type == "function_definition":
                name = node_text(source, function.child_by_field_name("name"))
                methods[name] = self._method_info(source, lines, function)

        fragment = Fragment(source_file=source_file, fields=fields, methods=methods)
        role = ModelRole.EXTENSION if is_extension else ModelRole.ORIGINAL
        return [Declaration(name, fragment, role) for name in candidates]

    @staticmethod
    def _add_candidate(candidates: list[str], name: str | None) -> None:
        if name is not None and name not in candidates:
            candidates.append(name)

    def _add_list_candidates(self, source: bytes, candidates: list[str], value: Any) -> None:
        value = _unwrap_parentheses(value)
        if value.type != "list":
            return
        names = [string_constant(source, element) for element in value.named_children]
        if self.policy.inherit_lists:
            for name in names:
                self._add_candidate(candidates, name)
        else:
            _logger.debug("Ignoring list extension targets %s", [n for n in names if n])

    def _is_suppressed(self, source: bytes, decorated: Any) -> bool:
        for child in decorated.named_children:
            if child.type != "decorator":
                continue
            shape = decorator_shape(source, child)
            if match_suppression(shape, self.markers.api, self.markers.model):
                return True
        return False

    def _method_info(self, source: bytes, lines: LineIndex, function: Any) -> MethodInfo:
        line, column = lines.locate(function.start_byte)
        params = _ParameterCollector(source).collect(function.child_by_field_name("parameters"))
        return MethodInfo(
            line=line,
            column=column,
            args=tuple(params.args),
            var_arg=params.var_arg,
            kw_only_args=tuple(params.kw_only_args),
            kw_arg=params.kw_arg,
            doc_string=self._doc_string(source, function.child_by_field_name("body")),
        )

    @staticmethod
    def _doc_string(source: bytes, body: Any) -> str | None:
        if body is None:
            return None
        statements = _statements(body)
        if not statements:
            return None
        first = statements[0]
        if first.type != "expression_statement" or len(first.named_children) != 1:
            return None
        expr = _unwrap_parentheses(first.named_children[0])
        if expr.type not in STRING_NODES:
            return None
        doc = string_constant(source, expr)
        return normalize_doc_string(doc) if doc is not None else None
