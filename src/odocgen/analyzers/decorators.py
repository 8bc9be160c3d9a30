"""Decorator patterns that hide a method from the documentation.

Decorators are first reduced to a ``DecoratorShape`` and then matched
structurally against a closed set of tagged patterns. With the default
markers the hidden forms are ``@api.depends(...)`` (call on the api
namespace), ``@api.model`` / ``@x.model`` (attribute named ``model``) and
``@api.anything`` (attribute of the api namespace).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from odocgen.analyzers.python_parser import node_text


class ShapeKind(Enum):
    """Syntactic form of a decorator expression."""

    ATTRIBUTE = "attribute"  # @base.attr
    CALL = "call"  # @base.attr(...) or @name(...)
    OTHER = "other"  # @name, @a.b.c, anything else


class SuppressionPattern(Enum):
    """Closed set of decorator forms that suppress documentation."""

    CALL_ON_API = "call_on_api"
    MODEL_ATTRIBUTE = "model_attribute"
    API_ATTRIBUTE = "api_attribute"


@dataclass(frozen=True)
class DecoratorShape:
    """Structural summary of a decorator.

    Attributes:
        kind: Decorator form
        base: Identifier the attribute is taken from, when it is a plain name
        attribute: Attribute name, for attribute and attribute-call forms
    """

    kind: ShapeKind
    base: str | None = None
    attribute: str | None = None


def _attribute_parts(source: bytes, node: Any) -> tuple[str | None, str | None]:
    obj = node.child_by_field_name("object")
    attr = node.child_by_field_name("attribute")
    base = node_text(source, obj) if obj is not None and obj.type == "identifier" else None
    return base, node_text(source, attr) if attr is not None else None


def decorator_shape(source: bytes, decorator: Any) -> DecoratorShape:
    """Reduce a tree-sitter ``decorator`` node to its shape."""
    expr = decorator.named_children[0] if decorator.named_children else None
    if expr is None:
        return DecoratorShape(ShapeKind.OTHER)

    if expr.type == "attribute":
        base, attribute = _attribute_parts(source, expr)
        return DecoratorShape(ShapeKind.ATTRIBUTE, base, attribute)

    if expr.type == "call":
        func = expr.child_by_field_name("function")
        if func is not None and func.type == "attribute":
            base, attribute = _attribute_parts(source, func)
            return DecoratorShape(ShapeKind.CALL, base, attribute)
        return DecoratorShape(ShapeKind.CALL)

    return DecoratorShape(ShapeKind.OTHER)


def match_suppression(
    shape: DecoratorShape, api_marker: str, model_marker: str
) -> SuppressionPattern | None:
    """Return the pattern a decorator shape matches, if any."""
    if shape.kind is ShapeKind.CALL:
        if shape.attribute is not None and shape.base == api_marker:
            return SuppressionPattern.CALL_ON_API
    elif shape.kind is ShapeKind.ATTRIBUTE:
        if shape.attribute == model_marker:
            return SuppressionPattern.MODEL_ATTRIBUTE
        if shape.base == api_marker:
            return SuppressionPattern.API_ATTRIBUTE
    return None
