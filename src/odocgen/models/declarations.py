"""Per-file declaration records.

These are produced by the declaration extractor, one batch per source
file, and never modified afterwards.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class ModelRole(Enum):
    """Role of a class block with respect to the model it names."""

    ORIGINAL = "original"
    EXTENSION = "extension"


@dataclass(frozen=True)
class FieldInfo:
    """A public class attribute assignment.

    Attributes:
        line: 1-based line of the assignment statement
        column: Column of the statement start
        declaration: Verbatim source text of the whole statement
    """

    line: int
    column: int
    declaration: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "line": self.line,
            "column": self.column,
            "declaration": self.declaration,
        }


@dataclass(frozen=True)
class MethodInfo:
    """A documented method of a class block.

    Attributes:
        line: 1-based line of the ``def`` statement
        column: Column of the statement start
        args: Positional parameter names in declaration order
        var_arg: Name of the ``*args`` parameter
        kw_only_args: Keyword-only parameter names in declaration order
        kw_arg: Name of the ``**kwargs`` parameter
        doc_string: Normalized docstring, if the body starts with one
    """

    line: int
    column: int
    args: tuple[str, ...] = ()
    var_arg: str | None = None
    kw_only_args: tuple[str, ...] = ()
    kw_arg: str | None = None
    doc_string: str | None = None

    def signature(self) -> str:
        """Render the parameter list, e.g. ``self, a, *args, b, **kw``."""
        parts = list(self.args)
        if self.var_arg is not None:
            parts.append(f"*{self.var_arg}")
        elif self.kw_only_args:
            parts.append("*")
        parts.extend(self.kw_only_args)
        if self.kw_arg is not None:
            parts.append(f"**{self.kw_arg}")
        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "line": self.line,
            "column": self.column,
            "args": list(self.args),
            "var_arg": self.var_arg,
            "kw_only_args": list(self.kw_only_args),
            "kw_arg": self.kw_arg,
            "doc_string": self.doc_string,
        }


@dataclass(frozen=True)
class Fragment:
    """Fields and methods contributed by one class block in one file.

    The same fragment is shared by every model name its block declares.

    Attributes:
        source_file: Path of the file the block lives in
        fields: Field name -> FieldInfo (last assignment wins)
        methods: Method name -> MethodInfo (last definition wins)
    """

    source_file: str
    fields: Mapping[str, FieldInfo] = field(default_factory=dict)
    methods: Mapping[str, MethodInfo] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "methods", MappingProxyType(dict(self.methods)))

    def __hash__(self) -> int:
        return hash((self.source_file, tuple(self.sorted_fields()), tuple(self.sorted_methods())))

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.methods

    def sorted_fields(self) -> list[tuple[str, FieldInfo]]:
        return sorted(self.fields.items())

    def sorted_methods(self) -> list[tuple[str, MethodInfo]]:
        return sorted(self.methods.items())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_file": self.source_file,
            "fields": {name: info.to_dict() for name, info in self.sorted_fields()},
            "methods": {name: info.to_dict() for name, info in self.sorted_methods()},
        }


@dataclass(frozen=True)
class Declaration:
    """One (model name, fragment, role) triple."""

    model_name: str
    fragment: Fragment
    role: ModelRole

    @property
    def is_extension(self) -> bool:
        return self.role is ModelRole.EXTENSION


@dataclass(frozen=True)
class FileExtraction:
    """Everything extracted from a single source file.

    Attributes:
        source_file: Path of the file
        declarations: Triples in block order
    """

    source_file: str
    declarations: tuple[Declaration, ...] = ()

    @property
    def model_names(self) -> list[str]:
        return [d.model_name for d in self.declarations]
