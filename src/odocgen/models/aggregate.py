"""Corpus-wide records built from all per-file declarations."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from odocgen.models.declarations import FileExtraction, Fragment

ORIGINAL_TITLE = "Original"
EXTENSION_TITLE = "Inherited"


@dataclass
class AggregateModel:
    """All fragments of one logical model.

    Attributes:
        name: Canonical model name
        original: Fragment that introduces the model, if any file does
        extensions: Extending fragments, ascending by source file
    """

    name: str
    original: Fragment | None = None
    extensions: list[Fragment] = field(default_factory=list)

    @property
    def displayed_extensions(self) -> list[Fragment]:
        """Extensions in page order (descending by source file)."""
        return list(reversed(self.extensions))

    @property
    def extension_files(self) -> list[str]:
        """Extending files in page order."""
        return [fragment.source_file for fragment in self.displayed_extensions]

    def displayed_fragments(self) -> Iterator[tuple[str, Fragment]]:
        """Yield (title, fragment) for the original then each extension."""
        if self.original is not None:
            yield ORIGINAL_TITLE, self.original
        for fragment in self.displayed_extensions:
            yield EXTENSION_TITLE, fragment

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "original": self.original.to_dict() if self.original else None,
            "extensions": [fragment.to_dict() for fragment in self.extensions],
        }


@dataclass(frozen=True)
class CrossReferenceEntry:
    """Owner of a field or method name.

    Attributes:
        model: Model the name belongs to
        is_original: True when the name comes from the model's original
            fragment, False when only an extension declares it
    """

    model: str
    is_original: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to the data-file shape."""
        return {"is_original": self.is_original, "model": self.model}


@dataclass
class CrossReferenceIndex:
    """Global field/method name lookup.

    Attributes:
        methods: Method name -> entry (the last emitted entry wins)
        fields: Field name -> entry (the last emitted entry wins)
        method_owners: Method name -> every emitted entry, in emission order
        field_owners: Field name -> every emitted entry, in emission order
    """

    methods: dict[str, CrossReferenceEntry] = field(default_factory=dict)
    fields: dict[str, CrossReferenceEntry] = field(default_factory=dict)
    method_owners: dict[str, list[CrossReferenceEntry]] = field(default_factory=dict)
    field_owners: dict[str, list[CrossReferenceEntry]] = field(default_factory=dict)

    def add_method(self, name: str, entry: CrossReferenceEntry) -> None:
        self.methods[name] = entry
        self.method_owners.setdefault(name, []).append(entry)

    def add_field(self, name: str, entry: CrossReferenceEntry) -> None:
        self.fields[name] = entry
        self.field_owners.setdefault(name, []).append(entry)

    def to_dict(self) -> dict[str, Any]:
        """Convert name-keyed maps to the data-file shape."""
        return {
            "methods": {name: entry.to_dict() for name, entry in self.methods.items()},
            "fields": {name: entry.to_dict() for name, entry in self.fields.items()},
        }


@dataclass
class ExtractionResult:
    """Output of a full extraction pass.

    Attributes:
        files: Per-file extractions in processing order
        models: Model name -> aggregate, sorted by name
        index: Cross-reference index derived from ``models``
    """

    files: list[FileExtraction] = field(default_factory=list)
    models: dict[str, AggregateModel] = field(default_factory=dict)
    index: CrossReferenceIndex = field(default_factory=CrossReferenceIndex)

    @property
    def model_names(self) -> list[str]:
        return sorted(self.models)

    @property
    def declaration_count(self) -> int:
        return sum(len(f.declarations) for f in self.files)
