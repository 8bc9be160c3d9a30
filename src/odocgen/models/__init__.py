"""Data records for odocgen.

Per-file records (frozen, produced by the declaration extractor):
- FieldInfo, MethodInfo, Fragment, Declaration, FileExtraction

Corpus-wide records (built by the aggregator and indexer):
- AggregateModel, CrossReferenceEntry, CrossReferenceIndex, ExtractionResult
"""

from odocgen.models.aggregate import (
    AggregateModel,
    CrossReferenceEntry,
    CrossReferenceIndex,
    ExtractionResult,
)
from odocgen.models.declarations import (
    Declaration,
    FieldInfo,
    FileExtraction,
    Fragment,
    MethodInfo,
    ModelRole,
)

__all__ = [
    "AggregateModel",
    "CrossReferenceEntry",
    "CrossReferenceIndex",
    "Declaration",
    "ExtractionResult",
    "FieldInfo",
    "FileExtraction",
    "Fragment",
    "MethodInfo",
    "ModelRole",
]
