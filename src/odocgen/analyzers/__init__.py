"""Extraction stages for odocgen.

Data flows strictly forward:
- locator: find model source files
- extractor (with python_parser, decorators): one FileExtraction per file
- aggregator: one AggregateModel per model name
- xref: global field/method cross-reference index
"""

from odocgen.analyzers.aggregator import ModelAggregator, aggregate
from odocgen.analyzers.extractor import DeclarationExtractor
from odocgen.analyzers.locator import locate_sources
from odocgen.analyzers.python_parser import PythonParser
from odocgen.analyzers.xref import build_cross_reference

__all__ = [
    "DeclarationExtractor",
    "ModelAggregator",
    "PythonParser",
    "aggregate",
    "build_cross_reference",
    "locate_sources",
]
