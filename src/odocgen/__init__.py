"""odocgen - Model documentation generator for extensible object-model codebases.

odocgen scans addon directories, extracts every class that declares or
reopens a model (``_name`` / ``_inherit``), merges the fragments of each
model across the whole codebase and emits a static, searchable HTML site.

Core principles:
- Deterministic: same input tree produces byte-identical output
- Fail-fast: any unreadable or unparseable file aborts the run
- Two-phase: immutable per-file extraction, then a single aggregation step
"""

__version__ = "0.1.0"
__author__ = "odocgen Contributors"
