"""Extraction pipeline orchestrator.

Runs the stages strictly forward, single-threaded:
1. Source location (addons directories -> model files)
2. Declaration extraction (one immutable FileExtraction per file)
3. Aggregation (one AggregateModel per model name)
4. Cross-reference indexing

Any read or parse error aborts the whole run; there is no partial result.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from odocgen.analyzers import (
    DeclarationExtractor,
    ModelAggregator,
    build_cross_reference,
    locate_sources,
)
from odocgen.config import OdocgenConfig
from odocgen.models.aggregate import ExtractionResult
from odocgen.models.declarations import FileExtraction
from odocgen.utils.logging import get_logger

logger = get_logger(__name__)


class ExtractionPipeline:
    """Builds the merged model documentation data for a source tree.

    Usage:
        pipeline = ExtractionPipeline(config)
        result = pipeline.run(["odoo/addons"])
    """

    def __init__(self, config: OdocgenConfig | None = None) -> None:
        """Initialize the pipeline.

        Args:
            config: odocgen configuration (uses defaults if None)
        """
        self.config = config or OdocgenConfig()
        self._extractor = DeclarationExtractor(
            markers=self.config.markers,
            policy=self.config.policy,
        )

    def locate(self, addons_dirs: Iterable[str | Path]) -> list[str]:
        """Stage 1: list model files under the addons directories."""
        sources = self.config.sources
        files = list(locate_sources(addons_dirs, sources.models_dir, sources.extension))
        logger.info("Found %d model file(s)", len(files))
        return files

    def run(self, addons_dirs: Iterable[str | Path]) -> ExtractionResult:
        """Execute the full pipeline over addons directories.

        Raises:
            OdocgenError: On any read, parse or policy failure
        """
        return self.run_files(self.locate(addons_dirs))

    def run_files(self, paths: Iterable[str | Path]) -> ExtractionResult:
        """Execute stages 2-4 over an explicit list of files, in order."""
        aggregator = ModelAggregator(self.config.policy.on_duplicate_original)
        files: list[FileExtraction] = []

        for path in paths:
            extraction = self._extractor.extract_file(path)
            aggregator.add_file(extraction)
            files.append(extraction)

        models = aggregator.build()
        index = build_cross_reference(models)

        result = ExtractionResult(files=files, models=models, index=index)
        logger.structured(
            logging.INFO,
            f"Extracted {len(models)} model(s) from {len(files)} file(s)",
            files=len(files),
            models=len(models),
            declarations=result.declaration_count,
            methods=len(index.methods),
            fields=len(index.fields),
        )
        return result
