"""Merges per-file declarations into one record per model."""

from collections.abc import Iterable

from odocgen.exceptions import DuplicateOriginalError
from odocgen.models.aggregate import AggregateModel
from odocgen.models.declarations import Declaration, FileExtraction
from odocgen.utils.logging import get_logger

_logger = get_logger(__name__)


class ModelAggregator:
    """Folds declarations from all files into AggregateModel records.

    Extensions are kept in arrival order until ``build()``, which sorts them
    by source file. Processing order only matters when two files declare
    the same model as original: the later one replaces the earlier one.

    Usage:
        aggregator = ModelAggregator()
        for extraction in extractions:
            aggregator.add_file(extraction)
        models = aggregator.build()
    """

    def __init__(self, on_duplicate_original: str = "warn") -> None:
        """Initialize the aggregator.

        Args:
            on_duplicate_original: "ignore", "warn" or "error" when a model
                gets a second original fragment
        """
        self.on_duplicate_original = on_duplicate_original
        self._models: dict[str, AggregateModel] = {}

    def add(self, declaration: Declaration) -> None:
        """Fold one declaration into its model."""
        name = declaration.model_name
        model = self._models.get(name)
        if model is None:
            model = self._models[name] = AggregateModel(name=name)

        if declaration.is_extension:
            model.extensions.append(declaration.fragment)
            return

        previous = model.original
        if previous is not None:
            self._report_duplicate(name, previous.source_file, declaration.fragment.source_file)
        model.original = declaration.fragment

    def add_file(self, extraction: FileExtraction) -> None:
        """Fold every declaration of one file."""
        for declaration in extraction.declarations:
            self.add(declaration)

    def add_all(self, extractions: Iterable[FileExtraction]) -> None:
        for extraction in extractions:
            self.add_file(extraction)

    def build(self) -> dict[str, AggregateModel]:
        """Finish the fold.

        Returns:
            Model name -> aggregate, sorted by name, with extensions sorted
            ascending by source file (stable for fragments of one file)
        """
        for model in self._models.values():
            model.extensions.sort(key=lambda fragment: fragment.source_file)
        return {name: self._models[name] for name in sorted(self._models)}

    def _report_duplicate(self, name: str, first: str, second: str) -> None:
        if self.on_duplicate_original == "error":
            raise DuplicateOriginalError(name, first, second)
        if self.on_duplicate_original == "warn":
            _logger.warning(
                "Model %s is originally defined in both %s and %s; using %s",
                name,
                first,
                second,
                second,
            )


def aggregate(
    extractions: Iterable[FileExtraction],
    on_duplicate_original: str = "warn",
) -> dict[str, AggregateModel]:
    """Aggregate extractions in one call."""
    aggregator = ModelAggregator(on_duplicate_original)
    aggregator.add_all(extractions)
    return aggregator.build()
