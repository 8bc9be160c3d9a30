"""Shared pytest fixtures for odocgen tests.

Fixtures are organized by category:
- Path fixtures: sample addons tree
- Source fixtures: model source snippets
- Factory fixtures: build addons trees and extractions in tmp_path
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from odocgen.analyzers.extractor import DeclarationExtractor
from odocgen.models.declarations import FileExtraction
from tests.fixtures import SAMPLE_ADDONS_PATH

# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def restore_odocgen_logger() -> Iterator[None]:
    """Undo handler and level changes made by CLI runs and logging tests."""
    logger = logging.getLogger("odocgen")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def sample_addons_dir() -> Path:
    """Return the path to the sample addons directory."""
    return SAMPLE_ADDONS_PATH


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def original_source() -> str:
    """A single original model with one field and one documented method."""
    return '''from odoo import models


class XY(models.Model):
    _name = "x.y"
    a = 1

    def m(self, a, b=2):
        "doc"
'''


@pytest.fixture
def extension_source() -> str:
    """An extension of x.y adding a field and overriding a method."""
    return '''from odoo import api, fields, models


class XY(models.Model):
    _inherit = "x.y"

    c = fields.Char()

    def m(self, a, b=3):
        return super().m(a, b)
'''


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def extractor() -> DeclarationExtractor:
    """Create an extractor with default markers and policy."""
    return DeclarationExtractor()


@pytest.fixture
def extract(extractor: DeclarationExtractor) -> Callable[[str, str], FileExtraction]:
    """Extract declarations from a source string."""

    def _extract(source: str, source_file: str = "addon/models/model.py") -> FileExtraction:
        return extractor.extract_source(source, source_file)

    return _extract


@pytest.fixture
def make_addons(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Create an addons tree from {"addon/models/file.py": source}."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "addons"
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        root.mkdir(exist_ok=True)
        return root

    return _make
