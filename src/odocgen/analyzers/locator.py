"""Source file discovery.

Layout searched: ``<addons_dir>/<addon>/<models_dir>/*<extension>``.
Addons and files are visited in name order so runs are reproducible
regardless of file system enumeration order.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from odocgen.exceptions import FileReadError
from odocgen.utils.logging import get_logger

_logger = get_logger(__name__)


def _sorted_entries(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FileReadError(directory, str(e)) from e


def locate_sources(
    addons_dirs: Iterable[str | Path],
    models_dir: str = "models",
    extension: str = ".py",
) -> Iterator[str]:
    """Yield model source files under each addons directory.

    Args:
        addons_dirs: Directories whose subdirectories are addons, in order
        models_dir: Per-addon subdirectory holding model files
        extension: Suffix a model file name must end with

    Yields:
        File paths as strings, prefixed by the addons directory as given

    Raises:
        FileReadError: If an addons or models directory cannot be listed
    """
    for addons_dir in addons_dirs:
        addons_path = Path(addons_dir)
        count = 0
        for addon in _sorted_entries(addons_path):
            models_path = addon / models_dir
            if not models_path.is_dir():
                continue
            for entry in _sorted_entries(models_path):
                if entry.name.endswith(extension) and entry.is_file():
                    count += 1
                    yield str(entry)
        _logger.debug("Found %d model file(s) in %s", count, addons_path)
