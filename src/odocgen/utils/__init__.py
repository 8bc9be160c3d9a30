"""Utility modules for odocgen.

- logging: human / verbose / JSON log output
- positions: byte offset to line/column lookup
- preflight: dependency checks
"""

from odocgen.utils.logging import LogMode, configure_from_cli, get_logger, setup_logging
from odocgen.utils.positions import LineIndex

__all__ = [
    "LineIndex",
    "LogMode",
    "configure_from_cli",
    "get_logger",
    "setup_logging",
]
