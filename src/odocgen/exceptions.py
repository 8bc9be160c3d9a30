"""Error hierarchy for odocgen.

Every error here is fatal to the whole run: there is no per-file recovery
and no partial output. Each error carries enough context (the file path)
for the operator to locate the offending input.
"""

from pathlib import Path


class OdocgenError(Exception):
    """Base exception for all odocgen errors."""

    pass


class ConfigError(OdocgenError):
    """Raised when the configuration file is invalid."""

    pass


class FileReadError(OdocgenError):
    """Raised when a source file or addons directory cannot be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class ParseError(OdocgenError):
    """Raised when a source file does not conform to the Python grammar."""

    def __init__(self, path: str | Path, line: int, column: int) -> None:
        self.path = str(path)
        self.line = line
        self.column = column
        super().__init__(f"Syntax error in {self.path} at line {line}, column {column}")


class OutputWriteError(OdocgenError):
    """Raised when the output directory cannot be reset or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")


class DuplicateOriginalError(OdocgenError):
    """Raised when two files both declare the same model as original."""

    def __init__(self, model: str, first: str, second: str) -> None:
        self.model = model
        self.first = first
        self.second = second
        super().__init__(
            f"Model {model!r} is originally defined twice: {first} and {second}"
        )


class ParserUnavailableError(OdocgenError):
    """Raised when the tree-sitter Python grammar cannot be loaded.

    Run `odocgen check` to verify dependencies.
    """

    def __init__(self, message: str | None = None) -> None:
        self.message = message or (
            "tree-sitter is not available. "
            "Run `odocgen check` to verify dependencies."
        )
        super().__init__(self.message)
