"""Preflight validation.

The tree-sitter Python grammar must be available before extraction starts.
No fallback parser exists, so a missing grammar fails the check.
"""

import importlib.util
from dataclasses import dataclass, field
from typing import Any

from odocgen.analyzers.python_parser import PythonParser


@dataclass
class ToolCheck:
    """Result of checking a single dependency.

    Attributes:
        name: Dependency name
        available: Whether it is usable
        version: Version if known
        required: Whether it is required for this run
        path: Module path if available
        message: Status message (human-readable context)
    """

    name: str
    available: bool
    version: str | None = None
    required: bool = True
    path: str | None = None
    message: str = ""


@dataclass
class PreflightResult:
    """Result of preflight validation.

    Attributes:
        success: Whether all required dependencies are available
        checks: Individual check results
        errors: Error messages for missing required dependencies
    """

    success: bool = True
    checks: list[ToolCheck] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add_check(self, check: ToolCheck) -> None:
        """Add a check result."""
        self.checks.append(check)
        if not check.available and check.required:
            self.success = False
            self.errors.append(f"Required dependency not available: {check.name}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "success": self.success,
            "checks": [
                {
                    "name": c.name,
                    "available": c.available,
                    "version": c.version,
                    "required": c.required,
                    "path": c.path,
                    "message": c.message,
                }
                for c in self.checks
            ],
            "errors": self.errors,
        }


class PreflightChecker:
    """Validates parser availability before extraction.

    Usage:
        result = PreflightChecker().check_all()
        if not result.success:
            sys.exit(1)
    """

    def __init__(self, parser: PythonParser | None = None) -> None:
        self.parser = parser or PythonParser()

    def check_tree_sitter(self) -> ToolCheck:
        """Check that tree-sitter and the Python grammar load."""
        ts_spec = importlib.util.find_spec("tree_sitter")
        if ts_spec is None:
            return ToolCheck(
                name="tree-sitter",
                available=False,
                message="Install with: pip install tree-sitter",
            )

        if importlib.util.find_spec("tree_sitter_language_pack") is None:
            return ToolCheck(
                name="tree-sitter",
                available=False,
                message="Install with: pip install tree-sitter-language-pack",
            )

        if not self.parser.check_available():
            return ToolCheck(
                name="tree-sitter",
                available=False,
                path=ts_spec.origin,
                message="Python grammar could not be loaded",
            )

        import tree_sitter

        return ToolCheck(
            name="tree-sitter",
            available=True,
            version=getattr(tree_sitter, "__version__", None),
            path=ts_spec.origin,
            message="Python parser",
        )

    def check_all(self) -> PreflightResult:
        """Run every check."""
        result = PreflightResult()
        result.add_check(self.check_tree_sitter())
        return result
