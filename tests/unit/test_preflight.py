"""Unit tests for preflight checks."""

from odocgen.analyzers.python_parser import PythonParser
from odocgen.utils.preflight import PreflightChecker, PreflightResult, ToolCheck


class TestPreflightResult:
    """Tests for PreflightResult."""

    def test_missing_required_fails(self) -> None:
        result = PreflightResult()
        result.add_check(ToolCheck(name="tree-sitter", available=False))

        assert result.success is False
        assert result.errors == ["Required dependency not available: tree-sitter"]

    def test_to_dict(self) -> None:
        result = PreflightResult()
        result.add_check(ToolCheck(name="tree-sitter", available=True, version="0.23"))

        data = result.to_dict()

        assert data["success"] is True
        assert data["checks"][0]["version"] == "0.23"


class TestPreflightChecker:
    """Tests for PreflightChecker."""

    def test_tree_sitter_available(self) -> None:
        result = PreflightChecker().check_all()

        assert result.success is True
        assert result.checks[0].name == "tree-sitter"

    def test_grammar_failure_reported(self) -> None:
        parser = PythonParser()
        parser._init_error = "grammar broken"

        check = PreflightChecker(parser).check_tree_sitter()

        assert check.available is False
        assert check.message == "Python grammar could not be loaded"
