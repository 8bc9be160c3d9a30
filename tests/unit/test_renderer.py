"""Unit tests for the static site renderer."""

import json
from pathlib import Path

import pytest

from odocgen.exceptions import OutputWriteError
from odocgen.models.aggregate import AggregateModel, CrossReferenceIndex, ExtractionResult
from odocgen.models.declarations import FieldInfo, Fragment, MethodInfo
from odocgen.pipeline import ExtractionPipeline
from odocgen.templates import SiteRenderer
from odocgen.templates.renderer import load_tips, script_literal

STATIC_DIR = Path(__file__).parents[2] / "src" / "odocgen" / "templates" / "static"


@pytest.fixture
def renderer() -> SiteRenderer:
    return SiteRenderer()


@pytest.fixture
def sample_result(sample_addons_dir: Path) -> ExtractionResult:
    return ExtractionPipeline().run([sample_addons_dir])


def parse_data(text: str) -> dict:
    """Pull the globalIndex object out of db.js."""
    line = next(row for row in text.splitlines() if row.startswith("const globalIndex="))
    return json.loads(line[len("const globalIndex="):-1])


class TestScriptLiteral:
    """Tests for script_literal."""

    def test_closing_tag_escaped(self) -> None:
        assert "</script>" not in script_literal({"a": "</script>"})

    def test_compact(self) -> None:
        assert script_literal({"a": [1, 2]}) == '{"a":[1,2]}'


class TestLoadTips:
    """Tests for load_tips."""

    def test_comments_skipped(self) -> None:
        tips = load_tips()

        assert tips
        assert not any(tip.startswith("#") for tip in tips)
        assert "" not in tips


class TestRenderData:
    """Tests for db.js rendering."""

    def test_shape(self, renderer: SiteRenderer, sample_result: ExtractionResult) -> None:
        """Test the model list and index maps."""
        text = renderer.render_data(sample_result)
        data = parse_data(text)

        assert text.startswith("'use strict'\n")
        assert "const globalTipList=[" in text
        assert data["models"] == ["res.partner", "sale.order", "sale.order.line"]
        assert data["methods"]["action_confirm"] == {"is_original": True, "model": "sale.order"}
        assert data["methods"]["get_cart"] == {"is_original": False, "model": "res.partner"}
        assert data["fields"]["picking_ids"] == {"is_original": False, "model": "sale.order"}
        assert data["fields"]["order_id"] == {"is_original": True, "model": "sale.order.line"}

    def test_suppressed_methods_absent(
        self, renderer: SiteRenderer, sample_result: ExtractionResult
    ) -> None:
        data = parse_data(renderer.render_data(sample_result))

        for name in ("_compute_amounts", "default_get", "_onchange_picking_ids"):
            assert name not in data["methods"]

    def test_empty_result(self, renderer: SiteRenderer) -> None:
        result = ExtractionResult(files=[], models={}, index=CrossReferenceIndex())

        data = parse_data(renderer.render_data(result))

        assert data == {"models": [], "methods": {}, "fields": {}}


class TestRenderModel:
    """Tests for model page rendering."""

    def test_sections_and_order(
        self, renderer: SiteRenderer, sample_result: ExtractionResult
    ) -> None:
        """Test original first, then extensions in descending file order."""
        html = renderer.render_model(sample_result.models["sale.order"])

        original = html.index("<h2>Original: ")
        website = html.index("<h2>Inherited: ", original)
        assert "website_sale" in html[website : html.index("</h2>", website)]
        stock = html.index("<h2>Inherited: ", website + 1)
        assert "sale_stock" in html[stock : html.index("</h2>", stock)]
        assert "Originally defined in: " in html

    def test_members(self, renderer: SiteRenderer, sample_result: ExtractionResult) -> None:
        html = renderer.render_model(sample_result.models["sale.order"])

        assert 'id="f-amount_total"' in html
        assert "<details><summary id=\"m-action_confirm\">action_confirm(self)" in html
        assert "Confirm the quotation." in html
        assert '<ul id="m-action_cancel"><li>action_cancel(self, *args, reason, **kwargs)' in html
        assert "_compute_amounts(" not in html
        assert "default_get(" not in html

    def test_extension_only_model(
        self, renderer: SiteRenderer, sample_result: ExtractionResult
    ) -> None:
        html = renderer.render_model(sample_result.models["res.partner"])

        assert "Originally defined in" not in html
        assert "<h2>Original" not in html
        assert "Inherited in: " in html
        assert "get_cart(self)" in html

    def test_html_escaped(self, renderer: SiteRenderer) -> None:
        fragment = Fragment(
            "a.py",
            fields={"tag": FieldInfo(3, 5, 'tag = fields.Char(default="<b>")')},
            methods={"m": MethodInfo(5, 5, ("self",), doc_string="a < b")},
        )

        html = renderer.render_model(AggregateModel("x", original=fragment))

        assert "&lt;b&gt;" in html
        assert "a &lt; b" in html
        assert "<b>" not in html

    def test_empty_fragment_skipped(self, renderer: SiteRenderer) -> None:
        model = AggregateModel("x", original=Fragment("a.py"), extensions=[Fragment("b.py")])

        html = renderer.render_model(model)

        assert "<h2>" not in html
        assert "Inherited in: b.py" in html


class TestWrite:
    """Tests for SiteRenderer.write."""

    def test_layout(
        self, renderer: SiteRenderer, sample_result: ExtractionResult, tmp_path: Path
    ) -> None:
        output = renderer.write(sample_result, tmp_path / "site", branch="17.0")

        files = sorted(p.relative_to(output).as_posix() for p in output.rglob("*") if p.is_file())
        assert files == [
            "class/class.css",
            "class/class.js",
            "class/res.partner.html",
            "class/sale.order.html",
            "class/sale.order.line.html",
            "db.js",
            "index.html",
            "index.js",
        ]

    def test_static_copied_verbatim(
        self, renderer: SiteRenderer, sample_result: ExtractionResult, tmp_path: Path
    ) -> None:
        output = renderer.write(sample_result, tmp_path / "site")

        assert (output / "index.js").read_bytes() == (STATIC_DIR / "index.js").read_bytes()
        assert (output / "class" / "class.js").read_bytes() == (STATIC_DIR / "class.js").read_bytes()
        assert (output / "class" / "class.css").read_bytes() == (STATIC_DIR / "class.css").read_bytes()

    def test_branch_label(
        self, renderer: SiteRenderer, sample_result: ExtractionResult, tmp_path: Path
    ) -> None:
        output = renderer.write(sample_result, tmp_path / "site", branch="saas-17.2")

        assert "odocgen [saas-17.2]" in (output / "index.html").read_text()

    def test_default_branch(
        self, renderer: SiteRenderer, sample_result: ExtractionResult, tmp_path: Path
    ) -> None:
        output = renderer.write(sample_result, tmp_path / "site")

        assert "odocgen [master]" in (output / "index.html").read_text()

    def test_existing_output_replaced(
        self, renderer: SiteRenderer, sample_result: ExtractionResult, tmp_path: Path
    ) -> None:
        site = tmp_path / "site"
        (site / "class").mkdir(parents=True)
        (site / "stale.html").write_text("old")
        (site / "class" / "gone.model.html").write_text("old")

        renderer.write(sample_result, site)

        assert not (site / "stale.html").exists()
        assert not (site / "class" / "gone.model.html").exists()

    def test_deterministic(
        self, renderer: SiteRenderer, sample_result: ExtractionResult, tmp_path: Path
    ) -> None:
        first = renderer.write(sample_result, tmp_path / "one")
        second = renderer.write(sample_result, tmp_path / "two")

        for path in first.rglob("*"):
            if path.is_file():
                assert path.read_bytes() == (second / path.relative_to(first)).read_bytes()

    @pytest.mark.parametrize("name", ["a/b", "..", "a\\b"])
    def test_invalid_model_name(self, renderer: SiteRenderer, tmp_path: Path, name: str) -> None:
        model = AggregateModel(name, original=Fragment("a.py"))
        result = ExtractionResult(files=[], models={name: model}, index=CrossReferenceIndex())

        with pytest.raises(OutputWriteError):
            renderer.write(result, tmp_path / "site")
