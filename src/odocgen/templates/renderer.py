"""Static site renderer.

Writes the merged model data as a browsable site:

    <output>/index.html       landing page with search (branch substituted)
    <output>/index.js         search script (copied)
    <output>/db.js            model list + cross-reference index
    <output>/class/class.js   page script (copied)
    <output>/class/class.css  page style (copied)
    <output>/class/<model>.html

All output is deterministic - same input always produces the same bytes.
"""

import json
import shutil
from importlib import resources
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, Template, TemplateError, select_autoescape

from odocgen.config import OdocgenConfig
from odocgen.exceptions import OutputWriteError
from odocgen.models.aggregate import AggregateModel, ExtractionResult
from odocgen.utils.logging import get_logger

logger = get_logger(__name__)

MODEL_DIR = "class"

# (package resource name, path relative to the output directory)
STATIC_ASSETS: tuple[tuple[str, str], ...] = (
    ("index.js", "index.js"),
    ("class.js", f"{MODEL_DIR}/class.js"),
    ("class.css", f"{MODEL_DIR}/class.css"),
)

TIPS_RESOURCE = "tips.list"


def _static(name: str) -> Any:
    return resources.files("odocgen.templates").joinpath("static", name)


def load_tips() -> list[str]:
    """Read the landing page tips, skipping blank and ``#`` lines."""
    text = _static(TIPS_RESOURCE).read_text(encoding="utf-8")
    lines = (line.strip() for line in text.split("\n"))
    return [line for line in lines if line and not line.startswith("#")]


def script_literal(value: Any) -> str:
    """Serialize a value as a JavaScript literal safe inside <script>."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":")).replace("</", "<\\/")


class SiteRenderer:
    """Renders an ExtractionResult to a static HTML site.

    Usage:
        renderer = SiteRenderer(config)
        renderer.write(result, Path("build/odocgen"), branch="17.0")
    """

    def __init__(self, config: OdocgenConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: odocgen configuration
        """
        self.config = config or OdocgenConfig()

        self._env = Environment(
            loader=PackageLoader("odocgen", "templates"),
            autoescape=select_autoescape(["html", "html.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _template(self, name: str) -> Template:
        try:
            return self._env.get_template(name)
        except TemplateError as e:
            logger.error("Failed to load template %s: %s", name, e)
            raise ValueError(f"Template not found: {name}") from e

    # =========================================================================
    # In-memory rendering
    # =========================================================================

    def render_index(self, branch: str) -> str:
        """Render the landing page."""
        return self._template("index.html.j2").render(branch_label=f"[{branch}]")

    def render_data(self, result: ExtractionResult) -> str:
        """Render db.js: the model list, the cross-reference maps and tips."""
        index = result.index.to_dict()
        global_index = {
            "models": result.model_names,
            "methods": index["methods"],
            "fields": index["fields"],
        }
        return (
            "'use strict'\n"
            f"const globalIndex={script_literal(global_index)};\n"
            f"const globalTipList={script_literal(load_tips())};\n"
        )

    def render_model(self, model: AggregateModel) -> str:
        """Render one model page."""
        return self._template("model.html.j2").render(model=model)

    # =========================================================================
    # File emission
    # =========================================================================

    def write(
        self,
        result: ExtractionResult,
        output_dir: Path | str | None = None,
        branch: str | None = None,
    ) -> Path:
        """Regenerate the whole output directory.

        Any existing directory at ``output_dir`` is deleted first.

        Args:
            result: Extraction result from the pipeline
            output_dir: Target directory (defaults to config output.path)
            branch: Branch label (defaults to config output.branch)

        Returns:
            The output directory

        Raises:
            OutputWriteError: If the directory cannot be reset or written
        """
        output = Path(output_dir or self.config.output.path)
        branch = branch or self.config.output.branch

        self._reset(output)
        for resource_name, relative in STATIC_ASSETS:
            self._write_bytes(output / relative, _static(resource_name).read_bytes())

        self._write_text(output / "index.html", self.render_index(branch))
        self._write_text(output / "db.js", self.render_data(result))

        for model in result.models.values():
            self._write_text(self._model_page(output, model.name), self.render_model(model))

        logger.info("Wrote %d model page(s) to %s", len(result.models), output)
        return output

    @staticmethod
    def _model_page(output: Path, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise OutputWriteError(output / MODEL_DIR / name, "model name is not a valid file name")
        return output / MODEL_DIR / f"{name}.html"

    @staticmethod
    def _reset(output: Path) -> None:
        try:
            shutil.rmtree(output)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise OutputWriteError(output, str(e)) from e

        try:
            (output / MODEL_DIR).mkdir(parents=True)
        except OSError as e:
            raise OutputWriteError(output, str(e)) from e

    @staticmethod
    def _write_bytes(path: Path, content: bytes) -> None:
        try:
            path.write_bytes(content)
        except OSError as e:
            raise OutputWriteError(path, str(e)) from e

    def _write_text(self, path: Path, content: str) -> None:
        self._write_bytes(path, content.encode("utf-8"))
