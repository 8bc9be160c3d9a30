"""odocgen CLI interface.

Commands:
- write: Extract models from addons directories and write the site
- check: Validate parser availability
- init: Create a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from odocgen import __version__
from odocgen.config import OdocgenConfig, create_default_config, load_config
from odocgen.exceptions import OdocgenError
from odocgen.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="odocgen",
    help="Model documentation generator for extensible object-model codebases",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: OdocgenConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"odocgen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """odocgen - merge every fragment of each model into one documentation page."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except OdocgenError as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# write command
# =============================================================================


@app.command()
def write(
    addons_dirs: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Directories to find addons in (e.g. odoo/addons)",
            exists=True,
            file_okay=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to write output in (deleted if it exists)",
        ),
    ] = None,
    branch: Annotated[
        str | None,
        typer.Option(
            "--branch",
            "-b",
            help="Name of the branch the documentation is generated for",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail when two files define the same model as original",
        ),
    ] = False,
    inherit_lists: Annotated[
        bool,
        typer.Option(
            "--inherit-lists",
            help="Document _inherit = [...] classes under every listed model",
        ),
    ] = False,
) -> None:
    """Extract model declarations and write the documentation site.

    Exit codes:
        0: Documentation written
        1: Read, parse, policy or write error
    """
    from odocgen.pipeline import ExtractionPipeline
    from odocgen.templates import SiteRenderer

    config = _config or OdocgenConfig()
    if strict:
        config.policy.on_duplicate_original = "error"
    if inherit_lists:
        config.policy.inherit_lists = True

    sources = [str(d) for d in addons_dirs] if addons_dirs else config.sources.addons_dirs
    if not sources:
        _logger.error("No addons directories given (argument or sources.addons_dirs)")
        raise typer.Exit(1)

    output_path = output or Path(config.output.path)
    branch_name = branch or config.output.branch

    _logger.info(f"Scanning {len(sources)} addons director{'y' if len(sources) == 1 else 'ies'}")

    try:
        result = ExtractionPipeline(config).run(sources)
        SiteRenderer(config).write(result, output_path, branch_name)
    except OdocgenError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    typer.echo(f"Documentation for {len(result.models)} model(s) written to: {output_path}")
    raise typer.Exit(0)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Validate that the Python parser is available.

    Exit codes:
        0: All required dependencies available
        1: A required dependency is missing
    """
    from odocgen.utils.preflight import PreflightChecker

    result = PreflightChecker().check_all()

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for check_result in result.checks:
            status = "ok" if check_result.available else "missing"
            version_str = f" ({check_result.version})" if check_result.version else ""
            typer.echo(f"  [{status}] {check_result.name}{version_str}")
            if check_result.message:
                typer.echo(f"     {check_result.message}")

    raise typer.Exit(0 if result.success else 1)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Create .odocgen/config.yaml with default settings."""
    config_dir = Path(".odocgen")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
