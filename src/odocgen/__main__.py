"""Entry point for running odocgen as a module.

Usage:
    python -m odocgen [command] [options]

Example:
    python -m odocgen write odoo/addons --output build/docs --branch 17.0
    python -m odocgen check
"""

from odocgen.cli import app

if __name__ == "__main__":
    app()
