"""odocgen site rendering.

Jinja2 templates and static assets for the generated documentation site.
Templates are designed to produce identical output for identical input.
"""

from odocgen.templates.renderer import SiteRenderer

__all__ = ["SiteRenderer"]
