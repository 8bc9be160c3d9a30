"""Test fixtures for odocgen.

Sample Addons:
- sample_addons: an Odoo-style addons directory. ``sale`` defines
  ``sale.order`` and ``sale.order.line``; ``sale_stock`` and
  ``website_sale`` extend ``sale.order``; ``website_sale`` also extends
  ``res.partner``, which nothing defines; ``base_setup`` uses the list
  form of ``_inherit``; ``stock`` has no ``models`` directory.
"""

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent

SAMPLE_ADDONS_PATH = FIXTURES_DIR / "sample_addons"


def get_sample_addon(name: str) -> Path:
    """Get path to a sample addon.

    Raises:
        ValueError: If the addon doesn't exist
    """
    addon_path = SAMPLE_ADDONS_PATH / name
    if not addon_path.exists():
        raise ValueError(f"Sample addon not found: {name}")
    return addon_path
