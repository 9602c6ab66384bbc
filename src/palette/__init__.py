"""Public entrypoint for the palette package.

Re-exports the fixed preset library and the curated parameter generator so
that callers can import from ``palette`` instead of individual submodules.
"""

from .generator import CuratedParams, generate_params, pick_params
from .library import PALETTES, get_palette, palette_count, shading_colors

__all__ = [
    "CuratedParams",
    "generate_params",
    "pick_params",
    "PALETTES",
    "get_palette",
    "palette_count",
    "shading_colors",
]
