"""Massing generation.

Pure functions, no shared state:
- Boundary builder: typology + dimensions → boundary curve + holes
- Mass generator: footprint → floors, extruded mass, area and volume totals
- Typology selection: integer option index → typology
"""

from massing_builder.generators.boundary import build_boundary, make_base_surface
from massing_builder.generators.mass import floor_count_for, generate_mass
from massing_builder.generators.typology import TYPOLOGY_ORDER, select_typology

__all__ = [
    "build_boundary",
    "make_base_surface",
    "floor_count_for",
    "generate_mass",
    "TYPOLOGY_ORDER",
    "select_typology",
]
