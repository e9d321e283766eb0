"""Parametric building massing: typology footprints stacked into masses."""

__version__ = "0.1.0"

from massing_builder.generators import build_boundary, generate_mass, select_typology
from massing_builder.models import MassResult, Plane, Typology

__all__ = [
    "__version__",
    "build_boundary",
    "generate_mass",
    "select_typology",
    "MassResult",
    "Plane",
    "Typology",
]
