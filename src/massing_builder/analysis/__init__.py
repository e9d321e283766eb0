"""Analysis of generated masses."""

from massing_builder.analysis.facade import FacadeSurfaces, deconstruct_facade

__all__ = ["FacadeSurfaces", "deconstruct_facade"]
