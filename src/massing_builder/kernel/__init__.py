"""Geometry kernels.

``GeometryKernel`` is the capability interface the generators depend on;
``PlanarKernel`` is the in-memory shapely implementation used by default.
"""

from massing_builder.kernel.base import GeometryKernel, KernelError
from massing_builder.kernel.planar import ExtrudedSolid, PlanarKernel, PlanarSurface

__all__ = [
    "GeometryKernel",
    "KernelError",
    "PlanarKernel",
    "PlanarSurface",
    "ExtrudedSolid",
    "default_kernel",
]


def default_kernel() -> GeometryKernel:
    """Planar kernel with default settings."""
    return PlanarKernel()
