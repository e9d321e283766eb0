"""Footprint boundary builder.

Given a typology and three dimensions, draws the footprint's boundary curve
and hole curves in a local frame with the origin at the lower-left corner:

- width runs along +x
- length runs along +y
- depth is the wing (bar) thickness

Each typology has a feasibility guard. When it fails the result is
``BoundaryResult.infeasible()``: the typology simply cannot be built at those
dimensions, which is a normal answer rather than an error.

Guards compare dimensions with the point tolerance (1e-6 m): a wing or leg
shorter than that counts as missing.

U and D footprints pick their construction from their proportions. With
enough length the rounded end is a pair of circular arcs joined to straight
legs; on a short bay there is no room for straight legs and the rounded end
becomes a pair of half ellipses whose curvature compresses to fit.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from massing_builder.kernel import GeometryKernel, default_kernel
from massing_builder.kernel.base import KernelCurve, KernelSurface
from massing_builder.models.geometry import COINCIDENT_TOL
from massing_builder.models.results import BoundaryResult
from massing_builder.models.typology import Typology

logger = logging.getLogger(__name__)

# Half ellipses start on the -x side and sweep through the bottom (-y) side
HALF_START = 180.0
HALF_SWEEP = 180.0

# (kernel, length, width, depth) -> (boundary, holes), or None when the guard fails
BoundaryFn = Callable[[GeometryKernel, float, float, float], Optional[tuple[KernelCurve, list[KernelCurve]]]]


def _exceeds(a: float, b: float) -> bool:
    """True when `a` is larger than `b` by more than the point tolerance.

    Anything closer would give edges too short to tell their ends apart.
    """
    return a - b > COINCIDENT_TOL


def _rectangle_i(k: GeometryKernel, length: float, width: float, depth: float):
    if not (_exceeds(width, 0) and _exceeds(length, 0)):
        return None
    boundary = k.polyline(
        [
            k.point(0, 0),
            k.point(width, 0),
            k.point(width, length),
            k.point(0, length),
        ],
        close=True,
    )
    return boundary, []


def _l_shape(k: GeometryKernel, length: float, width: float, depth: float):
    if not (_exceeds(depth, 0) and _exceeds(width, depth) and _exceeds(length, depth)):
        return None
    boundary = k.polyline(
        [
            k.point(0, 0),
            k.point(width, 0),
            k.point(width, depth),
            k.point(depth, depth),
            k.point(depth, length),
            k.point(0, length),
        ],
        close=True,
    )
    return boundary, []


def _h_shape(k: GeometryKernel, length: float, width: float, depth: float):
    # The legs below the central bar are (length - depth) / 2 long
    if not (_exceeds(depth, 0) and _exceeds(width, depth * 2) and _exceeds(length, depth + COINCIDENT_TOL)):
        return None
    bar_bottom = (length - depth) / 2
    bar_top = (length + depth) / 2
    boundary = k.polyline(
        [
            k.point(0, 0),
            k.point(depth, 0),
            k.point(depth, bar_bottom),
            k.point(width - depth, bar_bottom),
            k.point(width - depth, 0),
            k.point(width, 0),
            k.point(width, length),
            k.point(width - depth, length),
            k.point(width - depth, bar_top),
            k.point(depth, bar_top),
            k.point(depth, length),
            k.point(0, length),
        ],
        close=True,
    )
    return boundary, []


def _u_shape(k: GeometryKernel, length: float, width: float, depth: float):
    if not (_exceeds(depth, 0) and _exceeds(length, depth) and _exceeds(width, depth * 2)):
        return None

    half = width / 2
    if _exceeds(length, half):
        # Rounded end as circular arcs, legs run straight up to the mouth
        center = k.point(half, half)
        boundary = k.join(
            [
                k.polyline(
                    [
                        k.point(0, half),
                        k.point(0, length),
                        k.point(depth, length),
                        k.point(depth, half),
                    ]
                ),
                k.arc_by_center_start_end(
                    center, k.point(depth, half), k.point(width - depth, half)
                ),
                k.polyline(
                    [
                        k.point(width - depth, half),
                        k.point(width - depth, length),
                        k.point(width, length),
                        k.point(width, half),
                    ]
                ),
                k.arc_by_center_start_end(center, k.point(0, half), k.point(width, half)),
            ]
        )
    else:
        # Short U: half ellipses hanging from the mouth, no straight legs
        center = k.point(half, length)
        boundary = k.join(
            [
                k.line(k.point(width, length), k.point(width - depth, length)),
                k.ellipse_arc(center, half - depth, length - depth, HALF_START, HALF_SWEEP),
                k.line(k.point(depth, length), k.point(0, length)),
                k.ellipse_arc(center, half, length, HALF_START, HALF_SWEEP),
            ]
        )
    return boundary, []


def _d_shape(k: GeometryKernel, length: float, width: float, depth: float):
    if not (_exceeds(depth, 0) and _exceeds(width, depth * 2) and _exceeds(length, depth * 2)):
        return None

    # The rounded end points down (-y) so that it lines up with the U
    half = width / 2
    if _exceeds(length, half + depth):
        center = k.point(half, half)
        boundary = k.join(
            [
                k.polyline(
                    [
                        k.point(width, half),
                        k.point(width, length),
                        k.point(0, length),
                        k.point(0, half),
                    ]
                ),
                k.arc_by_center_start_end(center, k.point(0, half), k.point(width, half)),
            ]
        )
        hole = k.join(
            [
                k.polyline(
                    [
                        k.point(width - depth, half),
                        k.point(width - depth, length - depth),
                        k.point(depth, length - depth),
                        k.point(depth, half),
                    ]
                ),
                k.arc_by_center_start_end(
                    center, k.point(depth, half), k.point(width - depth, half)
                ),
            ]
        )
    else:
        # Short D: half ellipses below the top bar
        spring = length - depth
        center = k.point(half, spring)
        boundary = k.join(
            [
                k.polyline(
                    [
                        k.point(width, spring),
                        k.point(width, length),
                        k.point(0, length),
                        k.point(0, spring),
                    ]
                ),
                k.ellipse_arc(center, half, spring, HALF_START, HALF_SWEEP),
            ]
        )
        hole = k.join(
            [
                k.line(k.point(width - depth, spring), k.point(depth, spring)),
                k.ellipse_arc(center, half - depth, length - 2 * depth, HALF_START, HALF_SWEEP),
            ]
        )
    return boundary, [hole]


def _o_shape(k: GeometryKernel, length: float, width: float, depth: float):
    if not (_exceeds(depth, 0) and _exceeds(width, depth * 2) and _exceeds(length, depth * 2)):
        return None
    center = k.point(width / 2, length / 2)
    boundary = k.ellipse(center, width / 2, length / 2)
    hole = k.ellipse(center, width / 2 - depth, length / 2 - depth)
    return boundary, [hole]


_BUILDERS: dict[Typology, BoundaryFn] = {
    Typology.I: _rectangle_i,
    Typology.L: _l_shape,
    Typology.H: _h_shape,
    Typology.U: _u_shape,
    Typology.D: _d_shape,
    Typology.O: _o_shape,
}


def build_boundary(
    type_code: str | Typology,
    length: float,
    width: float,
    depth: float,
    kernel: GeometryKernel | None = None,
) -> BoundaryResult:
    """Draw the footprint boundary and holes for one typology instance.

    Args:
        type_code: Typology code (I, L, H, U, D or O).
        length: Overall footprint length along local y (meters).
        width: Overall footprint width along local x (meters).
        depth: Wing depth (meters).
        kernel: Geometry kernel; defaults to the planar kernel.

    Returns:
        BoundaryResult with a boundary and 0 or 1 holes, or an infeasible
        result when the code is unknown or the typology's guard fails.
    """
    typology = Typology.lookup(type_code)
    if typology is None:
        logger.debug("Unknown typology code %r, no boundary", type_code)
        return BoundaryResult.infeasible()
    kernel = kernel or default_kernel()

    built = _BUILDERS[typology](kernel, length, width, depth)
    if built is None:
        logger.debug(
            "Typology %s infeasible at length=%s width=%s depth=%s",
            typology.value, length, width, depth,
        )
        return BoundaryResult.infeasible(typology)

    boundary, holes = built
    return BoundaryResult(typology=typology, boundary=boundary, holes=holes)


def make_base_surface(
    type_code: str | Typology,
    length: float,
    width: float,
    depth: float,
    kernel: GeometryKernel | None = None,
) -> KernelSurface | None:
    """Planar footprint surface with holes carved out, or None if infeasible.

    The boundary is passed to the trim together with the holes: trim face
    selection keeps the inside of the outermost loop, so without it the
    trim would keep the courtyard instead of the building.
    """
    kernel = kernel or default_kernel()
    result = build_boundary(type_code, length, width, depth, kernel)
    if not result.feasible:
        return None

    surface = kernel.patch(result.boundary)
    if result.holes:
        surface = kernel.trim_with_loops(surface, [*result.holes, result.boundary])
    return surface
