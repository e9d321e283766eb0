"""Building mass generator.

Stacks a typology footprint into enough floors to reach a target gross
floor area and extrudes it into a solid on a caller-supplied base plane:

1. Build the footprint surface in its local frame (lower-left corner at 0,0)
2. Move it so the footprint center sits on the base plane origin
3. floor_count = ceil(target_area / footprint_area)
4. Thicken one-sided along the plane normal by floor_count * floor_height
5. One floor surface per level, ground floor first
6. Top plane = base plane raised by the total height, for stacking masses

Invalid or infeasible input gives ``MassResult.empty()``. Kernel failures
propagate to the caller.
"""

from __future__ import annotations

import logging
import math

from massing_builder.generators.boundary import make_base_surface
from massing_builder.kernel import GeometryKernel, default_kernel
from massing_builder.models.geometry import Plane, Vector3D
from massing_builder.models.results import MassResult
from massing_builder.models.typology import Typology

logger = logging.getLogger(__name__)

# Relative excess over an integer that is still read as rounding noise
_FLOOR_COUNT_EPS = 1e-12


def floor_count_for(target_area: float, footprint_area: float) -> int:
    """Minimum number of floors whose combined area reaches ``target_area``.

    This is ``ceil(target_area / footprint_area)``, except that a quotient a
    few ulps above a whole number (an exact multiple whose footprint area was
    measured a hair small) does not add a floor.

    >>> floor_count_for(250.0, 100.0)
    3
    >>> floor_count_for(300.0, 100.0)
    3
    """
    if footprint_area <= 0:
        raise ValueError(f"Footprint area must be positive, got {footprint_area}")
    quotient = target_area / footprint_area
    whole = math.floor(quotient)
    if quotient - whole <= _FLOOR_COUNT_EPS * max(1.0, quotient):
        return max(1, whole)
    return max(1, math.ceil(quotient))


def generate_mass(
    type_code: str | Typology,
    base_plane: Plane,
    length: float,
    width: float,
    depth: float,
    target_area: float,
    floor_height: float,
    create_core: bool = False,
    kernel: GeometryKernel | None = None,
) -> MassResult:
    """Generate a building mass reaching ``target_area`` of gross floor area.

    Args:
        type_code: Typology code (I, L, H, U, D or O).
        base_plane: Placement plane; the footprint center lands on its origin.
        length: Overall footprint length (meters).
        width: Overall footprint width (meters).
        depth: Wing depth (meters).
        target_area: Target gross floor area (square meters).
        floor_height: Floor-to-floor height (meters).
        create_core: Accepted for compatibility; core volumes are not
            generated and ``cores`` is always empty.
        kernel: Geometry kernel; defaults to the planar kernel.

    Returns:
        MassResult, or ``MassResult.empty()`` for non-positive inputs,
        unknown typology codes and typologies that cannot be built at these
        dimensions.
    """
    typology = Typology.lookup(type_code)

    if min(length, width, depth, target_area, floor_height) <= 0:
        logger.debug(
            "Non-positive input for %r (length=%s width=%s depth=%s area=%s floor_height=%s)",
            type_code, length, width, depth, target_area, floor_height,
        )
        return MassResult.empty(typology)

    if typology is None:
        logger.debug("Unknown typology code %r, no mass", type_code)
        return MassResult.empty()

    kernel = kernel or default_kernel()
    surface = make_base_surface(typology, length, width, depth, kernel)
    if surface is None:
        return MassResult.empty(typology)

    if create_core:
        logger.debug("Core generation is not implemented; create_core ignored")

    local_center = Plane.world_xy(width / 2, length / 2)
    surface = kernel.transform(surface, local_center, base_plane)

    footprint_area = kernel.surface_area(surface)
    floor_count = floor_count_for(target_area, footprint_area)
    total_height = floor_count * floor_height

    solid = kernel.thicken(surface, total_height, both_sides=False)

    normal = base_plane.normal.as_array()
    floors = [
        kernel.translate(surface, Vector3D.from_array(normal * (i * floor_height)))
        for i in range(floor_count)
    ]

    logger.info(
        "Generated %s mass: %d floors, footprint %.2f m2, height %.2f m",
        typology.value, floor_count, footprint_area, total_height,
    )

    return MassResult(
        floors=floors,
        mass=solid,
        cores=[],
        floor_count=floor_count,
        footprint_area=footprint_area,
        total_floor_area=footprint_area * floor_count,
        total_volume=kernel.solid_volume(solid),
        top_plane=base_plane.offset(total_height),
        typology=typology,
    )
