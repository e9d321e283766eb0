"""Split a mass into its vertical (facade) and horizontal (roof/floor) faces."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from massing_builder.kernel import GeometryKernel, default_kernel

_WORLD_Z = np.array([0.0, 0.0, 1.0])


@dataclass
class FacadeSurfaces:
    """Faces of a mass grouped by orientation."""

    vertical: list[Any] = field(default_factory=list)
    horizontal: list[Any] = field(default_factory=list)


def deconstruct_facade(
    mass: Any | None,
    tolerance: float = 1.0,
    kernel: GeometryKernel | None = None,
) -> FacadeSurfaces:
    """Classify the boundary faces of a mass solid by their normal.

    A face is horizontal when its normal is within ``tolerance`` degrees of
    world Z (up or down) and vertical when within ``tolerance`` of 90°.
    Faces in between are left out of both lists.
    """
    if not 0 <= tolerance < 45:
        raise ValueError(f"Tolerance must be in [0, 45) degrees, got {tolerance}")

    result = FacadeSurfaces()
    if mass is None:
        return result

    kernel = kernel or default_kernel()
    for face in kernel.solid_faces(mass):
        n = kernel.surface_normal(face).as_array()
        cos_angle = float(np.clip(np.dot(n, _WORLD_Z) / np.linalg.norm(n), -1.0, 1.0))
        angle = math.degrees(math.acos(cos_angle))
        if angle <= tolerance or angle >= 180.0 - tolerance:
            result.horizontal.append(face)
        elif abs(angle - 90.0) <= tolerance:
            result.vertical.append(face)
    return result
