"""Geometry kernel interface.

The boundary builder and mass generator only talk to geometry through this
capability set, so any engine that can build curves, patch and trim planar
surfaces, thicken them into solids, move them between frames and measure
them can back the generator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from massing_builder.models.geometry import Plane, Point2D, Vector3D

# Kernel-owned geometry handles. Each kernel decides what these are.
KernelCurve = Any
KernelSurface = Any
KernelSolid = Any


class KernelError(ValueError):
    """Degenerate or inconsistent geometry passed to a kernel primitive."""


class GeometryKernel(ABC):
    """Primitive construction, transform, trim, thicken and measure operations."""

    # -- curves --------------------------------------------------------

    @abstractmethod
    def point(self, x: float, y: float) -> Point2D:
        """Point in the local drawing frame."""

    @abstractmethod
    def polyline(self, points: Sequence[Point2D], close: bool = False) -> KernelCurve:
        """Polyline through ``points``; ``close`` connects last to first."""

    @abstractmethod
    def line(self, start: Point2D, end: Point2D) -> KernelCurve:
        """Straight line segment."""

    @abstractmethod
    def arc_by_center_start_end(
        self, center: Point2D, start: Point2D, end: Point2D
    ) -> KernelCurve:
        """Circular arc running counter-clockwise from ``start`` to ``end``."""

    @abstractmethod
    def ellipse_arc(
        self,
        center: Point2D,
        radius_x: float,
        radius_y: float,
        start_angle: float,
        sweep_angle: float,
    ) -> KernelCurve:
        """Elliptical arc; angles in degrees from the local +x axis."""

    @abstractmethod
    def ellipse(self, center: Point2D, radius_x: float, radius_y: float) -> KernelCurve:
        """Closed axis-aligned ellipse."""

    @abstractmethod
    def join(self, curves: Sequence[KernelCurve]) -> KernelCurve:
        """Join curves end-to-end into one, reversing pieces as needed."""

    # -- surfaces and solids -------------------------------------------

    @abstractmethod
    def patch(self, boundary: KernelCurve) -> KernelSurface:
        """Planar surface bounded by a closed curve."""

    @abstractmethod
    def trim_with_loops(
        self, surface: KernelSurface, loops: Sequence[KernelCurve]
    ) -> KernelSurface:
        """Trim a surface with closed edge loops."""

    @abstractmethod
    def thicken(
        self, surface: KernelSurface, distance: float, both_sides: bool = False
    ) -> KernelSolid:
        """Solid swept from a planar surface along its normal."""

    # -- transforms ----------------------------------------------------

    @abstractmethod
    def transform(self, geometry: Any, source: Plane, target: Plane) -> Any:
        """Rigidly move geometry so that ``source`` lands on ``target``."""

    @abstractmethod
    def translate(self, geometry: Any, vector: Vector3D) -> Any:
        """Copy of geometry moved by ``vector``."""

    # -- measurement ---------------------------------------------------

    @abstractmethod
    def surface_area(self, surface: KernelSurface) -> float:
        """Area of a surface, holes excluded."""

    @abstractmethod
    def solid_volume(self, solid: KernelSolid) -> float:
        """Enclosed volume of a solid."""

    @abstractmethod
    def solid_faces(self, solid: KernelSolid) -> list[KernelSurface]:
        """Boundary faces of a solid."""

    @abstractmethod
    def surface_normal(self, surface: KernelSurface) -> Vector3D:
        """Unit normal of a planar surface."""
