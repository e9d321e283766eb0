"""In-memory planar geometry kernel backed by shapely.

Surfaces are planar regions: a coordinate frame (``Plane``) plus a shapely
polygon expressed in that frame's (u, v) coordinates. Solids are straight
extrusions of such a surface along its normal. This is all the mass
generator needs, and it keeps areas and volumes exact for polygonal
footprints (arcs are sampled at ``MassingSettings.arc_resolution``).
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import numpy as np
from pydantic import BaseModel, ValidationError
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from massing_builder.config import DEFAULT_SETTINGS, MassingSettings
from massing_builder.kernel.base import GeometryKernel, KernelError
from massing_builder.models.geometry import (
    CircularArc,
    Curve,
    EllipseArc,
    LineSegment,
    Plane,
    Point2D,
    Point3D,
    Vector3D,
)

logger = logging.getLogger(__name__)

Coords = list[tuple[float, float]]


class PlanarSurface(BaseModel):
    """Planar region: outer ring and hole rings in ``plane`` coordinates."""

    plane: Plane
    exterior: Coords
    interiors: list[Coords] = []

    @property
    def polygon(self) -> Polygon:
        return Polygon(self.exterior, self.interiors)

    @property
    def area(self) -> float:
        return float(self.polygon.area)

    def world_rings(self) -> list[np.ndarray]:
        """Exterior then interior rings as (n, 3) arrays of world points."""
        rings = [self.exterior, *self.interiors]
        return [np.array([self.plane.to_world(u, v) for u, v in ring]) for ring in rings]

    @classmethod
    def from_polygon(cls, plane: Plane, polygon: Polygon) -> PlanarSurface:
        polygon = orient(polygon, sign=1.0)
        return cls(
            plane=plane,
            exterior=[tuple(c) for c in polygon.exterior.coords[:-1]],
            interiors=[[tuple(c) for c in ring.coords[:-1]] for ring in polygon.interiors],
        )


class ExtrudedSolid(BaseModel):
    """Straight prism: ``base`` swept ``height`` along the base normal."""

    base: PlanarSurface
    height: float

    @property
    def top(self) -> PlanarSurface:
        return self.base.model_copy(update={"plane": self.base.plane.offset(self.height)})


def _reverse_curve(curve: Curve) -> Curve:
    return Curve(segments=[seg.reversed() for seg in reversed(curve.segments)])


class PlanarKernel(GeometryKernel):
    """Geometry kernel for planar footprints and their extrusions."""

    def __init__(self, settings: MassingSettings | None = None):
        self.settings = settings or DEFAULT_SETTINGS

    @property
    def resolution(self) -> int:
        return self.settings.arc_resolution

    @property
    def tolerance(self) -> float:
        return self.settings.join_tolerance

    # -- curves --------------------------------------------------------

    def point(self, x: float, y: float) -> Point2D:
        return Point2D(x=x, y=y)

    def polyline(self, points: Sequence[Point2D], close: bool = False) -> Curve:
        pts = list(points)
        if close:
            pts.append(pts[0])
        if len(pts) < 2:
            raise KernelError("Polyline needs at least two points")
        try:
            return Curve(
                segments=[LineSegment(start=a, end=b) for a, b in zip(pts, pts[1:])]
            )
        except ValidationError as exc:
            raise KernelError(f"Degenerate polyline: {exc}") from exc

    def line(self, start: Point2D, end: Point2D) -> Curve:
        return self.polyline([start, end])

    def arc_by_center_start_end(
        self, center: Point2D, start: Point2D, end: Point2D
    ) -> Curve:
        radius = center.distance_to(start)
        if not math.isclose(radius, center.distance_to(end), rel_tol=1e-9, abs_tol=self.tolerance):
            raise KernelError("Arc start and end are not equidistant from the center")
        a0 = math.degrees(math.atan2(start.y - center.y, start.x - center.x))
        a1 = math.degrees(math.atan2(end.y - center.y, end.x - center.x))
        sweep = (a1 - a0) % 360.0
        if math.isclose(sweep, 0.0, abs_tol=1e-9) or math.isclose(sweep, 360.0, abs_tol=1e-9):
            raise KernelError("Arc start and end points coincide")
        try:
            arc = CircularArc(
                center=center, radius_x=radius, radius_y=radius, start_angle=a0, sweep_angle=sweep
            )
        except ValidationError as exc:
            raise KernelError(f"Degenerate arc: {exc}") from exc
        return Curve(segments=[arc])

    def ellipse_arc(
        self,
        center: Point2D,
        radius_x: float,
        radius_y: float,
        start_angle: float,
        sweep_angle: float,
    ) -> Curve:
        try:
            arc = EllipseArc(
                center=center,
                radius_x=radius_x,
                radius_y=radius_y,
                start_angle=start_angle,
                sweep_angle=sweep_angle,
            )
        except ValidationError as exc:
            raise KernelError(f"Degenerate ellipse arc: {exc}") from exc
        return Curve(segments=[arc])

    def ellipse(self, center: Point2D, radius_x: float, radius_y: float) -> Curve:
        return self.ellipse_arc(center, radius_x, radius_y, 0.0, 360.0)

    def join(self, curves: Sequence[Curve]) -> Curve:
        if not curves:
            raise KernelError("Nothing to join")
        chain = list(curves[0].segments)
        remaining = list(curves[1:])

        def close_to(a: Point2D, b: Point2D) -> bool:
            return a.distance_to(b) <= self.tolerance

        while remaining:
            head, tail = chain[0].start_point, chain[-1].end_point
            for i, piece in enumerate(remaining):
                if close_to(tail, piece.start_point):
                    chain.extend(piece.segments)
                elif close_to(tail, piece.end_point):
                    chain.extend(_reverse_curve(piece).segments)
                elif close_to(head, piece.end_point):
                    chain[:0] = piece.segments
                elif close_to(head, piece.start_point):
                    chain[:0] = _reverse_curve(piece).segments
                else:
                    continue
                del remaining[i]
                break
            else:
                raise KernelError("Curves do not join end-to-end")
        return Curve(segments=chain)

    # -- surfaces and solids -------------------------------------------

    def _region(self, curve: Curve) -> Polygon:
        if curve.start_point.distance_to(curve.end_point) > self.tolerance:
            raise KernelError("Curve is not closed")
        pts = curve.points(self.resolution)
        if len(pts) < 3:
            raise KernelError("Closed curve has fewer than three vertices")
        region = Polygon(pts)
        if not region.is_valid or region.area <= 0:
            raise KernelError("Closed curve self-intersects or encloses no area")
        return region

    def patch(self, boundary: Curve) -> PlanarSurface:
        return PlanarSurface.from_polygon(Plane.world_xy(), self._region(boundary))

    def trim_with_loops(
        self, surface: PlanarSurface, loops: Sequence[Curve]
    ) -> PlanarSurface:
        """Keep the region inside the largest loop, minus the other loops.

        Loops are given in the surface's own (u, v) coordinates. The kept
        face is chosen from the loops alone, so a trim that omits the outer
        boundary keeps the inside of the largest hole instead.
        """
        if not loops:
            raise KernelError("Trim needs at least one loop")
        regions = sorted((self._region(c) for c in loops), key=lambda r: r.area, reverse=True)
        outer, holes = regions[0], regions[1:]
        if not surface.polygon.buffer(self.tolerance).contains(outer):
            raise KernelError("Trim loop lies outside the surface")
        for hole in holes:
            if not outer.contains(hole):
                raise KernelError("Trim loop crosses the outer loop")
        trimmed = Polygon(outer.exterior.coords, [h.exterior.coords for h in holes])
        if not trimmed.is_valid:
            raise KernelError("Trim loops overlap each other")
        logger.debug("Trimmed surface with %d loops, %d holes kept", len(loops), len(holes))
        return PlanarSurface.from_polygon(surface.plane, trimmed)

    def thicken(
        self, surface: PlanarSurface, distance: float, both_sides: bool = False
    ) -> ExtrudedSolid:
        if distance <= 0:
            raise KernelError(f"Thicken distance must be positive, got {distance}")
        base = surface
        if both_sides:
            base = surface.model_copy(update={"plane": surface.plane.offset(-distance / 2)})
        return ExtrudedSolid(base=base, height=distance)

    # -- transforms ----------------------------------------------------

    def transform(self, geometry: Any, source: Plane, target: Plane) -> Any:
        if isinstance(geometry, PlanarSurface):
            return geometry.model_copy(update={"plane": geometry.plane.remap(source, target)})
        if isinstance(geometry, ExtrudedSolid):
            return geometry.model_copy(update={"base": self.transform(geometry.base, source, target)})
        if isinstance(geometry, Plane):
            return geometry.remap(source, target)
        raise KernelError(f"Cannot transform {type(geometry).__name__}")

    def translate(self, geometry: Any, vector: Vector3D) -> Any:
        if isinstance(geometry, PlanarSurface):
            return geometry.model_copy(update={"plane": geometry.plane.translate(vector)})
        if isinstance(geometry, ExtrudedSolid):
            return geometry.model_copy(update={"base": self.translate(geometry.base, vector)})
        if isinstance(geometry, Plane):
            return geometry.translate(vector)
        raise KernelError(f"Cannot translate {type(geometry).__name__}")

    # -- measurement ---------------------------------------------------

    def surface_area(self, surface: PlanarSurface) -> float:
        return surface.area

    def solid_volume(self, solid: ExtrudedSolid) -> float:
        return solid.base.area * solid.height

    def solid_faces(self, solid: ExtrudedSolid) -> list[PlanarSurface]:
        """Bottom, top, then one side face per ring edge."""
        base = solid.base
        plane = base.plane
        # Bottom faces away from the solid: mirror v so the frame flips
        flipped = Plane(
            origin=plane.origin,
            x_axis=plane.x_axis,
            y_axis=Vector3D.from_array(-plane.y_axis.as_array()),
        )
        bottom = PlanarSurface(
            plane=flipped,
            exterior=[(u, -v) for u, v in base.exterior],
            interiors=[[(u, -v) for u, v in ring] for ring in base.interiors],
        )
        faces = [bottom, solid.top]

        up = plane.normal.as_array()
        for ring in [base.exterior, *base.interiors]:
            world = [plane.to_world(u, v) for u, v in ring]
            for a, b in zip(world, world[1:] + world[:1]):
                edge = b - a
                width = float(np.linalg.norm(edge))
                if width <= self.tolerance:
                    continue
                side = Plane(
                    origin=Point3D.from_array(a),
                    x_axis=Vector3D.from_array(edge),
                    y_axis=Vector3D.from_array(up),
                )
                faces.append(
                    PlanarSurface(
                        plane=side,
                        exterior=[(0.0, 0.0), (width, 0.0), (width, solid.height), (0.0, solid.height)],
                    )
                )
        return faces

    def surface_normal(self, surface: PlanarSurface) -> Vector3D:
        return surface.plane.normal
