"""Geometric primitives: points, vectors, planes and planar curves.

Curves are drawn in a footprint's local XY frame. Arcs and ellipses keep
their analytic parameters and are sampled to polylines on demand, so the
same curve can be measured, plotted or exported at any resolution.
"""

from __future__ import annotations

import math
from typing import Annotated, Literal, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

COINCIDENT_TOL = 1e-6


class Point2D(BaseModel):
    """2D point in the XY plane (meters)."""

    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point2D):
            return NotImplemented
        return math.isclose(self.x, other.x, abs_tol=COINCIDENT_TOL) and math.isclose(
            self.y, other.y, abs_tol=COINCIDENT_TOL
        )

    def __hash__(self) -> int:
        return hash((round(self.x, 6), round(self.y, 6)))


class Point3D(BaseModel):
    """3D point (meters)."""

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Point3D:
        return cls(x=float(arr[0]), y=float(arr[1]), z=float(arr[2]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def distance_to(self, other: Point3D) -> float:
        """Euclidean distance to another point."""
        return float(np.linalg.norm(self.as_array() - other.as_array()))


class Vector3D(BaseModel):
    """3D direction vector."""

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vector3D:
        return cls(x=float(arr[0]), y=float(arr[1]), z=float(arr[2]))

    @classmethod
    def z_axis(cls) -> Vector3D:
        return cls(x=0.0, y=0.0, z=1.0)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.as_array()))


class Plane(BaseModel):
    """Oriented coordinate frame: origin plus two in-plane axes.

    Axes are normalized on construction and ``y_axis`` is made orthogonal
    to ``x_axis`` (Gram-Schmidt), so the frame is always orthonormal and
    right-handed. The normal is ``x_axis × y_axis``.
    """

    origin: Point3D = Field(default_factory=lambda: Point3D(x=0.0, y=0.0, z=0.0))
    x_axis: Vector3D = Field(default_factory=lambda: Vector3D(x=1.0, y=0.0, z=0.0))
    y_axis: Vector3D = Field(default_factory=lambda: Vector3D(x=0.0, y=1.0, z=0.0))

    @model_validator(mode="after")
    def orthonormal_axes(self) -> Plane:
        x = self.x_axis.as_array()
        y = self.y_axis.as_array()
        if np.linalg.norm(x) < COINCIDENT_TOL or np.linalg.norm(y) < COINCIDENT_TOL:
            raise ValueError("Plane axes must be non-zero vectors")
        x = x / np.linalg.norm(x)
        y = y - np.dot(y, x) * x
        if np.linalg.norm(y) < COINCIDENT_TOL:
            raise ValueError("Plane axes must not be parallel")
        y = y / np.linalg.norm(y)
        self.x_axis = Vector3D.from_array(x)
        self.y_axis = Vector3D.from_array(y)
        return self

    @classmethod
    def world_xy(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Plane:
        """World XY plane, optionally moved to another origin."""
        return cls(origin=Point3D(x=x, y=y, z=z))

    @classmethod
    def by_origin_normal(cls, origin: Point3D, normal: Vector3D) -> Plane:
        """Plane through ``origin`` facing ``normal``.

        The x axis is the projection of world X (or world Y when the normal
        is parallel to X) onto the plane.
        """
        n = normal.as_array()
        if np.linalg.norm(n) < COINCIDENT_TOL:
            raise ValueError("Plane normal must be a non-zero vector")
        n = n / np.linalg.norm(n)
        ref = np.array([1.0, 0.0, 0.0])
        if abs(np.dot(ref, n)) > 1.0 - 1e-9:
            ref = np.array([0.0, 1.0, 0.0])
        x = ref - np.dot(ref, n) * n
        y = np.cross(n, x)
        return cls(
            origin=origin, x_axis=Vector3D.from_array(x), y_axis=Vector3D.from_array(y)
        )

    @property
    def normal(self) -> Vector3D:
        return Vector3D.from_array(np.cross(self.x_axis.as_array(), self.y_axis.as_array()))

    def basis(self) -> np.ndarray:
        """3x3 matrix whose columns are x axis, y axis and normal."""
        x = self.x_axis.as_array()
        y = self.y_axis.as_array()
        return np.column_stack([x, y, np.cross(x, y)])

    def to_world(self, u: float, v: float, w: float = 0.0) -> np.ndarray:
        """World coordinates of local frame coordinates (u, v, w)."""
        return self.origin.as_array() + self.basis() @ np.array([u, v, w], dtype=float)

    def to_local(self, point: Point3D | np.ndarray) -> np.ndarray:
        """Local frame coordinates (u, v, w) of a world point."""
        p = point.as_array() if isinstance(point, Point3D) else np.asarray(point, dtype=float)
        return self.basis().T @ (p - self.origin.as_array())

    def translate(self, vector: Vector3D | np.ndarray) -> Plane:
        v = vector.as_array() if isinstance(vector, Vector3D) else np.asarray(vector, dtype=float)
        return self.model_copy(
            update={"origin": Point3D.from_array(self.origin.as_array() + v)}
        )

    def offset(self, distance: float) -> Plane:
        """Copy of this plane moved ``distance`` along its normal."""
        return self.translate(self.normal.as_array() * distance)

    def remap(self, source: Plane, target: Plane) -> Plane:
        """Image of this frame under the rigid motion carrying source onto target."""
        rotation = target.basis() @ source.basis().T
        origin = target.to_world(*source.to_local(self.origin))
        return Plane(
            origin=Point3D.from_array(origin),
            x_axis=Vector3D.from_array(rotation @ self.x_axis.as_array()),
            y_axis=Vector3D.from_array(rotation @ self.y_axis.as_array()),
        )

    def is_close(self, other: Plane, tol: float = COINCIDENT_TOL) -> bool:
        return (
            np.allclose(self.origin.as_array(), other.origin.as_array(), atol=tol)
            and np.allclose(self.basis(), other.basis(), atol=tol)
        )


# ---------------------------------------------------------------------------
# Curve segments
# ---------------------------------------------------------------------------


def _arc_steps(sweep_deg: float, resolution: int) -> int:
    return max(2, math.ceil(abs(sweep_deg) / 360.0 * resolution))


class LineSegment(BaseModel):
    """Straight segment between two points."""

    kind: Literal["line"] = "line"
    start: Point2D
    end: Point2D

    @model_validator(mode="after")
    def start_and_end_differ(self) -> LineSegment:
        if self.start == self.end:
            raise ValueError("Line segment start and end points must be different")
        return self

    @property
    def start_point(self) -> Point2D:
        return self.start

    @property
    def end_point(self) -> Point2D:
        return self.end

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def reversed(self) -> LineSegment:
        return LineSegment(start=self.end, end=self.start)

    def sample(self, resolution: int = 128) -> list[tuple[float, float]]:
        return [self.start.as_tuple(), self.end.as_tuple()]


class EllipseArc(BaseModel):
    """Elliptical arc with axes aligned to the local frame.

    Angles are in degrees, counter-clockwise from +x. A negative sweep
    runs clockwise. A circular arc is the special case of equal radii.
    """

    kind: Literal["ellipse_arc"] = "ellipse_arc"
    center: Point2D
    radius_x: float = Field(gt=0)
    radius_y: float = Field(gt=0)
    start_angle: float = 0.0
    sweep_angle: float

    @field_validator("sweep_angle")
    @classmethod
    def sweep_in_range(cls, v: float) -> float:
        if v == 0 or abs(v) > 360.0:
            raise ValueError("Arc sweep must be non-zero and at most 360 degrees")
        return v

    def point_at(self, angle_deg: float) -> Point2D:
        a = math.radians(angle_deg)
        return Point2D(
            x=self.center.x + self.radius_x * math.cos(a),
            y=self.center.y + self.radius_y * math.sin(a),
        )

    @property
    def start_point(self) -> Point2D:
        return self.point_at(self.start_angle)

    @property
    def end_point(self) -> Point2D:
        return self.point_at(self.start_angle + self.sweep_angle)

    def reversed(self) -> EllipseArc:
        return self.model_copy(
            update={
                "start_angle": self.start_angle + self.sweep_angle,
                "sweep_angle": -self.sweep_angle,
            }
        )

    def sample(self, resolution: int = 128) -> list[tuple[float, float]]:
        steps = _arc_steps(self.sweep_angle, resolution)
        angles = np.linspace(self.start_angle, self.start_angle + self.sweep_angle, steps + 1)
        return [self.point_at(float(a)).as_tuple() for a in angles]


class CircularArc(EllipseArc):
    """Circular arc: an ellipse arc with a single radius."""

    kind: Literal["circular_arc"] = "circular_arc"

    @model_validator(mode="after")
    def equal_radii(self) -> CircularArc:
        if not math.isclose(self.radius_x, self.radius_y, rel_tol=1e-9):
            raise ValueError("Circular arc must have equal radii")
        return self

    @property
    def radius(self) -> float:
        return self.radius_x


Segment = Annotated[
    Union[LineSegment, CircularArc, EllipseArc], Field(discriminator="kind")
]


class Curve(BaseModel):
    """Planar curve made of segments joined end-to-end."""

    segments: list[Segment] = Field(min_length=1)

    @property
    def start_point(self) -> Point2D:
        return self.segments[0].start_point

    @property
    def end_point(self) -> Point2D:
        return self.segments[-1].end_point

    @property
    def is_closed(self) -> bool:
        return self.start_point == self.end_point

    def points(self, resolution: int = 128) -> list[tuple[float, float]]:
        """Sampled vertices, consecutive duplicates removed.

        For a closed curve the closing vertex is not repeated.
        """
        pts: list[tuple[float, float]] = []
        for seg in self.segments:
            for p in seg.sample(resolution):
                if pts and math.isclose(pts[-1][0], p[0], abs_tol=COINCIDENT_TOL) and math.isclose(
                    pts[-1][1], p[1], abs_tol=COINCIDENT_TOL
                ):
                    continue
                pts.append(p)
        if self.is_closed and len(pts) > 1:
            pts.pop()
        return pts

    def signed_area(self, resolution: int = 128) -> float:
        """Shoelace area of the sampled curve; positive when counter-clockwise."""
        pts = self.points(resolution)
        n = len(pts)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += pts[i][0] * pts[j][1] - pts[j][0] * pts[i][1]
        return area / 2.0

    def area(self, resolution: int = 128) -> float:
        return abs(self.signed_area(resolution))
