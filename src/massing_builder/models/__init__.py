"""Massing data models."""

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
from massing_builder.models.typology import Typology
from massing_builder.models.results import BoundaryResult, MassResult

__all__ = [
    "Point2D",
    "Point3D",
    "Vector3D",
    "Plane",
    "LineSegment",
    "CircularArc",
    "EllipseArc",
    "Curve",
    "Typology",
    "BoundaryResult",
    "MassResult",
]
