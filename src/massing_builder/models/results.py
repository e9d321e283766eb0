"""Result records returned by the boundary builder and the mass generator.

Curves, surfaces and solids inside these records are owned by whichever
geometry kernel produced them, so they are typed loosely here.
Infeasible or invalid requests are represented as values
(``BoundaryResult.infeasible()``, ``MassResult.empty()``), never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from massing_builder.models.geometry import Plane
from massing_builder.models.typology import Typology


@dataclass
class BoundaryResult:
    """Footprint of one typology instance: boundary curve plus holes."""

    typology: Typology | None = None
    boundary: Any | None = None
    holes: list[Any] = field(default_factory=list)

    @classmethod
    def infeasible(cls, typology: Typology | None = None) -> BoundaryResult:
        """No footprint: unknown typology, or it cannot be built at these dimensions."""
        return cls(typology=typology)

    @property
    def feasible(self) -> bool:
        return self.boundary is not None

    def loops(self) -> list[Any]:
        """Boundary followed by holes; empty when infeasible."""
        if self.boundary is None:
            return []
        return [self.boundary, *self.holes]


@dataclass
class MassResult:
    """A footprint stacked into floors and extruded into a mass."""

    floors: list[Any] = field(default_factory=list)
    mass: Any | None = None
    cores: list[Any] = field(default_factory=list)
    floor_count: int = 0
    footprint_area: float = 0.0
    total_floor_area: float = 0.0
    total_volume: float = 0.0
    top_plane: Plane | None = None
    typology: Typology | None = None

    @classmethod
    def empty(cls, typology: Typology | None = None) -> MassResult:
        """All-empty/zero result for infeasible or invalid input."""
        return cls(typology=typology)

    @property
    def is_empty(self) -> bool:
        return self.mass is None

    def summary(self) -> dict:
        """JSON-ready scalar summary (geometry omitted)."""
        top = None
        if self.top_plane is not None:
            o = self.top_plane.origin
            n = self.top_plane.normal
            top = {"origin": [o.x, o.y, o.z], "normal": [n.x, n.y, n.z]}
        return {
            "typology": self.typology.value if self.typology else None,
            "feasible": not self.is_empty,
            "floor_count": self.floor_count,
            "footprint_area": round(self.footprint_area, 6),
            "total_floor_area": round(self.total_floor_area, 6),
            "total_volume": round(self.total_volume, 6),
            "cores": len(self.cores),
            "top_plane": top,
        }
