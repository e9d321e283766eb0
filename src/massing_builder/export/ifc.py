"""IFC export via ifcopenshell.

Writes a generated mass as IFC 2x3: Project → Site → Building → one
storey per floor. Each floor becomes an IfcSlab (footprint profile with
courtyard voids) and the whole mass an IfcBuildingElementProxy, so the
massing can be opened in any BIM tool as a starting envelope.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

import ifcopenshell
import ifcopenshell.guid

from massing_builder.kernel.planar import PlanarSurface
from massing_builder.models.geometry import Plane
from massing_builder.models.results import MassResult

logger = logging.getLogger(__name__)

# Massing is measured in metres, square metres and cubic metres
_SI_UNITS = (
    ("LENGTHUNIT", "METRE"),
    ("AREAUNIT", "SQUARE_METRE"),
    ("VOLUMEUNIT", "CUBIC_METRE"),
    ("PLANEANGLEUNIT", "RADIAN"),
)


def _new_guid() -> str:
    """New 22-character IFC GlobalId."""
    return ifcopenshell.guid.compress(uuid.uuid4().hex)


def _triple(arr) -> tuple[float, float, float]:
    return (float(arr[0]), float(arr[1]), float(arr[2]))


class IFCExporter:
    """Export a MassResult to an IFC file."""

    def __init__(self, result: MassResult, name: str = "Mass", slab_thickness: float = 0.25):
        if result.is_empty:
            raise ValueError("Cannot export an empty mass")
        self.result = result
        self.name = name
        self.slab_thickness = slab_thickness
        self.file = ifcopenshell.file(schema="IFC2X3")
        self._setup_header()
        self._body_context: ifcopenshell.entity_instance | None = None

    def _setup_header(self) -> None:
        """Set IFC file header metadata.

        Uses the 0.8 header API, hence the <0.9 pin in pyproject.toml.
        """
        header = self.file.wrapped_data.header()
        file_name = header.file_name_py()
        file_name.name = f"{self.name}.ifc"
        file_name.author = ("Massing Builder",)
        file_name.organization = ("",)

    def export(self, output_path: str | Path) -> Path:
        """Export the mass to an IFC file. Returns the output path."""
        output_path = Path(output_path)

        ifc_building = self._create_spatial_root()
        storeys = [
            self._export_floor(i, floor, ifc_building)
            for i, floor in enumerate(self.result.floors)
        ]

        # The mass spans all floors; it lives in the ground storey
        proxy = self._create_mass_proxy(self.result.mass.base, self.result.mass.height)
        self._contain(storeys[0], proxy)

        self.file.write(str(output_path))
        logger.info("Wrote IFC with %d storeys to %s", len(storeys), output_path)
        return output_path

    def _create_spatial_root(self) -> ifcopenshell.entity_instance:
        """Project, site and building for the mass. Returns the building."""
        context = self.file.createIfcGeometricRepresentationContext(
            ContextType="Model",
            CoordinateSpaceDimension=3,
            Precision=1e-5,
            WorldCoordinateSystem=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
        )
        self._body_context = self.file.createIfcGeometricRepresentationSubContext(
            ContextIdentifier="Body",
            ContextType="Model",
            ParentContext=context,
            TargetView="MODEL_VIEW",
        )

        units = [
            self.file.createIfcSIUnit(UnitType=unit_type, Name=unit_name)
            for unit_type, unit_name in _SI_UNITS
        ]
        project = self.file.createIfcProject(
            GlobalId=_new_guid(),
            Name=self.name,
            UnitsInContext=self.file.createIfcUnitAssignment(Units=units),
            RepresentationContexts=[context],
        )
        site = self.file.createIfcSite(GlobalId=_new_guid(), Name="Site", CompositionType="ELEMENT")
        building = self.file.createIfcBuilding(
            GlobalId=_new_guid(), Name=self.name, CompositionType="ELEMENT"
        )
        self._aggregate(project, site)
        self._aggregate(site, building)
        return building

    def _aggregate(
        self, parent: ifcopenshell.entity_instance, child: ifcopenshell.entity_instance
    ) -> None:
        self.file.createIfcRelAggregates(
            GlobalId=_new_guid(), RelatingObject=parent, RelatedObjects=[child]
        )

    def _contain(
        self, storey: ifcopenshell.entity_instance, element: ifcopenshell.entity_instance
    ) -> None:
        self.file.createIfcRelContainedInSpatialStructure(
            GlobalId=_new_guid(), RelatingStructure=storey, RelatedElements=[element]
        )

    def _export_floor(
        self,
        index: int,
        floor: PlanarSurface,
        ifc_building: ifcopenshell.entity_instance,
    ) -> ifcopenshell.entity_instance:
        """Export one floor as a storey holding its slab."""
        name = "Ground Floor" if index == 0 else f"Floor {index}"
        ifc_storey = self.file.createIfcBuildingStorey(
            GlobalId=_new_guid(),
            Name=name,
            CompositionType="ELEMENT",
            Elevation=float(floor.plane.origin.z),
        )
        self._aggregate(ifc_building, ifc_storey)

        slab = self.file.createIfcSlab(
            GlobalId=_new_guid(),
            Name=f"{name} Slab",
            ObjectPlacement=self._create_local_placement(floor.plane),
            Representation=self._extrusion(floor, self.slab_thickness),
            PredefinedType="FLOOR",
        )
        self._contain(ifc_storey, slab)
        return ifc_storey

    def _create_mass_proxy(
        self, base: PlanarSurface, height: float
    ) -> ifcopenshell.entity_instance:
        """Create an IfcBuildingElementProxy for the extruded mass."""
        typology = self.result.typology.value if self.result.typology else "?"
        return self.file.createIfcBuildingElementProxy(
            GlobalId=_new_guid(),
            Name=f"{typology} Mass",
            ObjectPlacement=self._create_local_placement(base.plane),
            Representation=self._extrusion(base, height),
        )

    def _profile(self, surface: PlanarSurface) -> ifcopenshell.entity_instance:
        """Footprint profile in the surface's own frame, holes as inner curves."""

        def ring(coords: list[tuple[float, float]]) -> ifcopenshell.entity_instance:
            points = [self.file.createIfcCartesianPoint((float(u), float(v))) for u, v in coords]
            # Close the loop
            points.append(points[0])
            return self.file.createIfcPolyline(Points=points)

        if surface.interiors:
            return self.file.createIfcArbitraryProfileDefWithVoids(
                ProfileType="AREA",
                OuterCurve=ring(surface.exterior),
                InnerCurves=[ring(r) for r in surface.interiors],
            )
        return self.file.createIfcArbitraryClosedProfileDef(
            ProfileType="AREA",
            OuterCurve=ring(surface.exterior),
        )

    def _extrusion(
        self, surface: PlanarSurface, depth: float
    ) -> ifcopenshell.entity_instance:
        """Product shape extruding the surface profile along its normal."""
        solid = self.file.createIfcExtrudedAreaSolid(
            SweptArea=self._profile(surface),
            Position=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            ExtrudedDirection=self.file.createIfcDirection((0.0, 0.0, 1.0)),
            Depth=float(depth),
        )
        shape = self.file.createIfcShapeRepresentation(
            ContextOfItems=self._body_context,
            RepresentationIdentifier="Body",
            RepresentationType="SweptSolid",
            Items=[solid],
        )
        return self.file.createIfcProductDefinitionShape(Representations=[shape])

    def _create_local_placement(self, plane: Plane) -> ifcopenshell.entity_instance:
        """Create an IfcLocalPlacement matching a plane's frame."""
        axis2 = self.file.createIfcAxis2Placement3D(
            Location=self.file.createIfcCartesianPoint(_triple(plane.origin.as_array())),
            Axis=self.file.createIfcDirection(_triple(plane.normal.as_array())),
            RefDirection=self.file.createIfcDirection(_triple(plane.x_axis.as_array())),
        )
        return self.file.createIfcLocalPlacement(RelativePlacement=axis2)


def export_ifc(result: MassResult, output_path: str | Path, name: str = "Mass") -> Path:
    """Convenience wrapper around IFCExporter."""
    return IFCExporter(result, name=name).export(output_path)
