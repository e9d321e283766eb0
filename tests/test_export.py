"""Tests for IFC export and plan rendering."""

import ifcopenshell
import pytest

from massing_builder.export.ifc import IFCExporter, export_ifc
from massing_builder.export.plan import render_footprint
from massing_builder.generators.boundary import make_base_surface
from massing_builder.generators.mass import generate_mass
from massing_builder.kernel import PlanarKernel
from massing_builder.models import MassResult, Plane


@pytest.fixture
def k() -> PlanarKernel:
    return PlanarKernel()


class TestIFCExport:
    def test_storeys_and_slabs(self, k, tmp_path):
        result = generate_mass("I", Plane.world_xy(), 20.0, 10.0, 2.0, 500.0, 3.0, kernel=k)
        path = export_ifc(result, tmp_path / "mass.ifc")
        assert path.exists()

        f = ifcopenshell.open(str(path))
        assert len(f.by_type("IfcBuildingStorey")) == result.floor_count
        assert len(f.by_type("IfcSlab")) == result.floor_count
        assert len(f.by_type("IfcBuildingElementProxy")) == 1
        elevations = sorted(s.Elevation for s in f.by_type("IfcBuildingStorey"))
        assert elevations == pytest.approx([0.0, 3.0, 6.0])

    def test_courtyard_profile_has_voids(self, k, tmp_path):
        result = generate_mass("O", Plane.world_xy(), 60.0, 40.0, 10.0, 2000.0, 3.0, kernel=k)
        f = ifcopenshell.open(str(export_ifc(result, tmp_path / "o.ifc")))
        profiles = f.by_type("IfcArbitraryProfileDefWithVoids")
        assert len(profiles) == result.floor_count + 1
        assert all(len(p.InnerCurves) == 1 for p in profiles)

    def test_mass_extrusion_depth(self, k, tmp_path):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        f = ifcopenshell.open(str(IFCExporter(result, name="Tower").export(tmp_path / "t.ifc")))
        proxy = f.by_type("IfcBuildingElementProxy")[0]
        solid = proxy.Representation.Representations[0].Items[0]
        assert solid.Depth == pytest.approx(9.0)
        assert f.by_type("IfcProject")[0].Name == "Tower"

    def test_header_names_file(self, k, tmp_path):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        path = IFCExporter(result, name="Tower").export(tmp_path / "t.ifc")
        header = path.read_text().split("ENDSEC;")[0]
        assert "Tower.ifc" in header
        assert "Massing Builder" in header

    def test_spatial_hierarchy(self, k, tmp_path):
        result = generate_mass("L", Plane.world_xy(), 30.0, 20.0, 8.0, 1000.0, 3.0, kernel=k)
        f = ifcopenshell.open(str(export_ifc(result, tmp_path / "l.ifc", name="Block")))
        site = f.by_type("IfcSite")[0]
        building = f.by_type("IfcBuilding")[0]
        assert building.Name == "Block"
        assert building.Decomposes[0].RelatingObject == site
        assert site.Decomposes[0].RelatingObject == f.by_type("IfcProject")[0]
        storeys = f.by_type("IfcBuildingStorey")
        assert all(s.Decomposes[0].RelatingObject == building for s in storeys)

    def test_si_units(self, k, tmp_path):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        f = ifcopenshell.open(str(export_ifc(result, tmp_path / "u.ifc")))
        names = {u.UnitType: u.Name for u in f.by_type("IfcSIUnit")}
        assert names["LENGTHUNIT"] == "METRE"
        assert names["VOLUMEUNIT"] == "CUBIC_METRE"

    def test_global_ids_unique(self, k, tmp_path):
        result = generate_mass("O", Plane.world_xy(), 60.0, 40.0, 10.0, 2000.0, 3.0, kernel=k)
        f = ifcopenshell.open(str(export_ifc(result, tmp_path / "g.ifc")))
        ids = [e.GlobalId for e in f.by_type("IfcRoot")]
        assert all(len(i) == 22 for i in ids)
        assert len(set(ids)) == len(ids)

    def test_empty_result_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            IFCExporter(MassResult.empty())


class TestRenderFootprint:
    @pytest.mark.parametrize("code", ["I", "U", "D"])
    def test_writes_png(self, k, tmp_path, code):
        surface = make_base_surface(code, 50.0, 40.0, 10.0, k)
        path = render_footprint(surface, tmp_path / f"{code}.png", title=code)
        assert path.exists()
        assert path.read_bytes()[:4] == b"\x89PNG"
