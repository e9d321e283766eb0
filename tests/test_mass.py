"""Tests for the building mass generator."""

import logging
import math

import numpy as np
import pytest

from massing_builder.generators.mass import floor_count_for, generate_mass
from massing_builder.kernel import PlanarKernel
from massing_builder.models import MassResult, Plane, Point3D, Typology, Vector3D

ALL_CODES = ["I", "L", "H", "U", "D", "O"]

# Dimensions feasible for every typology
DIMS = dict(length=60.0, width=40.0, depth=10.0)


@pytest.fixture
def k() -> PlanarKernel:
    return PlanarKernel()


def _assert_empty(result: MassResult) -> None:
    assert result.is_empty
    assert result.floors == []
    assert result.mass is None
    assert result.cores == []
    assert result.floor_count == 0
    assert result.total_floor_area == 0.0
    assert result.total_volume == 0.0
    assert result.top_plane is None


class TestFloorCount:
    def test_rounds_up(self):
        assert floor_count_for(250.0, 100.0) == 3

    def test_exact_multiple(self):
        assert floor_count_for(300.0, 100.0) == 3

    def test_float_noise_on_exact_multiple(self):
        assert floor_count_for(0.3, 0.1) == 3

    def test_excess_beyond_rounding_noise_adds_floor(self):
        assert floor_count_for(300.0 * (1 + 1e-10), 100.0) == 4

    def test_footprint_measured_one_ulp_small(self):
        assert floor_count_for(300.0, math.nextafter(100.0, 0.0)) == 3

    def test_small_target_still_one_floor(self):
        assert floor_count_for(1.0, 100.0) == 1

    def test_zero_footprint_raises(self):
        with pytest.raises(ValueError):
            floor_count_for(100.0, 0.0)


class TestGenerateMass:
    def test_rectangle_floor_count(self, k):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        assert result.floor_count == 3
        assert len(result.floors) == 3
        assert result.footprint_area == pytest.approx(100.0)
        assert result.total_floor_area == pytest.approx(300.0)

    def test_exact_multiple_floor_count(self, k):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 300.0, 3.0, kernel=k)
        assert result.floor_count == 3

    def test_floors_stack_along_normal(self, k):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 450.0, 3.5, kernel=k)
        elevations = [f.plane.origin.z for f in result.floors]
        assert elevations == pytest.approx([0.0, 3.5, 7.0, 10.5, 14.0])

    def test_top_plane(self, k):
        base = Plane.world_xy(5.0, 5.0, 2.0)
        result = generate_mass("I", base, 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        assert np.allclose(result.top_plane.origin.as_array(), [5.0, 5.0, 11.0])
        assert np.allclose(result.top_plane.normal.as_array(), [0, 0, 1])

    def test_volume_matches_solid(self, k):
        result = generate_mass("I", Plane.world_xy(), 20.0, 10.0, 2.0, 500.0, 3.0, kernel=k)
        assert result.floor_count == 3
        assert result.total_volume == pytest.approx(200.0 * 3 * 3.0)
        assert result.total_volume == pytest.approx(k.solid_volume(result.mass))

    def test_footprint_centered_on_base_origin(self, k):
        base = Plane.world_xy(100.0, -40.0, 12.0)
        result = generate_mass("L", base, 30.0, 20.0, 8.0, 1000.0, 3.0, kernel=k)
        ground = result.floors[0]
        xs = [p[0] for p in ground.world_rings()[0]]
        ys = [p[1] for p in ground.world_rings()[0]]
        # Bounding box of the footprint is centered on the plane origin
        assert (min(xs) + max(xs)) / 2 == pytest.approx(100.0)
        assert (min(ys) + max(ys)) / 2 == pytest.approx(-40.0)
        assert ground.plane.origin.z == pytest.approx(12.0)

    def test_rotated_base_plane(self, k):
        origin = Point3D(x=1.0, y=2.0, z=3.0)
        base = Plane.by_origin_normal(origin, Vector3D(x=1.0, y=0.0, z=0.0))
        result = generate_mass("I", base, 10.0, 10.0, 2.0, 250.0, 4.0, kernel=k)
        for i, floor in enumerate(result.floors):
            expected = origin.as_array() + np.array([1.0, 0.0, 0.0]) * i * 4.0
            assert np.allclose(floor.plane.to_world(5.0, 5.0), expected)
        assert np.allclose(result.top_plane.origin.as_array(), [13.0, 2.0, 3.0])

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_total_area_is_footprint_times_floors(self, k, code):
        result = generate_mass(code, Plane.world_xy(), target_area=5000.0, floor_height=3.0, kernel=k, **DIMS)
        assert not result.is_empty
        assert result.total_floor_area == pytest.approx(result.footprint_area * result.floor_count)
        assert result.floor_count == math.ceil(5000.0 / result.footprint_area)

    @pytest.mark.parametrize("code", ALL_CODES)
    def test_floors_strictly_increasing(self, k, code):
        result = generate_mass(code, Plane.world_xy(), target_area=5000.0, floor_height=3.0, kernel=k, **DIMS)
        zs = [f.plane.origin.z for f in result.floors]
        assert all(b - a == pytest.approx(3.0) for a, b in zip(zs, zs[1:]))

    @pytest.mark.parametrize("code", ["D", "O"])
    def test_courtyard_area_excluded(self, k, code):
        result = generate_mass(code, Plane.world_xy(), target_area=5000.0, floor_height=3.0, kernel=k, **DIMS)
        assert len(result.floors[0].interiors) == 1

    def test_infeasible_returns_empty(self, k):
        result = generate_mass("H", Plane.world_xy(), 40.0, 16.0, 8.0, 1000.0, 3.0, kernel=k)
        _assert_empty(result)
        assert result.typology is Typology.H

    @pytest.mark.parametrize("code", ALL_CODES)
    @pytest.mark.parametrize(
        "field", ["length", "width", "depth", "target_area", "floor_height"]
    )
    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_non_positive_input_returns_empty(self, k, code, field, value):
        args = dict(DIMS, target_area=5000.0, floor_height=3.0)
        args[field] = value
        _assert_empty(generate_mass(code, Plane.world_xy(), kernel=k, **args))

    def test_create_core_has_no_effect(self, k):
        without = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        with_core = generate_mass(
            "I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, create_core=True, kernel=k
        )
        assert with_core.cores == []
        assert with_core.floor_count == without.floor_count
        assert with_core.total_volume == without.total_volume

    def test_unknown_typology_returns_empty(self, k):
        result = generate_mass("Q", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        _assert_empty(result)
        assert result.typology is None

    def test_unknown_typology_with_invalid_input_returns_empty(self, k):
        _assert_empty(generate_mass("Q", Plane.world_xy(), 0.0, 10.0, 2.0, 250.0, 3.0, kernel=k))

    @pytest.mark.parametrize("code,length", [("U", 20.0 + 5e-7), ("D", 30.0 + 5e-7)])
    def test_just_above_branch_threshold(self, k, code, length):
        result = generate_mass(code, Plane.world_xy(), length, 40.0, 10.0, 2000.0, 3.0, kernel=k)
        assert not result.is_empty
        assert result.total_floor_area >= 2000.0

    def test_default_kernel(self):
        result = generate_mass(Typology.O, Plane.world_xy(), 60.0, 40.0, 10.0, 2000.0, 3.0)
        assert result.floor_count == math.ceil(2000.0 / result.footprint_area)

    def test_logs_generation(self, k, caplog):
        with caplog.at_level(logging.INFO, logger="massing_builder"):
            generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        assert "3 floors" in caplog.text


class TestSummary:
    def test_summary_fields(self, k):
        result = generate_mass("I", Plane.world_xy(), 10.0, 10.0, 2.0, 250.0, 3.0, kernel=k)
        summary = result.summary()
        assert summary["typology"] == "I"
        assert summary["feasible"] is True
        assert summary["floor_count"] == 3
        assert summary["total_floor_area"] == pytest.approx(300.0)
        assert summary["top_plane"]["origin"] == pytest.approx([0.0, 0.0, 9.0])

    def test_empty_summary(self):
        summary = MassResult.empty().summary()
        assert summary["feasible"] is False
        assert summary["top_plane"] is None
        assert summary["typology"] is None
