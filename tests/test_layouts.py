# tests/test_layouts.py
# ------------------------------------------------------------
# Layout geometry -> load cases and adjacent loads.
#
from __future__ import annotations

import math

import pytest

from tm38.models import (
    BackToBackRackLayout, ContactFootprint, ContactShape, LoadPosition,
    NeighbourPosition, PointLoadLayout, SingleRackLayout, WheelLayout,
)
from tm38.contact import wheel_contact_radius
from tm38.layouts import (
    back_to_back_cases,
    contact_radius_for,
    load_cases_for,
    point_load_cases,
    single_rack_cases,
    wheel_cases,
)

INT = NeighbourPosition.INTERIOR
EDGE = NeighbourPosition.EDGE


def _by_name(cases):
    return {c.name: c for c in cases}


def _geometry(case):
    return [(nb.distance, nb.position) for nb in case.neighbours]


def test_point_load_has_no_neighbours():
    cases = point_load_cases(PointLoadLayout(load_kN=80.0))
    assert [c.position for c in cases] == [LoadPosition.INTERIOR, LoadPosition.EDGE, LoadPosition.CORNER]
    assert all(c.load_kN == 80.0 and c.neighbours == () for c in cases)


def test_single_rack_neighbours():
    cases = _by_name(single_rack_cases(SingleRackLayout(x=900.0, y=2500.0, load_kN=70.0)))
    assert list(cases) == ["interior", "edge", "corner"]
    assert _geometry(cases["interior"]) == [(900.0, INT), (2500.0, INT), (2500.0, INT)]
    assert _geometry(cases["edge"]) == [(2500.0, EDGE), (2500.0, EDGE)]
    assert _geometry(cases["corner"]) == [(900.0, EDGE), (2500.0, EDGE), (math.hypot(900.0, 2500.0), INT)]
    assert all(c.load_kN == 70.0 for c in cases.values())


def test_back_to_back_neighbours():
    layout = BackToBackRackLayout(x=800.0, y=2700.0, z=300.0, plate_a=150.0)
    cases = _by_name(back_to_back_cases(layout))
    assert list(cases) == ["interior", "edge_long", "edge_short", "corner"]
    zc = 450.0
    assert _geometry(cases["interior"]) == [(800.0, INT), (2700.0, INT), (2700.0, INT), (zc, INT)]
    assert _geometry(cases["edge_long"]) == [(2700.0, EDGE), (2700.0, EDGE), (800.0, INT)]
    assert _geometry(cases["edge_short"]) == [(800.0, EDGE), (zc, EDGE), (2700.0, INT)]
    assert cases["edge_long"].position == cases["edge_short"].position == LoadPosition.EDGE


def test_wheel_load_is_half_axle():
    cases = _by_name(wheel_cases(WheelLayout(axle_load_kN=300.0, wheel_spacing=1800.0)))
    assert list(cases) == ["interior", "edge_perpendicular", "edge_parallel", "corner"]
    assert all(c.load_kN == 150.0 for c in cases.values())
    assert _geometry(cases["interior"]) == [(1800.0, INT)]
    assert _geometry(cases["edge_perpendicular"]) == [(1800.0, INT)]
    assert _geometry(cases["edge_parallel"]) == [(1800.0, EDGE)]
    assert _geometry(cases["corner"]) == [(1800.0, EDGE)]


def test_neighbours_share_primary_load():
    for layout in (SingleRackLayout(), BackToBackRackLayout(), WheelLayout()):
        for case in load_cases_for(layout):
            assert all(nb.load_kN is None for nb in case.neighbours)


def test_invalid_geometry_raises():
    with pytest.raises(ValueError):
        single_rack_cases(SingleRackLayout(x=0.0))
    with pytest.raises(ValueError):
        single_rack_cases(SingleRackLayout(load_kN=-1.0))
    with pytest.raises(ValueError):
        back_to_back_cases(BackToBackRackLayout(z=-10.0))
    with pytest.raises(ValueError):
        wheel_cases(WheelLayout(wheel_spacing=0.0))
    with pytest.raises(ValueError):
        wheel_cases(WheelLayout(axle_load_kN=0.0))
    with pytest.raises(ValueError):
        point_load_cases(PointLoadLayout(load_kN=0.0))


def test_back_to_back_zero_gap_allowed():
    cases = _by_name(back_to_back_cases(BackToBackRackLayout(z=0.0, plate_a=125.0)))
    assert cases["interior"].neighbours[-1].distance == 125.0


def test_dispatch():
    assert [c.name for c in load_cases_for(PointLoadLayout())] == ["interior", "edge", "corner"]
    assert len(load_cases_for(BackToBackRackLayout())) == 4
    with pytest.raises(ValueError):
        load_cases_for(object())
    with pytest.raises(ValueError):
        contact_radius_for("rack")


def test_contact_radius_for_each_layout():
    point = PointLoadLayout(footprint=ContactFootprint(ContactShape.CIRCULAR, 200.0))
    assert contact_radius_for(point) == 100.0

    rack = SingleRackLayout(plate_a=100.0, plate_b=150.0)
    assert contact_radius_for(rack) == pytest.approx(math.sqrt(15000.0 / math.pi))
    assert contact_radius_for(BackToBackRackLayout(plate_a=100.0, plate_b=150.0)) == pytest.approx(
        contact_radius_for(rack)
    )

    wheel = WheelLayout(axle_load_kN=400.0, tyre_pressure_kPa=800.0, dual=True, dual_spacing=250.0)
    assert contact_radius_for(wheel) == pytest.approx(
        wheel_contact_radius(200.0, 800.0, dual=True, dual_spacing=250.0)
    )
