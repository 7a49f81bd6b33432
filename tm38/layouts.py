# tm38/layouts.py
# ------------------------------------------------------------
# Load layouts -> load cases with their adjacent-load lists.
#
# What this file provides
# -----------------------
# - point_load_cases(layout)        isolated baseplate, no neighbours
# - single_rack_cases(layout)       single line of racking
# - back_to_back_cases(layout)      back-to-back racking
# - wheel_cases(layout)             axle with single or dual wheels
# - load_cases_for(layout)          dispatch on the layout type
# - contact_radius_for(layout)      equivalent contact radius of one footprint
#
# Geometry conventions (all distances mm, centre to centre)
# ---------------------------------------------------------
# - Racks: x = short leg spacing (across the aisle frame),
#          y = long leg spacing (along the beam),
#          z = clear gap between the two frames of a back-to-back pair,
#              so the leg-to-leg centre distance is z + plate_a.
# - Neighbours tagged EDGE also sit on the slab edge/joint and are evaluated
#   with the edge equation and the edge-radial influence curve.
# - Wheels: s = wheel spacing on the axle; each wheel carries half the axle.
#
from __future__ import annotations
from math import hypot
from typing import List

from .contact import equivalent_radius, footprint_radius, wheel_contact_radius
from .models import (
    AdjacentLoad,
    BackToBackRackLayout,
    ContactShape,
    Layout,
    LoadCase,
    LoadPosition,
    NeighbourPosition,
    PointLoadLayout,
    SingleRackLayout,
    WheelLayout,
)

INT = NeighbourPosition.INTERIOR
EDGE = NeighbourPosition.EDGE


def _positive(name: str, value: float) -> None:
    if value <= 0.0:
        raise ValueError(f"{name} must be > 0.")


# -----------------------------
# Point load
# -----------------------------
def point_load_cases(layout: PointLoadLayout) -> List[LoadCase]:
    _positive("Point load", layout.load_kN)
    return [
        LoadCase("interior", LoadPosition.INTERIOR, layout.load_kN),
        LoadCase("edge", LoadPosition.EDGE, layout.load_kN),
        LoadCase("corner", LoadPosition.CORNER, layout.load_kN),
    ]


# -----------------------------
# Single line of racking
# -----------------------------
def single_rack_cases(layout: SingleRackLayout) -> List[LoadCase]:
    """
    interior: leg at x, two legs at y
    edge    : two legs along the edge at y
    corner  : legs at x and y along the two edges, one diagonally inside
    """
    x, y, P = layout.x, layout.y, layout.load_kN
    _positive("Short leg spacing x", x)
    _positive("Long leg spacing y", y)
    _positive("Leg load", P)
    return [
        LoadCase("interior", LoadPosition.INTERIOR, P, (
            AdjacentLoad(x, INT), AdjacentLoad(y, INT), AdjacentLoad(y, INT),
        )),
        LoadCase("edge", LoadPosition.EDGE, P, (
            AdjacentLoad(y, EDGE), AdjacentLoad(y, EDGE),
        )),
        LoadCase("corner", LoadPosition.CORNER, P, (
            AdjacentLoad(x, EDGE), AdjacentLoad(y, EDGE), AdjacentLoad(hypot(x, y), INT),
        )),
    ]


# -----------------------------
# Back-to-back racking
# -----------------------------
def back_to_back_cases(layout: BackToBackRackLayout) -> List[LoadCase]:
    """
    As single_rack_cases plus the leg of the other frame at z + plate_a.
    The edge is checked with the long side (edge_long) and the short side
    (edge_short) of the rack on the joint.
    """
    x, y, P = layout.x, layout.y, layout.load_kN
    _positive("Short leg spacing x", x)
    _positive("Long leg spacing y", y)
    _positive("Leg load", P)
    if layout.z < 0.0:
        raise ValueError("Clear spacing z cannot be negative.")
    zc = layout.z + layout.plate_a
    return [
        LoadCase("interior", LoadPosition.INTERIOR, P, (
            AdjacentLoad(x, INT), AdjacentLoad(y, INT), AdjacentLoad(y, INT), AdjacentLoad(zc, INT),
        )),
        LoadCase("edge_long", LoadPosition.EDGE, P, (
            AdjacentLoad(y, EDGE), AdjacentLoad(y, EDGE), AdjacentLoad(x, INT),
        )),
        LoadCase("edge_short", LoadPosition.EDGE, P, (
            AdjacentLoad(x, EDGE), AdjacentLoad(zc, EDGE), AdjacentLoad(y, INT),
        )),
        LoadCase("corner", LoadPosition.CORNER, P, (
            AdjacentLoad(x, EDGE), AdjacentLoad(y, EDGE), AdjacentLoad(hypot(x, y), INT),
        )),
    ]


# -----------------------------
# Wheels
# -----------------------------
def wheel_cases(layout: WheelLayout) -> List[LoadCase]:
    """
    edge_perpendicular: axle at right angles to the edge (other wheel inside)
    edge_parallel     : axle along the edge (other wheel also on the edge)
    """
    s, P = layout.wheel_spacing, layout.wheel_load_kN
    _positive("Wheel spacing", s)
    _positive("Axle load", layout.axle_load_kN)
    return [
        LoadCase("interior", LoadPosition.INTERIOR, P, (AdjacentLoad(s, INT),)),
        LoadCase("edge_perpendicular", LoadPosition.EDGE, P, (AdjacentLoad(s, INT),)),
        LoadCase("edge_parallel", LoadPosition.EDGE, P, (AdjacentLoad(s, EDGE),)),
        LoadCase("corner", LoadPosition.CORNER, P, (AdjacentLoad(s, EDGE),)),
    ]


# -----------------------------
# Dispatch
# -----------------------------
def load_cases_for(layout: Layout) -> List[LoadCase]:
    if isinstance(layout, PointLoadLayout):
        return point_load_cases(layout)
    if isinstance(layout, SingleRackLayout):
        return single_rack_cases(layout)
    if isinstance(layout, BackToBackRackLayout):
        return back_to_back_cases(layout)
    if isinstance(layout, WheelLayout):
        return wheel_cases(layout)
    raise ValueError(f"Unknown layout type '{type(layout).__name__}'.")


def contact_radius_for(layout: Layout) -> float:
    """Equivalent contact radius [mm] of a single footprint in the layout."""
    if isinstance(layout, PointLoadLayout):
        return footprint_radius(layout.footprint)
    if isinstance(layout, (SingleRackLayout, BackToBackRackLayout)):
        return equivalent_radius(ContactShape.RECTANGULAR, layout.plate_a, layout.plate_b)
    if isinstance(layout, WheelLayout):
        return wheel_contact_radius(
            layout.wheel_load_kN,
            layout.tyre_pressure_kPa,
            dual=layout.dual,
            dual_spacing=layout.dual_spacing,
        )
    raise ValueError(f"Unknown layout type '{type(layout).__name__}'.")


__all__ = [
    "point_load_cases",
    "single_rack_cases",
    "back_to_back_cases",
    "wheel_cases",
    "load_cases_for",
    "contact_radius_for",
]
