# tm38/models.py
# ------------------------------------------------------------
# Core data models for the TM38 slab thickness calculator.
# This file contains NO imports from other local modules
# to avoid circular-import issues.
#
# Units convention (consistent across the codebase):
# - Lengths: millimetres (mm)
# - Loads at the input boundary: kN (converted to N inside stresses.py)
# - Stresses/Strengths: MPa (i.e., N/mm^2)
# - Modulus of subgrade reaction k: MN/m^3
# - Tyre pressure: kPa
#
# Notes:
# - Input records are frozen: every calculation run takes a fresh snapshot
#   and produces a fresh result, nothing is cached between runs.
# - Result containers are plain mutable dataclasses filled in by design.py.
#
# This file is purely data containers + tiny helpers.
# All calculations live in subgrade.py / concrete.py / contact.py /
# stresses.py / solver.py / design.py.

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


# -----------------------------
# Enumerations
# -----------------------------
class GroundAssessment(str, Enum):
    CBR = "CBR"
    SCALA = "Scala"    # Scala penetrometer, mm per blow


class JointType(str, Enum):
    DOWEL = "Dowel Joints"
    TIED = "Tied Joints"
    NONE = "No Load Transfer"

    @property
    def has_load_transfer(self) -> bool:
        return self is not JointType.NONE


class ContactShape(str, Enum):
    CIRCULAR = "circular"
    SQUARE = "square"
    RECTANGULAR = "rectangular"


class LoadPosition(str, Enum):
    """Position of the primary load relative to the slab boundary."""
    INTERIOR = "interior"
    EDGE = "edge"
    CORNER = "corner"


class NeighbourPosition(str, Enum):
    """Which baseline equation an adjacent load is evaluated with."""
    INTERIOR = "interior"
    EDGE = "edge"


class Direction(str, Enum):
    """Direction of measurement relative to the line joining two loads."""
    RADIAL = "radial"
    TANGENTIAL = "tangential"


class InfluenceCurve(str, Enum):
    INTERIOR_RADIAL = "interior-radial"
    INTERIOR_TANGENTIAL = "interior-tangential"
    EDGE_RADIAL = "edge-radial"


# Load-repetition buckets offered at the input boundary (label -> count).
# None means "unlimited".
REPETITION_BUCKETS: Dict[str, Optional[int]] = {
    "< 8000": 0,
    "10000": 10000,
    "30000": 30000,
    "50000": 50000,
    "100000": 100000,
    "200000": 200000,
    "300000": 300000,
    "400000": 400000,
    "Unlimited": None,
}


def repetitions_from_label(label: str) -> Optional[int]:
    """
    Map a repetition bucket label (e.g. "< 8000", "100000", "Unlimited")
    to a repetition count. Raises ValueError for unknown labels.
    """
    key = (label or "").strip()
    for name, count in REPETITION_BUCKETS.items():
        if key.replace(" ", "").lower() == name.replace(" ", "").lower():
            return count
    raise ValueError(f"Unknown load repetition bucket '{label}'. "
                     f"Expected one of: {', '.join(REPETITION_BUCKETS)}.")


# -----------------------------
# Configuration
# -----------------------------
@dataclass(frozen=True)
class SlabFactors:
    """
    Design factors and thickness-search settings.

    Attributes
    ----------
    poisson         : float
        Poisson's ratio of concrete (TM38 uses 0.15).
    load_factor     : float
        Factor applied to the summed unfactored stress.
    edge_transfer   : float
        Edge stress multiplier when the joint has dowels or ties.
    corner_transfer : float
        Corner stress multiplier when the joint has dowels or ties.
    h_min, h_step, h_max : int
        Thickness search floor, increment and ceiling (mm).
    """
    poisson: float = 0.15
    load_factor: float = 1.5
    edge_transfer: float = 0.85
    corner_transfer: float = 0.70
    h_min: int = 100
    h_step: int = 1
    h_max: int = 800


# -----------------------------
# Ground & concrete inputs
# -----------------------------
@dataclass(frozen=True)
class GroundInput:
    """
    Ground assessment and granular sub-base.

    value is a CBR (%) when method is CBR, or a Scala penetrometer
    reading (mm/blow) when method is SCALA.
    """
    method: GroundAssessment = GroundAssessment.CBR
    value: float = 10.0
    has_subbase: bool = False
    subbase_thickness: float = 0.0   # mm


@dataclass(frozen=True)
class ConcreteProperties:
    """
    Concrete properties at the time of loading.

    Attributes
    ----------
    f_c            : compressive strength (MPa).
    age_days       : 28 or 90 (age at load application).
    repetitions    : cumulative load repetitions; None = unlimited.
    post_tensioned : whether residual prestress may be added to capacity.
    prestress      : residual prestress (MPa), used only if post_tensioned.
    """
    f_c: float = 32.0
    age_days: int = 28
    repetitions: Optional[int] = 0
    post_tensioned: bool = False
    prestress: float = 0.0


# -----------------------------
# Contact footprint & load cases
# -----------------------------
@dataclass(frozen=True)
class ContactFootprint:
    """Loaded area under a baseplate. dim2 is ignored for circular pads."""
    shape: ContactShape = ContactShape.SQUARE
    dim1: float = 100.0   # diameter or side a (mm)
    dim2: float = 100.0   # side b (mm)


@dataclass(frozen=True)
class AdjacentLoad:
    """
    A neighbouring load point whose stress field adds to the primary load.

    load_kN of None means the neighbour carries the same load as the
    primary point (rack legs, wheel pairs).
    """
    distance: float                 # mm, centre to centre
    position: NeighbourPosition = NeighbourPosition.INTERIOR
    direction: Direction = Direction.TANGENTIAL
    load_kN: Optional[float] = None


@dataclass(frozen=True)
class LoadCase:
    name: str
    position: LoadPosition
    load_kN: float
    neighbours: Tuple[AdjacentLoad, ...] = ()


# -----------------------------
# Layouts (position-specific geometry blocks)
# -----------------------------
@dataclass(frozen=True)
class PointLoadLayout:
    """Single isolated point load on a baseplate."""
    load_kN: float = 200.0
    footprint: ContactFootprint = field(default_factory=lambda: ContactFootprint(
        shape=ContactShape.CIRCULAR, dim1=125.0, dim2=125.0
    ))


@dataclass(frozen=True)
class SingleRackLayout:
    """
    Single line of racking.

    x : short leg spacing (mm), y : long leg spacing (mm),
    plate_a x plate_b : baseplate (mm), load_kN : unfactored leg load.
    """
    x: float = 800.0
    y: float = 2700.0
    load_kN: float = 60.0
    plate_a: float = 125.0
    plate_b: float = 125.0


@dataclass(frozen=True)
class BackToBackRackLayout:
    """Back-to-back racking; z is the clear gap between adjacent legs (mm)."""
    x: float = 800.0
    y: float = 2700.0
    z: float = 500.0
    load_kN: float = 60.0
    plate_a: float = 125.0
    plate_b: float = 125.0


@dataclass(frozen=True)
class WheelLayout:
    """
    Axle with one wheel (single or dual tyres) at each end.

    wheel_spacing : centre-to-centre distance between wheels (mm)
    dual_spacing  : clear spacing between the two tyres of a dual wheel (mm)
    """
    axle_load_kN: float = 400.0
    wheel_spacing: float = 2000.0
    tyre_pressure_kPa: float = 700.0
    dual: bool = False
    dual_spacing: float = 300.0

    @property
    def wheel_load_kN(self) -> float:
        return self.axle_load_kN / 2.0


Layout = Union[PointLoadLayout, SingleRackLayout, BackToBackRackLayout, WheelLayout]


# -----------------------------
# Design input
# -----------------------------
@dataclass(frozen=True)
class DesignInput:
    """
    Everything one calculator run needs: the shared inputs (ground,
    concrete, joints, factors) plus one layout block.
    """
    ground: GroundInput = field(default_factory=GroundInput)
    concrete: ConcreteProperties = field(default_factory=ConcreteProperties)
    joint_type: JointType = JointType.DOWEL
    layout: Layout = field(default_factory=SingleRackLayout)
    factors: SlabFactors = field(default_factory=SlabFactors)
    notes: str = ""


# -----------------------------
# Results
# -----------------------------
@dataclass
class CaseResult:
    """
    Outcome of the thickness search for one load case.

    thickness : first adequate thickness (mm), or the search ceiling
                when adequate is False.
    stress    : factored design stress at that thickness (MPa).
    adequate  : False means the search was exhausted; this is a design
                failure and must be reported as such.
    """
    name: str
    position: LoadPosition
    thickness: int
    stress: float
    adequate: bool
    radius_of_stiffness: float = 0.0   # mm, at the reported thickness
    contact_radius: float = 0.0        # mm
    detail: str = ""


@dataclass
class DesignResult:
    """
    Container for all per-case results and the governing outcome.

    cases: mapping from case name -> CaseResult, e.g.:
           {
             "interior": CaseResult(...),
             "edge":     CaseResult(...),
             "corner":   CaseResult(...),
           }
    """
    cases: Dict[str, CaseResult] = field(default_factory=dict)
    k_subgrade: float = 0.0        # MN/m^3, before sub-base enhancement
    k_design: float = 0.0          # MN/m^3, used in the analysis
    allowable_stress: float = 0.0  # MPa
    elastic_modulus: float = 0.0   # MPa
    contact_radius: float = 0.0    # mm
    governing_case: str = ""
    governing_thickness: int = 0
    ok: bool = False
    derived: Dict[str, float] = field(default_factory=dict)

    def summary(self) -> str:
        """One-line human-readable summary."""
        if not self.cases:
            return "No results."
        gc = self.governing_case or "N/A"
        if not self.ok:
            return f"Governing: {gc} → > {self.governing_thickness} mm (NOT OK)"
        return f"Governing: {gc} → {self.governing_thickness} mm (OK)"


@dataclass
class PointLoadCheck:
    """Factored stresses for an isolated point load at a fixed thickness."""
    thickness: float
    allowable_stress: float
    interior: float
    edge: float
    corner: float
    radius_of_stiffness: float
    contact_radius: float

    def utilisation(self) -> Dict[str, float]:
        if self.allowable_stress <= 0:
            return {"interior": float("inf"), "edge": float("inf"), "corner": float("inf")}
        return {
            "interior": self.interior / self.allowable_stress,
            "edge": self.edge / self.allowable_stress,
            "corner": self.corner / self.allowable_stress,
        }


# Friendly export list
__all__ = [
    "GroundAssessment",
    "JointType",
    "ContactShape",
    "LoadPosition",
    "NeighbourPosition",
    "Direction",
    "InfluenceCurve",
    "REPETITION_BUCKETS",
    "repetitions_from_label",
    "SlabFactors",
    "GroundInput",
    "ConcreteProperties",
    "ContactFootprint",
    "AdjacentLoad",
    "LoadCase",
    "PointLoadLayout",
    "SingleRackLayout",
    "BackToBackRackLayout",
    "WheelLayout",
    "Layout",
    "DesignInput",
    "CaseResult",
    "DesignResult",
    "PointLoadCheck",
]
