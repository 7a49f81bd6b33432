# tm38/stresses.py
# ------------------------------------------------------------
# Slab flexural stresses under concentrated loads (TM38 Eqs 3.2, 3.5, 3.6)
# and superposition of adjacent loads via empirical influence curves.
#
# Stress equations (P in N, h/ℓ/b/r in mm, σ in MPa)
# ---------------------------------------------------
#   interior: σ_i = 0.275 (1 + μ) P / h^2 · ln(ℓ / b)
#   edge    : σ_e = 0.529 (1 + 0.54 μ) P / h^2 · ln(ℓ / b)     × 0.85 with load transfer
#   corner  : σ_c = 3 P / h^2 · (1 - (r √2 / ℓ)^0.6)          × 0.70 with load transfer
#
# This constant set follows the TM38 worked examples. It is applied to every
# layout; do not mix it with other published coefficient sets.
#
# Superposition
# -------------
# Each neighbour contributes its own isolated stress scaled by an influence
# fraction read from a (distance/ℓ -> %) table. The sum is factored once:
#
#   σ_design = (σ_base + Σ influence(d/ℓ) · σ_neighbour) × load factor
#
# Degenerate geometry (h, ℓ or radius <= 0) gives 0.0 rather than a math
# domain error; negative closed-form results are clamped to 0.0.
#
from __future__ import annotations
from math import log, sqrt
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .contact import edge_radius, westergaard_b
from .models import (
    AdjacentLoad,
    Direction,
    InfluenceCurve,
    JointType,
    LoadCase,
    LoadPosition,
    NeighbourPosition,
    SlabFactors,
)

N_PER_KN = 1000.0

C_INTERIOR = 0.275
C_EDGE = 0.529
C_CORNER = 3.0


# -----------------------------
# Influence curves (distance / ℓ, % of isolated stress)
# -----------------------------
INFLUENCE_TABLES: Dict[InfluenceCurve, Tuple[Tuple[float, float], ...]] = {
    InfluenceCurve.INTERIOR_RADIAL: (
        (0.0, 100.0), (0.5, 60.0), (1.0, 25.0), (1.5, 5.0), (2.0, -5.0),
        (3.0, -8.0), (4.0, -5.0), (5.0, -2.0), (6.0, 0.0),
    ),
    InfluenceCurve.INTERIOR_TANGENTIAL: (
        (0.0, 100.0), (0.5, 80.0), (1.0, 55.0), (1.5, 35.0), (2.0, 20.0),
        (3.0, 8.0), (4.0, 2.0), (5.0, 0.0), (6.0, 0.0),
    ),
    InfluenceCurve.EDGE_RADIAL: (
        (0.0, 100.0), (0.5, 50.0), (1.0, 20.0), (1.5, 5.0), (2.0, -5.0),
        (3.0, -10.0), (4.0, -8.0), (5.0, -4.0), (6.0, 0.0),
    ),
}


def interpolate(points: Sequence[Tuple[float, float]], x: float) -> float:
    """
    Piecewise-linear interpolation over ascending (x, y) pairs.
    Clamps to the first/last y outside the table.
    """
    if x <= points[0][0]:
        return points[0][1]
    if x >= points[-1][0]:
        return points[-1][1]
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        if x1 <= x <= x2:
            return y1 + (y2 - y1) * (x - x1) / (x2 - x1)
    return points[-1][1]


def influence(distance_over_l: float, curve: InfluenceCurve) -> float:
    """Fraction (not %) of an isolated load's stress felt at distance d/ℓ."""
    return interpolate(INFLUENCE_TABLES[InfluenceCurve(curve)], distance_over_l) / 100.0


def curve_for(neighbour: AdjacentLoad) -> InfluenceCurve:
    """Edge neighbours use the edge-radial curve; interior ones follow direction."""
    if neighbour.position == NeighbourPosition.EDGE:
        return InfluenceCurve.EDGE_RADIAL
    if neighbour.direction == Direction.RADIAL:
        return InfluenceCurve.INTERIOR_RADIAL
    return InfluenceCurve.INTERIOR_TANGENTIAL


# -----------------------------
# Isolated-load stresses
# -----------------------------
def interior_stress(
    P_kN: float,
    h: float,
    l: float,
    b: float,
    poisson: float = 0.15,
) -> float:
    """Unfactored interior stress [MPa] (TM38 Eq 3.2)."""
    if h <= 0 or l <= 0 or b <= 0:
        return 0.0
    P = P_kN * N_PER_KN
    stress = C_INTERIOR * (1.0 + poisson) * P / (h * h) * log(l / b)
    return stress if stress > 0.0 else 0.0


def edge_stress(
    P_kN: float,
    h: float,
    l: float,
    b: float,
    load_transfer: bool,
    poisson: float = 0.15,
    transfer_factor: float = 0.85,
) -> float:
    """Unfactored edge stress [MPa] (TM38 Eq 3.5)."""
    if h <= 0 or l <= 0 or b <= 0:
        return 0.0
    P = P_kN * N_PER_KN
    stress = C_EDGE * (1.0 + 0.54 * poisson) * P / (h * h) * log(l / b)
    if load_transfer:
        stress *= transfer_factor
    return stress if stress > 0.0 else 0.0


def corner_stress(
    P_kN: float,
    h: float,
    l: float,
    r: float,
    load_transfer: bool,
    transfer_factor: float = 0.70,
) -> float:
    """
    Unfactored corner stress [MPa] (TM38 Eq 3.6). Uses the contact radius r
    directly, not the Westergaard b.
    """
    if h <= 0 or l <= 0 or r <= 0:
        return 0.0
    P = P_kN * N_PER_KN
    stress = C_CORNER * P / (h * h) * (1.0 - (r * sqrt(2.0) / l) ** 0.6)
    if load_transfer:
        stress *= transfer_factor
    return stress if stress > 0.0 else 0.0


def isolated_stress(
    position: LoadPosition,
    P_kN: float,
    h: float,
    l: float,
    r_contact: float,
    joint_type: JointType,
    factors: SlabFactors,
) -> float:
    """
    Unfactored stress of a lone load at the given position. Interior uses
    b(r), edge uses b(√2 r), corner uses r.
    """
    transfer = JointType(joint_type).has_load_transfer
    if position == LoadPosition.EDGE:
        b = westergaard_b(edge_radius(r_contact), h)
        return edge_stress(P_kN, h, l, b, transfer, factors.poisson, factors.edge_transfer)
    if position == LoadPosition.CORNER:
        return corner_stress(P_kN, h, l, r_contact, transfer, factors.corner_transfer)
    b = westergaard_b(r_contact, h)
    return interior_stress(P_kN, h, l, b, factors.poisson)


# -----------------------------
# Superposition
# -----------------------------
def neighbour_contribution(
    neighbour: AdjacentLoad,
    primary_load_kN: float,
    h: float,
    l: float,
    r_contact: float,
    joint_type: JointType,
    factors: SlabFactors,
) -> float:
    """
    Stress [MPa, unfactored] added at the primary load point by one neighbour.
    Neighbours at distance <= 0 (or with ℓ <= 0) contribute nothing.
    """
    if neighbour.distance <= 0 or l <= 0:
        return 0.0
    P = primary_load_kN if neighbour.load_kN is None else neighbour.load_kN
    if neighbour.position == NeighbourPosition.EDGE:
        own = isolated_stress(LoadPosition.EDGE, P, h, l, r_contact, joint_type, factors)
    else:
        own = isolated_stress(LoadPosition.INTERIOR, P, h, l, r_contact, joint_type, factors)
    return own * influence(neighbour.distance / l, curve_for(neighbour))


def total_factored_stress(
    case: LoadCase,
    h: float,
    l: float,
    r_contact: float,
    joint_type: JointType,
    factors: Optional[SlabFactors] = None,
) -> float:
    """Design stress [MPa] for a load case at thickness h, neighbours included."""
    f = factors or SlabFactors()
    total = isolated_stress(case.position, case.load_kN, h, l, r_contact, joint_type, f)
    for nb in case.neighbours:
        total += neighbour_contribution(nb, case.load_kN, h, l, r_contact, joint_type, f)
    return total * f.load_factor


# -----------------------------
# Stress distribution (for charts)
# -----------------------------
def stress_distribution(
    P_kN: float,
    h: float,
    l: float,
    r_contact: float,
    joint_type: JointType,
    factors: Optional[SlabFactors] = None,
    n_points: int = 101,
    max_ratio: float = 4.0,
) -> Dict[str, np.ndarray]:
    """
    Unfactored stress felt at distance d from an isolated load, for
    d = 0 .. max_ratio·ℓ.

    Returns arrays keyed "distance" (mm), "interior_radial",
    "interior_tangential" and "edge_radial" (MPa). Empty arrays if ℓ <= 0.
    """
    f = factors or SlabFactors()
    if l <= 0:
        empty = np.array([])
        return {"distance": empty, "interior_radial": empty,
                "interior_tangential": empty, "edge_radial": empty}

    sigma_i = isolated_stress(LoadPosition.INTERIOR, P_kN, h, l, r_contact, joint_type, f)
    sigma_e = isolated_stress(LoadPosition.EDGE, P_kN, h, l, r_contact, joint_type, f)

    d = np.linspace(0.0, max_ratio * l, n_points)
    ratios = d / l
    return {
        "distance": d,
        "interior_radial": np.array([sigma_i * influence(x, InfluenceCurve.INTERIOR_RADIAL) for x in ratios]),
        "interior_tangential": np.array([sigma_i * influence(x, InfluenceCurve.INTERIOR_TANGENTIAL) for x in ratios]),
        "edge_radial": np.array([sigma_e * influence(x, InfluenceCurve.EDGE_RADIAL) for x in ratios]),
    }


__all__ = [
    "INFLUENCE_TABLES",
    "interpolate",
    "influence",
    "curve_for",
    "interior_stress",
    "edge_stress",
    "corner_stress",
    "isolated_stress",
    "neighbour_contribution",
    "total_factored_stress",
    "stress_distribution",
]
