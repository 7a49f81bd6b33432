# tm38/solver.py
# ------------------------------------------------------------
# Minimum slab thickness search and governing-case selection.
#
# Search
# ------
#   h = h_min, h_min + h_step, ..., h_max   (defaults 100 .. 800 mm, 1 mm step)
#   at each h: ℓ(h) -> factored stress -> compare with allowable
#
#   Adequate : first h with σ_design <= allowable
#   Exhausted: no h up to h_max works; the result carries h_max, the stress
#              there and adequate=False. Never report it as a valid thickness.
#
# The loop is bounded by h_max, so it always terminates.
#
from __future__ import annotations
import logging
from typing import Dict, Mapping, Optional, Tuple

from .concrete import radius_of_relative_stiffness
from .models import CaseResult, JointType, LoadCase, LoadPosition, SlabFactors
from .stresses import total_factored_stress

logger = logging.getLogger(__name__)

# Higher wins a thickness tie
POSITION_PRIORITY: Dict[LoadPosition, int] = {
    LoadPosition.CORNER: 3,
    LoadPosition.EDGE: 2,
    LoadPosition.INTERIOR: 1,
}


def solve(
    case: LoadCase,
    contact_radius: float,
    k: float,
    E: float,
    allowable: float,
    joint_type: JointType,
    factors: Optional[SlabFactors] = None,
) -> CaseResult:
    """
    Find the minimum thickness [mm] for one load case.

    Parameters
    ----------
    case           : load position, load and neighbour list
    contact_radius : equivalent contact radius r [mm]
    k              : modulus of subgrade reaction [MN/m^3]
    E              : concrete elastic modulus [MPa]
    allowable      : allowable flexural stress [MPa]
    joint_type     : decides whether load-transfer reductions apply
    factors        : search bounds, load factor, Poisson's ratio

    Returns
    -------
    CaseResult
    """
    f = factors or SlabFactors()
    if f.h_step <= 0:
        raise ValueError("Thickness search step must be > 0.")
    if f.h_min <= 0 or f.h_min > f.h_max:
        raise ValueError(f"Invalid thickness search range {f.h_min}..{f.h_max} mm.")

    h = f.h_min
    last_h, last_stress, last_l = h, 0.0, 0.0
    while h <= f.h_max:
        l = radius_of_relative_stiffness(E, h, k, f.poisson)
        stress = total_factored_stress(case, h, l, contact_radius, joint_type, f)
        last_h, last_stress, last_l = h, stress, l
        if stress <= allowable and l > 0:
            logger.debug("%s: adequate at h=%d mm (σ=%.3f <= %.3f MPa)",
                         case.name, h, stress, allowable)
            return CaseResult(
                name=case.name,
                position=case.position,
                thickness=int(h),
                stress=stress,
                adequate=True,
                radius_of_stiffness=l,
                contact_radius=contact_radius,
                detail=f"ℓ={l:.1f} mm; r={contact_radius:.1f} mm; {len(case.neighbours)} adjacent load(s)",
            )
        h += f.h_step

    logger.warning("%s: no adequate thickness up to %d mm (σ=%.3f MPa, allowable %.3f MPa)",
                   case.name, last_h, last_stress, allowable)
    return CaseResult(
        name=case.name,
        position=case.position,
        thickness=int(last_h),
        stress=last_stress,
        adequate=False,
        radius_of_stiffness=last_l,
        contact_radius=contact_radius,
        detail=f"Search exhausted at {last_h} mm; re-evaluate the design",
    )


def governing_case(results: Mapping[str, CaseResult]) -> Tuple[str, Optional[CaseResult]]:
    """
    The case needing the greatest thickness. At equal thickness an exhausted
    case beats an adequate one, then corner > edge > interior, then the case
    listed first. Returns ('', None) for no results.
    """
    best_name, best = "", None
    for name, res in results.items():
        if best is None:
            best_name, best = name, res
            continue
        key = (res.thickness, not res.adequate, POSITION_PRIORITY[res.position])
        best_key = (best.thickness, not best.adequate, POSITION_PRIORITY[best.position])
        if key > best_key:
            best_name, best = name, res
    return best_name, best


__all__ = ["POSITION_PRIORITY", "solve", "governing_case"]
