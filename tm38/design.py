# tm38/design.py
# ------------------------------------------------------------
# Orchestration of a slab thickness calculation:
# - Derives k (subgrade + sub-base), Ec and the allowable stress once
# - Builds the load cases for the chosen layout (layouts.py)
# - Runs the thickness search independently for each case (solver.py)
# - Returns a DesignResult with per-case results and the governing case
#
# Dependencies
# ------------
# - imports ONLY from tm38.* modules that do NOT import this file, to avoid
#   circular imports.
#
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Dict, List, Sequence

from .concrete import allowable_stress, elastic_modulus, radius_of_relative_stiffness
from .contact import footprint_radius
from .layouts import contact_radius_for, load_cases_for
from .models import (
    CaseResult,
    DesignInput,
    DesignResult,
    LoadPosition,
    PointLoadCheck,
    PointLoadLayout,
    WheelLayout,
)
from .solver import governing_case, solve
from .stresses import isolated_stress, total_factored_stress
from .subgrade import subgrade_modulus

logger = logging.getLogger(__name__)


# -----------------------------
# Public API: thickness design
# -----------------------------
def run_design(inp: DesignInput) -> DesignResult:
    """
    Master entry point. Solves every load case of inp.layout and picks the
    governing one.

    Conventions:
    - Wheel layouts are analysed on the subgrade modulus without sub-base
      enhancement; all other layouts use the enhanced value.
    - A case that cannot be satisfied up to the search ceiling is kept as an
      inadequate CaseResult; the other cases are still solved.
    - result.ok is True only if every case found an adequate thickness.

    Returns
    -------
    DesignResult
    """
    f = inp.factors
    k_sub, k_design = subgrade_modulus(inp.ground)
    k = k_sub if isinstance(inp.layout, WheelLayout) else k_design

    E = elastic_modulus(inp.concrete.f_c)
    allowable = allowable_stress(inp.concrete)
    r_contact = contact_radius_for(inp.layout)
    cases = load_cases_for(inp.layout)

    logger.info("TM38 run: layout=%s k=%.2f MN/m3 Ec=%.0f MPa allowable=%.3f MPa r=%.1f mm",
                type(inp.layout).__name__, k, E, allowable, r_contact)

    results: Dict[str, CaseResult] = {}
    for case in cases:
        results[case.name] = solve(case, r_contact, k, E, allowable, inp.joint_type, f)

    gov_name, gov = governing_case(results)

    result = DesignResult(
        cases=results,
        k_subgrade=k_sub,
        k_design=k,
        allowable_stress=allowable,
        elastic_modulus=E,
        contact_radius=r_contact,
        derived={
            "k_subgrade": k_sub,
            "k_design": k,
            "E_c": E,
            "allowable_stress": allowable,
            "contact_radius": r_contact,
        },
    )
    result.governing_case = gov_name
    result.governing_thickness = gov.thickness if gov is not None else 0
    result.ok = bool(results) and all(r.adequate for r in results.values())

    logger.info(result.summary())
    return result


# -----------------------------
# Public API: stress check at a given thickness
# -----------------------------
def check_point_load(inp: DesignInput, thickness: float) -> PointLoadCheck:
    """
    Factored interior, edge and corner stresses [MPa] for the isolated load
    of a PointLoadLayout at a fixed slab thickness [mm].

    The allowable stress is taken for static loading (< 8000 repetitions),
    whatever repetitions inp.concrete carries.
    """
    layout = inp.layout
    if not isinstance(layout, PointLoadLayout):
        raise ValueError("check_point_load requires a PointLoadLayout.")
    if thickness <= 0.0:
        raise ValueError("Slab thickness must be > 0.")

    f = inp.factors
    _, k = subgrade_modulus(inp.ground)
    E = elastic_modulus(inp.concrete.f_c)
    fr = allowable_stress(replace(inp.concrete, repetitions=0))
    l = radius_of_relative_stiffness(E, thickness, k, f.poisson)
    r = footprint_radius(layout.footprint)

    sigma = {
        pos: isolated_stress(pos, layout.load_kN, thickness, l, r, inp.joint_type, f) * f.load_factor
        for pos in (LoadPosition.INTERIOR, LoadPosition.EDGE, LoadPosition.CORNER)
    }
    return PointLoadCheck(
        thickness=thickness,
        allowable_stress=fr,
        interior=sigma[LoadPosition.INTERIOR],
        edge=sigma[LoadPosition.EDGE],
        corner=sigma[LoadPosition.CORNER],
        radius_of_stiffness=l,
        contact_radius=r,
    )


def stress_curves(inp: DesignInput, thicknesses: Sequence[float]) -> Dict[str, List[float]]:
    """
    Factored stress [MPa] of every load case of inp.layout at each of the
    given thicknesses. Useful for stress vs thickness charts.
    """
    f = inp.factors
    k_sub, k_design = subgrade_modulus(inp.ground)
    k = k_sub if isinstance(inp.layout, WheelLayout) else k_design
    E = elastic_modulus(inp.concrete.f_c)
    r_contact = contact_radius_for(inp.layout)

    curves: Dict[str, List[float]] = {}
    for case in load_cases_for(inp.layout):
        series = []
        for h in thicknesses:
            l = radius_of_relative_stiffness(E, h, k, f.poisson)
            series.append(total_factored_stress(case, h, l, r_contact, inp.joint_type, f))
        curves[case.name] = series
    return curves


__all__ = ["run_design", "check_point_load", "stress_curves"]
