# tm38/concrete.py
# ------------------------------------------------------------
# Concrete stiffness and allowable flexural stress (TM38 Eq 3.1).
#
# What this file provides
# -----------------------
# - elastic_modulus(f_c)                  Ec [MPa]
# - age_factor(days)                      k1
# - fatigue_factor(repetitions)           k2
# - modulus_of_rupture(f_c, days, reps)   fr = 0.456 k1 k2 f_c^0.66 [MPa]
# - allowable_stress(props)               fr + residual prestress [MPa]
# - radius_of_relative_stiffness(Ec, h, k) ℓ [mm]
#
# Units convention
# ----------------
# - Stresses/strengths: MPa
# - Thickness h and ℓ: mm
# - k: MN/m^3  (= 1e-3 N/mm^3, hence the factor 1000 in ℓ)
#
# Invalid input policy
# --------------------
# f_c <= 0 gives an allowable stress of 0.0. Every thickness search then
# reports inadequate, which is the intended fail-safe (no exception).
#
from __future__ import annotations
import logging
from math import log10, sqrt
from typing import Optional

from .models import ConcreteProperties

logger = logging.getLogger(__name__)

POISSON_RATIO = 0.15

# Below this many repetitions the loading is treated as static
STATIC_REPETITIONS = 8000

K2_MIN = 0.75
K2_MAX = 1.0


def elastic_modulus(f_c: float) -> float:
    """Ec = 3320 sqrt(f_c) + 6900  [MPa]; 0.0 for f_c <= 0."""
    if f_c <= 0.0:
        return 0.0
    return 3320.0 * sqrt(f_c) + 6900.0


def age_factor(days: int) -> float:
    """k1: 1.0 for loading at 28 days, 1.1 at 90 days or later."""
    return 1.1 if days >= 90 else 1.0


def fatigue_factor(repetitions: Optional[int]) -> float:
    """
    k2 load-repetition factor.

        n < 8000 : 1.0 (static)
        n >= 8000: 1.5 * (0.73 - 0.0846 * (log10(n) - 3)), clamped to [0.75, 1.0]
        None     : 0.75 (unlimited repetitions)

    Non-increasing in n.
    """
    if repetitions is None:
        return K2_MIN
    if repetitions < STATIC_REPETITIONS:
        return K2_MAX
    k2 = 1.5 * (0.73 - 0.0846 * (log10(repetitions) - 3.0))
    return max(K2_MIN, min(K2_MAX, k2))


def modulus_of_rupture(f_c: float, days: int = 28, repetitions: Optional[int] = 0) -> float:
    """
    Fatigue- and age-adjusted modulus of rupture [MPa] (TM38 Eq 3.1):

        fr = 0.456 * k1 * k2 * f_c^0.66
    """
    if f_c <= 0.0:
        return 0.0
    return 0.456 * age_factor(days) * fatigue_factor(repetitions) * f_c ** 0.66


def allowable_stress(props: ConcreteProperties) -> float:
    """
    Allowable flexural stress [MPa]: fr plus residual prestress for
    post-tensioned slabs. Returns 0.0 when f_c <= 0.
    """
    if props.f_c <= 0.0:
        logger.warning("Invalid concrete strength f_c=%r: allowable stress set to 0", props.f_c)
        return 0.0
    fr = modulus_of_rupture(props.f_c, props.age_days, props.repetitions)
    if props.post_tensioned and props.prestress > 0.0:
        fr += props.prestress
    return fr


def radius_of_relative_stiffness(
    E: float,
    h: float,
    k: float,
    poisson: float = POISSON_RATIO,
) -> float:
    """
    Radius of relative stiffness ℓ [mm] of a plate on an elastic foundation:

        ℓ = (E h^3 / (12 (1 - μ^2) k))^0.25

    with E in MPa, h in mm and k in MN/m^3. Returns 0.0 when any input
    is non-positive.
    """
    if E <= 0.0 or h <= 0.0 or k <= 0.0:
        return 0.0
    numerator = E * h ** 3 * 1000.0
    denominator = 12.0 * (1.0 - poisson ** 2) * k
    return (numerator / denominator) ** 0.25


__all__ = [
    "POISSON_RATIO",
    "STATIC_REPETITIONS",
    "elastic_modulus",
    "age_factor",
    "fatigue_factor",
    "modulus_of_rupture",
    "allowable_stress",
    "radius_of_relative_stiffness",
]
