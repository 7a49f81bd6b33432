# tm38/subgrade.py
# ------------------------------------------------------------
# Modulus of subgrade reaction k from a ground assessment.
#
# What this file provides
# -----------------------
# - Scala penetrometer reading -> equivalent CBR (power law)
# - CBR -> modulus of subgrade reaction k (two log regressions, TM38 Fig 1.2)
# - Granular sub-base enhancement of k (log regression, TM38 Fig 3.1)
# - subgrade_modulus(ground): both values for a GroundInput
#
# Units convention
# ----------------
# - Scala reading: mm per blow
# - CBR: %
# - k: MN/m^3
# - Sub-base thickness: mm
#
# Invalid input policy
# --------------------
# A non-positive CBR (or an unusable Scala reading) yields k = 0.0. This is
# the "invalid modulus" marker: callers must check it before use. Nothing
# here raises for bad ground data.
#
from __future__ import annotations
import logging
from math import isnan, log
from typing import Tuple, Union

from .models import GroundAssessment, GroundInput

logger = logging.getLogger(__name__)

# CBR above which the steeper regression applies
CBR_BREAKPOINT = 30.0

# Sub-base enhancement is ignored for thinner layers
MIN_SUBBASE_THICKNESS = 100.0  # mm

# Enhanced k is never more than this multiple of the subgrade value
MAX_SUBBASE_ENHANCEMENT = 2.0


def scala_to_cbr(scala: Union[float, str]) -> float:
    """
    Equivalent CBR from a Scala penetrometer reading.

        CBR = 318.15 * s^-1.0788     (s in mm/blow)

    Returns 0.0 for non-positive or unparsable readings.
    """
    try:
        s = float(scala)
    except (TypeError, ValueError):
        logger.warning("Unparsable Scala reading %r, treating CBR as 0", scala)
        return 0.0
    if isnan(s) or s <= 0.0:
        return 0.0
    return 318.15 * s ** -1.0788


def k_from_cbr(cbr: float) -> float:
    """
    Modulus of subgrade reaction k [MN/m^3] from CBR [%].

        CBR < 30 : k = 22.5 ln(CBR) + 1.4305
        CBR >= 30: k = 109.2 ln(CBR) - 293.32

    Returns 0.0 (invalid) when CBR <= 0 or the regression is non-positive.
    """
    if cbr <= 0.0:
        return 0.0
    if cbr < CBR_BREAKPOINT:
        k = 22.5 * log(cbr) + 1.4305
    else:
        k = 109.2 * log(cbr) - 293.32
    return k if k > 0.0 else 0.0


def k_with_subbase(k_subgrade: float, thickness: float) -> float:
    """
    Modulus on top of a granular sub-base of the given thickness [mm].

        k' = t * (0.0612 ln k - 0.1029) + 0.8752 k - 1.453

    The result is bounded to [k, 2k]; layers thinner than 100 mm are ignored.
    """
    if k_subgrade <= 0.0:
        return 0.0
    if thickness < MIN_SUBBASE_THICKNESS:
        return k_subgrade
    k_mod = thickness * (0.0612 * log(k_subgrade) - 0.1029) + 0.8752 * k_subgrade - 1.453
    return min(max(k_mod, k_subgrade), MAX_SUBBASE_ENHANCEMENT * k_subgrade)


def cbr_from_ground(ground: GroundInput) -> float:
    if ground.method == GroundAssessment.SCALA:
        return scala_to_cbr(ground.value)
    return float(ground.value)


def subgrade_modulus(ground: GroundInput) -> Tuple[float, float]:
    """
    Returns (k_subgrade, k_design) in MN/m^3.

    k_design includes the sub-base enhancement when a sub-base is present,
    otherwise it equals k_subgrade. Both are 0.0 for invalid ground input.
    """
    cbr = cbr_from_ground(ground)
    k_sub = k_from_cbr(cbr)
    if k_sub <= 0.0:
        logger.warning("Invalid ground input (%s=%r): subgrade modulus set to 0",
                       ground.method.value, ground.value)
        return 0.0, 0.0

    k_design = k_sub
    if ground.has_subbase:
        k_design = k_with_subbase(k_sub, ground.subbase_thickness)
    logger.debug("CBR=%.2f k_subgrade=%.2f k_design=%.2f", cbr, k_sub, k_design)
    return k_sub, k_design


__all__ = [
    "CBR_BREAKPOINT",
    "MIN_SUBBASE_THICKNESS",
    "MAX_SUBBASE_ENHANCEMENT",
    "scala_to_cbr",
    "k_from_cbr",
    "k_with_subbase",
    "cbr_from_ground",
    "subgrade_modulus",
]
