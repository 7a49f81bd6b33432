# tests/test_subgrade.py
# ------------------------------------------------------------
# Ground assessment -> modulus of subgrade reaction.
#
from __future__ import annotations

import math

import pytest

from tm38.models import GroundAssessment, GroundInput
from tm38.subgrade import (
    k_from_cbr,
    k_with_subbase,
    scala_to_cbr,
    subgrade_modulus,
)


def test_cbr_regression_values():
    assert k_from_cbr(10.0) == pytest.approx(53.24, abs=0.01)
    assert k_from_cbr(30.0) == pytest.approx(109.2 * math.log(30.0) - 293.32)
    assert k_from_cbr(1.0) == pytest.approx(1.4305)


def test_invalid_cbr_gives_zero_modulus():
    assert k_from_cbr(0.0) == 0.0
    assert k_from_cbr(-5.0) == 0.0
    assert k_from_cbr(0.5) == 0.0  # regression goes negative


def test_k_increases_with_cbr():
    cbrs = [1, 2, 5, 10, 20, 29.9, 30, 40, 60, 100]
    ks = [k_from_cbr(c) for c in cbrs]
    assert all(a < b for a, b in zip(ks, ks[1:]))


def test_scala_power_law():
    assert scala_to_cbr(1.0) == pytest.approx(318.15)
    assert scala_to_cbr(10.0) == pytest.approx(318.15 * 10.0 ** -1.0788)
    # softer ground (more mm per blow) -> lower CBR
    assert scala_to_cbr(5.0) > scala_to_cbr(20.0)


def test_scala_invalid_readings():
    assert scala_to_cbr(0.0) == 0.0
    assert scala_to_cbr(-3.0) == 0.0
    assert scala_to_cbr("abc") == 0.0
    assert scala_to_cbr("12.5") == pytest.approx(scala_to_cbr(12.5))


def test_subbase_enhancement_value():
    assert k_with_subbase(54.0, 150.0) == pytest.approx(66.99, abs=0.02)


def test_subbase_enhancement_bounds():
    """Enhanced k stays within [k, 2k] and is not applied below 100 mm."""
    for k in (5.0, 15.0, 37.0, 54.0, 82.0, 109.0, 200.0):
        for t in (0.0, 50.0, 99.9):
            assert k_with_subbase(k, t) == k
        for t in (100.0, 150.0, 200.0, 300.0, 500.0, 1000.0):
            k_mod = k_with_subbase(k, t)
            assert k <= k_mod <= 2.0 * k


def test_subbase_enhancement_is_capped():
    assert k_with_subbase(54.0, 500.0) == pytest.approx(108.0)


def test_subgrade_modulus_from_ground_input():
    k_sub, k_design = subgrade_modulus(GroundInput(GroundAssessment.CBR, 10.0))
    assert k_sub == k_design == pytest.approx(53.24, abs=0.01)

    k_sub, k_design = subgrade_modulus(GroundInput(GroundAssessment.CBR, 10.0, True, 150.0))
    assert k_design > k_sub

    # sub-base flag off: thickness ignored
    k_sub, k_design = subgrade_modulus(GroundInput(GroundAssessment.CBR, 10.0, False, 300.0))
    assert k_design == k_sub


def test_subgrade_modulus_from_scala():
    k_sub, _ = subgrade_modulus(GroundInput(GroundAssessment.SCALA, 10.0))
    assert k_sub == pytest.approx(k_from_cbr(scala_to_cbr(10.0)))


def test_subgrade_modulus_invalid_ground():
    assert subgrade_modulus(GroundInput(GroundAssessment.SCALA, -1.0, True, 200.0)) == (0.0, 0.0)
    assert subgrade_modulus(GroundInput(GroundAssessment.CBR, 0.0)) == (0.0, 0.0)
