# tests/test_concrete.py
# ------------------------------------------------------------
# Concrete modulus, fatigue/age factors and allowable stress.
#
from __future__ import annotations

import math

import pytest

from tm38.models import ConcreteProperties, repetitions_from_label, REPETITION_BUCKETS
from tm38.concrete import (
    age_factor,
    allowable_stress,
    elastic_modulus,
    fatigue_factor,
    modulus_of_rupture,
    radius_of_relative_stiffness,
)


def test_elastic_modulus():
    assert elastic_modulus(32.0) == pytest.approx(3320 * math.sqrt(32.0) + 6900)
    assert elastic_modulus(0.0) == 0.0
    assert elastic_modulus(-10.0) == 0.0


def test_age_factor():
    assert age_factor(28) == 1.0
    assert age_factor(90) == 1.1


def test_fatigue_factor_static_and_unlimited():
    assert fatigue_factor(0) == 1.0
    assert fatigue_factor(7999) == 1.0
    assert fatigue_factor(None) == 0.75
    assert fatigue_factor(10_000_000) == 0.75


def test_fatigue_factor_log_formula():
    assert fatigue_factor(10000) == pytest.approx(1.5 * (0.73 - 0.0846))
    assert fatigue_factor(400000) == pytest.approx(0.7648, abs=1e-3)


def test_fatigue_factor_is_non_increasing():
    """k2 never increases across the repetition buckets."""
    sequence = [0, 8000, 10000, 30000, 50000, 100000, 200000, 300000, 400000, 1_000_000, None]
    k2 = [fatigue_factor(n) for n in sequence]
    assert all(a >= b for a, b in zip(k2, k2[1:]))
    assert all(0.75 <= v <= 1.0 for v in k2)


def test_fatigue_factor_over_bucket_labels():
    k2 = [fatigue_factor(repetitions_from_label(lbl)) for lbl in REPETITION_BUCKETS]
    assert k2[0] == 1.0
    assert k2[-1] == 0.75
    assert all(a >= b for a, b in zip(k2, k2[1:]))


def test_repetitions_from_label():
    assert repetitions_from_label("< 8000") == 0
    assert repetitions_from_label("<8000") == 0
    assert repetitions_from_label("100000") == 100000
    assert repetitions_from_label("unlimited") is None
    with pytest.raises(ValueError):
        repetitions_from_label("12345")


def test_modulus_of_rupture():
    assert modulus_of_rupture(32.0) == pytest.approx(0.456 * 32 ** 0.66)
    assert modulus_of_rupture(32.0, days=90) == pytest.approx(1.1 * 0.456 * 32 ** 0.66)
    assert modulus_of_rupture(32.0, repetitions=400000) < modulus_of_rupture(32.0)
    assert modulus_of_rupture(0.0) == 0.0


def test_allowable_stress_with_prestress():
    base = allowable_stress(ConcreteProperties(f_c=32.0))
    assert base == pytest.approx(4.49, abs=0.01)

    pt = allowable_stress(ConcreteProperties(f_c=32.0, post_tensioned=True, prestress=1.0))
    assert pt == pytest.approx(base + 1.0)

    # prestress ignored unless the slab is post-tensioned
    not_pt = allowable_stress(ConcreteProperties(f_c=32.0, post_tensioned=False, prestress=1.0))
    assert not_pt == pytest.approx(base)


def test_allowable_stress_invalid_strength():
    assert allowable_stress(ConcreteProperties(f_c=0.0, post_tensioned=True, prestress=2.0)) == 0.0
    assert allowable_stress(ConcreteProperties(f_c=-5.0)) == 0.0


def test_radius_of_relative_stiffness():
    E, h, k = elastic_modulus(32.0), 125.0, 53.24
    l = radius_of_relative_stiffness(E, h, k)
    assert l == pytest.approx(532.0, rel=0.01)
    # ℓ^4 · 12 (1 - μ²) k = E h³ · 1000
    assert l ** 4 * 12 * (1 - 0.15 ** 2) * k == pytest.approx(E * h ** 3 * 1000)


def test_radius_of_relative_stiffness_degenerate():
    assert radius_of_relative_stiffness(0.0, 125.0, 50.0) == 0.0
    assert radius_of_relative_stiffness(25000.0, 0.0, 50.0) == 0.0
    assert radius_of_relative_stiffness(25000.0, 125.0, 0.0) == 0.0
