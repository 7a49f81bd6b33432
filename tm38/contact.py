# tm38/contact.py
# ------------------------------------------------------------
# Contact geometry: loaded area -> equivalent radius.
#
# What this file provides
# -----------------------
# - footprint_radius(footprint)       baseplates (circular/square/rectangular)
# - wheel_contact_radius(...)         tyre footprint from load / pressure,
#                                     single or dual tyres
# - edge_radius(r)                    radius used for edge loading (√2 r)
# - westergaard_b(r, h)               equivalent radius b for the interior
#                                     and edge stress formulas
#
# Units convention
# ----------------
# - Dimensions and radii: mm
# - Loads: kN
# - Tyre pressure: kPa (1 kPa = 1e-3 N/mm^2)
#
from __future__ import annotations
from math import pi, sqrt

from .models import ContactFootprint, ContactShape

# b = r once the loaded radius reaches this multiple of the thickness
WESTERGAARD_THRESHOLD = 1.72


def equivalent_radius(shape: ContactShape, dim1: float, dim2: float = 0.0) -> float:
    """
    Radius of the circle with the same area as the loaded footprint [mm].

        circular           : r = d / 2
        square/rectangular : r = sqrt(a b / π)
    """
    if dim1 <= 0.0:
        raise ValueError("Contact dimension must be > 0.")
    if shape == ContactShape.CIRCULAR:
        return dim1 / 2.0
    if shape == ContactShape.SQUARE:
        return sqrt(dim1 * dim1 / pi)
    if dim2 <= 0.0:
        raise ValueError("Rectangular contact requires both dimensions > 0.")
    return sqrt(dim1 * dim2 / pi)


def footprint_radius(footprint: ContactFootprint) -> float:
    return equivalent_radius(footprint.shape, footprint.dim1, footprint.dim2)


def wheel_contact_radius(
    wheel_load_kN: float,
    tyre_pressure_kPa: float,
    dual: bool = False,
    dual_spacing: float = 0.0,
) -> float:
    """
    Equivalent contact radius [mm] for a wheel.

    Single tyre: contact area A = P / p, r = sqrt(A / π).

    Dual tyres: each tyre carries P / 2 and the pair is replaced by one
    circle (Westergaard dual-wheel equivalence):

        r = sqrt(r_t^2 + 2 tc r_t / π)

    where r_t is the single-tyre radius and tc the clear spacing [mm].
    """
    if wheel_load_kN <= 0.0:
        raise ValueError("Wheel load must be > 0.")
    if tyre_pressure_kPa <= 0.0:
        raise ValueError("Tyre pressure must be > 0.")

    pressure_MPa = tyre_pressure_kPa / 1000.0
    if not dual:
        area = wheel_load_kN * 1000.0 / pressure_MPa  # mm^2
        return sqrt(area / pi)

    if dual_spacing < 0.0:
        raise ValueError("Dual tyre spacing cannot be negative.")
    area_tyre = (wheel_load_kN * 1000.0 / 2.0) / pressure_MPa
    r_tyre = sqrt(area_tyre / pi)
    return sqrt(r_tyre ** 2 + 2.0 * dual_spacing * r_tyre / pi)


def edge_radius(r: float) -> float:
    """Radius for edge loading: a half-circle of the same area, r √2."""
    return r * sqrt(2.0)


def westergaard_b(r: float, h: float) -> float:
    """
    Equivalent contact radius b [mm] used inside ln(ℓ/b):

        b = r                               if r >= 1.72 h
        b = sqrt(1.6 r^2 + h^2) - 0.675 h   otherwise

    Returns 0.0 when r or h is non-positive.
    """
    if r <= 0.0 or h <= 0.0:
        return 0.0
    if r >= WESTERGAARD_THRESHOLD * h:
        return r
    return sqrt(1.6 * r * r + h * h) - 0.675 * h


__all__ = [
    "WESTERGAARD_THRESHOLD",
    "equivalent_radius",
    "footprint_radius",
    "wheel_contact_radius",
    "edge_radius",
    "westergaard_b",
]
