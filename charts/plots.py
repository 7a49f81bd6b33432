# charts/plots.py
# ------------------------------------------------------------
# Plotting utilities for the TM38 slab calculator.
#
# Design principles
# -----------------
# - Pure matplotlib; caller supplies data (distances, stresses, results).
# - Functions return a matplotlib Figure for UI layers to render
#   (e.g., Streamlit st.pyplot(fig)).
#
# Usage (example in Streamlit)
# ----------------------------
#   from charts.plots import plot_stress_distribution, plot_case_thicknesses
#   dist = stress_distribution(P, h, l, r, joint)
#   st.pyplot(plot_stress_distribution(dist))
#
from __future__ import annotations

from typing import Mapping, Sequence, Union

import matplotlib.pyplot as plt

from tm38.models import CaseResult


Number = Union[int, float]


def _validate_xy(x: Sequence[Number], y: Sequence[Number], name: str = "") -> None:
    if x is None or y is None:
        raise ValueError(f"{name}: x and y must be provided.")
    if len(x) != len(y):
        raise ValueError(f"{name}: x and y must be the same length (got {len(x)} vs {len(y)}).")
    if len(x) < 2:
        raise ValueError(f"{name}: need at least 2 points to plot (got {len(x)}).")


def plot_stress_distribution(
    distribution: Mapping[str, Sequence[Number]],
    *,
    title: str = "Stress distribution around an isolated load",
) -> plt.Figure:
    """
    Two panels: interior (radial + tangential) and edge (radial) stress
    felt at distance d from a load.

    Parameters
    ----------
    distribution : mapping as returned by tm38.stresses.stress_distribution,
                   keys "distance", "interior_radial", "interior_tangential",
                   "edge_radial"
    title        : figure title

    Returns
    -------
    matplotlib.figure.Figure
    """
    d = distribution["distance"]
    for key in ("interior_radial", "interior_tangential", "edge_radial"):
        _validate_xy(d, distribution[key], f"plot_stress_distribution[{key}]")

    fig, (ax_i, ax_e) = plt.subplots(1, 2, figsize=(10, 4), sharey=True)

    ax_i.plot(d, distribution["interior_radial"], linewidth=2, color="red", label="Radial")
    ax_i.plot(d, distribution["interior_tangential"], linewidth=2, color="black", label="Tangential")
    ax_i.set_title("Internal")
    ax_i.set_xlabel("Distance from load (mm)")
    ax_i.set_ylabel("Stress (MPa)")
    ax_i.legend()

    ax_e.plot(d, distribution["edge_radial"], linewidth=2, color="red", label="Radial")
    ax_e.set_title("Edge")
    ax_e.set_xlabel("Distance from load (mm)")
    ax_e.legend()

    for ax in (ax_i, ax_e):
        ax.axhline(0.0, linestyle="--", linewidth=1)
        ax.grid(True, which="both", alpha=0.35)

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_stress_vs_thickness(
    thicknesses_mm: Sequence[Number],
    stresses_MPa: Mapping[str, Sequence[Number]],
    allowable_MPa: float,
    *,
    title: str = "Factored stress vs slab thickness",
) -> plt.Figure:
    """
    One curve per load case plus the allowable stress line.

    Parameters
    ----------
    thicknesses_mm : h values [mm]
    stresses_MPa   : mapping case name -> factored stress at each h
    allowable_MPa  : allowable flexural stress
    """
    if not stresses_MPa:
        raise ValueError("stresses_MPa is empty.")
    for name, series in stresses_MPa.items():
        _validate_xy(thicknesses_mm, series, f"plot_stress_vs_thickness[{name}]")

    fig, ax = plt.subplots()
    for name, series in stresses_MPa.items():
        ax.plot(thicknesses_mm, series, linewidth=2, label=name)
    ax.axhline(allowable_MPa, linestyle="--", linewidth=1, color="black", label="Allowable")

    ax.set_xlabel("Slab thickness h (mm)")
    ax.set_ylabel("Factored stress (MPa)")
    ax.grid(True, which="both", alpha=0.35)
    ax.legend(title="Load case")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_case_thicknesses(
    cases: Mapping[str, CaseResult],
    *,
    governing: str = "",
    title: str = "Required thickness per load case",
) -> plt.Figure:
    """
    Bar chart of required thickness. The governing case is outlined;
    inadequate (exhausted) cases are hatched.
    """
    if not cases:
        raise ValueError("cases is empty.")

    names = list(cases)
    values = [cases[n].thickness for n in names]

    fig, ax = plt.subplots()
    bars = ax.bar(names, values)
    for name, bar in zip(names, bars):
        if not cases[name].adequate:
            bar.set_hatch("//")
        if name == governing:
            bar.set_edgecolor("red")
            bar.set_linewidth(2.5)

    ax.set_ylabel("Thickness (mm)")
    ax.grid(True, axis="y", alpha=0.35)
    ax.set_title(title)
    fig.tight_layout()
    return fig


__all__ = [
    "plot_stress_distribution",
    "plot_stress_vs_thickness",
    "plot_case_thicknesses",
]
