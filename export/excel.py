# export/excel.py
# ------------------------------------------------------------
# Excel export utilities for the TM38 slab calculator.
#
# What this file provides
# -----------------------
# - build_input_table(inp)           → pandas.DataFrame of inputs
# - build_results_table(result)      → pandas.DataFrame of per-case results
# - build_derived_table(result)      → pandas.DataFrame of derived values
# - export_to_excel_bytes(inp, res)  → bytes of an .xlsx workbook with:
#       * "Summary" sheet (governing outcome)
#       * "Inputs"  sheet
#       * "Results" sheet (per load case)
#       * "Derived" sheet (k, Ec, allowable stress, contact radius)
#   Optional: a "StressCurves" sheet (h vs factored stress) with a line chart.
#
# Dependencies: pandas, numpy, xlsxwriter (pandas uses it as engine)
#
from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from io import BytesIO
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from tm38.models import DesignInput, DesignResult


# -----------------------------
# Table builders (pandas)
# -----------------------------
def _flatten(prefix: str, obj) -> List[Tuple[str, object]]:
    rows: List[Tuple[str, object]] = []
    for f in fields(obj):
        val = getattr(obj, f.name)
        label = f"{prefix}.{f.name}" if prefix else f.name
        if is_dataclass(val):
            rows.extend(_flatten(label, val))
        elif isinstance(val, Enum):
            rows.append((label, val.value))
        elif val is None:
            rows.append((label, "Unlimited" if f.name == "repetitions" else ""))
        else:
            rows.append((label, val))
    return rows


def build_input_table(inp: DesignInput) -> pd.DataFrame:
    """
    Flatten DesignInput into a tidy two-column table for Excel.
    """
    rows = [("layout type", type(inp.layout).__name__)] + _flatten("", inp)
    return pd.DataFrame({
        "Parameter": [r[0] for r in rows],
        "Value": [r[1] for r in rows],
    })


def build_results_table(result: DesignResult) -> pd.DataFrame:
    """
    Build a per-case results table suitable for Excel.
    """
    rows = []
    for name, cr in result.cases.items():
        util = cr.stress / result.allowable_stress if result.allowable_stress > 0 else np.nan
        rows.append({
            "Case": name,
            "Position": cr.position.value,
            "Thickness (mm)": cr.thickness if cr.adequate else f"> {cr.thickness}",
            "Factored stress (MPa)": cr.stress,
            "Allowable (MPa)": result.allowable_stress,
            "Utilisation": util,
            "Adequate": cr.adequate,
            "Governing": name == result.governing_case,
            "Detail": cr.detail,
        })
    return pd.DataFrame(rows, columns=[
        "Case", "Position", "Thickness (mm)", "Factored stress (MPa)",
        "Allowable (MPa)", "Utilisation", "Adequate", "Governing", "Detail",
    ])


def build_derived_table(result: DesignResult) -> pd.DataFrame:
    """
    Collect derived scalars (subgrade modulus, stiffness, allowable stress).
    """
    d: Dict[str, list] = {
        "Quantity": [
            "Subgrade modulus k (subgrade)",
            "Modulus of subgrade reaction k (design)",
            "Concrete elastic modulus Ec",
            "Allowable flexural stress",
            "Equivalent contact radius r",
        ],
        "Value": [
            result.k_subgrade,
            result.k_design,
            result.elastic_modulus,
            result.allowable_stress,
            result.contact_radius,
        ],
        "Unit": ["MN/m³", "MN/m³", "MPa", "MPa", "mm"],
    }
    return pd.DataFrame(d)


# -----------------------------
# Excel writer
# -----------------------------
def export_to_excel_bytes(
    inp: DesignInput,
    result: DesignResult,
    *,
    stress_curves: Optional[Tuple[Sequence[float], Mapping[str, Sequence[float]]]] = None,
) -> bytes:
    """
    Create an in-memory .xlsx workbook with summary, inputs, results, and derived.
    Optionally include a StressCurves sheet.

    Parameters
    ----------
    inp           : DesignInput
    result        : DesignResult
    stress_curves : optional tuple (h_vals, {case: stresses})

    Returns
    -------
    bytes
        The content of the .xlsx file, ready for download or saving.
    """
    bio = BytesIO()
    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        _write_summary_sheet(writer, inp, result)
        build_input_table(inp).to_excel(writer, sheet_name="Inputs", index=False)
        build_results_table(result).to_excel(writer, sheet_name="Results", index=False)
        build_derived_table(result).to_excel(writer, sheet_name="Derived", index=False)

        if stress_curves is not None:
            h_vals, curves = stress_curves
            _write_stress_curves_sheet(writer, h_vals, curves, result.allowable_stress)

        _autofit_columns(writer, "Inputs")
        _autofit_columns(writer, "Results")
        _autofit_columns(writer, "Derived")

    return bio.getvalue()


# -----------------------------
# Helpers (xlsxwriter formatting)
# -----------------------------
def _write_summary_sheet(
    writer: pd.ExcelWriter,
    inp: DesignInput,
    result: DesignResult,
) -> None:
    ws = writer.book.add_worksheet("Summary")
    writer.sheets["Summary"] = ws

    h1 = writer.book.add_format({"bold": True, "font_size": 14})
    h2 = writer.book.add_format({"bold": True, "font_size": 12})
    lab = writer.book.add_format({"bold": True})
    okf = writer.book.add_format({"bold": True, "font_color": "#007700"})
    nof = writer.book.add_format({"bold": True, "font_color": "#AA0000"})

    ws.write(0, 0, "Ground Floor Slab Design (TM38): Summary", h1)

    ws.write(2, 0, "Layout:", lab)
    ws.write(2, 1, type(inp.layout).__name__)

    ws.write(3, 0, "Governing case:", lab)
    ws.write(3, 1, result.governing_case)

    ws.write(4, 0, "Governing thickness (mm):", lab)
    ws.write_number(4, 1, float(result.governing_thickness))

    ws.write(5, 0, "Overall status:", lab)
    ws.write(5, 1, "OK" if result.ok else "NOT OK: re-evaluate design", okf if result.ok else nof)

    ws.write(7, 0, "Key inputs", h2)
    key_inputs = [
        ("Ground assessment", inp.ground.method.value),
        ("Ground value", inp.ground.value),
        ("Sub-base thickness (mm)", inp.ground.subbase_thickness if inp.ground.has_subbase else 0.0),
        ("f'c (MPa)", inp.concrete.f_c),
        ("Age at loading (days)", inp.concrete.age_days),
        ("Joint type", inp.joint_type.value),
        ("k design (MN/m³)", result.k_design),
        ("Allowable stress (MPa)", result.allowable_stress),
    ]
    row = 8
    for label, val in key_inputs:
        ws.write(row, 0, label)
        if isinstance(val, (int, float)):
            ws.write_number(row, 1, float(val))
        else:
            ws.write(row, 1, str(val))
        row += 1

    ws.write(row + 1, 0, "Per-case results", h2)
    row += 2
    headers = ["Case", "Thickness (mm)", "Factored stress (MPa)", "Adequate", "Detail"]
    for j, h in enumerate(headers):
        ws.write(row, j, h, lab)
    row += 1
    for name, cr in result.cases.items():
        ws.write(row, 0, name, lab if name == result.governing_case else None)
        ws.write_number(row, 1, float(cr.thickness))
        ws.write_number(row, 2, float(cr.stress))
        ws.write(row, 3, "Yes" if cr.adequate else "No", okf if cr.adequate else nof)
        ws.write(row, 4, cr.detail or "")
        row += 1

    ws.set_column(0, 0, 30)
    ws.set_column(1, 2, 20)
    ws.set_column(3, 3, 12)
    ws.set_column(4, 4, 60)


def _write_stress_curves_sheet(
    writer: pd.ExcelWriter,
    h_vals: Sequence[float],
    curves: Mapping[str, Sequence[float]],
    allowable: float,
) -> None:
    """
    Writes a sheet "StressCurves" (h, one column per case, allowable) and a
    line chart.
    """
    data = {"h (mm)": list(h_vals)}
    for name, series in curves.items():
        data[name] = list(series)
    data["Allowable"] = [allowable] * len(data["h (mm)"])
    df = pd.DataFrame(data)
    df.to_excel(writer, sheet_name="StressCurves", index=False)
    ws = writer.sheets["StressCurves"]

    chart = writer.book.add_chart({"type": "line"})
    n = len(df)
    for col in range(1, len(df.columns)):
        chart.add_series({
            "name":       ["StressCurves", 0, col],
            "categories": ["StressCurves", 1, 0, n, 0],
            "values":     ["StressCurves", 1, col, n, col],
            "line":       {"width": 2.25},
        })
    chart.set_title({"name": "Factored stress vs thickness"})
    chart.set_x_axis({"name": "Slab thickness h (mm)"})
    chart.set_y_axis({"name": "Stress (MPa)"})
    chart.set_legend({"position": "bottom"})
    ws.insert_chart(1, len(df.columns) + 1, chart, {"x_scale": 1.3, "y_scale": 1.2})


def _autofit_columns(writer: pd.ExcelWriter, sheet_name: str) -> None:
    """
    Best-effort column widths for a sheet written from a DataFrame.
    """
    ws = writer.sheets.get(sheet_name)
    if ws is None:
        return
    if sheet_name == "Inputs":
        ws.set_column(0, 0, 34)
        ws.set_column(1, 1, 24)
    elif sheet_name == "Results":
        ws.set_column(0, 1, 20)
        ws.set_column(2, 5, 18)
        ws.set_column(6, 7, 12)
        ws.set_column(8, 8, 60)
    elif sheet_name == "Derived":
        ws.set_column(0, 0, 40)
        ws.set_column(1, 1, 18)
        ws.set_column(2, 2, 12)


__all__ = [
    "build_input_table",
    "build_results_table",
    "build_derived_table",
    "export_to_excel_bytes",
]
