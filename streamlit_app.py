# streamlit_app.py
# ------------------------------------------------------------
# Streamlit UI for the TM38 ground floor slab calculator.
# - Collects the shared inputs (ground, sub-base, concrete, joints)
# - Collects one calculator layout (point / single rack / back-to-back / wheel)
# - Calls tm38.design.run_design() (or check_point_load() for a fixed h)
# - Shows per-case results + governing case, charts, and an .xlsx download
#
# Run:
#   streamlit run streamlit_app.py
#
from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import streamlit as st

# Local imports (no circular refs; tm38/* never imports streamlit_app)
from tm38.models import (
    REPETITION_BUCKETS,
    BackToBackRackLayout,
    ConcreteProperties,
    ContactFootprint,
    ContactShape,
    DesignInput,
    GroundAssessment,
    GroundInput,
    JointType,
    PointLoadLayout,
    SingleRackLayout,
    WheelLayout,
    repetitions_from_label,
)
from tm38.design import check_point_load, run_design, stress_curves
from tm38.stresses import stress_distribution
from tm38.subgrade import subgrade_modulus
from charts.plots import plot_case_thicknesses, plot_stress_distribution, plot_stress_vs_thickness
from export.excel import build_results_table, export_to_excel_bytes

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

CALCULATORS = ["Point Loading", "Rack Loads - Single Line", "Rack Loads - Back-to-Back", "Wheel Loads"]


# -----------------------------
# UI Helpers
# -----------------------------
def _ground_inputs() -> GroundInput:
    method_label = st.selectbox("Ground stiffness method", ["CBR", "Scala Penetrometer"], index=0)
    if method_label == "CBR":
        method = GroundAssessment.CBR
        value = st.number_input("CBR (%)", min_value=0.5, max_value=100.0, value=10.0, step=0.5)
    else:
        method = GroundAssessment.SCALA
        value = st.number_input("Scala (mm/blow)", min_value=0.1, max_value=200.0, value=10.0, step=0.5)
    has_subbase = st.checkbox("Granular sub-base", value=True)
    t_sub = 0.0
    if has_subbase:
        t_sub = st.number_input("Sub-base thickness (mm)", min_value=0.0, max_value=1000.0, value=150.0, step=25.0)
    return GroundInput(method=method, value=float(value), has_subbase=has_subbase, subbase_thickness=float(t_sub))


def _concrete_inputs(repetitions_label: str) -> ConcreteProperties:
    f_c = st.number_input("Compressive strength f'c (MPa)", min_value=10.0, max_value=80.0, value=35.0, step=1.0)
    age = st.radio("Load application time (days)", [28, 90], index=1, horizontal=True)
    pt = st.checkbox("Post-tensioned", value=False)
    prestress = 0.0
    if pt:
        prestress = st.number_input("Residual prestress (MPa)", min_value=0.0, max_value=5.0, value=0.5, step=0.1)
    return ConcreteProperties(
        f_c=float(f_c),
        age_days=int(age),
        repetitions=repetitions_from_label(repetitions_label),
        post_tensioned=pt,
        prestress=float(prestress),
    )


def _joint_select() -> JointType:
    label = st.selectbox("Joint type", [j.value for j in JointType], index=0)
    return JointType(label)


def _layout_inputs(calculator: str):
    if calculator == "Point Loading":
        load = st.number_input("Applied load P (kN)", min_value=1.0, value=200.0, step=5.0)
        shape = ContactShape(st.selectbox("Loaded shape", [s.value for s in ContactShape], index=0))
        d1 = st.number_input("Diameter / side a (mm)", min_value=10.0, value=125.0, step=5.0)
        d2 = d1
        if shape == ContactShape.RECTANGULAR:
            d2 = st.number_input("Side b (mm)", min_value=10.0, value=125.0, step=5.0)
        return PointLoadLayout(load_kN=float(load), footprint=ContactFootprint(shape, float(d1), float(d2)))

    if calculator == "Wheel Loads":
        axle = st.number_input("Axle load (kN)", min_value=1.0, value=400.0, step=10.0)
        s = st.number_input("Wheel spacing s (mm)", min_value=100.0, value=2000.0, step=50.0)
        p = st.number_input("Tyre pressure (kPa)", min_value=100.0, value=700.0, step=50.0)
        dual = st.radio("Wheel type", ["single", "dual"], horizontal=True) == "dual"
        tc = 300.0
        if dual:
            tc = st.number_input("Clear spacing between dual tyres tc (mm)", min_value=0.0, value=300.0, step=10.0)
        return WheelLayout(axle_load_kN=float(axle), wheel_spacing=float(s),
                           tyre_pressure_kPa=float(p), dual=dual, dual_spacing=float(tc))

    x = st.number_input("Short leg spacing x (mm)", min_value=100.0, value=800.0, step=50.0)
    y = st.number_input("Long leg spacing y (mm)", min_value=100.0, value=2700.0, step=50.0)
    z = None
    if calculator == "Rack Loads - Back-to-Back":
        z = st.number_input("Clear spacing between legs z (mm)", min_value=0.0, value=500.0, step=25.0)
    p = st.number_input("Unfactored foot load P (kN)", min_value=1.0, value=60.0, step=5.0)
    a = st.number_input("Base plate a (mm)", min_value=10.0, value=125.0, step=5.0)
    b = st.number_input("Base plate b (mm)", min_value=10.0, value=125.0, step=5.0)
    if z is None:
        return SingleRackLayout(x=float(x), y=float(y), load_kN=float(p), plate_a=float(a), plate_b=float(b))
    return BackToBackRackLayout(x=float(x), y=float(y), z=float(z), load_kN=float(p),
                                plate_a=float(a), plate_b=float(b))


# -----------------------------
# Sidebar inputs
# -----------------------------
st.set_page_config(page_title="Ground Floor Slab Designer (TM38)", layout="wide")
st.title("Concrete Ground Floor Slab Thickness — CCANZ TM38")

with st.sidebar:
    st.header("Ground")
    ground = _ground_inputs()
    k_sub, k_design = subgrade_modulus(ground)
    st.caption(f"k subgrade = {k_sub:.2f} MN/m³, k design = {k_design:.2f} MN/m³")

    st.divider()
    st.header("Concrete & joints")
    reps_label = st.selectbox("No. of load cycles", list(REPETITION_BUCKETS), index=0)
    concrete = _concrete_inputs(reps_label)
    joint = _joint_select()

calculator = st.radio("Calculator", CALCULATORS, horizontal=True)

col_in, col_out = st.columns((1, 2), gap="large")

with col_in:
    st.subheader("Layout")
    layout = _layout_inputs(calculator)
    fixed_h = None
    if calculator == "Point Loading":
        fixed_h = st.number_input("Check at slab thickness h (mm)", min_value=50.0, value=200.0, step=5.0)
    run_calc = st.button("Calculate", type="primary")


# -----------------------------
# Build input object & run
# -----------------------------
inp = DesignInput(ground=ground, concrete=concrete, joint_type=joint, layout=layout, notes=calculator)

if run_calc:
    if k_design <= 0:
        st.error("Invalid ground input: modulus of subgrade reaction is zero.")
    try:
        result = run_design(inp)
    except ValueError as exc:
        st.error(str(exc))
        st.stop()

    with col_out:
        st.subheader("Results — all load positions")
        st.dataframe(build_results_table(result), use_container_width=True)
        st.caption(
            f"k = {result.k_design:.2f} MN/m³, Ec = {result.elastic_modulus:.0f} MPa, "
            f"allowable = {result.allowable_stress:.2f} MPa, r = {result.contact_radius:.1f} mm"
        )

        st.metric(
            label=f"Governing case: {result.governing_case}",
            value=(f"{result.governing_thickness} mm" if result.ok else f"> {result.governing_thickness} mm"),
            delta="OK" if result.ok else "NOT OK",
            delta_color="normal" if result.ok else "inverse",
        )
        if not result.ok:
            st.warning("No adequate thickness found for at least one load case. "
                       "The design requires engineering re-evaluation.")

        st.pyplot(plot_case_thicknesses(result.cases, governing=result.governing_case), clear_figure=True)

        h_vals = np.arange(inp.factors.h_min, inp.factors.h_max + 1, 25)
        curves = stress_curves(inp, h_vals)
        st.pyplot(plot_stress_vs_thickness(h_vals, curves, result.allowable_stress), clear_figure=True)

        if fixed_h is not None:
            check = check_point_load(inp, float(fixed_h))
            st.markdown(f"### Stresses at h = {fixed_h:.0f} mm")
            st.dataframe(pd.DataFrame({
                "Position": ["Interior", "Edge", "Corner"],
                "Factored stress (MPa)": [check.interior, check.edge, check.corner],
                "Allowable (MPa)": [check.allowable_stress] * 3,
            }), use_container_width=True)
            dist = stress_distribution(layout.load_kN, float(fixed_h), check.radius_of_stiffness,
                                       check.contact_radius, joint, inp.factors)
            if len(dist["distance"]) > 1:
                st.pyplot(plot_stress_distribution(dist), clear_figure=True)

        st.download_button(
            "Download results (.xlsx)",
            data=export_to_excel_bytes(inp, result, stress_curves=(list(h_vals), curves)),
            file_name="tm38_slab_design.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    st.divider()
    st.caption("Punching shear and bearing capacity are not checked. "
               "Results are for guidance and must be verified by a structural engineer.")
else:
    st.info("Set the inputs and click **Calculate** to see results.")
