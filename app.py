import streamlit as st

from msw_gpa.backend_logic import (
    add_elective,
    compute_totals,
    grade_points,
    probation_reasons,
    remove_elective,
    reset_rows,
    rows_of_kind,
    set_row,
)
from msw_gpa.catalog import CATALOG
from msw_gpa.config import CORE_MIN_GRADE, GPA_THRESHOLD, configure_logging
from msw_gpa.grading import format_gpa, grade_options_for, grade_value_of, is_below_threshold
from msw_gpa.io_json import JsonFileStore, persist_rows, restore_rows, rows_to_frame

configure_logging()

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="MSW GPA & Probation Calculator",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 MSW GPA & Probation Calculator")
st.write(
    f"Weighted GPA (letter grades only) + probation highlighting "
    f"(core below {CORE_MIN_GRADE}, GPA < {GPA_THRESHOLD:.1f}, or Field U)."
)

store = JsonFileStore()

if "rows" not in st.session_state:
    st.session_state["rows"] = restore_rows(store)


def _commit(rows):
    st.session_state["rows"] = rows
    persist_rows(store, rows)


def _on_course_change(key):
    _commit(set_row(st.session_state["rows"], key, course_id=st.session_state[f"course_{key}"]))
    # credit follows the new course's default
    st.session_state.pop(f"credit_{key}", None)


def _on_credit_change(key):
    _commit(set_row(st.session_state["rows"], key, credit=st.session_state[f"credit_{key}"]))


def _on_grade_change(key):
    _commit(set_row(st.session_state["rows"], key, grade=st.session_state[f"grade_{key}"]))


def _on_add_elective():
    _commit(add_elective(st.session_state["rows"]))


def _on_remove_elective(key):
    _commit(remove_elective(st.session_state["rows"], key))


def _on_reset():
    for k in list(st.session_state.keys()):
        if k.startswith(("course_", "credit_", "grade_")):
            del st.session_state[k]
    st.session_state["rows"] = reset_rows()
    store.clear()


rows = st.session_state["rows"]
totals = compute_totals(rows)

_, top_right = st.columns([6, 1])
with top_right:
    st.button("Reset", on_click=_on_reset, use_container_width=True)

# ------------------------
# Summary
# ------------------------

if totals.on_probation:
    st.error(f"Academic probation indicator: {' and '.join(probation_reasons(totals))}.")

st.subheader("Summary")
c1, c2, c3, c4 = st.columns(4)
with c1:
    st.metric("Credits attempted", f"{totals.total_credits_attempted:g}")
with c2:
    st.metric("GPA credits", f"{totals.gpa_credits:g}")
with c3:
    st.metric("Total points", f"{totals.points:.2f}" if totals.gpa_credits > 0 else "—")
with c4:
    st.metric("Overall GPA", format_gpa(totals.gpa))

if not totals.on_probation and totals.gpa is not None and totals.gpa >= GPA_THRESHOLD:
    st.success("No probation triggers.")

st.caption(
    f"Probation logic (internal): any core below {CORE_MIN_GRADE}, or overall GPA below "
    f"{GPA_THRESHOLD:.1f}, or any Field/Field Seminar U. Core + Field are preloaded; "
    "electives can be added below. Entries are saved locally on this machine."
)


# ------------------------
# Course tables
# ------------------------

def _row_editor(r, removable=False):
    definition = CATALOG.lookup(r.course_id)
    options = CATALOG.options_for_kind(r.kind)
    option_ids = [d.id for d in options]
    if r.course_id not in option_ids:
        option_ids.append(r.course_id)

    cols = st.columns([4, 1.2, 1.2, 1, 1, 0.8] if removable else [4, 1.2, 1.2, 1, 1])

    with cols[0]:
        st.selectbox(
            "Course",
            option_ids,
            index=option_ids.index(r.course_id),
            format_func=CATALOG.label,
            key=f"course_{r.key}",
            disabled=r.kind != "elective",
            on_change=_on_course_change,
            args=(r.key,),
            label_visibility="collapsed",
        )
        if r.kind == "core" and r.grade and is_below_threshold(r.grade, CORE_MIN_GRADE):
            st.caption(f":red[Below {CORE_MIN_GRADE} (probation trigger)]")
        elif r.kind == "field" and r.grade == "U":
            st.caption(":red[U (probation trigger)]")

    with cols[1]:
        if definition is not None and len(definition.credit_options) > 1:
            credit_options = list(definition.credit_options)
            if r.credit not in credit_options:
                credit_options.append(r.credit)
            st.selectbox(
                "Credits",
                credit_options,
                index=credit_options.index(r.credit),
                format_func=lambda c: f"{c:g}",
                key=f"credit_{r.key}",
                on_change=_on_credit_change,
                args=(r.key,),
                label_visibility="collapsed",
            )
        else:
            st.number_input(
                "Credits",
                min_value=0.0,
                step=0.5,
                value=float(r.credit),
                key=f"credit_{r.key}",
                on_change=_on_credit_change,
                args=(r.key,),
                label_visibility="collapsed",
            )

    with cols[2]:
        grade_options = list(grade_options_for(r.kind))
        st.selectbox(
            "Grade",
            grade_options,
            index=grade_options.index(r.grade),
            format_func=lambda g: g if g else "—",
            key=f"grade_{r.key}",
            on_change=_on_grade_change,
            args=(r.key,),
            label_visibility="collapsed",
        )

    value = None if r.kind == "field" else grade_value_of(r.grade)
    points = grade_points(r)
    with cols[3]:
        st.write("—" if value is None else f"{value:.2f}")
    with cols[4]:
        st.write("—" if points is None else f"{points:.2f}")

    if removable:
        with cols[5]:
            st.button(
                "Remove",
                key=f"remove_{r.key}",
                on_click=_on_remove_elective,
                args=(r.key,),
            )


def _table_header(removable=False):
    labels = ["Course", "Credits", "Grade", "Grade value", "Points"]
    widths = [4, 1.2, 1.2, 1, 1]
    if removable:
        labels.append("")
        widths.append(0.8)
    for col, label in zip(st.columns(widths), labels):
        col.markdown(f"**{label}**")


st.markdown("---")
st.subheader("Core (non-elective)")
_table_header()
for r in rows_of_kind(rows, "core"):
    _row_editor(r)

st.markdown("---")
el_left, el_right = st.columns([6, 1])
with el_left:
    st.subheader("Electives")
with el_right:
    st.button("+ Add elective", on_click=_on_add_elective, use_container_width=True)

electives = rows_of_kind(rows, "elective")
if electives:
    _table_header(removable=True)
    for r in electives:
        _row_editor(r, removable=True)
else:
    st.info("No electives yet. Click **+ Add elective** to add one.")
st.caption("Tip: If a course isn't listed, pick **Manual elective entry** and enter the credits.")

st.markdown("---")
st.subheader("Field / Practicum (S/U, excluded from GPA)")
_table_header()
for r in rows_of_kind(rows, "field"):
    _row_editor(r)
st.caption("Field / Field Seminar are graded **S/U** and are excluded from GPA. A **U** is a probation trigger.")

with st.expander("Table view"):
    st.dataframe(rows_to_frame(rows).drop(columns=["Key"]), use_container_width=True, hide_index=True)


st.header("Notes")
st.markdown(
    "- GPA excludes Field/Field Seminar and ignores blank grades.\n"
    "- This does not implement special cases (repeat/retake rules, withdrawals, "
    "transfer credit, pass/fail outside Field, etc.)."
)
