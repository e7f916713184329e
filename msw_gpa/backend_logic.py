import logging
import math
from dataclasses import replace
from numbers import Real
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .catalog import CATALOG, CourseCatalog
from .config import CORE_MIN_GRADE, FIELD_FAIL_GRADE, GPA_THRESHOLD
from .grading import grade_value_of, is_below_threshold, is_valid_grade
from .models import Row, Totals, new_key
from .reconcile import initial_rows

logger = logging.getLogger(__name__)


# ------------------------
# Core logic
# ------------------------
def weighted_gpa(gc: np.ndarray) -> Tuple[Optional[float], float, float]:
    """
    gc: Nx2 numpy array -> [grade value, credit]
    returns: (credit-weighted GPA or None, GPA credits, quality points)
    """
    if gc.size == 0:
        return None, 0.0, 0.0

    values = gc[:, 0].astype(float)
    credits = gc[:, 1].astype(float)
    gpa_credits = float(credits.sum())
    points = float(np.dot(values, credits))
    if gpa_credits <= 0:
        return None, gpa_credits, points

    return points / gpa_credits, gpa_credits, points


def compute_totals(rows: Sequence[Row]) -> Totals:
    """
    GPA and probation signals for a row set.

    Field rows count towards credits attempted only; S/U never touches the
    GPA. Blank grades are "not yet graded" and contribute nothing.
    """
    rows = list(rows)

    total_credits = float(np.sum([r.credit for r in rows], dtype=float))

    graded = []
    for r in rows:
        if r.kind == "field":
            continue
        value = grade_value_of(r.grade)
        if value is None:
            continue
        graded.append((value, r.credit))

    gc = np.array(graded, dtype=float).reshape(-1, 2)
    gpa, gpa_credits, points = weighted_gpa(gc)

    core_violations = tuple(
        r for r in rows
        if r.kind == "core" and r.grade and is_below_threshold(r.grade, CORE_MIN_GRADE)
    )
    field_violations = tuple(
        r for r in rows if r.kind == "field" and r.grade == FIELD_FAIL_GRADE
    )
    gpa_violation = gpa is not None and gpa < GPA_THRESHOLD

    return Totals(
        total_credits_attempted=total_credits,
        gpa_credits=gpa_credits,
        points=points,
        gpa=gpa,
        core_violations=core_violations,
        field_violations=field_violations,
        gpa_violation=gpa_violation,
        on_probation=bool(core_violations or field_violations or gpa_violation),
    )


def probation_reasons(totals: Totals) -> List[str]:
    reasons = []
    if totals.core_violations:
        reasons.append(f"at least one core/non-elective grade is below {CORE_MIN_GRADE}")
    if totals.field_violations:
        reasons.append(f"a Field/Field Seminar grade is {FIELD_FAIL_GRADE}")
    if totals.gpa_violation:
        reasons.append(f"overall GPA is below {GPA_THRESHOLD:.1f}")
    return reasons


def grade_points(row: Row) -> Optional[float]:
    """Quality points for one row, None for field or ungraded rows."""
    if row.kind == "field":
        return None
    value = grade_value_of(row.grade)
    if value is None:
        return None
    return row.credit * value


# ------------------------
# Row edits (copy-on-write)
# ------------------------
def rows_of_kind(rows: Sequence[Row], kind: str) -> Tuple[Row, ...]:
    return tuple(r for r in rows if r.kind == kind)


def _edited_credit(value: Any) -> float:
    # a cleared or garbled credit box reads as 0
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    try:
        as_float = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(as_float) or as_float < 0:
        return 0.0
    return as_float


def set_row(
    rows: Sequence[Row],
    key: str,
    catalog: CourseCatalog = CATALOG,
    **changes: Any,
) -> Tuple[Row, ...]:
    """
    Return a new row tuple with the row `key` edited.

    Supported changes: credit, grade and, for electives only, course_id.
    Switching an elective's course resets its credit to that course's
    default. Grades outside the row's allowed set become "".
    """
    unknown = set(changes) - {"credit", "grade", "course_id"}
    if unknown:
        raise TypeError(f"Unsupported row fields: {sorted(unknown)}")

    out = []
    for r in rows:
        if r.key != key:
            out.append(r)
            continue

        patch = {}
        if "course_id" in changes:
            course_id = changes["course_id"]
            if r.kind != "elective":
                logger.debug("Ignoring course change on %s row %s", r.kind, r.key)
            elif isinstance(course_id, str) and course_id != r.course_id:
                patch["course_id"] = course_id
                patch["credit"] = catalog.default_credit(course_id)
        if "credit" in changes:
            patch["credit"] = _edited_credit(changes["credit"])
        if "grade" in changes:
            grade = changes["grade"]
            patch["grade"] = grade if is_valid_grade(r.kind, grade) else ""

        out.append(replace(r, **patch) if patch else r)
    return tuple(out)


def add_elective(rows: Sequence[Row], catalog: CourseCatalog = CATALOG) -> Tuple[Row, ...]:
    """Append a new ungraded elective after the existing electives."""
    rows = tuple(rows)
    course_id = catalog.first_elective_id()
    elective = Row(
        key=new_key("el"),
        kind="elective",
        course_id=course_id,
        credit=catalog.default_credit(course_id),
        grade="",
    )
    # field rows stay last
    cut = next((i for i, r in enumerate(rows) if r.kind == "field"), len(rows))
    return rows[:cut] + (elective,) + rows[cut:]


def remove_elective(rows: Sequence[Row], key: str) -> Tuple[Row, ...]:
    """Drop the elective `key`; core and field rows are never removed."""
    return tuple(r for r in rows if not (r.key == key and r.kind == "elective"))


def reset_rows(catalog: CourseCatalog = CATALOG) -> Tuple[Row, ...]:
    return initial_rows(catalog)
