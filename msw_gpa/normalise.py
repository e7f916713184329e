import math
from collections.abc import Mapping
from numbers import Real
from typing import Any, List

from .config import DEFAULT_CREDIT, MANUAL_COURSE_ID
from .grading import ROW_KINDS, is_valid_grade
from .models import Row, new_key


def _normalise_kind(value: Any) -> str:
    if isinstance(value, str) and value in ROW_KINDS:
        return value
    return "core"


def _normalise_credit(value: Any) -> float:
    # bool is a Real subclass, but True is not a credit value
    if isinstance(value, bool) or not isinstance(value, Real):
        return DEFAULT_CREDIT
    try:
        as_float = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_CREDIT
    if not math.isfinite(as_float) or as_float < 0:
        return DEFAULT_CREDIT
    return as_float


def normalise_row(raw: Any) -> Row:
    """
    Build a well-formed Row from arbitrary input.

    Accepts a persisted record ({"key", "kind", "courseId", "credit",
    "grade"}), an existing Row, or anything else. Unknown fields are
    ignored and missing or invalid ones fall back to defaults: kind -> core,
    courseId -> manual entry, credit -> 3, grade -> "" (ungraded), key ->
    a fresh key.
    """
    if isinstance(raw, Row):
        raw = raw.to_record()
    if not isinstance(raw, Mapping):
        raw = {}

    kind = _normalise_kind(raw.get("kind"))

    course_id = raw.get("courseId")
    if not isinstance(course_id, str):
        course_id = MANUAL_COURSE_ID

    grade = raw.get("grade")
    if not is_valid_grade(kind, grade):
        grade = ""

    key = raw.get("key")
    if not isinstance(key, str):
        key = new_key()

    return Row(
        key=key,
        kind=kind,
        course_id=course_id,
        credit=_normalise_credit(raw.get("credit")),
        grade=grade,
    )


def normalise_records(payload: Any) -> List[Row]:
    """Normalise a whole persisted payload; non-record items are skipped."""
    if not isinstance(payload, list):
        return []
    return [normalise_row(item) for item in payload if isinstance(item, (Mapping, Row))]
