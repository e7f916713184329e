import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Tuple

from .config import CORE_MIN_GRADE

# ------------------------
# Grade scale
# ------------------------
GRADE_VALUES = {
    "A": 4.00,
    "A-": 3.67,
    "B+": 3.33,
    "B": 3.00,
    "B-": 2.67,
    "C+": 2.33,
    "C": 2.00,
    "C-": 1.67,
    "D+": 1.33,
    "D": 1.00,
    "F": 0.00,
}

# "" means not yet graded
LETTER_GRADE_OPTIONS: Tuple[str, ...] = ("",) + tuple(GRADE_VALUES)
SU_GRADE_OPTIONS: Tuple[str, ...] = ("", "S", "U")

ROW_KINDS: Tuple[str, ...] = ("core", "elective", "field")


def grade_value_of(letter: Any) -> Optional[float]:
    """Scale value for a letter grade, None for blank or unknown input."""
    if not isinstance(letter, str):
        return None
    return GRADE_VALUES.get(letter)


def is_below_threshold(letter: Any, threshold: Any = CORE_MIN_GRADE) -> bool:
    value = grade_value_of(letter)
    bar = grade_value_of(threshold)
    if value is None or bar is None:
        return False
    return value < bar


def grade_options_for(kind: str) -> Tuple[str, ...]:
    if kind == "field":
        return SU_GRADE_OPTIONS
    return LETTER_GRADE_OPTIONS


def is_valid_grade(kind: str, grade: Any) -> bool:
    return isinstance(grade, str) and grade in grade_options_for(kind)


# ------------------------
# Display helpers
# ------------------------
def round_half_up(x: float, places: int = 3) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(x)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_gpa(gpa: Optional[float]) -> str:
    if gpa is None or not math.isfinite(gpa):
        return "—"
    return f"{round_half_up(gpa, 3):.3f}"
