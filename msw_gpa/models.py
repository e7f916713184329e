"""
Row and Totals data models.

Rows are immutable; an edit produces a new Row via dataclasses.replace.
Totals are never stored, they are recomputed from the current rows.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


def new_key(prefix: str = "row") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Row:
    """
    A graded enrollment record.

    Attributes:
        key: Stable unique identifier for the row
        kind: "core", "elective" or "field"
        course_id: Catalog id, or the manual-entry id for free-form electives
        credit: Credit hours (non-negative, usually in steps of 0.5)
        grade: Letter grade, S/U for field rows, or "" when not yet graded
    """
    key: str
    kind: str
    course_id: str
    credit: float
    grade: str = ""

    def to_record(self) -> Dict[str, Any]:
        """Persisted shape of the row."""
        return {
            "key": self.key,
            "kind": self.kind,
            "courseId": self.course_id,
            "credit": self.credit,
            "grade": self.grade,
        }


@dataclass(frozen=True)
class Totals:
    total_credits_attempted: float
    gpa_credits: float
    points: float
    gpa: Optional[float]
    core_violations: Tuple[Row, ...]
    field_violations: Tuple[Row, ...]
    gpa_violation: bool
    on_probation: bool
