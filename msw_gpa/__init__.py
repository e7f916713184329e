"""
MSW GPA & probation calculator.

Pure calculation engine (catalog, row normalisation, reconciliation, GPA
totals) with a small persistence layer; app.py is the Streamlit front end.
"""

__version__ = "1.0.0"

from .catalog import CATALOG, CORE_ORDER, FIELD_ORDER, CourseCatalog, CourseDefinition
from .models import Row, Totals
from .normalise import normalise_records, normalise_row
from .reconcile import initial_rows, reconcile
from .backend_logic import (
    add_elective,
    compute_totals,
    probation_reasons,
    remove_elective,
    reset_rows,
    set_row,
)
from .grading import format_gpa, grade_value_of, is_below_threshold
from .io_json import JsonFileStore, MemoryStore, PersistenceAdapter, persist_rows, restore_rows

__all__ = [
    "__version__",
    "CATALOG",
    "CORE_ORDER",
    "FIELD_ORDER",
    "CourseCatalog",
    "CourseDefinition",
    "Row",
    "Totals",
    "normalise_row",
    "normalise_records",
    "reconcile",
    "initial_rows",
    "compute_totals",
    "probation_reasons",
    "set_row",
    "add_elective",
    "remove_elective",
    "reset_rows",
    "grade_value_of",
    "is_below_threshold",
    "format_gpa",
    "PersistenceAdapter",
    "JsonFileStore",
    "MemoryStore",
    "restore_rows",
    "persist_rows",
]
