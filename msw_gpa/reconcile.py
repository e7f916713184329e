from typing import Dict, Iterable, List, Sequence, Tuple

from .catalog import CATALOG, CourseCatalog
from .models import Row, new_key


def _default_row(kind: str, course_id: str, catalog: CourseCatalog) -> Row:
    return Row(
        key=new_key(kind),
        kind=kind,
        course_id=course_id,
        credit=catalog.default_credit(course_id),
        grade="",
    )


def _canonical(
    candidates: Sequence[Row],
    kind: str,
    order: Iterable[str],
    catalog: CourseCatalog,
) -> List[Row]:
    # each canonical id once, first match wins
    order = list(dict.fromkeys(order))
    first_by_id: Dict[str, Row] = {}
    for r in candidates:
        if r.kind == kind and r.course_id not in first_by_id:
            first_by_id[r.course_id] = r

    return [
        first_by_id.get(course_id) or _default_row(kind, course_id, catalog)
        for course_id in order
    ]


def reconcile(
    candidates: Iterable[Row],
    core_order: Sequence[str],
    field_order: Sequence[str],
    catalog: CourseCatalog = CATALOG,
) -> Tuple[Row, ...]:
    """
    Build the authoritative row set from normalised candidates.

    Output is [core rows in core_order] + [electives in input order] +
    [field rows in field_order]. Every canonical id appears exactly once:
    missing ids are backfilled with default rows, duplicates collapse to
    the first candidate. Core/field candidates whose id is not canonical
    are dropped. Reconciling an already reconciled set returns it unchanged.
    """
    candidates = list(candidates)

    core = _canonical(candidates, "core", core_order, catalog)
    field = _canonical(candidates, "field", field_order, catalog)
    electives = [r for r in candidates if r.kind == "elective"]

    return tuple(core + electives + field)


def initial_rows(catalog: CourseCatalog = CATALOG) -> Tuple[Row, ...]:
    """Fresh canonical rows: every core and field course, ungraded."""
    return reconcile([], catalog.core_order, catalog.field_order, catalog)
