import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import pandas as pd

from .backend_logic import grade_points
from .catalog import CATALOG, CourseCatalog
from .config import state_file_path
from .grading import grade_value_of
from .models import Row, new_key
from .normalise import normalise_records
from .reconcile import initial_rows, reconcile

logger = logging.getLogger(__name__)


# ------------------------
# Persistence (best effort)
# ------------------------
class PersistenceAdapter:
    """
    Raw load/save of the row snapshot.

    load() returns the decoded payload or None when nothing usable is
    stored; save() never raises. Implementations swallow and log their own
    I/O errors.
    """

    def load(self) -> Optional[Any]:
        raise NotImplementedError

    def save(self, records: List[dict]) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class JsonFileStore(PersistenceAdapter):
    """Snapshot kept as a JSON array in a local file."""

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else state_file_path()

    def load(self) -> Optional[Any]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read saved rows from %s: %s", self.path, e)
            return None

    def save(self, records: List[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save rows to %s: %s", self.path, e)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove %s: %s", self.path, e)


class MemoryStore(PersistenceAdapter):
    """In-process store, holds a JSON string like the browser's storage did."""

    def __init__(self, raw: Optional[str] = None):
        self.raw = raw

    def load(self) -> Optional[Any]:
        if not self.raw:
            return None
        try:
            return json.loads(self.raw)
        except ValueError as e:
            logger.warning("Could not decode saved rows: %s", e)
            return None

    def save(self, records: List[dict]) -> None:
        try:
            self.raw = json.dumps(records)
        except (TypeError, ValueError) as e:
            logger.warning("Could not encode rows: %s", e)

    def clear(self) -> None:
        self.raw = None


def _with_unique_keys(rows: List[Row]) -> List[Row]:
    seen = set()
    out = []
    for r in rows:
        if r.key in seen:
            r = replace(r, key=new_key(r.kind))
        seen.add(r.key)
        out.append(r)
    return out


def restore_rows(
    store: PersistenceAdapter,
    catalog: CourseCatalog = CATALOG,
) -> Tuple[Row, ...]:
    """Load, sanitise and reconcile the saved rows; defaults when unusable."""
    try:
        payload = store.load()
    except Exception:
        logger.warning("Saved rows could not be loaded, starting fresh", exc_info=True)
        payload = None
    if not isinstance(payload, list):
        return initial_rows(catalog)
    return reconcile(
        _with_unique_keys(normalise_records(payload)),
        catalog.core_order,
        catalog.field_order,
        catalog,
    )


def persist_rows(store: PersistenceAdapter, rows: Sequence[Row]) -> None:
    try:
        store.save([r.to_record() for r in rows])
    except Exception:
        logger.warning("Rows could not be saved", exc_info=True)


# ------------------------
# Table view (UI-side)
# ------------------------
TABLE_COLUMNS = ["Key", "Course", "Credits", "Grade", "Grade value", "Points"]


def rows_to_frame(rows: Sequence[Row], catalog: CourseCatalog = CATALOG) -> pd.DataFrame:
    records = []
    for r in rows:
        value = None if r.kind == "field" else grade_value_of(r.grade)
        records.append(
            {
                "Key": r.key,
                "Course": catalog.label(r.course_id),
                "Credits": float(r.credit),
                "Grade": r.grade,
                "Grade value": value,
                "Points": grade_points(r),
            }
        )
    df = pd.DataFrame(records, columns=TABLE_COLUMNS)
    return df.astype({"Credits": float, "Grade value": float, "Points": float})
