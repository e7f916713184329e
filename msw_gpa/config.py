import logging
import os
from pathlib import Path

# ------------------------
# Storage
# ------------------------
STORAGE_KEY = "ub_ssw_internal_gpa_calc_v2"

STATE_FILE_ENV = "MSW_GPA_STATE_FILE"
DEFAULT_STATE_FILE = Path.home() / ".msw_gpa" / f"{STORAGE_KEY}.json"


def state_file_path() -> Path:
    """Path of the persisted row snapshot (env override wins)."""
    override = os.environ.get(STATE_FILE_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_STATE_FILE


# ------------------------
# Probation policy
# ------------------------
# Any core grade below B-, overall GPA below 3.0, or a Field U.
CORE_MIN_GRADE = "B-"
GPA_THRESHOLD = 3.0
FIELD_FAIL_GRADE = "U"

# ------------------------
# Course defaults
# ------------------------
DEFAULT_CREDIT = 3.0
MANUAL_COURSE_ID = "MANUAL"


# ------------------------
# Logging
# ------------------------
LOG_LEVEL_ENV = "MSW_GPA_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None) -> None:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
