# Credits from the advising spreadsheet (Simplified tab), core titles from the
# Traditional MSW Curriculum Advising Guide.

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .config import DEFAULT_CREDIT, MANUAL_COURSE_ID

CORE = "core"
FIELD = "field"
NEITHER = "neither"


@dataclass(frozen=True)
class CourseDefinition:
    """
    One course as listed in the catalog.

    credit_options: allowed credit values, the first one is the default.
    category: "core" (required, GPA-bearing), "field" (S/U practicum,
              excluded from GPA) or "neither" (may be taken as an elective).
    """
    id: str
    title: Optional[str]
    credit_options: Tuple[float, ...]
    category: str = NEITHER

    @property
    def is_core(self) -> bool:
        return self.category == CORE

    @property
    def is_field(self) -> bool:
        return self.category == FIELD

    @property
    def is_elective_eligible(self) -> bool:
        return self.category == NEITHER

    @property
    def label(self) -> str:
        return self.title if self.title else f"SW {self.id}"


class CourseCatalog:
    """Ordered, read-only registry of course definitions."""

    def __init__(self, definitions: Iterable[CourseDefinition]):
        self._definitions: Tuple[CourseDefinition, ...] = tuple(definitions)
        self._by_id: Dict[str, CourseDefinition] = {}
        for d in self._definitions:
            if d.id in self._by_id:
                raise ValueError(f"Duplicate course id in catalog: {d.id!r}")
            if not d.credit_options:
                raise ValueError(f"Course {d.id!r} has no credit options")
            self._by_id[d.id] = d

    def __iter__(self):
        return iter(self._definitions)

    def lookup(self, course_id: Any) -> Optional[CourseDefinition]:
        if not isinstance(course_id, str):
            return None
        return self._by_id.get(course_id)

    def default_credit(self, course_id: Any) -> float:
        d = self.lookup(course_id)
        if d is None:
            return DEFAULT_CREDIT
        return d.credit_options[0]

    def label(self, course_id: Any) -> str:
        d = self.lookup(course_id)
        if d is None:
            return f"SW {course_id}"
        return d.label

    def options_for_kind(self, kind: str) -> Tuple[CourseDefinition, ...]:
        """Courses a row of the given kind may point at."""
        if kind == CORE:
            return tuple(d for d in self._definitions if d.is_core)
        if kind == FIELD:
            return tuple(d for d in self._definitions if d.is_field)
        return tuple(d for d in self._definitions if d.is_elective_eligible)

    def first_elective_id(self) -> str:
        for d in self._definitions:
            if d.is_elective_eligible:
                return d.id
        return MANUAL_COURSE_ID

    @property
    def core_order(self) -> Tuple[str, ...]:
        return tuple(d.id for d in self._definitions if d.is_core)

    @property
    def field_order(self) -> Tuple[str, ...]:
        return tuple(d.id for d in self._definitions if d.is_field)


def _core(course_id: str, title: str, credits: float = 3) -> CourseDefinition:
    return CourseDefinition(course_id, title, (credits,), CORE)


def _field(course_id: str, title: str, credits: float) -> CourseDefinition:
    return CourseDefinition(course_id, title, (credits,), FIELD)


def _elective(course_id: str, *credit_options: float) -> CourseDefinition:
    return CourseDefinition(course_id, f"SW {course_id}", credit_options or (3,))


# ------------------------
# Curriculum
# ------------------------
COURSE_DEFS: Tuple[CourseDefinition, ...] = (
    # Core (GPA-bearing)
    _core("500", "SW 500 Social Welfare History"),
    _core("502", "SW 502 Social Welfare Policy"),
    _core("503", "SW 503 Power, Privilege and Oppression"),
    _core("505", "SW 505 Theories of Human Behavior and Development"),
    _core("506", "SW 506 Theories of Organizational Behavior and Development"),
    _core("510", "SW 510 Introduction to Social Work Research and Evaluation"),
    _core("520", "SW 520 Interventions I"),
    _core("521", "SW 521 Interventions II"),
    _core("542", "SW 542 Perspectives on Trauma and Human Rights"),
    # Field / practicum (S/U only)
    _field("550", "SW 550 Field Instruction I", 3),
    _field("551", "SW 551 Field Instruction II", 4),
    _field("552", "SW 552 Field Instruction III", 4),
    _field("553", "SW 553 Field Instruction IV", 3),
    _field("555 part 1", "SW 555 Field Seminar (Part 1)", 0.5),
    _field("555 part 2", "SW 555 Field Seminar (Part 2)", 0.5),
    # Electives listed in the spreadsheet's credit table
    *(_elective(cid) for cid in (
        "522", "523", "524", "525", "526", "527", "528", "530", "531",
        "560", "561", "562", "563", "564", "565", "566", "567", "568", "569",
        "570", "571", "572", "574", "575", "576", "577", "578", "579",
        "581", "582", "583", "585", "586", "588", "590", "592", "594", "596",
        "599", "617", "618", "619", "621", "622", "623", "624", "625", "626",
        "627", "628", "629", "630", "631",
    )),
    _elective("700", 1, 2),
    _elective("703", 2),
    _elective("704", 2),
    _elective("705", 2),
    _elective("706", 3),
    *(_elective(cid) for cid in (
        "554", "556", "557", "559", "573", "580", "584", "587", "589",
        "591", "593", "595", "597", "598",
    )),
    # Free-form elective placeholder
    CourseDefinition(MANUAL_COURSE_ID, "Manual elective entry", (1, 2, 3)),
)

CATALOG = CourseCatalog(COURSE_DEFS)

CORE_ORDER: Tuple[str, ...] = CATALOG.core_order
FIELD_ORDER: Tuple[str, ...] = CATALOG.field_order
