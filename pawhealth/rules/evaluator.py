"""
Health Status Evaluation — Turn Care Records into a Verdict

This is where RULES live. Records are facts; this module assigns meaning.

Constraints:
- Deterministic: one injected reference instant, no wall-clock reads
- Four independent sub-scores, each an ordered rule table (first match wins)
- Named threshold constants (no magic numbers)
- Status, color and next action travel together on HealthStatus
- Never raises: empty collections are valid input

Known quirk: the health-event table always matches,
so a dog with no data at all still scores 20 and lands in POOR while
has_enough_data is False. UNKNOWN is unreachable through the tables.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pawhealth.records import (
    AppointmentRecord,
    HealthRecord,
    HealthRecordType,
    VaccinationRecord,
)


# ============================================================================
# THRESHOLD CONSTANTS
# ============================================================================

# Recency windows (calendar offsets from the reference date)
VACCINATION_WINDOW = relativedelta(years=1)
HEALTH_RECORD_WINDOW = relativedelta(months=6)

# Vaccination sub-score (max 40)
VACCINATIONS_UP_TO_DATE = 3
VACCINATION_POINTS_FULL = 40
VACCINATION_POINTS_PARTIAL = 25

# Health-event sub-score (max 30)
MAX_TOLERATED_ILLNESSES = 1
HEALTH_POINTS_CHECKUPS = 30
HEALTH_POINTS_MAINTAINED = 20
HEALTH_POINTS_CONCERNS = 10

# Appointment sub-score (max 20)
APPOINTMENT_POINTS_UPCOMING = 20
APPOINTMENT_POINTS_PAST = 15

# Regular-care bonus (max 10)
CARE_HISTORY_HEALTH_RECORDS = 5
CARE_HISTORY_VACCINATIONS = 3
CARE_POINTS = 10

# Status bands (0-100 scale, first band whose floor is met wins)
THRESHOLD_EXCELLENT = 85
THRESHOLD_GOOD = 70
THRESHOLD_FAIR = 50
THRESHOLD_NEEDS_ATTENTION = 30
THRESHOLD_POOR = 1

ILLNESS_TYPES = frozenset({HealthRecordType.ILLNESS, HealthRecordType.INJURY})


# ============================================================================
# Enums and Schemas
# ============================================================================

class StatusColor(str, Enum):
    """Display color attached to each status band."""
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    GRAY = "gray"


class HealthStatus(str, Enum):
    """
    Status band labels.

    Each member carries its display color and recommended next action.
    """
    EXCELLENT = ("Excellent", StatusColor.GREEN, "Keep up the great work!")
    GOOD = ("Good", StatusColor.BLUE, "Consider scheduling a checkup")
    FAIR = ("Fair", StatusColor.YELLOW, "Schedule a vet visit soon")
    NEEDS_ATTENTION = ("Needs Attention", StatusColor.ORANGE, "Update vaccinations and schedule checkup")
    POOR = ("Poor", StatusColor.RED, "Immediate vet attention recommended")
    UNKNOWN = ("Unknown", StatusColor.GRAY, "Add more health data")

    def __new__(cls, label: str, color: StatusColor, next_action: str):
        member = str.__new__(cls, label)
        member._value_ = label
        member.color = color
        member.next_action = next_action
        return member


# Ordered top-down; score is an integer so "> 0" is ">= 1"
STATUS_BANDS: Tuple[Tuple[int, HealthStatus], ...] = (
    (THRESHOLD_EXCELLENT, HealthStatus.EXCELLENT),
    (THRESHOLD_GOOD, HealthStatus.GOOD),
    (THRESHOLD_FAIR, HealthStatus.FAIR),
    (THRESHOLD_NEEDS_ATTENTION, HealthStatus.NEEDS_ATTENTION),
    (THRESHOLD_POOR, HealthStatus.POOR),
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthSummary(_CamelModel):
    """Record counts behind the verdict."""
    total_vaccinations: int = Field(..., ge=0)
    recent_vaccinations: int = Field(..., ge=0)
    total_health_records: int = Field(..., ge=0)
    recent_health_records: int = Field(..., ge=0)
    total_appointments: int = Field(..., ge=0)
    upcoming_appointments: int = Field(..., ge=0)


class HealthStatusReport(_CamelModel):
    """
    Health status verdict for one dog.

    Serialized with camelCase keys (hasEnoughData, statusColor, ...).
    Carries no timestamp or id: identical inputs give identical JSON.
    """
    has_enough_data: bool
    score: int = Field(..., ge=0, le=100)
    status: HealthStatus
    status_color: StatusColor
    next_action: str
    factors: List[str] = Field(default_factory=list)
    summary: HealthSummary


# ============================================================================
# Derived record window
# ============================================================================

def _as_date(value: Union[date, datetime]) -> date:
    """Reduce a datetime to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class RecordWindow:
    """The three input collections plus every subset the rules look at."""
    reference_date: date
    vaccinations: Tuple[VaccinationRecord, ...]
    health_records: Tuple[HealthRecord, ...]
    appointments: Tuple[AppointmentRecord, ...]
    recent_vaccinations: Tuple[VaccinationRecord, ...]
    recent_health_records: Tuple[HealthRecord, ...]
    illness_records: Tuple[HealthRecord, ...]
    vet_visit_records: Tuple[HealthRecord, ...]
    upcoming_appointments: Tuple[AppointmentRecord, ...]

    @classmethod
    def build(
        cls,
        vaccinations: Sequence[VaccinationRecord],
        health_records: Sequence[HealthRecord],
        appointments: Sequence[AppointmentRecord],
        now: Union[date, datetime],
        vaccination_window: relativedelta = VACCINATION_WINDOW,
        health_record_window: relativedelta = HEALTH_RECORD_WINDOW,
    ) -> "RecordWindow":
        today = _as_date(now)
        vaccination_cutoff = today - vaccination_window
        health_cutoff = today - health_record_window

        recent_vaccinations = tuple(
            v for v in vaccinations if _as_date(v.date_given) >= vaccination_cutoff
        )
        recent_health_records = tuple(
            r for r in health_records if _as_date(r.date) >= health_cutoff
        )

        return cls(
            reference_date=today,
            vaccinations=tuple(vaccinations),
            health_records=tuple(health_records),
            appointments=tuple(appointments),
            recent_vaccinations=recent_vaccinations,
            recent_health_records=recent_health_records,
            illness_records=tuple(
                r for r in recent_health_records if r.type in ILLNESS_TYPES
            ),
            vet_visit_records=tuple(
                r for r in recent_health_records if r.type == HealthRecordType.VET_VISIT
            ),
            upcoming_appointments=tuple(
                a for a in appointments if _as_date(a.date) >= today
            ),
        )


# ============================================================================
# Rule tables
# ============================================================================

@dataclass(frozen=True)
class ScoringRule:
    """One tier of a sub-score: if `applies`, award `points` and note `label`."""
    points: int
    label: str
    applies: Callable[[RecordWindow], bool]


@dataclass(frozen=True)
class SubScore:
    """Outcome of one rule table."""
    points: int
    label: Optional[str] = None


VACCINATION_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        VACCINATION_POINTS_FULL,
        "Up-to-date vaccinations",
        lambda w: len(w.recent_vaccinations) >= VACCINATIONS_UP_TO_DATE,
    ),
    ScoringRule(
        VACCINATION_POINTS_PARTIAL,
        "Some recent vaccinations",
        lambda w: len(w.recent_vaccinations) >= 1,
    ),
)

# Last tier always matches: this table never scores 0.
HEALTH_EVENT_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        HEALTH_POINTS_CHECKUPS,
        "Regular vet checkups",
        lambda w: len(w.illness_records) == 0 and len(w.vet_visit_records) >= 1,
    ),
    ScoringRule(
        HEALTH_POINTS_MAINTAINED,
        "Good health maintenance",
        lambda w: len(w.illness_records) <= MAX_TOLERATED_ILLNESSES,
    ),
    ScoringRule(
        HEALTH_POINTS_CONCERNS,
        "Some health concerns",
        lambda w: True,
    ),
)

APPOINTMENT_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        APPOINTMENT_POINTS_UPCOMING,
        "Scheduled appointments",
        lambda w: len(w.upcoming_appointments) > 0,
    ),
    ScoringRule(
        APPOINTMENT_POINTS_PAST,
        "Recent appointments",
        lambda w: len(w.appointments) > 0,
    ),
)

REGULAR_CARE_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        CARE_POINTS,
        "Comprehensive care history",
        lambda w: (
            len(w.health_records) >= CARE_HISTORY_HEALTH_RECORDS
            or len(w.vaccinations) >= CARE_HISTORY_VACCINATIONS
        ),
    ),
)


def apply_rules(rules: Sequence[ScoringRule], window: RecordWindow) -> SubScore:
    """Return the first matching tier, or zero points with no label."""
    for rule in rules:
        if rule.applies(window):
            return SubScore(points=rule.points, label=rule.label)
    return SubScore(points=0)


# ============================================================================
# Health Status Evaluator
# ============================================================================

class HealthStatusEvaluator:
    """
    Converts a dog's care records into a HealthStatusReport.

    Pure deterministic logic. Same input = Same output.
    Safe to share across threads: holds no mutable state.
    """

    def __init__(
        self,
        vaccination_window: relativedelta = VACCINATION_WINDOW,
        health_record_window: relativedelta = HEALTH_RECORD_WINDOW,
    ):
        """
        Initialize evaluator with recency windows.

        Args:
            vaccination_window: Look-back for "recent" vaccinations
            health_record_window: Look-back for "recent" health records
        """
        self.vaccination_window = vaccination_window
        self.health_record_window = health_record_window

    def build_window(
        self,
        vaccinations: Sequence[VaccinationRecord],
        health_records: Sequence[HealthRecord],
        appointments: Sequence[AppointmentRecord],
        now: Union[date, datetime],
    ) -> RecordWindow:
        """Derive the recent/illness/vet-visit/upcoming subsets."""
        return RecordWindow.build(
            vaccinations,
            health_records,
            appointments,
            now,
            vaccination_window=self.vaccination_window,
            health_record_window=self.health_record_window,
        )

    def score_vaccinations(self, window: RecordWindow) -> SubScore:
        """Vaccination sub-score (max 40)."""
        return apply_rules(VACCINATION_RULES, window)

    def score_health_events(self, window: RecordWindow) -> SubScore:
        """Health-event sub-score (10-30, never zero)."""
        return apply_rules(HEALTH_EVENT_RULES, window)

    def score_appointments(self, window: RecordWindow) -> SubScore:
        """Appointment sub-score (max 20)."""
        return apply_rules(APPOINTMENT_RULES, window)

    def score_regular_care(self, window: RecordWindow) -> SubScore:
        """Regular-care bonus (max 10)."""
        return apply_rules(REGULAR_CARE_RULES, window)

    def classify_status(self, score: int) -> HealthStatus:
        """
        Classify a total score into a status band.

        Bands come from STATUS_BANDS.

        Args:
            score: Total score [0, 100]

        Returns:
            First band (top-down) whose floor the score meets; UNKNOWN for 0
        """
        for floor, status in STATUS_BANDS:
            if score >= floor:
                return status
        return HealthStatus.UNKNOWN

    def evaluate(
        self,
        vaccinations: Sequence[VaccinationRecord],
        health_records: Sequence[HealthRecord],
        appointments: Sequence[AppointmentRecord],
        now: Union[date, datetime],
    ) -> HealthStatusReport:
        """
        Generate the complete health status report.

        Args:
            vaccinations: All vaccinations for the dog (any order)
            health_records: All health records for the dog
            appointments: Appointments as fetched by the caller
            now: Reference instant; the only notion of "today" used

        Returns:
            HealthStatusReport with score, band, factors and summary
        """
        window = self.build_window(vaccinations, health_records, appointments, now)

        sub_scores = [
            self.score_vaccinations(window),
            self.score_health_events(window),
            self.score_appointments(window),
            self.score_regular_care(window),
        ]

        score = int(round(sum(s.points for s in sub_scores)))
        status = self.classify_status(score)

        return HealthStatusReport(
            has_enough_data=bool(
                window.vaccinations or window.health_records or window.appointments
            ),
            score=score,
            status=status,
            status_color=status.color,
            next_action=status.next_action,
            factors=[s.label for s in sub_scores if s.label],
            summary=HealthSummary(
                total_vaccinations=len(window.vaccinations),
                recent_vaccinations=len(window.recent_vaccinations),
                total_health_records=len(window.health_records),
                recent_health_records=len(window.recent_health_records),
                total_appointments=len(window.appointments),
                upcoming_appointments=len(window.upcoming_appointments),
            ),
        )


_default_evaluator = HealthStatusEvaluator()


def evaluate_health_status(
    vaccinations: Sequence[VaccinationRecord],
    health_records: Sequence[HealthRecord],
    appointments: Sequence[AppointmentRecord],
    now: Union[date, datetime],
) -> HealthStatusReport:
    """Convenience wrapper around a default HealthStatusEvaluator."""
    return _default_evaluator.evaluate(vaccinations, health_records, appointments, now)
