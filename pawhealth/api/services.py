"""
API Services — Health Status Orchestration

Ownership check, record fetch, evaluation. Routes stay thin.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from pawhealth.config import settings
from pawhealth.database import RecordStore, store
from pawhealth.records import AppointmentRecord, Dog, HealthRecord, VaccinationRecord
from pawhealth.rules import HealthStatusEvaluator, HealthStatusReport


logger = logging.getLogger(__name__)

_evaluator = HealthStatusEvaluator()


class DogNotFoundError(Exception):
    """Dog does not exist or is not owned by the caller."""
    pass


@dataclass
class HealthStatusResult:
    """A report together with the records it was computed from."""
    dog: Dog
    report: HealthStatusReport
    vaccinations: List[VaccinationRecord]
    health_records: List[HealthRecord]
    appointments: List[AppointmentRecord]


def appointment_cutoff(reference: date, months: int) -> date:
    """
    Earliest appointment date handed to the evaluator.

    Args:
        reference: Evaluation date
        months: Trailing window length in calendar months

    Returns:
        reference minus `months`
    """
    return reference - relativedelta(months=months)


def evaluate_dog_health(
    dog_id: str,
    user_id: str,
    now: datetime,
    record_store: Optional[RecordStore] = None,
    evaluator: Optional[HealthStatusEvaluator] = None
) -> HealthStatusResult:
    """
    Verify ownership, fetch a dog's records and evaluate its health status.

    Args:
        dog_id: Dog identifier from the URL
        user_id: Authenticated caller
        now: Reference instant for the evaluation
        record_store: Store to read from (defaults to the app singleton)
        evaluator: Evaluator to use (defaults to standard windows)

    Returns:
        HealthStatusResult with the report and its input records

    Raises:
        DogNotFoundError: If the dog is missing or owned by another user
    """
    record_store = record_store or store
    evaluator = evaluator or _evaluator

    dog = record_store.get_owned_dog(dog_id, user_id)
    if dog is None:
        logger.warning(f"Health status requested for unknown or foreign dog {dog_id} by {user_id}")
        raise DogNotFoundError(dog_id)

    since = appointment_cutoff(now.date(), settings.APPOINTMENT_LOOKBACK_MONTHS)

    vaccinations = record_store.list_vaccinations(dog_id)
    health_records = record_store.list_health_records(dog_id)
    appointments = record_store.list_appointments(dog_id, since=since)

    report = evaluator.evaluate(vaccinations, health_records, appointments, now)

    logger.info(
        f"🩺 Health status for dog {dog_id}: "
        f"score={report.score} | status={report.status.value}"
    )

    return HealthStatusResult(
        dog=dog,
        report=report,
        vaccinations=vaccinations,
        health_records=health_records,
        appointments=appointments,
    )
