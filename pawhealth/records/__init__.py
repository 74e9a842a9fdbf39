"""
Records Module — Pet Health Data Contracts

Public API:
- Dog: Dog profile with owning user
- VaccinationRecord, HealthRecord, AppointmentRecord: Evaluator inputs
- HealthRecordType, AppointmentType: Allowed record kinds
"""

from .schemas import (
    Dog,
    VaccinationRecord,
    HealthRecord,
    AppointmentRecord,
    HealthRecordType,
    AppointmentType,
)

__all__ = [
    "Dog",
    "VaccinationRecord",
    "HealthRecord",
    "AppointmentRecord",
    "HealthRecordType",
    "AppointmentType",
]
