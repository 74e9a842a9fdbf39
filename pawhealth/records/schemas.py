"""
Record Schemas — Pet Health Data Contracts

Read-only views of the rows owned by the persistence layer.

Only a few fields matter to the health-status evaluator:
- VaccinationRecord.date_given
- HealthRecord.date and HealthRecord.type
- AppointmentRecord.date

Everything else is carried through untouched for exports.
"""

import datetime as dt
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


def _new_id() -> str:
    return str(uuid4())


# ============================================================================
# Enums
# ============================================================================

class HealthRecordType(str, Enum):
    """Kinds of entries in a dog's health log."""
    VET_VISIT = "vet-visit"
    MEDICATION = "medication"
    ILLNESS = "illness"
    INJURY = "injury"
    OTHER = "other"


class AppointmentType(str, Enum):
    """Kinds of calendar appointments."""
    VET = "vet"
    GROOMING = "grooming"
    TRAINING = "training"
    WALK = "walk"
    FEEDING = "feeding"
    OTHER = "other"


# ============================================================================
# Records
# ============================================================================

class Dog(BaseModel):
    """A dog profile. `user_id` is the owning account."""
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    breed: str = Field(..., min_length=1, max_length=255)
    age: int = Field(..., ge=0, le=30)
    weight: float = Field(..., gt=0)
    microchip_id: Optional[str] = Field(default=None, max_length=50)
    license_number: Optional[str] = Field(default=None, max_length=50)

    @field_validator('name', 'breed')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class VaccinationRecord(BaseModel):
    """A vaccine administered to a dog."""
    id: str = Field(default_factory=_new_id)
    dog_id: str
    vaccine_name: str = Field(default="", max_length=255)
    vaccine_type: str = Field(default="", max_length=255)
    date_given: dt.date
    next_due_date: Optional[dt.date] = None
    veterinarian: str = Field(default="", max_length=255)
    batch_number: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None


class HealthRecord(BaseModel):
    """An entry in a dog's health log (visit, medication, illness, ...)."""
    id: str = Field(default_factory=_new_id)
    dog_id: str
    date: dt.date
    type: HealthRecordType
    title: str = Field(default="", max_length=255)
    description: str = ""
    veterinarian: Optional[str] = Field(default=None, max_length=255)
    medication: Optional[str] = Field(default=None, max_length=255)
    dosage: Optional[str] = Field(default=None, max_length=100)


class AppointmentRecord(BaseModel):
    """A scheduled (or past) appointment for a dog."""
    id: str = Field(default_factory=_new_id)
    dog_id: str
    title: str = Field(default="", max_length=255)
    type: AppointmentType = AppointmentType.OTHER
    date: dt.date
    time: Optional[dt.time] = None
    location: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None
    reminder: bool = True
    reminder_time: int = Field(default=60, ge=0, description="Minutes before the appointment")
