"""
Demo Data — Seed the Record Store with Two Contrasting Dogs

Seeded only when SEED_DEMO_DATA is enabled. Dates are relative to
`today` so the demo verdicts stay stable over time:

- "Biscuit": well-kept history (scores Excellent)
- "Pepper": lapsed vaccinations and recent illness (scores Poor)
"""

import logging
from datetime import date, timedelta
from typing import Dict, Optional

from pawhealth.database import RecordStore
from pawhealth.records import (
    AppointmentRecord,
    AppointmentType,
    Dog,
    HealthRecord,
    HealthRecordType,
    VaccinationRecord,
)


logger = logging.getLogger(__name__)

DEMO_USER_ID = "demo-user"


def seed_demo_data(store: RecordStore, today: Optional[date] = None) -> Dict[str, str]:
    """
    Populate the store with one demo owner and two dogs.

    Args:
        store: Target record store
        today: Anchor date for relative record dates (defaults to today)

    Returns:
        Mapping of dog name to dog id
    """
    today = today or date.today()

    biscuit = store.add_dog(Dog(
        user_id=DEMO_USER_ID, name="Biscuit", breed="Labrador Retriever",
        age=5, weight=31.0, microchip_id="985112003456789",
    ))
    for name, days_ago in [("Rabies", 30), ("DHPP", 60), ("Leptospirosis", 90)]:
        store.add_vaccination(VaccinationRecord(
            dog_id=biscuit.id, vaccine_name=name, vaccine_type="core",
            date_given=today - timedelta(days=days_ago), veterinarian="Dr. Hale",
        ))
    store.add_health_record(HealthRecord(
        dog_id=biscuit.id, date=today - timedelta(days=20),
        type=HealthRecordType.VET_VISIT, title="Annual checkup",
        description="All clear", veterinarian="Dr. Hale",
    ))
    store.add_appointment(AppointmentRecord(
        dog_id=biscuit.id, title="Dental cleaning", type=AppointmentType.VET,
        date=today + timedelta(days=14), location="Riverside Vet Clinic",
    ))

    pepper = store.add_dog(Dog(
        user_id=DEMO_USER_ID, name="Pepper", breed="Border Collie",
        age=9, weight=18.5,
    ))
    store.add_vaccination(VaccinationRecord(
        dog_id=pepper.id, vaccine_name="Rabies", vaccine_type="core",
        date_given=today - timedelta(days=500), veterinarian="Dr. Okafor",
    ))
    for title, days_ago in [("Ear infection", 25), ("Sprained paw", 70)]:
        store.add_health_record(HealthRecord(
            dog_id=pepper.id, date=today - timedelta(days=days_ago),
            type=HealthRecordType.ILLNESS if "infection" in title else HealthRecordType.INJURY,
            title=title, description="Treated at clinic",
        ))
    store.add_appointment(AppointmentRecord(
        dog_id=pepper.id, title="Follow-up", type=AppointmentType.VET,
        date=today - timedelta(days=10),
    ))

    logger.info(f"🐾 Seeded demo data for user '{DEMO_USER_ID}': Biscuit, Pepper")
    return {"Biscuit": biscuit.id, "Pepper": pepper.id}
