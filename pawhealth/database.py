"""
Record Store — Singleton In-Process Store for Pet Health Records

Stands in for the relational store that owns dogs, vaccinations,
health records and appointments. Provides the read interface the
health-status handler needs, plus a small write path for seeding.

Usage:
    from pawhealth.database import store

    store.add_dog(Dog(user_id="u-1", name="Rex", breed="Beagle", age=4, weight=12.5))
    dog = store.get_owned_dog(dog_id, user_id="u-1")
    vaccinations = store.list_vaccinations(dog_id)
"""

import logging
from datetime import date
from threading import Lock
from typing import Dict, List, Optional

from pawhealth.records import (
    AppointmentRecord,
    Dog,
    HealthRecord,
    VaccinationRecord,
)


logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """Raised when a write references a dog the store does not know."""
    pass


class RecordStore:
    """
    Singleton store for dog profiles and their care records.

    Features:
    - Singleton pattern ensures one store across the app
    - Thread-safe initialization, reads and writes
    - Reads return copies; callers never mutate stored lists
    """

    _instance: Optional['RecordStore'] = None
    _lock: Lock = Lock()

    def __new__(cls) -> 'RecordStore':
        """Thread-safe singleton instantiation."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the store (only runs once due to singleton)."""
        if self._initialized:
            return

        self._data_lock = Lock()
        self._dogs: Dict[str, Dog] = {}
        self._vaccinations: Dict[str, List[VaccinationRecord]] = {}
        self._health_records: Dict[str, List[HealthRecord]] = {}
        self._appointments: Dict[str, List[AppointmentRecord]] = {}
        self._initialized = True

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_dog(self, dog: Dog) -> Dog:
        """Register a dog profile."""
        with self._data_lock:
            self._dogs[dog.id] = dog
            self._vaccinations.setdefault(dog.id, [])
            self._health_records.setdefault(dog.id, [])
            self._appointments.setdefault(dog.id, [])
        logger.debug(f"[STORE] Added dog {dog.id} ({dog.name}) for user {dog.user_id}")
        return dog

    def _require_dog(self, dog_id: str) -> None:
        if dog_id not in self._dogs:
            raise RecordStoreError(f"Unknown dog_id '{dog_id}'")

    def add_vaccination(self, record: VaccinationRecord) -> VaccinationRecord:
        """
        Store a vaccination.

        Raises:
            RecordStoreError: If the dog is not registered
        """
        with self._data_lock:
            self._require_dog(record.dog_id)
            self._vaccinations[record.dog_id].append(record)
        return record

    def add_health_record(self, record: HealthRecord) -> HealthRecord:
        """
        Store a health record.

        Raises:
            RecordStoreError: If the dog is not registered
        """
        with self._data_lock:
            self._require_dog(record.dog_id)
            self._health_records[record.dog_id].append(record)
        return record

    def add_appointment(self, record: AppointmentRecord) -> AppointmentRecord:
        """
        Store an appointment.

        Raises:
            RecordStoreError: If the dog is not registered
        """
        with self._data_lock:
            self._require_dog(record.dog_id)
            self._appointments[record.dog_id].append(record)
        return record

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_owned_dog(self, dog_id: str, user_id: str) -> Optional[Dog]:
        """
        Fetch a dog only if it belongs to the given user.

        Returns:
            The Dog, or None when it does not exist or is someone else's
        """
        with self._data_lock:
            dog = self._dogs.get(dog_id)
        if dog is None or dog.user_id != user_id:
            return None
        return dog

    def list_vaccinations(self, dog_id: str) -> List[VaccinationRecord]:
        """All vaccinations for a dog, most recent date_given first."""
        with self._data_lock:
            records = list(self._vaccinations.get(dog_id, []))
        records.sort(key=lambda r: r.date_given, reverse=True)
        return records

    def list_health_records(self, dog_id: str) -> List[HealthRecord]:
        """All health records for a dog, in insertion order."""
        with self._data_lock:
            return list(self._health_records.get(dog_id, []))

    def list_appointments(
        self,
        dog_id: str,
        since: Optional[date] = None
    ) -> List[AppointmentRecord]:
        """
        Appointments for a dog.

        Args:
            dog_id: Dog identifier
            since: If given, only appointments dated on or after this date

        Returns:
            Appointments ordered by date ascending
        """
        with self._data_lock:
            records = [
                r for r in self._appointments.get(dog_id, [])
                if since is None or r.date >= since
            ]
        records.sort(key=lambda r: r.date)
        return records

    def counts(self) -> Dict[str, int]:
        """Row counts per collection (for health checks)."""
        with self._data_lock:
            return {
                "dogs": len(self._dogs),
                "vaccinations": sum(len(v) for v in self._vaccinations.values()),
                "health_records": sum(len(v) for v in self._health_records.values()),
                "appointments": sum(len(v) for v in self._appointments.values()),
            }

    def clear(self) -> None:
        """Drop every stored record."""
        with self._data_lock:
            self._dogs.clear()
            self._vaccinations.clear()
            self._health_records.clear()
            self._appointments.clear()
        logger.info("Record store cleared")


# Singleton instance, import this in other modules
store = RecordStore()
