"""
Record Store Tests

Tests verify:
- Singleton behaviour
- Ownership-scoped dog lookup
- Vaccination ordering (date_given descending)
- Appointment `since` filter
- Writes for unknown dogs are rejected
- Reads stay consistent under concurrent writes
- Demo seeding produces the documented verdicts
"""

from datetime import date, datetime, timezone
from threading import Thread

import pytest

from pawhealth.database import RecordStore, RecordStoreError, store
from pawhealth.demo import DEMO_USER_ID, seed_demo_data
from pawhealth.records import AppointmentRecord, Dog, VaccinationRecord
from pawhealth.rules import HealthStatus, evaluate_health_status


@pytest.fixture(autouse=True)
def clean_store():
    store.clear()
    yield
    store.clear()


def create_dog(user_id: str = "owner") -> Dog:
    return store.add_dog(Dog(user_id=user_id, name="Rex", breed="Beagle", age=4, weight=12.5))


class TestSingleton:
    """One store per process."""

    def test_same_instance(self):
        assert RecordStore() is store


class TestOwnership:
    """get_owned_dog only returns the caller's dogs."""

    def test_owner_sees_dog(self):
        dog = create_dog("owner")

        assert store.get_owned_dog(dog.id, "owner") == dog

    def test_other_user_gets_none(self):
        dog = create_dog("owner")

        assert store.get_owned_dog(dog.id, "intruder") is None

    def test_unknown_dog_gets_none(self):
        assert store.get_owned_dog("missing", "owner") is None


class TestQueries:
    """Ordering and filtering of reads."""

    def test_vaccinations_newest_first(self):
        dog = create_dog()
        for d in (date(2025, 1, 1), date(2025, 6, 1), date(2024, 3, 1)):
            store.add_vaccination(VaccinationRecord(dog_id=dog.id, date_given=d))

        dates = [v.date_given for v in store.list_vaccinations(dog.id)]

        assert dates == [date(2025, 6, 1), date(2025, 1, 1), date(2024, 3, 1)]

    def test_appointments_since_is_inclusive(self):
        dog = create_dog()
        for d in (date(2025, 9, 14), date(2025, 9, 15), date(2026, 4, 1)):
            store.add_appointment(AppointmentRecord(dog_id=dog.id, date=d))

        dates = [a.date for a in store.list_appointments(dog.id, since=date(2025, 9, 15))]

        assert dates == [date(2025, 9, 15), date(2026, 4, 1)]

    def test_reads_return_copies(self):
        dog = create_dog()
        store.add_vaccination(VaccinationRecord(dog_id=dog.id, date_given=date(2025, 1, 1)))

        store.list_vaccinations(dog.id).clear()

        assert len(store.list_vaccinations(dog.id)) == 1

    def test_unknown_dog_has_no_records(self):
        assert store.list_health_records("missing") == []
        assert store.list_appointments("missing") == []


class TestWrites:
    """Write-path validation."""

    def test_record_for_unknown_dog_rejected(self):
        with pytest.raises(RecordStoreError):
            store.add_vaccination(VaccinationRecord(dog_id="missing", date_given=date(2025, 1, 1)))

    def test_counts(self):
        dog = create_dog()
        store.add_appointment(AppointmentRecord(dog_id=dog.id, date=date(2025, 1, 1)))

        assert store.counts() == {
            "dogs": 1,
            "vaccinations": 0,
            "health_records": 0,
            "appointments": 1,
        }


class TestConcurrency:
    """Reads interleaved with writes from other threads."""

    def test_counts_while_dogs_are_added(self):
        errors = []

        def add_dogs():
            for i in range(500):
                store.add_dog(Dog(user_id="owner", name=f"Dog {i}", breed="Mixed", age=1, weight=5.0))

        def read_counts():
            try:
                for _ in range(500):
                    store.counts()
                    store.list_appointments("missing")
            except RuntimeError as e:
                errors.append(e)

        threads = [Thread(target=add_dogs), Thread(target=add_dogs), Thread(target=read_counts)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert store.counts()["dogs"] == 1000


class TestDemoSeed:
    """Seeded dogs land in their documented bands."""

    def test_seeded_verdicts(self):
        today = date(2026, 3, 15)
        now = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)

        ids = seed_demo_data(store, today=today)

        def verdict(dog_id):
            return evaluate_health_status(
                store.list_vaccinations(dog_id),
                store.list_health_records(dog_id),
                store.list_appointments(dog_id),
                now,
            )

        assert verdict(ids["Biscuit"]).status == HealthStatus.EXCELLENT
        assert verdict(ids["Pepper"]).status == HealthStatus.POOR
        assert store.get_owned_dog(ids["Biscuit"], DEMO_USER_ID) is not None
