from __future__ import annotations

import pytest
import redis

from fakes import FakeRedis
from patient_portal.model import Patient
from patient_portal.repository import PatientRepository


@pytest.fixture
def repository(fake_redis):
    return PatientRepository(fake_redis, prefix="test")


def test_insert_assigns_sequential_ids(repository) -> None:
    first = repository.insert(Patient(name="Doe", firstname="John"))
    second = repository.insert(Patient(id="99", name="Roe", firstname="Jane"))
    assert (first.id, second.id) == ("1", "2")
    assert repository.find_by_id("2").name == "Roe"
    assert repository.find_by_id("99") is None


def test_find_all_returns_insertion_order(repository) -> None:
    for index in range(12):
        repository.insert(Patient(name=f"P{index}", firstname="X"))
    assert [patient.name for patient in repository.find_all()] == [f"P{index}" for index in range(12)]


def test_find_all_on_empty_store(repository) -> None:
    assert repository.find_all() == []
    assert repository.count() == 0


def test_save_replaces_whole_record(repository) -> None:
    stored = repository.insert(Patient(name="Doe", firstname="John", phone="123"))
    repository.save(Patient(id=stored.id, name="Doe", firstname="Johnny"))
    reloaded = repository.find_by_id(stored.id)
    assert reloaded == Patient(id=stored.id, name="Doe", firstname="Johnny")


def test_save_without_id_inserts(repository) -> None:
    stored = repository.save(Patient(name="Doe", firstname="John"))
    assert stored.id == "1"
    assert repository.count() == 1


def test_delete_is_idempotent(repository) -> None:
    stored = repository.insert(Patient(name="Doe", firstname="John"))
    repository.delete_by_id(stored.id)
    repository.delete_by_id(stored.id)
    repository.delete_by_id("12345")
    assert repository.find_by_id(stored.id) is None
    assert repository.count() == 0


def test_keys_are_namespaced_by_prefix(fake_redis) -> None:
    PatientRepository(fake_redis, prefix="a").insert(Patient(name="Doe", firstname="John"))
    assert PatientRepository(fake_redis, prefix="b").find_all() == []


def test_store_errors_propagate() -> None:
    class BrokenRedis(FakeRedis):
        def hgetall(self, key):
            raise redis.ConnectionError("down")

    with pytest.raises(redis.ConnectionError):
        PatientRepository(BrokenRedis()).find_all()


def test_insert_skips_ids_taken_by_save(repository) -> None:
    repository.save(Patient(id="2", name="Upserted", firstname="U"))
    first = repository.insert(Patient(name="A", firstname="X"))
    second = repository.insert(Patient(name="B", firstname="X"))

    assert (first.id, second.id) == ("1", "3")
    assert [patient.name for patient in repository.find_all()] == ["A", "Upserted", "B"]
