"""Redis-backed store for Patient documents.

Each record is a JSON document held in a single hash keyed by patient id.
New ids come from an INCR counter, so store-assigned ids are decimal strings.
"""

from __future__ import annotations

import json

import redis

from .model import Patient


def _sort_key(patient_id: str) -> tuple[int, int, str]:
    if patient_id.isdigit():
        return (0, int(patient_id), "")
    return (1, 0, patient_id)


class PatientRepository:
    def __init__(self, client: redis.Redis, prefix: str = "patient-portal") -> None:
        self._client = client
        self._hash_key = f"{prefix}:patients"
        self._seq_key = f"{prefix}:patients:seq"

    @classmethod
    def from_url(cls, redis_url: str, prefix: str = "patient-portal") -> "PatientRepository":
        return cls(redis.Redis.from_url(redis_url, decode_responses=True), prefix=prefix)

    def _next_id(self) -> str:
        return str(self._client.incr(self._seq_key))

    def _dump(self, patient: Patient) -> str:
        return json.dumps(patient.to_dict(), ensure_ascii=False)

    def _write(self, patient: Patient) -> Patient:
        self._client.hset(self._hash_key, patient.id, self._dump(patient))
        return patient

    def insert(self, patient: Patient) -> Patient:
        # save() may already hold ids the counter has not reached; skip past them.
        while True:
            candidate = patient.with_id(self._next_id())
            if self._client.hsetnx(self._hash_key, candidate.id, self._dump(candidate)):
                return candidate

    def find_all(self) -> list[Patient]:
        raw = self._client.hgetall(self._hash_key) or {}
        return [Patient.from_dict(json.loads(raw[key])) for key in sorted(raw, key=_sort_key)]

    def find_by_id(self, patient_id: str) -> Patient | None:
        raw = self._client.hget(self._hash_key, patient_id)
        if not raw:
            return None
        return Patient.from_dict(json.loads(raw))

    def save(self, patient: Patient) -> Patient:
        if not patient.id:
            return self.insert(patient)
        return self._write(patient)

    def delete_by_id(self, patient_id: str) -> None:
        # HDEL on a missing field returns 0 and is not an error.
        self._client.hdel(self._hash_key, patient_id)

    def count(self) -> int:
        return int(self._client.hlen(self._hash_key))
