"""Seed Redis with patients for local testing.

Usage:
  - Start Redis:  docker run -p 6379:6379 redis
  - Seed:         patient-portal-seed [path/to/seed_data.json]

Records failing the schema check are skipped; each stored record gets a fresh id.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import redis

from .config import BASE_DIR, load_config
from .model import Patient, validate_patient
from .repository import PatientRepository


def seed(repository: PatientRepository, payload: object) -> int:
    if not isinstance(payload, list):
        raise SystemExit("seed_data.json must be a JSON array")

    written = 0
    for item in payload:
        if validate_patient(item):
            continue
        repository.insert(Patient.from_dict(item))
        written += 1
    return written


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    config = load_config()

    seed_file = Path(args[0]) if args else BASE_DIR / "seed_data.json"
    if not seed_file.exists():
        raise SystemExit(f"Seed file not found: {seed_file}")
    payload = json.loads(seed_file.read_text(encoding="utf-8"))

    repository = PatientRepository.from_url(config["REDIS_URL"], prefix=config["REDIS_KEY_PREFIX"])
    try:
        written = seed(repository, payload)
        total = repository.count()
    except redis.ConnectionError as exc:
        raise SystemExit(
            "Unable to connect to Redis. Start Redis first, or point REDIS_URL to a running Redis instance."
        ) from exc

    print(json.dumps({"status": "ok", "written": written, "total": total, "redis_url": config["REDIS_URL"]}))


if __name__ == "__main__":
    main()
