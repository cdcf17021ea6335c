"""The Patient record, its schema check and the identifier rule."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

REQUIRED_FIELDS = ("name", "firstname")
OPTIONAL_FIELDS = ("birthdate", "gender", "address", "phone")


@dataclass
class Patient:
    id: str | None = None
    name: str = ""
    firstname: str = ""
    birthdate: str = ""
    gender: str = ""
    address: str = ""
    phone: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Patient":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            if key not in known:
                continue
            if key == "id":
                values["id"] = str(value).strip() if value not in (None, "") else None
                continue
            values[key] = "" if value is None else str(value).strip()
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)

    def with_id(self, patient_id: str) -> "Patient":
        data = self.to_dict()
        data["id"] = patient_id
        return Patient(**data)


def validate_patient(data: object) -> dict[str, str]:
    """Return a field -> message map of schema violations; empty when valid."""
    if not isinstance(data, dict):
        return {"_root": "patient must be an object"}

    errors: dict[str, str] = {}
    for name in REQUIRED_FIELDS:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            errors[name] = f"{name} is required"
    for name in OPTIONAL_FIELDS:
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            errors[name] = f"{name} must be a string"
    return errors


def parse_patient_id(raw: str | int) -> str | None:
    """Normalise a path identifier to its canonical decimal string.

    Returns None for anything that is not a non-negative decimal integer.
    """
    text = str(raw).strip()
    if not text or not text.isascii() or not text.isdigit():
        return None
    return str(int(text))
