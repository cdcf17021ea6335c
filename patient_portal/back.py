"""JSON service wrapping the patient store, mounted under ``/patientBack``."""

from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, request

from .model import Patient, parse_patient_id, validate_patient
from .repository import PatientRepository

bp = Blueprint("patient_back", __name__, url_prefix="/patientBack")


def _repository() -> PatientRepository:
    return current_app.extensions["patient_repository"]


def _patient_id(raw: str) -> str:
    patient_id = parse_patient_id(raw)
    if patient_id is None:
        abort(400, description=f"Invalid patient id: {raw!r}")
    return patient_id


@bp.before_request
def _require_authorization():
    if request.headers.get("Authorization") is None:
        return jsonify({"error": "Missing Authorization header"}), 400
    return None


def _validated_body():
    data = request.get_json(silent=True)
    errors = validate_patient(data)
    if errors:
        return None, (jsonify({"error": "Invalid patient", "fields": errors}), 400)
    return Patient.from_dict(data), None


@bp.route("/list", methods=["GET"])
def list_patients():
    patients = _repository().find_all()
    current_app.logger.info("[back] list -> %d patient(s)", len(patients))
    return jsonify([patient.to_dict() for patient in patients])


@bp.route("/updateForm/<raw_id>", methods=["GET"])
def get_patient(raw_id: str):
    patient_id = _patient_id(raw_id)
    patient = _repository().find_by_id(patient_id)
    if patient is None:
        return jsonify({"error": "Patient not found", "id": patient_id}), 404
    return jsonify(patient.to_dict())


@bp.route("/update/<raw_id>", methods=["POST"])
def update_patient(raw_id: str):
    patient_id = _patient_id(raw_id)
    patient, error = _validated_body()
    if error is not None:
        return error
    stored = _repository().save(patient.with_id(patient_id))
    current_app.logger.info("[back] updated patient id=%s", patient_id)
    return jsonify(stored.to_dict())


@bp.route("/add", methods=["POST"])
def add_patient():
    patient, error = _validated_body()
    if error is not None:
        return error
    stored = _repository().insert(patient)
    current_app.logger.info("[back] added patient id=%s", stored.id)
    return jsonify(stored.to_dict()), 201


@bp.route("/delete/<raw_id>", methods=["DELETE"])
def delete_patient(raw_id: str):
    patient_id = _patient_id(raw_id)
    _repository().delete_by_id(patient_id)
    current_app.logger.info("[back] deleted patient id=%s", patient_id)
    return jsonify({"status": "deleted", "id": patient_id})
