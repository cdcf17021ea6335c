"""Browser-facing controller mounted under ``/patientFront``.

Every protected route forwards the caller's Authorization header verbatim to
the remote patient service and either renders a view or redirects to the list.
"""

from __future__ import annotations

import requests
from flask import Blueprint, abort, current_app, redirect, render_template, request

from .model import Patient, parse_patient_id, validate_patient

bp = Blueprint("patient_front", __name__, url_prefix="/patientFront")


def _http() -> requests.Session:
    return current_app.extensions["patient_http"]


def _gateway_url(path: str) -> str:
    return f"{current_app.config['GATEWAY_PATH']}{path}"


def _authorization() -> str:
    value = request.headers.get("Authorization")
    if value is None:
        abort(400, description="Missing Authorization header")
    return value


def _patient_id(raw: str) -> str:
    patient_id = parse_patient_id(raw)
    if patient_id is None:
        abort(400, description=f"Invalid patient id: {raw!r}")
    return patient_id


def _upstream(method: str, path: str, authorization: str, payload: dict | None = None) -> requests.Response:
    return _http().request(
        method,
        _gateway_url(path),
        headers={"Authorization": authorization},
        json=payload,
        timeout=current_app.config["UPSTREAM_TIMEOUT_S"],
    )


def _mutate(method: str, path: str, authorization: str, payload: dict | None = None):
    response = _upstream(method, path, authorization, payload)
    if current_app.config["CHECK_UPSTREAM_STATUS"]:
        response.raise_for_status()
    return redirect(_gateway_url("/patientFront/list"))


def _submitted_record() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


@bp.route("/list", methods=["GET"])
def list_patients():
    authorization = _authorization()
    current_app.logger.info("[front] fetching patient list")
    response = _upstream("GET", "/patientBack/list", authorization)
    response.raise_for_status()
    patients = [Patient.from_dict(item) for item in response.json()]
    return render_template("patient/list.html", patients=patients)


@bp.route("/updateForm/<raw_id>", methods=["GET"])
def update_form(raw_id: str):
    authorization = _authorization()
    patient_id = _patient_id(raw_id)
    current_app.logger.info("[front] fetching update form for patient id=%s", patient_id)
    response = _upstream("GET", f"/patientBack/updateForm/{patient_id}", authorization)
    response.raise_for_status()
    return render_template("patient/update.html", patient=Patient.from_dict(response.json()))


@bp.route("/update/<raw_id>", methods=["POST"])
def update_patient(raw_id: str):
    authorization = _authorization()
    patient_id = _patient_id(raw_id)
    data = _submitted_record()
    errors = validate_patient(data)
    patient = Patient.from_dict(data).with_id(patient_id)
    if errors:
        return render_template("patient/update.html", patient=patient, errors=errors), 400

    current_app.logger.info("[front] updating patient id=%s", patient_id)
    return _mutate("POST", f"/patientBack/update/{patient_id}", authorization, patient.to_dict())


@bp.route("/add", methods=["GET"])
def add_form():
    current_app.logger.info("[front] showing add form")
    return render_template("patient/add.html", patient=Patient())


@bp.route("/add", methods=["POST"])
def add_patient():
    authorization = _authorization()
    data = _submitted_record()
    errors = validate_patient(data)
    if errors:
        return render_template("patient/add.html", patient=Patient.from_dict(data), errors=errors), 400

    current_app.logger.info("[front] adding new patient")
    payload = Patient.from_dict(data).to_dict()
    payload.pop("id")
    return _mutate("POST", "/patientBack/add", authorization, payload)


@bp.route("/delete/<raw_id>", methods=["GET"])
def delete_patient(raw_id: str):
    authorization = _authorization()
    patient_id = _patient_id(raw_id)
    current_app.logger.info("[front] deleting patient id=%s", patient_id)
    return _mutate("DELETE", f"/patientBack/delete/{patient_id}", authorization)
