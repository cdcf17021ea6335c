"""Flask application factory for the patient portal.

Both tiers live in one app: ``/patientBack`` wraps the Redis store and
``/patientFront`` proxies browser requests to it over HTTP. In a split
deployment GATEWAY_PATH points the front at the gateway in front of the back.
"""

from __future__ import annotations

import logging
from http.cookiejar import DefaultCookiePolicy

import requests
from flask import Flask, jsonify
from flask_cors import CORS

from . import back, front
from .config import load_config
from .repository import PatientRepository


def stateless_session() -> requests.Session:
    """A pooled session whose cookie jar refuses every cookie.

    The session is shared by all browser requests, so nothing one caller's
    upstream response sets may ride along on another caller's call.
    """
    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return session


def create_app(config: dict | None = None, *, http: requests.Session | None = None, redis_client=None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]), logging.INFO))
    CORS(app)

    if redis_client is not None:
        repository = PatientRepository(redis_client, prefix=app.config["REDIS_KEY_PREFIX"])
    else:
        repository = PatientRepository.from_url(app.config["REDIS_URL"], prefix=app.config["REDIS_KEY_PREFIX"])
    app.extensions["patient_repository"] = repository
    app.extensions["patient_http"] = http if http is not None else stateless_session()

    app.register_blueprint(back.bp)
    app.register_blueprint(front.bp)

    @app.route("/")
    def home():
        return jsonify(
            {
                "status": "running",
                "message": "Patient portal is running",
                "endpoints": {
                    "front": "/patientFront/list, /patientFront/add, /patientFront/updateForm/<id>, /patientFront/delete/<id>",
                    "back": "/patientBack/list, /patientBack/add, /patientBack/updateForm/<id>, /patientBack/update/<id>, /patientBack/delete/<id>",
                },
            }
        )

    return app


def main():
    app = create_app()
    app.run(host="0.0.0.0", port=int(app.config["PORT"]))


if __name__ == "__main__":
    main()
