from __future__ import annotations

import os
import sys

import pytest

_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from fakes import GATEWAY, BackRoutedSession, FakeRedis, RecordingSession  # noqa: E402
from patient_portal.app import create_app  # noqa: E402


def _config(**overrides) -> dict:
    config = {"TESTING": True, "GATEWAY_PATH": GATEWAY, "CHECK_UPSTREAM_STATUS": False}
    config.update(overrides)
    return config


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def back_app(fake_redis):
    return create_app(_config(), redis_client=fake_redis)


@pytest.fixture
def upstream():
    return RecordingSession()


@pytest.fixture
def front_app(upstream):
    return create_app(_config(), http=upstream, redis_client=FakeRedis())


@pytest.fixture
def strict_front_app(upstream):
    return create_app(_config(CHECK_UPSTREAM_STATUS=True), http=upstream, redis_client=FakeRedis())


@pytest.fixture
def wired_front(back_app):
    """A front app whose upstream calls land on a real /patientBack over an in-memory store."""
    session = BackRoutedSession(back_app.test_client())
    app = create_app(_config(), http=session, redis_client=FakeRedis())
    return app, session
