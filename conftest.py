# type: ignore
"""Shared fixtures: a fake SMS provider, a mocked SQLAlchemy engine and a wired app."""
import asyncio
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from ritepath.core.config import Settings
from ritepath.core.dependencies import ServiceContainer
from ritepath.models.domain import StaffMember
from ritepath.repositories.profile_repository import ProfileRepository
from ritepath.repositories.staff_repository import StaffRepository
from ritepath.services.sms_client import SmsSendError

FROM_NUMBER = "+15550000000"
APP_URL = "https://app.ritepath.test"


class FakeSmsClient:
    """In-process stand-in for the Twilio client."""

    configured = True

    def __init__(self, fail_for=(), crash_for=(), hang_for=()):
        self.fail_for = set(fail_for)
        self.crash_for = set(crash_for)
        self.hang_for = set(hang_for)
        self.sent = []

    async def send_message(self, from_number, to, body):
        self.sent.append({"from": from_number, "to": to, "body": body})
        if to in self.hang_for:
            await asyncio.sleep(3600)
        if to in self.crash_for:
            raise RuntimeError(f"unexpected failure for {to}")
        if to in self.fail_for:
            raise SmsSendError(f"SMS provider returned 400: invalid number {to}", status_code=400)
        return f"SM{len(self.sent):032d}"

    @property
    def recipients(self):
        return [m["to"] for m in self.sent]


def mock_connect():
    """Create a mock context manager for engine.connect()."""
    mock_conn = MagicMock()
    mock_conn.__enter__ = MagicMock(return_value=mock_conn)
    mock_conn.__exit__ = MagicMock(return_value=False)
    return mock_conn


def make_staff(staff_id, phone, role="removal-team", availability="available"):
    return StaffMember(
        id=staff_id, name=f"Staff {staff_id}", role=role, phone=phone,
        availability=availability, date_added="2024-01-01",
    )


@pytest.fixture
def config():
    cfg = Settings()
    cfg.TWILIO_FROM_NUMBER = FROM_NUMBER
    cfg.APP_URL = APP_URL
    cfg.HELLOSIGN_API_KEY = ""
    cfg.SMS_TIMEOUT = 2.0
    cfg.SEED_DEFAULT_STAFF = True
    return cfg


@pytest.fixture
def sms():
    return FakeSmsClient()


@pytest.fixture
def engine():
    eng = MagicMock()
    eng.connect.return_value = mock_connect()
    return eng


@pytest.fixture
def staff_repo():
    return StaffRepository(seed_defaults=True)


@pytest.fixture
def profile_repo():
    return ProfileRepository()


@pytest.fixture
def container(config, engine, sms, staff_repo, profile_repo):
    return ServiceContainer(config, engine, sms, staff_repo=staff_repo, profile_repo=profile_repo)


@pytest.fixture
def client(container):
    from main import create_app
    return TestClient(create_app(container), raise_server_exceptions=False)
