"""
Pytest configuration and shared fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from referral_hub.api.main import create_app
from referral_hub.email.transport import OutgoingEmail
from referral_hub.exceptions import NotificationError
from referral_hub.referral.notifier import ReferralNotifier
from referral_hub.referral.schemas import ReferralSubmission
from referral_hub.referral.service import ReferralService
from referral_hub.referral.store import ReferralStore
from referral_hub.settings import Settings
from referral_hub.storage.db import Database


class RecordingTransport:
    """Mail transport that keeps messages instead of sending them."""

    def __init__(self, fail_on: int | None = None):
        self.sent: list[OutgoingEmail] = []
        self.attempts = 0
        self.fail_on = fail_on

    async def send(self, message: OutgoingEmail) -> None:
        self.attempts += 1
        if self.fail_on is not None and self.attempts == self.fail_on:
            raise NotificationError("relay refused message")
        self.sent.append(message)

    @property
    def recipients(self) -> list[str]:
        return [m.to for m in self.sent]


@pytest.fixture
def valid_payload():
    """Well-formed referral form body"""
    return {
        "yourName": "Alice",
        "yourEmail": "alice@x.com",
        "yourPhone": "5551234567",
        "friendName": "Bob",
        "friendEmail": "bob@x.com",
        "friendPhone": "5559876543",
        "program": "DataSci",
    }


@pytest.fixture
def submission(valid_payload):
    return ReferralSubmission.model_validate(valid_payload)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        env="test",
        database_url="sqlite://",
        mail_transport="console",
        website_url="https://learn.example.org",
    )


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def store(database):
    return ReferralStore(database)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def notifier(transport):
    return ReferralNotifier(transport, website_url="https://learn.example.org")


@pytest.fixture
def service(store, notifier):
    return ReferralService(store=store, notifier=notifier)


@pytest.fixture
def app(test_settings, service):
    return create_app(test_settings, referral_service=service)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
