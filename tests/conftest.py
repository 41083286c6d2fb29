"""
Shared fixtures: an in-memory MongoDB (mongomock), mock email and storage
services, and TestClients with or without an admin session.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from aroma.auth import require_admin
from aroma.database import get_db
from aroma.main import app
from aroma.services.notifications import (
    MockNotificationService,
    NotificationResult,
    get_notification_service,
)
from aroma.services.storage import MockStorageService, get_storage_service
from aroma.services.testimonial_feed import TestimonialFeed, get_testimonial_feed

ADMIN_SESSION = {"token": "test-token", "email": "admin@restaurant.com", "role": "admin"}


class FailingNotificationService(MockNotificationService):
    """Email transport that always blows up."""

    async def send_email(self, to_email, subject, body_html, body_text=None) -> NotificationResult:
        raise RuntimeError("SMTP relay unreachable")


class RecordingFeed(TestimonialFeed):
    def __init__(self):
        super().__init__()
        self.published = 0

    def publish(self) -> int:
        self.published += 1
        return super().publish()


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    yield client["aroma_test"]
    client.close()


@pytest.fixture
def notifier() -> MockNotificationService:
    return MockNotificationService(latency=(0, 0))


@pytest.fixture
def storage() -> MockStorageService:
    return MockStorageService()


@pytest.fixture
def feed() -> RecordingFeed:
    return RecordingFeed()


def _override(db, notifier, storage, feed, admin: bool) -> None:
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_testimonial_feed] = lambda: feed
    if admin:
        app.dependency_overrides[require_admin] = lambda: ADMIN_SESSION


@pytest.fixture
def client(db, notifier, storage, feed):
    """Client acting as a logged-in admin."""
    _override(db, notifier, storage, feed, admin=True)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db, notifier, storage, feed):
    """Client without an admin session."""
    _override(db, notifier, storage, feed, admin=False)
    yield TestClient(app)
    app.dependency_overrides.clear()

