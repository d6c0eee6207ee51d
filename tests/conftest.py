from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.api import deps as api_deps
from app.core.config import Settings, get_settings
from app.main import app

ADMIN_EMAIL = "admin@example.com"
VERIFIED_SENDER = "noreply@example.com"
UPLOAD_URL = "https://res.cloudinary.com/demo/image/upload/v1/internship-uploads/cv.pdf"


# -----------------------------------------------------------------------------
# Settings Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def log_path(tmp_path):
    return tmp_path / "submissions.txt"


@pytest.fixture(scope="function")
def test_settings(log_path):
    """Settings pointing the log at a temp dir with fake credentials."""
    return Settings(
        SUBMISSIONS_LOG_PATH=str(log_path),
        ADMIN_EMAIL=ADMIN_EMAIL,
        VERIFIED_SENDER=VERIFIED_SENDER,
        SENDGRID_API_KEY="SG.test-key.test-secret",
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_API_KEY="123456",
        CLOUDINARY_API_SECRET="cloud-secret",
    )


# -----------------------------------------------------------------------------
# External Service Fakes
# -----------------------------------------------------------------------------


class FakeSendGridClient:
    """Records every Mail passed to send() instead of calling SendGrid."""

    sent = []
    status_code = 202
    error = None

    def __init__(self, api_key):
        self.api_key = api_key

    def send(self, message):
        if FakeSendGridClient.error is not None:
            raise FakeSendGridClient.error
        FakeSendGridClient.sent.append(message)
        return SimpleNamespace(status_code=FakeSendGridClient.status_code)


@pytest.fixture(scope="function")
def sendgrid(monkeypatch):
    FakeSendGridClient.sent = []
    FakeSendGridClient.status_code = 202
    FakeSendGridClient.error = None
    monkeypatch.setattr(
        "app.services.notification_service.SendGridAPIClient", FakeSendGridClient
    )
    return FakeSendGridClient


@pytest.fixture(scope="function")
def cloudinary_uploads(monkeypatch):
    """Replace cloudinary.uploader.upload; returns the list of recorded calls."""
    calls = []

    def _fake_upload(file, **options):
        calls.append({"content": file.read(), **options})
        return {"secure_url": UPLOAD_URL, "public_id": "internship-uploads/cv"}

    monkeypatch.setattr("cloudinary.uploader.upload", _fake_upload)
    return calls


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def client(test_settings, sendgrid, cloudinary_uploads):
    """
    TestClient wired to the temp settings and fake external services.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    api_deps._submission_logs.clear()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    api_deps._submission_logs.clear()
