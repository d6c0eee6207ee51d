from types import SimpleNamespace

import pytest

from app.core.config import Settings
from app.core.errors import NotificationError
from app.schemas.submission import Submission
from app.services.notification_service import NotificationService


def _settings(**overrides):
    values = {
        "SENDGRID_API_KEY": "SG.test-key.test-secret",
        "VERIFIED_SENDER": "noreply@example.com",
        "ADMIN_EMAIL": "admin@example.com",
    }
    values.update(overrides)
    return Settings(**values)


def _submission():
    return Submission(
        fields={"Name": "Ana", "Email": "ana@example.com", "CollegeName": "UTN", "Location": "Salta"},
        file_reference="https://res.cloudinary.com/demo/cv.pdf",
    )


def test_build_body_contains_dump_and_reference():
    body = NotificationService.build_body(_submission())

    assert body.startswith("Thank you for applying!\n\nDetails:\n{\n")
    assert '  "CollegeName": "UTN",\n' in body
    assert body.endswith("}\n\nFile URL:\nhttps://res.cloudinary.com/demo/cv.pdf")


def test_build_message_one_personalization_per_recipient():
    message = NotificationService(_settings()).build_message(_submission())
    payload = message.get()

    assert payload["from"]["email"] == "noreply@example.com"
    assert payload["subject"] == "Internship Form Submission"
    recipients = [p["to"][0]["email"] for p in payload["personalizations"]]
    assert sorted(recipients) == ["admin@example.com", "ana@example.com"]
    assert payload["content"][0]["type"] == "text/plain"


def test_recipients_without_admin_email():
    service = NotificationService(_settings(ADMIN_EMAIL=None))

    assert service.recipients(_submission()) == ["ana@example.com"]


def test_build_message_requires_verified_sender():
    service = NotificationService(_settings(VERIFIED_SENDER=None))

    with pytest.raises(NotificationError):
        service.build_message(_submission())


@pytest.mark.asyncio
async def test_send_uses_configured_api_key(monkeypatch):
    clients = []

    class _Client:
        def __init__(self, api_key):
            self.api_key = api_key
            clients.append(self)

        def send(self, message):
            return SimpleNamespace(status_code=202)

    monkeypatch.setattr("app.services.notification_service.SendGridAPIClient", _Client)

    await NotificationService(_settings()).send(_submission())

    assert [c.api_key for c in clients] == ["SG.test-key.test-secret"]


@pytest.mark.asyncio
async def test_send_wraps_client_errors(monkeypatch):
    class _Client:
        def __init__(self, api_key):
            pass

        def send(self, message):
            raise ConnectionError("network down")

    monkeypatch.setattr("app.services.notification_service.SendGridAPIClient", _Client)

    with pytest.raises(NotificationError, match="network down"):
        await NotificationService(_settings()).send(_submission())


@pytest.mark.asyncio
async def test_send_without_api_key_fails():
    service = NotificationService(_settings(SENDGRID_API_KEY=None))

    with pytest.raises(NotificationError):
        await service.send(_submission())
