import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "SUBMISSIONS_LOG_PATH", "UPLOAD_FOLDER", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 3000
    assert settings.SUBMISSIONS_LOG_PATH == "submissions.txt"
    assert settings.UPLOAD_FOLDER == "internship-uploads"
    assert settings.MAX_UPLOAD_BYTES == 5 * 1024 * 1024
    assert settings.ALLOWED_FILE_TYPES == ["image/jpeg", "image/png", "application/pdf"]
    assert settings.ALLOWED_ORIGINS == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@example.com")
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.key.secret")

    settings = Settings(_env_file=None)

    assert settings.PORT == 8080
    assert settings.ADMIN_EMAIL == "admin@example.com"
    assert settings.SENDGRID_API_KEY.get_secret_value() == "SG.key.secret"


def test_rejects_non_positive_upload_limit():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, MAX_UPLOAD_BYTES=0)
