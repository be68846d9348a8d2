"""Tests for settings defaults and environment overrides."""
from fileshare.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "MAX_UPLOAD_SIZE", "UPLOAD_DATE_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 3000
    assert settings.MAX_UPLOAD_SIZE == 10 * 1024 * 1024
    assert settings.UPLOAD_DATE_FORMAT == "%d.%m.%Y, %H:%M:%S"


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")

    assert Settings(_env_file=None).PORT == 8080
