from datetime import timedelta

import pytest

from core.settings import Settings, parse_duration
from core.url_parser import URLParser


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("2w", timedelta(weeks=2)),
        ("3600", timedelta(seconds=3600)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "seven days", "7y", "-1d"])
def test_parse_duration_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRES_IN", "12h")
    monkeypatch.setenv("API_VERSION", "/v2/")
    monkeypatch.setenv("ALLOWED_HOSTS", "https://app.example.com, ftp://bad")

    settings = Settings()

    assert settings.JWT_EXPIRES_IN == timedelta(hours=12)
    assert settings.API_PREFIX == "/v2"
    assert settings.ALLOWED_HOSTS == ["https://app.example.com"]


def test_settings_defaults():
    settings = Settings()

    assert settings.PORT == 3000
    assert settings.ALGORITHM == "HS256"
    assert settings.JWT_EXPIRES_IN == timedelta(days=7)


def test_missing_secret_refuses_to_start(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "   ")
    with pytest.raises(ValueError):
        Settings()


def test_url_parser_wildcard_wins():
    assert URLParser().parse_url_list("https://a.example.com,*", "HOSTS") == ["*"]
