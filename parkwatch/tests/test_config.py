from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from parkwatch.config import DEFAULT_URL, load_settings

_ENV_VARS = (
    "PARKING_URL",
    "SMTP_SERVER",
    "SMTP_PORT",
    "FROM_EMAIL",
    "FROM_PASSWORD",
    "TO_EMAIL",
    "CHECK_INTERVAL_MINUTES",
    "STATE_FILE",
    "PAGE_DUMP_FILE",
    "FETCH_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env():
    # load_dotenv writes into os.environ; restore it fully after each test.
    with patch.dict(os.environ):
        for name in _ENV_VARS:
            os.environ.pop(name, None)
        yield


def _load(tmp_path):
    # Point at an empty .env so a developer's local one doesn't leak in.
    dotenv = tmp_path / ".env"
    dotenv.write_text("")
    return load_settings(dotenv_path=str(dotenv))


def test_load_settings_defaults(tmp_path) -> None:
    settings = _load(tmp_path)

    assert settings.url == DEFAULT_URL
    assert settings.smtp_server == "smtp.gmail.com"
    assert settings.smtp_port == 587
    assert settings.check_interval_minutes == 60
    assert settings.state_file == "state.json"
    assert settings.page_dump_file == "last_page.html"
    assert settings.email_configured is False


def test_load_settings_reads_email_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("PARKING_URL", "https://parking.example.com/lot/1/")
    monkeypatch.setenv("SMTP_SERVER", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "2525")
    monkeypatch.setenv("FROM_EMAIL", "from@example.com")
    monkeypatch.setenv("FROM_PASSWORD", "secret")
    monkeypatch.setenv("TO_EMAIL", "to@example.com")

    settings = _load(tmp_path)

    assert settings.url == "https://parking.example.com/lot/1/"
    assert settings.smtp_server == "smtp.example.com"
    assert settings.smtp_port == 2525
    assert settings.email_configured is True


def test_load_settings_rejects_non_integer_smtp_port(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("SMTP_PORT", "abc")

    with pytest.raises(RuntimeError, match=r"Invalid SMTP_PORT"):
        _load(tmp_path)


def test_load_settings_rejects_out_of_range_smtp_port(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("SMTP_PORT", "70000")

    with pytest.raises(RuntimeError, match=r"SMTP_PORT must be <= 65535"):
        _load(tmp_path)


def test_load_settings_rejects_zero_interval(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("CHECK_INTERVAL_MINUTES", "0")

    with pytest.raises(RuntimeError, match=r"CHECK_INTERVAL_MINUTES must be >= 1"):
        _load(tmp_path)


def test_load_settings_rejects_bad_timeout(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "-1")

    with pytest.raises(RuntimeError, match=r"FETCH_TIMEOUT_SECONDS must be > 0"):
        _load(tmp_path)


def test_load_settings_rejects_non_http_url(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("PARKING_URL", "ftp://example.com/")

    with pytest.raises(RuntimeError, match=r"Invalid PARKING_URL"):
        _load(tmp_path)


def test_load_settings_reads_dotenv_file(tmp_path) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text("TO_EMAIL=dotenv@example.com\nSTATE_FILE=/var/lib/parkwatch/state.json\n")

    settings = load_settings(dotenv_path=str(dotenv))

    assert settings.to_email == "dotenv@example.com"
    assert settings.state_file == "/var/lib/parkwatch/state.json"


def test_load_settings_does_not_override_existing_env_with_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # load_dotenv(override=False) must not overwrite already-set env vars.
    monkeypatch.setenv("TO_EMAIL", "env@example.com")

    dotenv = tmp_path / ".env"
    dotenv.write_text("TO_EMAIL=dotenv@example.com\n")

    settings = load_settings(dotenv_path=str(dotenv))
    assert settings.to_email == "env@example.com"
