from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_URL = "https://monthly.mkp.jp/parking/004884-00/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@dataclass(frozen=True)
class Settings:
    url: str = DEFAULT_URL

    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    from_email: str = ""
    from_password: str = ""
    to_email: str = ""

    # Informational only: checks are launched by cron / a systemd timer.
    check_interval_minutes: int = 60

    # Where we store the last seen state
    state_file: str = "state.json"
    # Raw page is dumped here when the status element can't be found
    page_dump_file: str = "last_page.html"

    user_agent: str = DEFAULT_USER_AGENT
    fetch_timeout_seconds: float = 30.0

    @property
    def email_configured(self) -> bool:
        return bool(self.from_email and self.from_password and self.to_email)


def _int_env(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid {name} value: {raw!r}. Expected integer.") from e
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}")
    return value


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid {name} value: {raw!r}. Expected number of seconds.") from e
    if value <= 0:
        raise RuntimeError(f"{name} must be > 0")
    return value


def load_settings(dotenv_path: str | None = None) -> Settings:
    # Prefer .env in repo root; dotenv_path allows overriding in tests.
    load_dotenv(dotenv_path=dotenv_path, override=False)

    url = os.getenv("PARKING_URL", "").strip() or DEFAULT_URL
    if not url.startswith(("http://", "https://")):
        raise RuntimeError(f"Invalid PARKING_URL value: {url!r}. Expected http(s) URL.")

    smtp_port = _int_env("SMTP_PORT", 587, minimum=1)
    if smtp_port > 65535:
        raise RuntimeError("SMTP_PORT must be <= 65535")

    return Settings(
        url=url,
        smtp_server=os.getenv("SMTP_SERVER", "").strip() or "smtp.gmail.com",
        smtp_port=smtp_port,
        from_email=os.getenv("FROM_EMAIL", "").strip(),
        from_password=os.getenv("FROM_PASSWORD", ""),
        to_email=os.getenv("TO_EMAIL", "").strip(),
        check_interval_minutes=_int_env("CHECK_INTERVAL_MINUTES", 60, minimum=1),
        state_file=os.getenv("STATE_FILE", "").strip() or "state.json",
        page_dump_file=os.getenv("PAGE_DUMP_FILE", "").strip() or "last_page.html",
        fetch_timeout_seconds=_float_env("FETCH_TIMEOUT_SECONDS", 30.0),
    )
