from __future__ import annotations

from parkwatch.domain import NotifyDecision, ParkingState, Send, Suppress

ALERT_SUBJECT = "[Parking vacancy] A space has opened up!"


def format_alert(state: ParkingState, *, url: str) -> tuple[str, str]:
    body = (
        "A space has opened up at the parking!\n"
        "\n"
        f"URL: {url}\n"
        f"Checked at: {state.timestamp}\n"
        "\n"
        "Details:\n"
        f"{state.details}\n"
        "\n"
        "Check it out as soon as possible!"
    )
    return ALERT_SUBJECT, body


def decide(current: ParkingState, previous: ParkingState | None, *, url: str) -> NotifyDecision:
    """Fire only on the rising edge of has_vacancy.

    A missing previous state counts as "was full", so a vacancy on the very
    first check is reported.
    """
    if not current.has_vacancy:
        return Suppress("currently full")

    if previous is not None and previous.has_vacancy:
        return Suppress("already notified, vacancy still open")

    subject, body = format_alert(current, url=url)
    return Send(subject=subject, body=body)
