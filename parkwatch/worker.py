from __future__ import annotations

import logging

from parkwatch.config import Settings
from parkwatch.decider import decide
from parkwatch.domain import FetchError, NotifyDecision, Send
from parkwatch.email_notifier import send_email_message
from parkwatch.page_fetcher import fetch_page
from parkwatch.parser import parse_availability
from parkwatch.state_file import load_state, save_state

logger = logging.getLogger(__name__)


def _send_alert(settings: Settings, decision: Send) -> None:
    if not settings.email_configured:
        logger.error("Email settings are incomplete (FROM_EMAIL / FROM_PASSWORD / TO_EMAIL), alert not sent")
        return

    try:
        send_email_message(
            smtp_server=settings.smtp_server,
            smtp_port=settings.smtp_port,
            from_email=settings.from_email,
            from_password=settings.from_password,
            to_email=settings.to_email,
            subject=decision.subject,
            body=decision.body,
        )
    except Exception as e:
        # No retry: state is already saved, the next vacancy edge will alert again.
        logger.warning("Failed to send email to %s (%s: %s)", settings.to_email, type(e).__name__, e)
        return

    logger.info("Email sent to %s", settings.to_email)


def run_check_once(settings: Settings) -> NotifyDecision | None:
    """One full check: fetch, parse, persist, then notify on a vacancy edge.

    Returns the decision, or None when the page could not be fetched.
    """
    logger.info("Checking parking page: %s", settings.url)

    try:
        html = fetch_page(
            settings.url,
            user_agent=settings.user_agent,
            timeout_seconds=settings.fetch_timeout_seconds,
        )
    except FetchError as e:
        logger.error("Check skipped (%s)", e)
        return None

    current = parse_availability(html, dump_path=settings.page_dump_file)
    previous = load_state(settings.state_file)

    logger.info(
        "Vacancy: current=%s previous=%s",
        current.has_vacancy,
        None if previous is None else previous.has_vacancy,
    )

    # Saved before notifying so the next run always compares against this check.
    if save_state(settings.state_file, current):
        logger.info("State saved to %s", settings.state_file)

    decision = decide(current, previous, url=settings.url)

    if isinstance(decision, Send):
        logger.info("Vacancy found, sending alert")
        _send_alert(settings, decision)
    else:
        logger.info("No alert: %s", decision.reason)

    return decision
