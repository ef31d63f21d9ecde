"""Vacancy detection for the monthly-parking detail page.

The page marks the current status with a single ``span.ic_situation`` inside
the detail panel title, e.g. ``<span class="ic_situation full">``. When that
element is missing we fall back to a crude keyword scan of the page text and
dump the HTML so the new layout can be inspected by hand.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Callable

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from parkwatch.domain import ParkingState

logger = logging.getLogger(__name__)

TITLE_SELECTOR = "body#parking div#page div#contents div.con_parkingdetail div.title"
SITUATION_SELECTOR = f"{TITLE_SELECTOR} span.ic_situation"

DETAILS_UNAVAILABLE = "Vacancy details unavailable."
STRUCTURE_CHANGED = "Page structure may have changed. Please verify manually."

# Evaluated top to bottom, first match wins.
# "contact" (enquire for availability) is reported as a vacancy.
_INDICATOR_RULES: tuple[tuple[str, bool], ...] = (
    ("empty", True),
    ("contact", True),
    ("full", False),
)

_VACANCY_KEYWORDS = ("空き", "空", "empty")
_FULL_KEYWORDS = ("満車", "満", "full", "contact")


def classify_indicator(class_value: str) -> bool | None:
    """Map the status element's class string to a vacancy flag.

    Returns None when no known token is present.
    """
    for token, has_vacancy in _INDICATOR_RULES:
        if token in class_value:
            return has_vacancy
    return None


def classify_text(text: str) -> bool | None:
    """Keyword heuristic over lowercased page text. None means undetermined."""
    has_vacancy_word = any(k in text for k in _VACANCY_KEYWORDS)
    has_full_word = any(k in text for k in _FULL_KEYWORDS)

    if has_vacancy_word and not has_full_word:
        return True
    if has_full_word:
        return False
    return None


def _dump_page(html: str, path: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(html)
    except OSError as e:
        logger.warning("Failed to write page dump to %s (%s: %s)", path, type(e).__name__, e)
        return
    logger.info("Saved page HTML to %s, please inspect it", path)


def _page_text(soup: BeautifulSoup) -> str:
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup.get_text(" ").lower()


def parse_availability(
    html: str,
    *,
    dump_path: str = "last_page.html",
    clock: Callable[[], dt.datetime] = dt.datetime.now,
) -> ParkingState:
    try:
        soup: BeautifulSoup | None = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning("HTML parser rejected the page (%s: %s)", type(e).__name__, e)
        soup = None

    situation = soup.select_one(SITUATION_SELECTOR) if soup is not None else None

    if situation is not None:
        class_value = " ".join(situation.get("class") or [])

        verdict = classify_indicator(class_value)
        if verdict is None:
            logger.warning("Unexpected status class found: %r, treating as full", class_value)
        has_vacancy = bool(verdict)

        title = situation.find_parent("div", class_="title")
        title_text = " ".join(title.get_text(" ").split()) if title is not None else ""
        details = title_text or DETAILS_UNAVAILABLE

        logger.info("Vacancy status detected: class=%r has_vacancy=%s", class_value, has_vacancy)
    else:
        logger.warning("Status element not found, falling back to text search")
        _dump_page(html, dump_path)

        verdict = classify_text(_page_text(soup) if soup is not None else html.lower())
        if verdict is None:
            logger.warning("Fallback text search could not determine vacancy, assuming full")
        has_vacancy = bool(verdict)
        details = STRUCTURE_CHANGED

    return ParkingState(
        has_vacancy=has_vacancy,
        details=details,
        timestamp=clock().isoformat(),
    )
