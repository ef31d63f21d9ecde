from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class ParkingState:
    """Result of one availability check.

    ``contact`` ("please enquire") on the site counts as a vacancy: it is the
    only way a space ever shows up there.
    """

    has_vacancy: bool
    details: str
    timestamp: str  # ISO-8601 local date-time, no offset

    def to_record(self) -> dict[str, Any]:
        # Field names kept compatible with existing state.json files.
        return {
            "hasVacancy": self.has_vacancy,
            "details": self.details,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> ParkingState:
        has_vacancy = raw.get("hasVacancy", False)
        if not isinstance(has_vacancy, bool):
            raise ValueError(f"hasVacancy must be a boolean, got {has_vacancy!r}")
        return cls(
            has_vacancy=has_vacancy,
            details=str(raw.get("details", "")),
            timestamp=str(raw.get("timestamp", "")),
        )


@dataclass(frozen=True)
class Send:
    subject: str
    body: str


@dataclass(frozen=True)
class Suppress:
    reason: str


NotifyDecision = Union[Send, Suppress]


class FetchError(RuntimeError):
    """The parking page could not be retrieved (transport error or bad HTTP status)."""
