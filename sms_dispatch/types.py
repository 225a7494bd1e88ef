"""Core types for the SMS dispatch adapter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

# ── Work unit attribute names ─────────────────────────────────────────

SMS_TO = "sms.to"
SMS_BODY = "sms.body"
SMS_SID = "sms.sid"
SMS_PRICE = "sms.price"

DEFAULT_TIMEOUT_SECONDS = 10.0


class Relationship(str, Enum):
    """Routing outcome a work unit is transferred to after dispatch."""

    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def description(self) -> str:
        return _RELATIONSHIP_DESCRIPTIONS[self]


_RELATIONSHIP_DESCRIPTIONS: dict[Relationship, str] = {
    Relationship.SUCCESS: "Message sent successfully",
    Relationship.FAILURE: "Message failed to send",
}


@dataclass(slots=True)
class WorkUnit:
    """A unit of work handed over by the host, carrying string attributes.

    The adapter reads ``sms.to`` and ``sms.body`` and, on success, adds
    ``sms.sid`` and ``sms.price``. Attributes are never removed.
    """

    attributes: dict[str, str] = field(default_factory=dict)
    penalized: bool = False

    def get(self, name: str) -> str | None:
        return self.attributes.get(name)

    def put_all(self, attributes: Mapping[str, str]) -> None:
        """Merge ``attributes`` into the unit, overwriting same-named keys."""
        self.attributes.update(attributes)

    def penalize(self) -> None:
        """Mark the unit so the host delays its next processing attempt."""
        self.penalized = True


@dataclass(frozen=True, slots=True)
class SMSMessage:
    """An outbound SMS. Missing fields are passed to the provider as absent."""

    to: str | None
    body: str | None


@dataclass(frozen=True, slots=True)
class SentSMS:
    """Message resource returned by the provider after a successful send."""

    sid: str
    price: str | None = None
    status: str | None = None


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of dispatching a single work unit."""

    relationship: Relationship
    sid: str | None = None
    price: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.relationship is Relationship.SUCCESS

    @classmethod
    def success(cls, *, sid: str, price: str | None = None) -> DispatchResult:
        return cls(relationship=Relationship.SUCCESS, sid=sid, price=price)

    @classmethod
    def failure(cls) -> DispatchResult:
        return cls(relationship=Relationship.FAILURE)


# ── Provider configuration ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class DispatchConfig:
    """Twilio credentials and sender number used for every dispatched message."""

    account_id: str
    auth_token: str = field(repr=False)
    from_number: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
