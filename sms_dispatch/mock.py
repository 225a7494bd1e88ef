"""Test doubles for the SMS dispatch adapter.

``MockSMSProvider`` records every message it is asked to send and returns a
configurable result. ``InMemorySession`` stands in for the host runtime.
"""

from __future__ import annotations

import uuid
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from .types import Relationship, SentSMS, SMSMessage, WorkUnit


class MockSMSProvider:
    """Provider that records messages instead of sending them.

    Usage::

        provider = MockSMSProvider()
        adapter = SmsDispatchAdapter(config, provider)
        adapter.dispatch(WorkUnit({"sms.to": "+1555...", "sms.body": "hi"}))
        assert provider.sent[0].body == "hi"

    Configure a rejection::

        provider = MockSMSProvider(error=ProviderRejection("invalid number"))
    """

    def __init__(
        self,
        *,
        fixed_result: SentSMS | None = None,
        error: Exception | None = None,
        price: str | None = "0.0075",
    ) -> None:
        self.fixed_result = fixed_result
        self.error = error
        self.price = price
        self.sent: list[SMSMessage] = []

    def send(self, message: SMSMessage) -> SentSMS:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        if self.fixed_result is not None:
            return self.fixed_result
        return SentSMS(sid=f"SM{uuid.uuid4().hex}", price=self.price, status="queued")

    def reset(self) -> None:
        """Clear all recorded messages."""
        self.sent.clear()


@dataclass
class Transfer:
    """Record of a work unit routed through an InMemorySession."""

    work: WorkUnit
    relationship: Relationship


class InMemorySession:
    """Host session backed by a local queue of work units."""

    def __init__(self, units: Iterable[WorkUnit] = ()) -> None:
        self._queue: deque[WorkUnit] = deque(units)
        self.transferred: list[Transfer] = []

    def get(self) -> WorkUnit | None:
        return self._queue.popleft() if self._queue else None

    def transfer(self, work: WorkUnit, relationship: Relationship) -> None:
        self.transferred.append(Transfer(work=work, relationship=relationship))

    def routed_to(self, relationship: Relationship) -> list[WorkUnit]:
        return [t.work for t in self.transferred if t.relationship is relationship]
