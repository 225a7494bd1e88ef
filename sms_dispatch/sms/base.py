"""Base protocol for SMS providers."""

from __future__ import annotations

from typing import Protocol

from sms_dispatch.types import SentSMS, SMSMessage


class ProviderRejection(RuntimeError):
    """The provider answered the send request with an error.

    Raised for authentication failures, invalid numbers, rate limits and any
    other error the provider reports. Network-level failures are not wrapped.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class SMSProvider(Protocol):
    """Interface that all SMS providers must implement."""

    def send(self, message: SMSMessage) -> SentSMS:
        """Send an SMS and return the created message resource.

        Raises ProviderRejection when the provider refuses the message.
        """
        ...
