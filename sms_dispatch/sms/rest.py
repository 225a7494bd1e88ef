"""Twilio SMS provider speaking the Messages REST resource directly over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from sms_dispatch.config import validate_config
from sms_dispatch.types import DispatchConfig, SentSMS, SMSMessage

from .base import ProviderRejection

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioRestSMSProvider:
    """Posts ``Body``/``To``/``From`` form fields to Twilio's Messages endpoint.

    Authenticates with HTTP basic auth (account id, auth token). Transport
    errors from httpx are not caught.
    """

    def __init__(
        self,
        config: DispatchConfig,
        *,
        base_url: str = TWILIO_API_BASE,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        validate_config(config)
        self._config = config
        self._url = f"{base_url.rstrip('/')}/Accounts/{config.account_id}/Messages.json"
        self._transport = transport

    def send(self, message: SMSMessage) -> SentSMS:
        """Send an SMS synchronously."""
        form = {
            key: value
            for key, value in (
                ("Body", message.body),
                ("To", message.to),
                ("From", self._config.from_number),
            )
            if value is not None
        }

        with httpx.Client(timeout=self._config.timeout, transport=self._transport) as client:
            response = client.post(
                self._url,
                data=form,
                auth=(self._config.account_id, self._config.auth_token),
            )

        if response.status_code >= 400:
            raise _rejection_from_response(response)

        data = response.json()
        price = data.get("price")
        return SentSMS(
            sid=data["sid"],
            price=str(price) if price is not None else None,
            status=data.get("status"),
        )


def _rejection_from_response(response: httpx.Response) -> ProviderRejection:
    """Build a ProviderRejection from a Twilio error response.

    Twilio error bodies look like ``{"code": 21211, "message": "...", "status": 400}``.
    """
    try:
        parsed = response.json()
    except ValueError:
        parsed = None
    payload: dict[str, Any] = parsed if isinstance(parsed, dict) else {}

    code = payload.get("code")
    description = payload.get("message") or f"HTTP {response.status_code}"
    logger.error("Twilio SMS API error: status=%s code=%s msg=%s", response.status_code, code, description)
    return ProviderRejection(
        str(description),
        status_code=response.status_code,
        error_code=str(code) if code else None,
    )
