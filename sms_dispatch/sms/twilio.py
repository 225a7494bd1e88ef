"""Twilio SMS provider backed by the official SDK."""

from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioRestException  # type: ignore[import-untyped]
from twilio.http.http_client import TwilioHttpClient  # type: ignore[import-untyped]
from twilio.rest import Client  # type: ignore[import-untyped]

from sms_dispatch.config import validate_config
from sms_dispatch.types import DispatchConfig, SentSMS, SMSMessage

from .base import ProviderRejection

logger = logging.getLogger(__name__)


class TwilioSMSProvider:
    """Sends SMS messages via the Twilio REST API.

    A new client is built for every send so that concurrent callers never
    share an HTTP session.
    """

    def __init__(self, config: DispatchConfig) -> None:
        validate_config(config)
        self._config = config

    def send(self, message: SMSMessage) -> SentSMS:
        """Send an SMS synchronously."""
        client = self._build_client()
        try:
            msg = client.messages.create(
                body=message.body,
                to=message.to,
                from_=self._config.from_number,
            )
        except TwilioRestException as exc:
            logger.error("Twilio SMS API error: status=%s code=%s msg=%s", exc.status, exc.code, exc.msg)
            raise ProviderRejection(
                str(exc.msg),
                status_code=exc.status,
                error_code=str(exc.code) if exc.code else None,
            ) from exc

        price = getattr(msg, "price", None)
        return SentSMS(
            sid=msg.sid,
            price=str(price) if price is not None else None,
            status=getattr(msg, "status", None),
        )

    def _build_client(self) -> Client:
        http_client = TwilioHttpClient(timeout=self._config.timeout)
        return Client(self._config.account_id, self._config.auth_token, http_client=http_client)
