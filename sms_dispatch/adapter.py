"""SMS dispatch adapter — the main entry point.

Takes a work unit carrying ``sms.to`` and ``sms.body``, sends it through an
SMS provider and routes it to ``success`` (with ``sms.sid``/``sms.price``
added) or ``failure`` (penalized, attributes untouched).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .config import config_from_env, load_config, redact, validate_config
from .descriptor import CAPABILITIES
from .sms.base import ProviderRejection
from .sms.twilio import TwilioSMSProvider
from .types import (
    SMS_BODY,
    SMS_PRICE,
    SMS_SID,
    SMS_TO,
    DispatchConfig,
    DispatchResult,
    Relationship,
    SMSMessage,
    WorkUnit,
)

if TYPE_CHECKING:
    from .host import WorkSession
    from .sms.base import SMSProvider

logger = logging.getLogger(__name__)


class SmsDispatchAdapter:
    """Sends one SMS per work unit and routes the unit by outcome.

    Usage::

        from sms_dispatch import DispatchConfig, SmsDispatchAdapter, WorkUnit

        adapter = SmsDispatchAdapter(DispatchConfig(
            account_id="AC...",
            auth_token="...",
            from_number="+15559999999",
        ))
        work = WorkUnit({"sms.to": "+15551234567", "sms.body": "Hi"})
        result = adapter.dispatch(work)
        if result.succeeded:
            print(work.attributes["sms.sid"])

    The configuration is validated on construction and is read-only
    afterwards; the adapter keeps no other state, so one instance may be
    shared between worker threads.
    """

    capabilities = CAPABILITIES

    def __init__(self, config: DispatchConfig, provider: SMSProvider | None = None) -> None:
        validate_config(config)
        self._config = config
        self._provider = provider if provider is not None else TwilioSMSProvider(config)
        logger.debug("SMS dispatch adapter configured: %s", redact(config))

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, Any],
        provider: SMSProvider | None = None,
    ) -> SmsDispatchAdapter:
        return cls(load_config(values), provider)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        provider: SMSProvider | None = None,
    ) -> SmsDispatchAdapter:
        return cls(config_from_env(environ), provider)

    @property
    def config(self) -> DispatchConfig:
        return self._config

    def dispatch(self, work: WorkUnit | None) -> DispatchResult | None:
        """Send the SMS described by ``work`` and record the outcome on it.

        Returns None without contacting the provider when ``work`` is None.
        Errors other than a provider rejection propagate to the caller.
        """
        if work is None:
            return None

        message = SMSMessage(to=work.get(SMS_TO), body=work.get(SMS_BODY))
        if not message.to or not message.body:
            logger.warning(
                "Work unit is missing %s or %s; sending anyway and leaving validation to the provider",
                SMS_TO,
                SMS_BODY,
            )

        try:
            sent = self._provider.send(message)
        except ProviderRejection as exc:
            logger.warning(
                "SMS to %s rejected by provider (status=%s code=%s); routing to %s",
                message.to,
                exc.status_code,
                exc.error_code,
                Relationship.FAILURE.value,
            )
            work.penalize()
            return DispatchResult.failure()

        attributes = {SMS_SID: sent.sid}
        if sent.price is not None:
            attributes[SMS_PRICE] = sent.price
        work.put_all(attributes)

        logger.info("SMS sent to %s, sid=%s", message.to, sent.sid)
        return DispatchResult.success(sid=sent.sid, price=sent.price)

    async def dispatch_async(self, work: WorkUnit | None) -> DispatchResult | None:
        """Dispatch asynchronously (runs the blocking dispatch in a thread)."""
        return await asyncio.to_thread(self.dispatch, work)

    def on_trigger(self, session: WorkSession) -> DispatchResult | None:
        """Take at most one work unit from the host session, dispatch and route it."""
        work = session.get()
        if work is None:
            return None

        result = self.dispatch(work)
        assert result is not None  # work is not None
        session.transfer(work, result.relationship)
        return result


def dispatch(
    config: DispatchConfig,
    work: WorkUnit | None,
    *,
    provider: SMSProvider | None = None,
) -> DispatchResult | None:
    """Validate ``config`` and dispatch a single work unit."""
    return SmsDispatchAdapter(config, provider).dispatch(work)
