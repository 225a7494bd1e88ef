"""
sms-dispatch — Twilio SMS dispatch adapter for work-unit pipelines.

Receives a unit of work carrying a destination number and a message body,
sends the SMS through Twilio, and routes the unit to ``success`` (with the
provider's message SID and price recorded as attributes) or ``failure``
(penalized, attributes untouched). The host runtime keeps ownership of work
units, scheduling and routing.

Quick start::

    from sms_dispatch import DispatchConfig, SmsDispatchAdapter, WorkUnit

    adapter = SmsDispatchAdapter(DispatchConfig(
        account_id="AC...",
        auth_token="...",
        from_number="+15559999999",
    ))
    work = WorkUnit({"sms.to": "+15551234567", "sms.body": "Hi"})
    result = adapter.dispatch(work)
    if result.succeeded:
        print(f"SMS SID: {work.attributes['sms.sid']}")

Configuration from the environment (``TWILIO_ACCOUNT_SID``,
``TWILIO_AUTH_TOKEN``, ``TWILIO_FROM_NUMBER``)::

    adapter = SmsDispatchAdapter.from_env()

Driven by a host session::

    result = adapter.on_trigger(session)  # session.get() / session.transfer()

For testing::

    from sms_dispatch import InMemorySession, MockSMSProvider

    provider = MockSMSProvider()
    adapter = SmsDispatchAdapter(config, provider)
    session = InMemorySession([WorkUnit({"sms.to": "+1555...", "sms.body": "hi"})])
    adapter.on_trigger(session)
    assert session.transferred[0].relationship is Relationship.SUCCESS

Module overview
---------------
- ``types``       — WorkUnit, DispatchResult, Relationship, DispatchConfig
- ``config``      — Option descriptors, validation, loading, redaction
- ``descriptor``  — Static capability descriptor for host registration
- ``adapter``     — SmsDispatchAdapter and the functional ``dispatch``
- ``host``        — WorkSession protocol
- ``sms/``        — TwilioSMSProvider (SDK), TwilioRestSMSProvider (httpx)
- ``mock``        — MockSMSProvider, InMemorySession

What this library does NOT own (stays in the host):
- Work unit storage, scheduling and retry of penalized units
- Queueing, batching and backoff
- Channels other than SMS
"""

from .adapter import SmsDispatchAdapter, dispatch
from .config import (
    ACCOUNT_ID,
    AUTH_TOKEN,
    FROM_NUMBER,
    PROPERTIES,
    TIMEOUT,
    ConfigurationError,
    PropertyDescriptor,
    config_from_env,
    load_config,
    redact,
    validate_config,
)
from .descriptor import CAPABILITIES, AttributeSpec, CapabilityDescriptor
from .host import WorkSession
from .mock import InMemorySession, MockSMSProvider
from .sms import ProviderRejection, SMSProvider, TwilioRestSMSProvider, TwilioSMSProvider
from .types import (
    SMS_BODY,
    SMS_PRICE,
    SMS_SID,
    SMS_TO,
    DispatchConfig,
    DispatchResult,
    Relationship,
    SentSMS,
    SMSMessage,
    WorkUnit,
)

__all__ = [
    # Adapter
    "SmsDispatchAdapter",
    "dispatch",
    "WorkSession",
    # Configuration
    "ACCOUNT_ID",
    "AUTH_TOKEN",
    "FROM_NUMBER",
    "TIMEOUT",
    "PROPERTIES",
    "ConfigurationError",
    "PropertyDescriptor",
    "config_from_env",
    "load_config",
    "redact",
    "validate_config",
    # Capabilities
    "CAPABILITIES",
    "AttributeSpec",
    "CapabilityDescriptor",
    # Providers
    "SMSProvider",
    "ProviderRejection",
    "TwilioSMSProvider",
    "TwilioRestSMSProvider",
    "MockSMSProvider",
    "InMemorySession",
    # Types
    "SMS_TO",
    "SMS_BODY",
    "SMS_SID",
    "SMS_PRICE",
    "DispatchConfig",
    "DispatchResult",
    "Relationship",
    "SentSMS",
    "SMSMessage",
    "WorkUnit",
]
