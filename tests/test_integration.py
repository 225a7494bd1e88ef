"""Integration tests — full flow from work unit to routed outcome.

These tests wire real library components together and only mock the
external transport boundary (httpx transport / Twilio SDK client). They
verify that a work unit enters the adapter, flows through the provider,
hits the Twilio API with the correct form payload, and leaves with the
right attributes and relationship.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs

import httpx
import pytest
from twilio.base.exceptions import TwilioRestException

from sms_dispatch import (
    InMemorySession,
    Relationship,
    SmsDispatchAdapter,
    TwilioRestSMSProvider,
    WorkUnit,
    load_config,
)

# ── Fixtures ─────────────────────────────────────────────────────────


END_TO_END_CONFIG = {"accountId": "ACxxx", "authToken": "secret", "fromNumber": "+15559999999"}


class _FakeTwilio:
    """Minimal stand-in for the Messages resource, recording form posts."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.forms: list[dict[str, list[str]]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.forms.append(parse_qs(request.content.decode()))
        return self.response


def _rest_adapter(fake: _FakeTwilio) -> SmsDispatchAdapter:
    config = load_config(END_TO_END_CONFIG)
    provider = TwilioRestSMSProvider(config, transport=httpx.MockTransport(fake))
    return SmsDispatchAdapter(config, provider)


# ── REST transport: end-to-end ───────────────────────────────────────


class TestRestEndToEnd:
    """WorkUnit → SmsDispatchAdapter → TwilioRestSMSProvider → HTTP → routed unit."""

    def test_outbound_parameters_are_exact(self):
        fake = _FakeTwilio(httpx.Response(201, json={"sid": "SM123", "price": "0.0075", "status": "queued"}))
        adapter = _rest_adapter(fake)

        adapter.dispatch(WorkUnit({"sms.to": "+15551234567", "sms.body": "Hi"}))

        assert fake.forms == [{"Body": ["Hi"], "To": ["+15551234567"], "From": ["+15559999999"]}]

    def test_success_flow_through_session(self):
        fake = _FakeTwilio(httpx.Response(201, json={"sid": "SM123", "price": "0.0075", "status": "queued"}))
        work = WorkUnit({"sms.to": "+15551234567", "sms.body": "hello", "mime.type": "text/plain"})
        session = InMemorySession([work])

        result = _rest_adapter(fake).on_trigger(session)

        assert result is not None and result.succeeded
        assert session.routed_to(Relationship.SUCCESS) == [work]
        assert work.attributes == {
            "sms.to": "+15551234567",
            "sms.body": "hello",
            "mime.type": "text/plain",
            "sms.sid": "SM123",
            "sms.price": "0.0075",
        }

    def test_rejection_flow_through_session(self):
        fake = _FakeTwilio(
            httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number", "status": 400})
        )
        work = WorkUnit({"sms.to": "+1", "sms.body": "hello"})
        session = InMemorySession([work])

        result = _rest_adapter(fake).on_trigger(session)

        assert result is not None and not result.succeeded
        assert session.routed_to(Relationship.FAILURE) == [work]
        assert work.penalized
        assert work.attributes == {"sms.to": "+1", "sms.body": "hello"}

    def test_network_fault_is_not_routed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        config = load_config(END_TO_END_CONFIG)
        adapter = SmsDispatchAdapter(config, TwilioRestSMSProvider(config, transport=httpx.MockTransport(handler)))
        work = WorkUnit({"sms.to": "+15551234567", "sms.body": "hello"})
        session = InMemorySession([work])

        with pytest.raises(httpx.TransportError):
            adapter.on_trigger(session)

        assert session.transferred == []
        assert not work.penalized

    def test_repeat_dispatch_posts_twice(self):
        fake = _FakeTwilio(httpx.Response(201, json={"sid": "SM123", "price": None}))
        adapter = _rest_adapter(fake)
        work = WorkUnit({"sms.to": "+15551234567", "sms.body": "Hi"})

        adapter.dispatch(work)
        adapter.dispatch(work)

        assert len(fake.forms) == 2


# ── Twilio SDK: end-to-end ───────────────────────────────────────────


class TestSdkEndToEnd:
    """WorkUnit → SmsDispatchAdapter → TwilioSMSProvider → Twilio SDK (mocked client)."""

    def test_sdk_success(self):
        with patch("sms_dispatch.sms.twilio.Client") as client_cls, \
             patch("sms_dispatch.sms.twilio.TwilioHttpClient"):
            client_cls.return_value.messages.create.return_value = MagicMock(
                sid="SM123", price="0.0075", status="queued"
            )
            adapter = SmsDispatchAdapter.from_mapping(END_TO_END_CONFIG)
            work = WorkUnit({"sms.to": "+15551234567", "sms.body": "Hi"})

            result = adapter.dispatch(work)

        assert result is not None and result.relationship is Relationship.SUCCESS
        client_cls.assert_called_once()
        assert client_cls.call_args.args == ("ACxxx", "secret")
        client_cls.return_value.messages.create.assert_called_once_with(
            body="Hi", to="+15551234567", from_="+15559999999"
        )
        assert work.attributes["sms.sid"] == "SM123"
        assert work.attributes["sms.price"] == "0.0075"

    def test_sdk_rejection(self):
        with patch("sms_dispatch.sms.twilio.Client") as client_cls, \
             patch("sms_dispatch.sms.twilio.TwilioHttpClient"):
            client_cls.return_value.messages.create.side_effect = TwilioRestException(
                401, "https://api.twilio.com", msg="Authenticate", code=20003
            )
            adapter = SmsDispatchAdapter.from_mapping(END_TO_END_CONFIG)
            work = WorkUnit({"sms.to": "+15551234567", "sms.body": "Hi"})

            result = adapter.dispatch(work)

        assert result is not None and result.relationship is Relationship.FAILURE
        assert work.penalized
        assert "sms.sid" not in work.attributes
