"""Shared test fixtures for the SMS dispatch adapter."""

import pytest

from sms_dispatch import DispatchConfig, MockSMSProvider, SentSMS, WorkUnit


@pytest.fixture
def dispatch_config() -> DispatchConfig:
    return DispatchConfig(
        account_id="ACtest123",
        auth_token="test_token_456",
        from_number="+15559999999",
    )


@pytest.fixture
def mock_provider() -> MockSMSProvider:
    return MockSMSProvider(fixed_result=SentSMS(sid="SM123", price="0.0075", status="queued"))


@pytest.fixture
def work_unit() -> WorkUnit:
    return WorkUnit({"sms.to": "+15551234567", "sms.body": "hello", "filename": "order-42.json"})
