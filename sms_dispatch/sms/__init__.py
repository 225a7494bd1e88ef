"""SMS providers — Twilio SDK and direct REST transports."""

from .base import ProviderRejection, SMSProvider
from .rest import TwilioRestSMSProvider
from .twilio import TwilioSMSProvider

__all__ = ["ProviderRejection", "SMSProvider", "TwilioRestSMSProvider", "TwilioSMSProvider"]
