"""Static capability descriptor exposed for host registration.

Declares the adapter's configuration options, routing relationships and the
work unit attributes it reads and writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .config import PROPERTIES, PropertyDescriptor
from .types import SMS_BODY, SMS_PRICE, SMS_SID, SMS_TO, Relationship


@dataclass(frozen=True, slots=True)
class AttributeSpec:
    """A work unit attribute read or written by the adapter."""

    name: str
    description: str


@dataclass(frozen=True, slots=True)
class CapabilityDescriptor:
    description: str
    tags: tuple[str, ...]
    properties: tuple[PropertyDescriptor, ...]
    relationships: tuple[Relationship, ...]
    reads: tuple[AttributeSpec, ...]
    writes: tuple[AttributeSpec, ...]

    def get_property(self, key: str) -> PropertyDescriptor:
        for prop in self.properties:
            if prop.key == key:
                return prop
        raise KeyError(key)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form suitable for a host's component registry."""
        return {
            "description": self.description,
            "tags": list(self.tags),
            "properties": [prop.to_dict() for prop in self.properties],
            "relationships": [
                {"name": rel.value, "description": rel.description} for rel in self.relationships
            ],
            "reads_attributes": [{"name": a.name, "description": a.description} for a in self.reads],
            "writes_attributes": [{"name": a.name, "description": a.description} for a in self.writes],
        }


CAPABILITIES = CapabilityDescriptor(
    description="Sends messages to the twilio service. Currently supports simple SMS",
    tags=("sms", "twilio", "notification"),
    properties=PROPERTIES,
    relationships=(Relationship.SUCCESS, Relationship.FAILURE),
    reads=(
        AttributeSpec(SMS_TO, "Phone number to send to, with +CountryCode"),
        AttributeSpec(SMS_BODY, "Message body to send"),
    ),
    writes=(
        AttributeSpec(SMS_SID, "Unique Message Identifier from Twilio"),
        AttributeSpec(SMS_PRICE, "The cost of sending the message"),
    ),
)
