"""Configuration schema, validation and loading for the dispatch adapter.

Each recognised option is described by a :class:`PropertyDescriptor`.
Options flagged ``sensitive`` are masked by :func:`redact` and are never
included in error messages or log records.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .types import DEFAULT_TIMEOUT_SECONDS, DispatchConfig

logger = logging.getLogger(__name__)

REDACTED = "********"


@dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    """A single configuration option the adapter recognises."""

    key: str
    name: str
    description: str
    env_var: str
    required: bool = True
    sensitive: bool = False
    aliases: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "required": self.required,
            "sensitive": self.sensitive,
        }


ACCOUNT_ID = PropertyDescriptor(
    key="account_id",
    name="Account Id",
    description="Twilio Account Id",
    env_var="TWILIO_ACCOUNT_SID",
    aliases=("accountId",),
)

AUTH_TOKEN = PropertyDescriptor(
    key="auth_token",
    name="Auth token",
    description="Twilio Auth token",
    env_var="TWILIO_AUTH_TOKEN",
    sensitive=True,
    aliases=("authToken",),
)

FROM_NUMBER = PropertyDescriptor(
    key="from_number",
    name="From",
    description="Twilio sending number",
    env_var="TWILIO_FROM_NUMBER",
    aliases=("fromNumber",),
)

TIMEOUT = PropertyDescriptor(
    key="timeout",
    name="Timeout",
    description="HTTP timeout in seconds for calls to Twilio",
    env_var="TWILIO_TIMEOUT_SECONDS",
    required=False,
    aliases=("timeoutSeconds",),
)

PROPERTIES: tuple[PropertyDescriptor, ...] = (ACCOUNT_ID, AUTH_TOKEN, FROM_NUMBER, TIMEOUT)


class ConfigurationError(ValueError):
    """Raised when one or more configuration options are missing or invalid."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("Invalid SMS dispatch configuration: " + "; ".join(problems))
        self.problems = tuple(problems)


def validate_config(config: DispatchConfig) -> None:
    """Check every option and raise :class:`ConfigurationError` listing all failures."""
    problems: list[str] = []
    for prop in PROPERTIES:
        if not prop.required:
            continue
        value = getattr(config, prop.key)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"'{prop.name}' is required and must not be empty")

    if not isinstance(config.timeout, (int, float)) or config.timeout <= 0:
        problems.append(f"'{TIMEOUT.name}' must be a positive number of seconds")

    if problems:
        raise ConfigurationError(problems)


def load_config(values: Mapping[str, Any]) -> DispatchConfig:
    """Build and validate a config from a mapping.

    Keys may be option keys (``account_id``), display names
    (``Account Id``) or aliases (``accountId``).
    """
    lookup: dict[str, PropertyDescriptor] = {}
    for prop in PROPERTIES:
        for name in (prop.key, prop.name, *prop.aliases):
            lookup[name] = prop

    resolved: dict[str, Any] = {}
    for raw_key, value in values.items():
        prop = lookup.get(raw_key)
        if prop is None:
            logger.debug("Ignoring unknown SMS dispatch option %r", raw_key)
            continue
        resolved[prop.key] = value

    timeout = resolved.pop(TIMEOUT.key, None)
    if timeout is not None and timeout != "":
        try:
            resolved[TIMEOUT.key] = float(timeout)
        except (TypeError, ValueError):
            raise ConfigurationError([f"'{TIMEOUT.name}' must be a positive number of seconds"]) from None

    config = DispatchConfig(
        account_id=resolved.get(ACCOUNT_ID.key, ""),
        auth_token=resolved.get(AUTH_TOKEN.key, ""),
        from_number=resolved.get(FROM_NUMBER.key, ""),
        timeout=resolved.get(TIMEOUT.key, DEFAULT_TIMEOUT_SECONDS),
    )
    validate_config(config)
    return config


def config_from_env(environ: Mapping[str, str] | None = None) -> DispatchConfig:
    """Build and validate a config from ``TWILIO_*`` environment variables."""
    env = os.environ if environ is None else environ
    values = {prop.key: env[prop.env_var] for prop in PROPERTIES if prop.env_var in env}
    return load_config(values)


def redact(config: DispatchConfig) -> dict[str, str]:
    """Return option values keyed by option key, with sensitive ones masked."""
    result: dict[str, str] = {}
    for prop in PROPERTIES:
        value = getattr(config, prop.key)
        if prop.sensitive:
            result[prop.key] = REDACTED if value else ""
        else:
            result[prop.key] = str(value)
    return result
