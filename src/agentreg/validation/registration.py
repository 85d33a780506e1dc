"""Registration file validation against the ERC-8004 registration format.

`validate_registration` runs every check and accumulates messages; it never
stops at the first violation and never raises. Checks, in message order:

1. required fields: `type` (exact format URI), `name`, `description`
2. `services`: array shape, spec vs alias field names, known protocols, URLs
3. x402 flag: spec spelling `x402Support` vs lowercase alias, boolean type
4. optional fields: `image`, `active`, `supportedTrust`
5. unknown top-level fields
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from agentreg.constants import X402_FIELD
from agentreg.core.config import DEFAULT_CONFIG, ParserConfig
from agentreg.core.models import UriAgentType, ValidationOutcome
from agentreg.services import is_array, resolve_endpoint, resolve_protocol
from agentreg.validation.utils import is_valid_url, json_type_name

logger = logging.getLogger(__name__)


def _check_required(doc: Mapping[str, Any], messages: list[str], config: ParserConfig) -> None:
    spec_type = config.spec_type_value
    if "type" not in doc:
        messages.append(f'type: Missing required field (expected "{spec_type}")')
    elif not isinstance(doc["type"], str):
        messages.append('type: Is not type of "string"')
    elif doc["type"] != spec_type:
        messages.append(f'type: Invalid value "{doc["type"]}" (expected "{spec_type}")')

    if "name" not in doc:
        messages.append("name: Missing required field")
    elif not isinstance(doc["name"], str):
        messages.append('name: Is not type of "string"')
    elif doc["name"] == "":
        messages.append("name: Is empty string")

    if "description" not in doc:
        messages.append("description: Missing field")
    elif not isinstance(doc["description"], str):
        messages.append('description: Is not type of "string"')
    elif doc["description"] == "":
        messages.append("description: Is empty string")


def _check_service(index: int, service: Any, messages: list[str], config: ParserConfig) -> None:
    path = f"services[{index}]"
    if not isinstance(service, Mapping):
        messages.append(f'{path}: Is not type of "object"')
        return

    has_type, has_name = "type" in service, "name" in service
    if not has_type and not has_name:
        messages.append(f'{path}: Missing protocol identifier ("type" or "name")')
    elif not has_type:
        messages.append(f'{path}.name: Uses "name" instead of spec-defined "type"')

    has_url, has_endpoint = "url" in service, "endpoint" in service
    if not has_url and not has_endpoint:
        messages.append(f'{path}: Missing endpoint ("url" or "endpoint")')
    elif not has_url:
        messages.append(f'{path}.endpoint: Uses "endpoint" instead of spec-defined "url"')

    protocol = resolve_protocol(service)
    if protocol is not None:
        if not isinstance(protocol, str):
            messages.append(f'{path}: Protocol identifier is not type of "string"')
        elif protocol.lower() not in config.known_protocols:
            known = ", ".join(config.known_protocols)
            messages.append(f'{path}: Unknown protocol "{protocol}" (known: {known})')

    endpoint = resolve_endpoint(service)
    if endpoint is not None and not is_valid_url(endpoint):
        messages.append(f"{path}.url: Invalid URL format")


def _check_services(doc: Mapping[str, Any], messages: list[str], config: ParserConfig) -> None:
    if "services" not in doc:
        return
    services = doc["services"]
    if not is_array(services):
        messages.append('services: Is not type of "array"')
        return
    if not services:
        messages.append("services: Is empty array")
        return
    for index, service in enumerate(services):
        _check_service(index, service, messages, config)


def _check_x402(doc: Mapping[str, Any], messages: list[str], config: ParserConfig) -> None:
    alias = config.x402_alias
    has_correct_case = X402_FIELD in doc
    has_lower_case = alias in doc

    if has_lower_case and not has_correct_case:
        messages.append(f'{alias}: Uses lowercase "{alias}" instead of spec-defined "{X402_FIELD}"')

    if has_correct_case or has_lower_case:
        field = X402_FIELD if has_correct_case else alias
        value = doc[field]
        if not isinstance(value, bool):
            messages.append(f'{field}: Is not type of "boolean", got "{json_type_name(value)}"')


def _check_optional(doc: Mapping[str, Any], messages: list[str], config: ParserConfig) -> None:
    if "image" in doc:
        if not isinstance(doc["image"], str):
            messages.append('image: Is not type of "string"')
        elif not is_valid_url(doc["image"]):
            messages.append("image: Is not a valid URL")

    if "active" in doc and not isinstance(doc["active"], bool):
        messages.append('active: Is not type of "boolean"')

    if "supportedTrust" in doc:
        trust = doc["supportedTrust"]
        if not is_array(trust):
            messages.append('supportedTrust: Is not type of "array"')
        else:
            known = ", ".join(config.known_trust_types)
            for index, value in enumerate(trust):
                if value not in config.known_trust_types:
                    messages.append(f'supportedTrust[{index}]: Unknown value "{value}" (known: {known})')


def _check_extra_fields(doc: Mapping[str, Any], messages: list[str], config: ParserConfig) -> None:
    allowed = config.allowed_fields
    for key in doc:
        if key not in allowed:
            messages.append(f"{key}: Unknown field not defined in ERC-8004 spec")


def validate_registration(
    document: Any,
    uri_type: UriAgentType | None = None,
    *,
    config: ParserConfig = DEFAULT_CONFIG,
) -> ValidationOutcome:
    """Check a decoded registration file; status is True iff no message was produced."""
    if document is None:
        return ValidationOutcome.from_messages(["json: Is null or undefined"])
    if not isinstance(document, Mapping):
        return ValidationOutcome.from_messages(["json: Is not a valid object"])

    messages: list[str] = []
    _check_required(document, messages, config)
    _check_services(document, messages, config)
    _check_x402(document, messages, config)
    _check_optional(document, messages, config)
    _check_extra_fields(document, messages, config)

    logger.debug("registration from %s uri: %d deviation(s)", uri_type, len(messages))
    return ValidationOutcome.from_messages(messages)
