"""Registry event decoder.

Translates a raw `EventLog` into a `DecodedEvent` using an `EventRegistry`.
Every check appends a `"<path>: <reason>"` message instead of raising:

1. topics present and non-empty
2. topic0 known to the registry
3. data present and long enough to hold an ABI string header
4. agent id (uint256 topic) and owner (address topic)
5. the ABI-encoded URI string, only when 1–4 produced no message
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from agentreg.constants import MIN_DATA_HEX_LENGTH
from agentreg.core.models import DecodedEvent, EventLog
from agentreg.decoding.specs import EventRegistry, EventSpec, TopicFieldSpec
from agentreg.decoding.utils import decode_abi_string, hex_to_bytes, parse_topic_field

logger = logging.getLogger(__name__)


# ---------- helper functions ----------


def _validate_and_get_spec(
    topics: Sequence[Any] | None,
    registry: EventRegistry,
    messages: list[str],
) -> EventSpec | None:
    """Validate topics and retrieve the event spec from the registry."""
    if not topics:
        messages.append("log: Missing or empty topics array")
        return None
    topic0 = topics[0]
    spec = registry.get(topic0.lower()) if isinstance(topic0, str) else None
    if spec is None:
        messages.append("log.topics[0]: Unknown event signature, not a recognized ERC-8004 event")
    return spec


def _validate_data(data: Any, messages: list[str]) -> bool:
    if data is None:
        messages.append("log: Missing data field")
        return False
    if isinstance(data, str) and len(data) < MIN_DATA_HEX_LENGTH:
        messages.append(f"log.data: Too short for ABI-encoded string (minimum {MIN_DATA_HEX_LENGTH} bytes)")
        return False
    return True


def _topic_at(topics: Sequence[Any], tf: TopicFieldSpec) -> Any:
    return topics[tf.index] if tf.index < len(topics) else None


def _extract_agent_id(topics: Sequence[Any], tf: TopicFieldSpec, messages: list[str]) -> str | None:
    try:
        return str(parse_topic_field(_topic_at(topics, tf), tf))
    except (TypeError, ValueError):
        messages.append(f"log.topics[{tf.index}]: Cannot decode as {tf.type} agentId")
        return None


def _extract_owner(topics: Sequence[Any], tf: TopicFieldSpec, messages: list[str]) -> str | None:
    try:
        return parse_topic_field(_topic_at(topics, tf), tf)
    except (TypeError, ValueError):
        messages.append(f"log.topics[{tf.index}]: Cannot decode as address")
        return None


def _decode_uri(data: Any, messages: list[str]) -> str | None:
    try:
        return decode_abi_string(hex_to_bytes(data))
    except (AttributeError, TypeError, ValueError):
        messages.append("log.data: ABI string decoding failed")
        return None


# ---------- main decoder ----------


def decode_event_log(event_log: EventLog, *, registry: EventRegistry) -> DecodedEvent:
    """Decode one registry log into agent id, owner and URI.

    Topic and data shape failures stop decoding with all values None.
    Agent id / owner failures keep whatever could be decoded but skip the URI.
    """
    messages: list[str] = []
    topics = event_log.topics

    spec = _validate_and_get_spec(topics, registry, messages)
    if spec is None or not _validate_data(event_log.data, messages):
        logger.debug("log rejected before field extraction: %s", messages)
        return DecodedEvent(status=False, messages=tuple(messages))

    agent_id = _extract_agent_id(topics, spec.agent_id, messages)
    owner_address = _extract_owner(topics, spec.owner, messages)
    if messages:
        return DecodedEvent(
            status=False,
            messages=tuple(messages),
            agent_id=agent_id,
            owner_address=owner_address,
            event_name=spec.name,
        )

    uri = _decode_uri(event_log.data, messages)
    logger.debug("decoded %s log for agent %s", spec.name, agent_id)

    return DecodedEvent(
        status=not messages,
        messages=tuple(messages),
        agent_id=agent_id,
        owner_address=owner_address,
        decoded_agent_uri=uri,
        event_name=spec.name,
    )
