"""Service entry helpers shared by validation, extraction and the pipeline.

A registration file lists services as objects carrying a protocol under
`type` (spec) or `name` (alias) and an endpoint under `url` (spec) or
`endpoint` (alias). Spec names win when both are present; empty values fall
through to the alias.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Return a JSON object as a mapping; non-objects have no fields."""
    return value if isinstance(value, Mapping) else {}


def resolve_protocol(service: Any) -> Any:
    s = as_mapping(service)
    return s.get("type") or s.get("name") or None


def resolve_endpoint(service: Any) -> Any:
    s = as_mapping(service)
    return s.get("url") or s.get("endpoint") or None


def protocol_key(service: Any) -> str | None:
    """Lowercased protocol identifier, or None when absent or not a string."""
    protocol = resolve_protocol(service)
    return protocol.lower() if isinstance(protocol, str) else None


def iter_services(document: Any) -> list[Any]:
    """The raw `services` array of a document (empty if missing or malformed)."""
    services = as_mapping(document).get("services")
    return list(services) if is_array(services) else []
