"""Metadata extraction: registration file → `Categories` + `Entries`.

Extraction is a pure projection and never fails. Without a document it
returns the empty variants (`Categories.empty`, `Entries.empty`) so callers
always receive fully shaped records.

`is_spec_compliant` is coarser than `validate_registration`:
it only looks at `type`, `name`, the x402 spelling and service field
aliases, and is computed independently of the validator's messages.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from agentreg.constants import X402_FIELD
from agentreg.core.config import DEFAULT_CONFIG, ParserConfig
from agentreg.core.models import (
    Categories,
    Entries,
    Extraction,
    ServiceEntry,
    UriAgentType,
    uri_type_flags,
)
from agentreg.services import as_mapping, iter_services, protocol_key, resolve_endpoint, resolve_protocol


# ---------- detection helpers ----------


def _detect_x402(doc: Mapping[str, Any], config: ParserConfig) -> bool:
    """x402 support, preferring `x402Support` over the lowercase alias; only a literal `true` counts."""
    if X402_FIELD in doc:
        return doc[X402_FIELD] is True
    if config.x402_alias in doc:
        return doc[config.x402_alias] is True
    return False


def _detect_protocols(services: list[Any]) -> tuple[bool, bool]:
    keys = {protocol_key(s) for s in services}
    return "mcp" in keys, "a2a" in keys


def _uses_alias_fields(service: Any) -> bool:
    s = as_mapping(service)
    uses_name = "name" in s and "type" not in s
    uses_endpoint = "endpoint" in s and "url" not in s
    return uses_name or uses_endpoint


def _is_spec_compliant(doc: Mapping[str, Any], config: ParserConfig) -> bool:
    if doc.get("type") != config.spec_type_value:
        return False
    name = doc.get("name")
    if not isinstance(name, str) or not name:
        return False
    if config.x402_alias in doc and X402_FIELD not in doc:
        return False
    return not any(_uses_alias_fields(s) for s in iter_services(doc))


def _first_endpoints(services: list[Any]) -> dict[str, Any]:
    """First non-null endpoint per protocol; later services only fill gaps."""
    found: dict[str, Any] = {"mcp": None, "a2a": None}
    for service in services:
        key = protocol_key(service)
        if key in found and found[key] is None:
            found[key] = resolve_endpoint(service)
    return found


def _serialize(document: Any) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False, default=str)


# ---------- builders ----------


def _categories_from_document(document: Any, uri_agent_type: UriAgentType, config: ParserConfig) -> Categories:
    doc = as_mapping(document)
    services = iter_services(doc)
    has_mcp, has_a2a = _detect_protocols(services)
    active = doc.get("active")

    return Categories(
        **uri_type_flags(uri_agent_type),
        is_parseable=True,
        is_spec_compliant=_is_spec_compliant(doc, config),
        is_x402=_detect_x402(doc, config),
        is_mcp=has_mcp,
        is_a2a=has_a2a,
        is_active=active if isinstance(active, bool) else None,
    )


def _entries_from_document(
    document: Any,
    uri_agent_type: UriAgentType,
    agent_id: str | None,
    owner_address: str | None,
    config: ParserConfig,
) -> Entries:
    doc = as_mapping(document)
    services = iter_services(doc)
    endpoints = _first_endpoints(services)

    return Entries(
        agent_id=agent_id or None,
        owner_address=owner_address or None,
        uri_agent_type=uri_agent_type,
        name=doc.get("name") or None,
        description=doc.get("description") or None,
        x402_support=_detect_x402(doc, config),
        services=tuple(ServiceEntry(resolve_protocol(s), resolve_endpoint(s)) for s in services),
        mcp_endpoint=endpoints["mcp"],
        a2a_endpoint=endpoints["a2a"],
        image=doc.get("image") or None,
        active=doc.get("active"),
        supported_trust=doc.get("supportedTrust"),
        raw=_serialize(document),
    )


def extract_metadata(
    document: Any,
    uri_agent_type: UriAgentType,
    agent_id: str | None = None,
    owner_address: str | None = None,
    *,
    config: ParserConfig = DEFAULT_CONFIG,
) -> Extraction:
    """Project a registration file (or its absence) onto categories and entries."""
    if document is None:
        return Extraction(
            categories=Categories.empty(uri_agent_type),
            entries=Entries.empty(uri_agent_type, agent_id, owner_address),
        )
    return Extraction(
        categories=_categories_from_document(document, uri_agent_type, config),
        entries=_entries_from_document(document, uri_agent_type, agent_id, owner_address, config),
    )
