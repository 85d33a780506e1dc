"""Core data models for registration decoding (fixed-shape results).

This module defines:
- `EventLog`: raw registry log as delivered by an RPC node, minimally normalized.
- `DecodedEvent`: agent id, owner and URI recovered from one log.
- `UriAgentType`: closed tag describing how an agent URI is encoded.
- `Categories` / `Entries`: normalized summary of one registration.
- Stage results: `UriDecodeResult`, `ValidationOutcome`, `Extraction`,
  `ClassifyResult`, `PipelineResult`.

Design notes
------------
- Every record is frozen; messages are stored as tuples.
- Results are always fully shaped: absent values are None, never missing.
- `Categories.empty` / `Entries.empty` build the "no registration file"
  variant; the document-derived variant lives in `agentreg.extraction`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


# === Raw log ===


@dataclass(slots=True, frozen=True)
class EventLog:
    """Raw log as fetched from RPC. Content is validated by the decoder, not here."""

    topics: tuple[Any, ...] | None
    data: Any = None
    address: str | None = None
    block_number: int | None = None
    tx_hash: str | None = None
    log_index: int | None = None

    @staticmethod
    def from_rpc(rl: Mapping[str, Any]) -> EventLog:
        """Build from an `eth_getLogs` entry (hex quantities are converted when present)."""
        topics = rl.get("topics")
        return EventLog(
            topics=tuple(topics) if isinstance(topics, (list, tuple)) else None,
            data=rl.get("data"),
            address=rl.get("address"),
            block_number=_hex_quantity(rl.get("blockNumber")),
            tx_hash=rl.get("transactionHash"),
            log_index=_hex_quantity(rl.get("logIndex")),
        )


def _hex_quantity(value: Any) -> int | None:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.startswith("0x"):
        try:
            return int(value, 16)
        except ValueError:
            return None
    return None


@dataclass(slots=True, frozen=True)
class DecodedEvent:
    """Outcome of decoding one log; partial values survive a failed stage."""

    status: bool
    messages: tuple[str, ...]
    agent_id: str | None = None
    owner_address: str | None = None
    decoded_agent_uri: str | None = None
    event_name: str | None = None


# === URI tag ===


class UriAgentType(str, Enum):
    EMPTY = "empty"
    BASE64 = "base64"
    GZIP = "gzip"
    HTTP = "http"
    IPFS = "ipfs"
    JSON = "json"
    UNKNOWN = "unknown"


# === Stage results ===


@dataclass(slots=True, frozen=True)
class ValidationOutcome:
    """`status` + messages pair returned by validators (including injected ones)."""

    status: bool
    messages: tuple[str, ...] = ()

    @staticmethod
    def from_messages(messages: Iterable[str]) -> ValidationOutcome:
        msgs = tuple(messages)
        return ValidationOutcome(status=not msgs, messages=msgs)


@dataclass(slots=True, frozen=True)
class UriDecodeResult:
    status: bool
    messages: tuple[str, ...]
    decoded_registration_file: Any = None


# === Normalized summary ===


@dataclass(slots=True, frozen=True)
class ServiceEntry:
    protocol: str | None
    endpoint: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"protocol": self.protocol, "endpoint": self.endpoint}


def uri_type_flags(uri_agent_type: UriAgentType) -> dict[str, bool]:
    """The seven mutually exclusive URI-type flags for one tag."""
    return {
        "is_empty": uri_agent_type is UriAgentType.EMPTY,
        "is_base64": uri_agent_type is UriAgentType.BASE64,
        "is_http": uri_agent_type is UriAgentType.HTTP,
        "is_ipfs": uri_agent_type is UriAgentType.IPFS,
        "is_json": uri_agent_type is UriAgentType.JSON,
        "is_gzip": uri_agent_type is UriAgentType.GZIP,
        "is_unknown": uri_agent_type is UriAgentType.UNKNOWN,
    }


@dataclass(slots=True, frozen=True)
class Categories:
    """Boolean summary of one registration (`is_active` is tri-state)."""

    is_empty: bool
    is_base64: bool
    is_http: bool
    is_ipfs: bool
    is_json: bool
    is_gzip: bool
    is_unknown: bool
    is_parseable: bool
    is_spec_compliant: bool
    is_x402: bool
    is_mcp: bool
    is_a2a: bool
    is_active: bool | None

    @classmethod
    def empty(cls, uri_agent_type: UriAgentType) -> Categories:
        """Categories for a URI that produced no registration file."""
        return cls(
            **uri_type_flags(uri_agent_type),
            is_parseable=False,
            is_spec_compliant=False,
            is_x402=False,
            is_mcp=False,
            is_a2a=False,
            is_active=None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "isEmpty": self.is_empty,
            "isBase64": self.is_base64,
            "isHttp": self.is_http,
            "isIpfs": self.is_ipfs,
            "isJson": self.is_json,
            "isGzip": self.is_gzip,
            "isUnknown": self.is_unknown,
            "isParseable": self.is_parseable,
            "isSpecCompliant": self.is_spec_compliant,
            "isX402": self.is_x402,
            "isMcp": self.is_mcp,
            "isA2A": self.is_a2a,
            "isActive": self.is_active,
        }


@dataclass(slots=True, frozen=True)
class Entries:
    """Normalized registration fields. `active` and `supported_trust` are passed through as found."""

    agent_id: str | None
    owner_address: str | None
    uri_agent_type: UriAgentType
    name: Any
    description: Any
    x402_support: bool
    services: tuple[ServiceEntry, ...]
    mcp_endpoint: str | None
    a2a_endpoint: str | None
    image: Any
    active: Any
    supported_trust: Any
    raw: str | None

    @classmethod
    def empty(
        cls,
        uri_agent_type: UriAgentType,
        agent_id: str | None = None,
        owner_address: str | None = None,
    ) -> Entries:
        """Entries for a URI that produced no registration file."""
        return cls(
            agent_id=agent_id or None,
            owner_address=owner_address or None,
            uri_agent_type=uri_agent_type,
            name=None,
            description=None,
            x402_support=False,
            services=(),
            mcp_endpoint=None,
            a2a_endpoint=None,
            image=None,
            active=None,
            supported_trust=None,
            raw=None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "agentId": self.agent_id,
            "ownerAddress": self.owner_address,
            "uriAgentType": self.uri_agent_type.value,
            "name": self.name,
            "description": self.description,
            "x402Support": self.x402_support,
            "services": [s.to_dict() for s in self.services],
            "mcpEndpoint": self.mcp_endpoint,
            "a2aEndpoint": self.a2a_endpoint,
            "image": self.image,
            "active": self.active,
            "supportedTrust": self.supported_trust,
            "raw": self.raw,
        }


@dataclass(slots=True, frozen=True)
class Extraction:
    categories: Categories
    entries: Entries


@dataclass(slots=True, frozen=True)
class ClassifyResult:
    uri_agent_type: UriAgentType
    categories: Categories


@dataclass(slots=True, frozen=True)
class PipelineResult:
    """Final result of a pipeline run. `status` is True iff `messages` is empty."""

    status: bool
    messages: tuple[str, ...]
    categories: Categories
    entries: Entries

    @staticmethod
    def build(messages: Iterable[str], extraction: Extraction) -> PipelineResult:
        msgs = tuple(messages)
        return PipelineResult(
            status=not msgs,
            messages=msgs,
            categories=extraction.categories,
            entries=extraction.entries,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "messages": list(self.messages),
            "categories": self.categories.to_dict(),
            "entries": self.entries.to_dict(),
        }
