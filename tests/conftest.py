import base64
import gzip
import json
from typing import Any, Callable

import pytest

from agentreg.constants import REGISTERED_T0, SPEC_TYPE_VALUE
from agentreg.core.models import ValidationOutcome

AGENT_ID_42_TOPIC = "0x000000000000000000000000000000000000000000000000000000000000002a"
OWNER_TOPIC = "0x0000000000000000000000008ec6c9a8a6b0d69f48734c4b7ecd1cbb190a0d69"


def _abi_string(value: str) -> str:
    """0x-hex ABI encoding of one dynamic string: offset word, length word, padded bytes."""
    raw = value.encode("utf-8")
    padded = raw + b"\x00" * (-len(raw) % 32)
    return "0x" + (32).to_bytes(32, "big").hex() + len(raw).to_bytes(32, "big").hex() + padded.hex()


def _base64_uri(document: Any) -> str:
    payload = base64.b64encode(json.dumps(document).encode("utf-8")).decode("ascii")
    return f"data:application/json;base64,{payload}"


def _gzip_uri(document: Any) -> str:
    payload = base64.b64encode(gzip.compress(json.dumps(document).encode("utf-8"))).decode("ascii")
    return f"data:application/json;enc=gzip;level=6;base64,{payload}"


@pytest.fixture
def abi_string() -> Callable[[str], str]:
    return _abi_string


@pytest.fixture
def base64_uri() -> Callable[[Any], str]:
    return _base64_uri


@pytest.fixture
def gzip_uri() -> Callable[[Any], str]:
    return _gzip_uri


@pytest.fixture
def spec_compliant_doc() -> dict[str, Any]:
    return {
        "name": "Test Agent",
        "description": "A test agent",
        "type": SPEC_TYPE_VALUE,
        "services": [{"type": "mcp", "url": "https://mcp.example.com"}],
        "x402Support": True,
        "active": True,
    }


@pytest.fixture
def real_world_doc() -> dict[str, Any]:
    return {
        "name": "Real Agent",
        "description": "A real agent",
        "services": [{"name": "MCP", "endpoint": "https://mcp.example.com"}],
        "x402support": True,
    }


@pytest.fixture
def make_log() -> Callable[..., dict[str, Any]]:
    """Build an `eth_getLogs`-shaped entry for a Registered event carrying `uri`."""

    def _make(uri: str = "", *, topic0: str = REGISTERED_T0, **overrides: Any) -> dict[str, Any]:
        log = {
            "address": "0x8004a169fb4a3325136eb29fa0ceb6d2e539a432",
            "topics": [topic0, AGENT_ID_42_TOPIC, OWNER_TOPIC],
            "data": _abi_string(uri),
            "blockNumber": "0x10",
            "transactionHash": "0x" + "ab" * 32,
            "logIndex": "0x0",
        }
        log.update(overrides)
        return log

    return _make


class StubValidator:
    """Protocol validator double that records the endpoints it was called with."""

    def __init__(self, status: bool = False, messages: tuple[str, ...] = ("Server not reachable",)):
        self.outcome = ValidationOutcome(status=status, messages=messages)
        self.calls: list[str] = []

    def validate(self, endpoint: str) -> ValidationOutcome:
        self.calls.append(endpoint)
        return self.outcome


@pytest.fixture
def failing_validator() -> StubValidator:
    return StubValidator()


@pytest.fixture
def passing_validator() -> StubValidator:
    return StubValidator(status=True, messages=())


@pytest.fixture
def stub_validator() -> type[StubValidator]:
    return StubValidator
