"""Agent URI payload decoding.

Turns a classified agent URI into a registration document:

- ``base64``: ``data:application/json;base64,<payload>``; the payload must
  survive a lenient decode → re-encode round trip unchanged, which catches
  truncated or malformed base64 and bytes that are not UTF-8 in one check.
- ``gzip``: ``data:...;enc=gzip;...;base64,<payload>``; base64, gunzip, UTF-8.
- ``json``: the URI itself is the document.
- ``http`` / ``ipfs`` / ``empty``: reported as unresolved, nothing is fetched.

Failures are reported as ``uri: ...`` messages; nothing here raises.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import json
import logging
import re
import zlib
from typing import Any

from agentreg.constants import BASE64_JSON_PREFIX, IPFS_SCHEME
from agentreg.core.models import UriAgentType, UriDecodeResult

logger = logging.getLogger(__name__)

MSG_EMPTY = "uri: Is empty, agent has no Registration File"
MSG_HTTP = "uri: HTTP URL detected, metadata not resolved (requires fetch)"
MSG_IPFS = "uri: IPFS URI detected, metadata not resolved (requires gateway)"
MSG_IPFS_ADDRESS = "uri: IPFS CID looks like an Ethereum address, not a valid content hash"
MSG_GZIP = "uri: Gzip encoding detected but not decodable in this environment"
MSG_UTF8 = "uri: Decoded base64 is not valid UTF-8"
MSG_JSON = "uri: Contains inline JSON but parsing failed"
MSG_UNKNOWN = "uri: Unknown format, cannot classify"

_GZIP_MARKER = "base64,"
# Shape check only: a 20-byte hex address is not a content identifier.
_ETH_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")
_BASE64_NOISE_RE = re.compile(r"[^A-Za-z0-9+/]")


class _JsonConstantError(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _JsonConstantError(f"{name} is not valid JSON")


def _parse_json(text: str) -> tuple[bool, Any]:
    """Strict RFC 8259 parse (no NaN/Infinity)."""
    try:
        return True, json.loads(text, parse_constant=_reject_constant)
    except (RecursionError, ValueError):
        return False, None


def _result(ok: bool, messages: list[str], document: Any = None) -> UriDecodeResult:
    return UriDecodeResult(status=ok, messages=tuple(messages), decoded_registration_file=document)


# ---------- per-format decoders ----------


def _lenient_b64decode(payload: str) -> bytes:
    """Decode without rejecting input: foreign characters are skipped and padding is restored."""
    data = _BASE64_NOISE_RE.sub("", payload)
    if len(data) % 4 == 1:
        data = data[:-1]  # a lone trailing character holds no complete byte
    return base64.b64decode(data + "=" * (-len(data) % 4))


def _decode_base64(uri: str) -> UriDecodeResult:
    payload = uri[len(BASE64_JSON_PREFIX):]
    text = _lenient_b64decode(payload).decode("utf-8", errors="replace")
    if base64.b64encode(text.encode("utf-8")).decode("ascii") != payload:
        return _result(False, [MSG_UTF8])

    ok, document = _parse_json(text)
    if not ok:
        return _result(False, [MSG_JSON])
    return _result(True, [], document)


def _decode_gzip(uri: str) -> UriDecodeResult:
    _, marker, payload = uri.rpartition(_GZIP_MARKER)
    if not marker or not payload:
        return _result(False, [MSG_GZIP])

    try:
        text = gzip.decompress(base64.b64decode(payload)).decode("utf-8", errors="replace")
    except (binascii.Error, EOFError, OSError, ValueError, zlib.error):
        return _result(False, [MSG_GZIP])

    ok, document = _parse_json(text)
    if not ok:
        return _result(False, [MSG_JSON])
    return _result(True, [], document)


def _decode_json(uri: str) -> UriDecodeResult:
    ok, document = _parse_json(uri)
    if not ok:
        return _result(False, [MSG_JSON])
    return _result(True, [], document)


def _decode_ipfs(uri: str) -> UriDecodeResult:
    messages: list[str] = []
    cid = uri.removeprefix(IPFS_SCHEME)
    if _ETH_ADDRESS_RE.fullmatch(cid):
        messages.append(MSG_IPFS_ADDRESS)
    messages.append(MSG_IPFS)
    return _result(False, messages)


def _coerce_tag(uri_agent_type: UriAgentType | str) -> UriAgentType | None:
    try:
        return UriAgentType(uri_agent_type)
    except ValueError:
        return None


# ---------- dispatcher ----------


def decode_uri(uri: Any, uri_agent_type: UriAgentType | str) -> UriDecodeResult:
    """Decode `uri` according to its tag.

    Only the base64, gzip and json branches can succeed; http and ipfs are
    deferred to an external resolver and always report status False.
    Unrecognized tags take the unknown branch.
    """
    text = uri.strip() if isinstance(uri, str) else ""

    match _coerce_tag(uri_agent_type):
        case UriAgentType.EMPTY:
            result = _result(False, [MSG_EMPTY])
        case UriAgentType.HTTP:
            result = _result(False, [MSG_HTTP])
        case UriAgentType.IPFS:
            result = _decode_ipfs(text)
        case UriAgentType.GZIP:
            result = _decode_gzip(text)
        case UriAgentType.BASE64:
            result = _decode_base64(text)
        case UriAgentType.JSON:
            result = _decode_json(text)
        case _:
            result = _result(False, [MSG_UNKNOWN])

    logger.debug("uri decoded as %s: status=%s messages=%s", uri_agent_type, result.status, result.messages)
    return result
