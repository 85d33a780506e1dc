"""Agent URI classification.

`classify_uri` is total: every input maps to exactly one `UriAgentType`
and nothing raises. Checks run in order and the first match wins; gzip is
tested before base64 so a `data:` URI flagged `enc=gzip` is never read as
plain base64 JSON.
"""

from __future__ import annotations

from typing import Any

from agentreg.constants import BASE64_JSON_PREFIX, IPFS_SCHEME
from agentreg.core.models import UriAgentType


def _looks_like_json(value: str) -> bool:
    return value.startswith("{") or value.startswith("[")


def classify_uri(uri: Any) -> UriAgentType:
    """Return the encoding tag of an agent URI."""
    if uri is None or uri == "":
        return UriAgentType.EMPTY
    if not isinstance(uri, str):
        return UriAgentType.UNKNOWN

    trimmed = uri.strip()
    if not trimmed:
        return UriAgentType.EMPTY
    if trimmed.startswith("data:") and "enc=gzip" in trimmed:
        return UriAgentType.GZIP
    if trimmed.startswith(BASE64_JSON_PREFIX):
        return UriAgentType.BASE64
    if trimmed.startswith(("https://", "http://")):
        return UriAgentType.HTTP
    if trimmed.startswith(IPFS_SCHEME):
        return UriAgentType.IPFS
    if _looks_like_json(trimmed):
        return UriAgentType.JSON
    return UriAgentType.UNKNOWN
