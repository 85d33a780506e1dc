"""Decoding utilities: hex handling, ABI word access, typed topic parsers."""

from __future__ import annotations

from typing import Any

from eth_utils import to_checksum_address  # type: ignore[attr-defined]

from .specs import TopicFieldSpec


def hex_to_bytes(data_hex: str) -> bytes:
    """Decode a (optionally 0x-prefixed) hex string; raises ValueError if malformed."""
    h = data_hex[2:] if data_hex.lower().startswith("0x") else data_hex
    return bytes.fromhex(h) if h else b""


def word_at(data: bytes, i: int) -> bytes:
    """Return the i-th 32-byte ABI word (zero-padded if out-of-range)."""
    start = 32 * i
    end = start + 32
    return data[start:end] if start < len(data) else b"\x00" * 32


def parse_topic_field(topic_hex: Any, spec: TopicFieldSpec) -> Any:
    """Parse one indexed topic according to the declared type.

    Unsigned integers come back as `int`, addresses as EIP-55 checksummed
    strings. Raises ValueError / TypeError when the topic does not fit.
    """
    if not isinstance(topic_hex, str):
        raise TypeError(f"topic must be a hex string, got {type(topic_hex).__name__}")
    t = spec.type
    h = topic_hex.lower()
    if t == "address":
        # 32-byte topic: 12 bytes of left padding, then the 20-byte address
        return to_checksum_address("0x" + h[26:])
    if t.startswith("uint"):
        bits = int(t[4:]) if t != "uint" else 256
        v = int(h, 16)
        if v < 0 or v >= 2**bits:
            raise ValueError(f"value out of range for {t}")
        return v
    raise ValueError(f"Unsupported topic type: {t}")


def decode_abi_string(data: bytes) -> str:
    """Decode `data` as the ABI encoding of a single dynamic `string`.

    Layout: word 0 holds the byte offset of the string, the word at that
    offset holds its length, the UTF-8 bytes follow. Offsets and lengths are
    bounds-checked and the payload must be valid UTF-8.
    """
    if len(data) < 32:
        raise ValueError("data shorter than one ABI word")
    offset = int.from_bytes(word_at(data, 0), "big")
    if offset + 32 > len(data):
        raise ValueError(f"string offset {offset} out of bounds")
    length = int.from_bytes(data[offset : offset + 32], "big")
    start = offset + 32
    end = start + length
    if end > len(data):
        raise ValueError(f"string length {length} exceeds data")
    return data[start:end].decode("utf-8")
