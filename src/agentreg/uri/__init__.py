"""Agent URI handling: classification and payload decoding (no network access)."""

from agentreg.uri.classifier import classify_uri
from agentreg.uri.decoder import decode_uri

__all__ = ["classify_uri", "decode_uri"]
