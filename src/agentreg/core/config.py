from __future__ import annotations

from dataclasses import dataclass, field

from agentreg.constants import (
    KNOWN_PROTOCOLS,
    KNOWN_SPEC_FIELDS,
    KNOWN_TRUST_TYPES,
    SPEC_TYPE_VALUE,
    X402_ALIAS,
)
from agentreg.decoding.registry import make_registry
from agentreg.decoding.specs import EventRegistry


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the registration pipeline."""

    registry: EventRegistry = field(default_factory=make_registry)
    spec_type_value: str = SPEC_TYPE_VALUE
    known_protocols: tuple[str, ...] = KNOWN_PROTOCOLS
    known_trust_types: tuple[str, ...] = KNOWN_TRUST_TYPES
    known_spec_fields: tuple[str, ...] = KNOWN_SPEC_FIELDS
    x402_alias: str = X402_ALIAS  # tolerated lowercase spelling of x402Support

    @property
    def allowed_fields(self) -> tuple[str, ...]:
        """Top-level keys that are not reported as unknown."""
        return (*self.known_spec_fields, self.x402_alias)


DEFAULT_CONFIG = ParserConfig()
