"""Default event registry for the ERC-8004 identity registry.

This module exposes:
- `make_registry()` → EventRegistry prefilled with Registered and URIUpdated
- `add_event_spec(registry, spec)` → append one spec (lowercases key)
- `add_many(registry, specs)` → append multiple

Recognizing another event with the same layout only requires adding an
`EventSpec` for its topic0.
"""

from __future__ import annotations

from collections.abc import Iterable

from agentreg.constants import REGISTERED_T0, URI_UPDATED_T0
from agentreg.decoding.specs import EventRegistry, EventSpec


def make_registry() -> EventRegistry:
    """Build the default registry with the identity registry URI events."""
    reg: EventRegistry = {}
    add_many(
        reg,
        [
            EventSpec(topic0=REGISTERED_T0, name="Registered"),
            EventSpec(topic0=URI_UPDATED_T0, name="URIUpdated"),
        ],
    )
    return reg


def add_event_spec(registry: EventRegistry, spec: EventSpec) -> None:
    """Insert one spec into the registry keyed by lowercased topic0."""
    registry[spec.topic0.lower()] = spec


def add_many(registry: EventRegistry, specs: Iterable[EventSpec]) -> None:
    """Insert many specs into the registry."""
    for s in specs:
        add_event_spec(registry, s)
