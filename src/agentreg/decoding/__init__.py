"""Registry event decoding.

This package provides:
- Event specification system (EventSpec, TopicFieldSpec, DataFieldSpec)
- Decoder that translates raw logs into DecodedEvent objects
- Registry management for event specs
"""

from agentreg.decoding.event_decoder import decode_event_log
from agentreg.decoding.registry import add_event_spec, add_many, make_registry
from agentreg.decoding.specs import (
    DataFieldSpec,
    EventRegistry,
    EventSpec,
    TopicFieldSpec,
)

__all__ = [
    "decode_event_log",
    "add_event_spec",
    "add_many",
    "make_registry",
    "DataFieldSpec",
    "EventRegistry",
    "EventSpec",
    "TopicFieldSpec",
]
