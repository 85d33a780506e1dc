"""Core data models, configuration and parameter contracts.

This package provides:
- Data models (EventLog, DecodedEvent, UriAgentType, Categories, Entries, results)
- Capability interface for injected protocol validators
- Configuration (ParserConfig)
- Parameter validation (ParameterError)
"""

from agentreg.core.models import (
    Categories,
    ClassifyResult,
    DecodedEvent,
    Entries,
    EventLog,
    Extraction,
    PipelineResult,
    ServiceEntry,
    UriAgentType,
    UriDecodeResult,
    ValidationOutcome,
)
from agentreg.core.interfaces import ProtocolValidator, ProtocolValidators
from agentreg.core.config import DEFAULT_CONFIG, ParserConfig
from agentreg.core.params import ParameterError

__all__ = [
    "Categories",
    "ClassifyResult",
    "DecodedEvent",
    "Entries",
    "EventLog",
    "Extraction",
    "PipelineResult",
    "ServiceEntry",
    "UriAgentType",
    "UriDecodeResult",
    "ValidationOutcome",
    "ProtocolValidator",
    "ProtocolValidators",
    "DEFAULT_CONFIG",
    "ParserConfig",
    "ParameterError",
]
