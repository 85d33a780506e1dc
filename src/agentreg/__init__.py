"""agentreg: decode and validate ERC-8004 agent registration events."""

from agentreg.core import (
    Categories,
    ClassifyResult,
    DecodedEvent,
    Entries,
    EventLog,
    Extraction,
    ParameterError,
    ParserConfig,
    PipelineResult,
    ProtocolValidator,
    ServiceEntry,
    UriAgentType,
    UriDecodeResult,
    ValidationOutcome,
)
from agentreg.constants import REGISTERED_T0, URI_UPDATED_T0
from agentreg.decoding import add_event_spec, add_many, make_registry
from agentreg.pipeline import (
    RegistrationPipeline,
    categorize_registration,
    classify_uri,
    decode_event_log,
    decode_uri,
    full_pipeline,
    validate_from_uri,
)

__all__ = [
    "Categories",
    "ClassifyResult",
    "DecodedEvent",
    "Entries",
    "EventLog",
    "Extraction",
    "ParameterError",
    "ParserConfig",
    "PipelineResult",
    "ProtocolValidator",
    "ServiceEntry",
    "UriAgentType",
    "UriDecodeResult",
    "ValidationOutcome",
    "RegistrationPipeline",
    "categorize_registration",
    "classify_uri",
    "decode_event_log",
    "decode_uri",
    "full_pipeline",
    "validate_from_uri",
    "add_event_spec",
    "add_many",
    "make_registry",
    "REGISTERED_T0",
    "URI_UPDATED_T0",
]
