"""Pipeline orchestration over the registration stages.

This package provides:
- `RegistrationPipeline`, the configurable service composing every stage
- Module-level entry points bound to the default configuration
"""

from agentreg.pipeline.orchestrator import (
    RegistrationPipeline,
    categorize_registration,
    classify_uri,
    decode_event_log,
    decode_uri,
    full_pipeline,
    validate_from_uri,
)

__all__ = [
    "RegistrationPipeline",
    "categorize_registration",
    "classify_uri",
    "decode_event_log",
    "decode_uri",
    "full_pipeline",
    "validate_from_uri",
]
