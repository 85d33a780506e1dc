"""Call-time parameter contracts for the public entry points.

Each entry point validates its arguments with a strict pydantic model before
any pipeline stage runs. Violations are collected (not short-circuited) and
raised together as one `ParameterError`, comma-joined:

    agent_uri: Input should be a valid string, additional_validators: Must be a mapping

These errors never appear in `PipelineResult.messages`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from agentreg.core.interfaces import ProtocolValidator
from agentreg.core.models import EventLog


class ParameterError(ValueError):
    """Raised when an entry point is called with malformed arguments."""


class _Params(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, arbitrary_types_allowed=True)


def _check_validators(value: Any) -> Any:
    if value is None:
        return value
    if not isinstance(value, Mapping):
        raise ValueError("Must be a mapping of protocol name to validator")
    for key, validator in value.items():
        if not isinstance(key, str):
            raise ValueError(f"Protocol name {key!r} must be a string")
        if not isinstance(validator, ProtocolValidator):
            raise ValueError(f"Validator for '{key}' must implement validate(endpoint)")
    return value


class EventLogParams(_Params):
    event_log: Any
    additional_validators: Any = None

    @field_validator("event_log")
    @classmethod
    def check_event_log(cls, value: Any) -> Any:
        if not isinstance(value, (EventLog, Mapping)):
            raise ValueError("Must be an EventLog or a mapping with 'topics' and 'data'")
        return value

    check_validators = field_validator("additional_validators")(_check_validators)


class UriParams(_Params):
    agent_uri: Optional[str]
    agent_id: Optional[str] = None
    owner_address: Optional[str] = None
    additional_validators: Any = None

    check_validators = field_validator("additional_validators")(_check_validators)


class ClassifyParams(_Params):
    uri: Optional[str]


class DecodeParams(_Params):
    uri: Optional[str]
    uri_agent_type: Any = None

    @field_validator("uri_agent_type")
    @classmethod
    def check_uri_agent_type(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            raise ValueError("Must be a string or None")
        return value


P = TypeVar("P", bound=_Params)


def _describe(error: Mapping[str, Any]) -> str:
    field = ".".join(str(part) for part in error["loc"]) or "params"
    ctx = error.get("ctx") or {}
    reason = str(ctx["error"]) if error["type"] == "value_error" and "error" in ctx else error["msg"]
    return f"{field}: {reason}"


def check_params(model: type[P], **params: Any) -> P:
    """Validate `params` against `model`; raise ParameterError listing every violation."""
    try:
        return model(**params)
    except ValidationError as e:
        raise ParameterError(", ".join(_describe(err) for err in e.errors())) from e
