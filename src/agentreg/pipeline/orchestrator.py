"""Registration pipeline: log → URI → registration file → categories/entries.

This module provides two layers:

1) `RegistrationPipeline`:
   - Composes the stages (event decoder, URI classifier, URI decoder,
     registration validator, metadata extractor) under one `ParserConfig`.
   - Validates call-time parameters first and raises `ParameterError`;
     every other problem is accumulated into `PipelineResult.messages`.
   - Calls injected protocol validators for matching services.

2) Module-level entry points (`full_pipeline`, `validate_from_uri`, ...):
   - Thin wrappers over a default `RegistrationPipeline` for typical
     script / CLI usage.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from agentreg.core.config import DEFAULT_CONFIG, ParserConfig
from agentreg.core.interfaces import ProtocolValidators
from agentreg.core.models import (
    Categories,
    ClassifyResult,
    DecodedEvent,
    EventLog,
    Extraction,
    PipelineResult,
    UriAgentType,
    UriDecodeResult,
    ValidationOutcome,
)
from agentreg.core.params import (
    ClassifyParams,
    DecodeParams,
    EventLogParams,
    UriParams,
    check_params,
)
from agentreg.decoding.event_decoder import decode_event_log as decode_log
from agentreg.extraction.metadata import extract_metadata
from agentreg.services import iter_services, protocol_key, resolve_endpoint
from agentreg.uri.classifier import classify_uri as detect_uri_type
from agentreg.uri.decoder import decode_uri as decode_uri_payload
from agentreg.validation.registration import validate_registration

logger = logging.getLogger(__name__)


def _as_event_log(event_log: EventLog | Mapping[str, Any]) -> EventLog:
    if isinstance(event_log, EventLog):
        return event_log
    return EventLog.from_rpc(event_log)


def _normalize_validators(validators: ProtocolValidators | None) -> dict[str, Any]:
    return {key.lower(): v for key, v in (validators or {}).items()}


class RegistrationPipeline:
    """Stateless service running the registration stages with one configuration.

    Instances hold only their (frozen) config and may be shared freely.
    """

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    # ---------- public entry points ----------

    def full_pipeline(
        self,
        event_log: EventLog | Mapping[str, Any],
        additional_validators: ProtocolValidators | None = None,
    ) -> PipelineResult:
        """Decode a registry log and run every downstream stage on its URI.

        When the log cannot be decoded (or carries no URI) the result still
        has fully shaped categories/entries, typed `empty`, with whatever
        agent id / owner could be recovered.
        """
        check_params(EventLogParams, event_log=event_log, additional_validators=additional_validators)

        decoded = decode_log(_as_event_log(event_log), registry=self.config.registry)
        messages = list(decoded.messages)

        if not decoded.status or decoded.decoded_agent_uri is None:
            extraction = extract_metadata(
                None,
                UriAgentType.EMPTY,
                decoded.agent_id,
                decoded.owner_address,
                config=self.config,
            )
            return PipelineResult.build(messages, extraction)

        stage_messages, extraction = self._run_pipeline(
            decoded.decoded_agent_uri,
            decoded.agent_id,
            decoded.owner_address,
            _normalize_validators(additional_validators),
        )
        messages.extend(stage_messages)
        return PipelineResult.build(messages, extraction)

    def validate_from_uri(
        self,
        agent_uri: str | None,
        agent_id: str | None = None,
        owner_address: str | None = None,
        additional_validators: ProtocolValidators | None = None,
    ) -> PipelineResult:
        """Same as `full_pipeline`, starting from an already known agent URI."""
        check_params(
            UriParams,
            agent_uri=agent_uri,
            agent_id=agent_id,
            owner_address=owner_address,
            additional_validators=additional_validators,
        )
        messages, extraction = self._run_pipeline(
            agent_uri,
            agent_id,
            owner_address,
            _normalize_validators(additional_validators),
        )
        return PipelineResult.build(messages, extraction)

    def classify_uri(self, uri: str | None) -> ClassifyResult:
        """Lightweight preview: the URI tag plus categories for an unresolved file."""
        check_params(ClassifyParams, uri=uri)
        uri_agent_type = detect_uri_type(uri)
        return ClassifyResult(uri_agent_type=uri_agent_type, categories=Categories.empty(uri_agent_type))

    def decode_uri(self, uri: str | None, uri_agent_type: UriAgentType | str | None = None) -> UriDecodeResult:
        """Decode a URI payload without validating it; classifies when no tag is given."""
        check_params(DecodeParams, uri=uri, uri_agent_type=uri_agent_type)
        return decode_uri_payload(uri, uri_agent_type or detect_uri_type(uri))

    def decode_event_log(self, event_log: EventLog | Mapping[str, Any]) -> DecodedEvent:
        check_params(EventLogParams, event_log=event_log)
        return decode_log(_as_event_log(event_log), registry=self.config.registry)

    def categorize_registration(self, document: Any) -> Extraction:
        """Categories/entries for an already decoded registration file."""
        return extract_metadata(document, UriAgentType.BASE64, config=self.config)

    # ---------- stages ----------

    def _run_pipeline(
        self,
        agent_uri: str | None,
        agent_id: str | None,
        owner_address: str | None,
        validators: Mapping[str, Any],
    ) -> tuple[list[str], Extraction]:
        messages: list[str] = []

        uri_agent_type = detect_uri_type(agent_uri)
        decoded = decode_uri_payload(agent_uri, uri_agent_type)
        messages.extend(decoded.messages)

        if not decoded.status:
            extraction = extract_metadata(None, uri_agent_type, agent_id, owner_address, config=self.config)
            return messages, extraction

        document = decoded.decoded_registration_file
        outcome = validate_registration(document, uri_agent_type, config=self.config)
        messages.extend(outcome.messages)

        extraction = extract_metadata(document, uri_agent_type, agent_id, owner_address, config=self.config)
        messages.extend(self._run_validators(document, validators))

        logger.debug(
            "pipeline for %s uri (agent %s): %d message(s)",
            uri_agent_type.value,
            agent_id,
            len(messages),
        )
        return messages, extraction

    @staticmethod
    def _run_validators(document: Any, validators: Mapping[str, Any]) -> list[str]:
        """Call matching protocol validators; failures are relabelled per service."""
        if not validators:
            return []

        messages: list[str] = []
        for index, service in enumerate(iter_services(document)):
            key = protocol_key(service)
            endpoint = resolve_endpoint(service)
            if key not in validators or endpoint is None:
                continue

            outcome = _as_outcome(validators[key].validate(endpoint))
            logger.debug("validator %s on services[%d]: status=%s", key, index, outcome.status)
            if not outcome.status:
                label = key.upper()
                messages.extend(f"services[{index}].url ({label}): {msg}" for msg in outcome.messages)
        return messages


def _as_outcome(result: Any) -> ValidationOutcome:
    """Accept a ValidationOutcome or a `{"status": ..., "messages": [...]}` mapping."""
    if isinstance(result, Mapping):
        return ValidationOutcome(status=bool(result.get("status")), messages=tuple(result.get("messages") or ()))
    return result


# ---------- default entry points ----------

_DEFAULT_PIPELINE = RegistrationPipeline()


def full_pipeline(
    event_log: EventLog | Mapping[str, Any],
    additional_validators: ProtocolValidators | None = None,
) -> PipelineResult:
    return _DEFAULT_PIPELINE.full_pipeline(event_log, additional_validators)


def validate_from_uri(
    agent_uri: str | None,
    agent_id: str | None = None,
    owner_address: str | None = None,
    additional_validators: ProtocolValidators | None = None,
) -> PipelineResult:
    return _DEFAULT_PIPELINE.validate_from_uri(agent_uri, agent_id, owner_address, additional_validators)


def classify_uri(uri: str | None) -> ClassifyResult:
    return _DEFAULT_PIPELINE.classify_uri(uri)


def decode_uri(uri: str | None, uri_agent_type: UriAgentType | str | None = None) -> UriDecodeResult:
    return _DEFAULT_PIPELINE.decode_uri(uri, uri_agent_type)


def decode_event_log(event_log: EventLog | Mapping[str, Any]) -> DecodedEvent:
    return _DEFAULT_PIPELINE.decode_event_log(event_log)


def categorize_registration(document: Any) -> Extraction:
    return _DEFAULT_PIPELINE.categorize_registration(document)
