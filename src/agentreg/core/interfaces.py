from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from agentreg.core.models import ValidationOutcome


# ---------------------------------------------------------------------------
# ProtocolValidator
# ---------------------------------------------------------------------------

@runtime_checkable
class ProtocolValidator(Protocol):
    """
    Externally supplied checker for one service protocol (e.g. MCP, A2A).

    Domain expectations:
    - It receives the endpoint URL declared by a registration file.
    - It returns a ValidationOutcome, or a mapping with `status` and
      `messages` keys; messages are relabeled by the pipeline as
      `services[<i>].url (<PROTOCOL>): <message>`.
    - The pipeline imposes no timeout and does not catch its exceptions.
    """

    def validate(self, endpoint: str) -> ValidationOutcome | Mapping[str, Any]:
        """
        Check one endpoint.

        Implementations:
        - Reachability check (HTTP request, MCP handshake, agent card fetch)
        - Static shape checker
        - Test double
        """
        ...


# Lowercased protocol name -> validator
ProtocolValidators = Mapping[str, ProtocolValidator]
