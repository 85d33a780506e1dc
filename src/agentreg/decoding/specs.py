"""Event specification primitives and registry typing.

Defines lightweight dataclasses describing where a registry event keeps its
values:
- `TopicFieldSpec`: typed source for one indexed topic
- `DataFieldSpec`: typed source for the ABI-encoded data section
- `EventSpec`: one event rule (topic0, name, agent id / owner / URI sources)
- `EventRegistry`: mapping from topic0 → EventSpec

Registered and URIUpdated share the same layout (uint256 agent id in
topics[1], owner address in topics[2], one dynamic string in data), which is
the default for `EventSpec`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TopicFieldSpec:
    """Describe one indexed topic field (by 0-based topic index and ABI type)."""

    name: str
    index: int
    type: str  # e.g., "address", "uint256"


@dataclass(frozen=True)
class DataFieldSpec:
    """Describe the data section payload (a single dynamic ABI value)."""

    name: str
    type: str  # only "string" is decoded


@dataclass(frozen=True)
class EventSpec:
    """One registry event decoding rule."""

    topic0: str
    name: str
    agent_id: TopicFieldSpec = field(default_factory=lambda: TopicFieldSpec("agentId", 1, "uint256"))
    owner: TopicFieldSpec = field(default_factory=lambda: TopicFieldSpec("owner", 2, "address"))
    uri: DataFieldSpec = field(default_factory=lambda: DataFieldSpec("agentURI", "string"))

    def __post_init__(self):
        if not self.agent_id.type.startswith("uint"):
            raise ValueError(f"{self.name}: agent id must be an unsigned integer topic")
        if self.owner.type != "address":
            raise ValueError(f"{self.name}: owner must be an address topic")
        if self.uri.type != "string":
            raise ValueError(f"{self.name}: uri must be an ABI string")
        for tf in (self.agent_id, self.owner):
            if tf.index < 1:
                raise ValueError(f"{self.name}: {tf.name} refers to topic0, which holds the signature")


# The full registry keyed by topic0 (lowercased 0x-hex).
EventRegistry = dict[str, EventSpec]


def get_event_specs_topic0s(event_specs: Iterable[EventSpec]):
    return [event_spec.topic0 for event_spec in event_specs]


def get_event_registry_topic0s(registry: EventRegistry):
    return get_event_specs_topic0s(registry.values())
