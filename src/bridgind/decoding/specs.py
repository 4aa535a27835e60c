"""Event specification primitives and registry typing.

Defines lightweight dataclasses to describe how to decode EVM logs:
- `TopicFieldSpec` / `DataFieldSpec`: typed sources for indexed topics / data words
- `EventSpec`: one event rule (topic0, fields, strictness)
- `EventRegistry`: mapping from topic0 → EventSpec
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TopicFieldSpec:
    """Describe one indexed topic field (by 0-based topic index and ABI type)."""

    name: str
    index: int
    type: str  # e.g., "address", "uint256", "bytes32"


@dataclass(frozen=True)
class DataFieldSpec:
    """Describe one 32-byte ABI word in the data section (0-based word index)."""

    name: str
    word_index: int
    type: str  # e.g., "address", "uint256", "bool"


@dataclass(frozen=True)
class EventSpec:
    """One event decoding rule.

    `strict` specs belong to the bridge contract: a shape mismatch is a
    decode error. Non-strict specs (ERC20 noise) are dropped on mismatch.
    """

    topic0: str
    name: str
    topic_fields: list[TopicFieldSpec]
    data_fields: list[DataFieldSpec]
    strict: bool = True

    @property
    def topic_count(self) -> int:
        return 1 + len(self.topic_fields)

    @property
    def data_words(self) -> int:
        return max((df.word_index for df in self.data_fields), default=-1) + 1


# The full registry keyed by topic0 (lowercased 0x-hex).
EventRegistry = dict[str, EventSpec]


def topic0_of(registry: EventRegistry, name: str) -> str:
    """Return the topic0 of the event called `name` in `registry`."""
    for spec in registry.values():
        if spec.name == name:
            return spec.topic0
    raise KeyError(name)
