"""Family-agnostic decoding entry point.

`decode(chain, raw)` sorts raw entries by (block, log index), groups them per
transaction in first-appearance order and hands each group to the decoder
strategy of the chain's family. Per-entry decode errors are collected, never
raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from bridgind.core.errors import DecodeError
from bridgind.core.models import ChainDescriptor, ChainFamily, IntermediateEvent, RawLogEntry, TxEvents
from bridgind.decoding.account import decode_account_tx
from bridgind.decoding.objects import decode_object_tx
from bridgind.decoding.registries import make_portal_registry
from bridgind.decoding.specs import EventRegistry

logger = logging.getLogger(__name__)

TxDecoder = Callable[
    [ChainDescriptor, Sequence[RawLogEntry], EventRegistry],
    tuple[list[IntermediateEvent], list[DecodeError]],
]


@dataclass(slots=True)
class DecodeOutput:
    """Decoded transactions (only those with bridge events) and per-entry errors."""

    transactions: list[TxEvents] = field(default_factory=list)
    errors: list[DecodeError] = field(default_factory=list)


def group_by_tx(raw: Sequence[RawLogEntry]) -> list[tuple[int, str, list[RawLogEntry]]]:
    """Group entries per (block, tx) ordered by block, then first log index."""
    groups: dict[tuple[int, str], list[RawLogEntry]] = {}
    for entry in sorted(raw, key=lambda e: (e.block_number, e.log_index)):
        groups.setdefault((entry.block_number, entry.tx_id), []).append(entry)
    return [(block, tx_id, entries) for (block, tx_id), entries in groups.items()]


def _object_strategy(
    chain: ChainDescriptor,
    entries: Sequence[RawLogEntry],
    registry: EventRegistry,
) -> tuple[list[IntermediateEvent], list[DecodeError]]:
    return decode_object_tx(chain, entries)


DECODERS: dict[ChainFamily, TxDecoder] = {
    ChainFamily.ACCOUNT: decode_account_tx,
    ChainFamily.OBJECT: _object_strategy,
}

_DEFAULT_REGISTRY: EventRegistry = make_portal_registry()


def decode(
    chain: ChainDescriptor,
    raw: Sequence[RawLogEntry],
    *,
    registry: EventRegistry | None = None,
) -> DecodeOutput:
    """Decode raw entries of one chain into per-transaction intermediate events."""
    strategy = DECODERS[chain.family]
    reg = registry if registry is not None else _DEFAULT_REGISTRY

    out = DecodeOutput()
    for block, tx_id, entries in group_by_tx(raw):
        events, errors = strategy(chain, entries, reg)
        for err in errors:
            logger.warning("[%s] %s", chain.name, err)
        out.errors.extend(errors)
        if events:
            out.transactions.append(TxEvents(tx_id=tx_id, block_number=block, events=events))

    logger.debug(
        "[%s] decoded %d raw entries into %d bridge transactions (%d errors)",
        chain.name,
        len(raw),
        len(out.transactions),
        len(out.errors),
    )
    return out
