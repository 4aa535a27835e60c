"""Decoder strategy for account-based (EVM) chains.

Raw logs of one transaction are matched against the portal registry:
- bridge signatures count only when emitted by the chain's bridge contract;
- ERC20 `Transfer` from the zero address becomes a `Mint` when the same
  transaction carries a log emitted by the bridge contract;
- everything else (approvals, plain transfers, unknown logs) is dropped,
  regardless of its position in the transaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_utils import to_checksum_address  # type: ignore[attr-defined]

from bridgind.core.constants import ZERO_ADDRESS
from bridgind.core.errors import DecodeError
from bridgind.core.models import (
    ChainDescriptor,
    CompleteTransfer,
    CompleteTransferAndUnwrap,
    IntermediateEvent,
    Meta,
    Mint,
    RawLogEntry,
    TransferTokens,
    WrapAndTransfer,
)
from bridgind.decoding import registries as names
from bridgind.decoding.specs import EventRegistry, EventSpec
from bridgind.decoding.utils import WORD_SIZE, parse_word, topic_bytes, word_at


def _shape_error(entry: RawLogEntry, spec: EventSpec) -> str | None:
    """Return a description of the shape mismatch, or None if the log fits `spec`."""
    topics = entry.topics
    if len(topics) != spec.topic_count:
        return f"expected {spec.topic_count} topics, got {len(topics)}"
    try:
        for t in topics[1:]:
            topic_bytes(t)
    except ValueError:
        return "malformed topic"
    try:
        data = entry.data_bytes()
    except ValueError:
        return "data is not hex"
    if len(data) < WORD_SIZE * spec.data_words:
        return f"expected {WORD_SIZE * spec.data_words} data bytes, got {len(data)}"
    return None


def decode_log(entry: RawLogEntry, spec: EventSpec) -> dict[str, Any] | None:
    """Decode one raw log against `spec`.

    Returns the typed field values, None for a non-strict spec whose shape
    does not match, and raises `DecodeError` for a strict one.
    """
    problem = _shape_error(entry, spec)
    if problem is not None:
        if spec.strict:
            raise DecodeError(entry, problem)
        return None

    topics = entry.topics
    data = entry.data_bytes()
    values: dict[str, Any] = {}
    for tf in spec.topic_fields:
        values[tf.name] = parse_word(topic_bytes(topics[tf.index]), tf.type)
    for df in spec.data_fields:
        values[df.name] = parse_word(word_at(data, df.word_index), df.type)
    return values


def _to_event(
    name: str,
    values: dict[str, Any],
    entry: RawLogEntry,
    *,
    touches_bridge: bool,
) -> IntermediateEvent | None:
    meta = Meta.of(entry)
    match name:
        case names.WRAP_AND_TRANSFER:
            return WrapAndTransfer(
                meta=meta,
                sender=to_checksum_address(values["sender"]),
                amount=values["amount"],
                raw_token=to_checksum_address(values["token"]),
            )
        case names.TRANSFER_TOKENS:
            return TransferTokens(
                meta=meta,
                sender=to_checksum_address(values["sender"]),
                amount=values["amount"],
                token=to_checksum_address(values["token"]),
                to_origin_chain=values["toOriginChain"],
            )
        case names.COMPLETE_TRANSFER:
            return CompleteTransfer(
                meta=meta,
                recipient=to_checksum_address(values["recipient"]),
                amount=values["amount"],
                token=to_checksum_address(values["token"]),
            )
        case names.COMPLETE_TRANSFER_AND_UNWRAP:
            return CompleteTransferAndUnwrap(
                meta=meta,
                recipient=to_checksum_address(values["recipient"]),
                amount=values["amount"],
            )
        case names.ERC20_TRANSFER:
            if not touches_bridge or values["from"] != ZERO_ADDRESS or values["to"] == ZERO_ADDRESS:
                return None
            return Mint(
                meta=meta,
                recipient=to_checksum_address(values["to"]),
                amount=values["value"],
                wrapped_token=to_checksum_address(entry.address),
            )
        case names.TRANSFER_REDEEMED | names.ERC20_APPROVAL:
            return None
    return None


def decode_account_tx(
    chain: ChainDescriptor,
    entries: Sequence[RawLogEntry],
    registry: EventRegistry,
) -> tuple[list[IntermediateEvent], list[DecodeError]]:
    """Decode the raw logs of one transaction (already in emission order)."""
    bridge = chain.bridge_address.lower()
    touches_bridge = any(e.address.lower() == bridge for e in entries)

    events: list[IntermediateEvent] = []
    errors: list[DecodeError] = []
    for entry in entries:
        spec = registry.get(entry.signature.lower())
        if spec is None:
            continue
        if spec.strict and entry.address.lower() != bridge:
            continue
        try:
            values = decode_log(entry, spec)
        except DecodeError as e:
            errors.append(e)
            continue
        if values is None:
            continue
        ev = _to_event(spec.name, values, entry, touches_bridge=touches_bridge)
        if ev is not None:
            events.append(ev)
    return events, errors
