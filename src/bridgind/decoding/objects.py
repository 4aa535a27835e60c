"""Decoder strategy for object-based (Move) chains.

Each event type of the bridge package maps 1:1 onto an intermediate event
kind. Field values arrive in struct declaration order; the event envelope
sender stands in for the depositor.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from bridgind.core.errors import DecodeError
from bridgind.core.models import (
    ChainDescriptor,
    CompleteTransfer,
    IntermediateEvent,
    Meta,
    Mint,
    RawLogEntry,
    TransferTokens,
)

_SHORT_ADDRESS_MAX = 4  # framework addresses (0x1, 0x2, ...) keep their short form


@dataclass(frozen=True)
class MoveEventSpec:
    """Field layout of one bridge Move event."""

    kind: str
    fields: tuple[str, ...]


_TRANSFER_FIELDS = ("amount", "coin_type", "to_origin_chain")
_COMPLETE_FIELDS = ("recipient", "amount", "coin_type")

# Keyed by `module::Struct`
MOVE_EVENTS: dict[str, MoveEventSpec] = {
    "transfer_tokens::TransferTokens": MoveEventSpec("TransferTokens", _TRANSFER_FIELDS),
    "transfer_tokens_with_payload::TransferTokensWithPayload": MoveEventSpec("TransferTokens", _TRANSFER_FIELDS),
    "complete_transfer::CompleteTransfer": MoveEventSpec("CompleteTransfer", _COMPLETE_FIELDS),
    "complete_transfer_with_payload::CompleteTransferWithPayload": MoveEventSpec("CompleteTransfer", _COMPLETE_FIELDS),
    "wrapped_asset::WrappedMinted": MoveEventSpec("Mint", _COMPLETE_FIELDS),
}


def normalize_address(value: str) -> str:
    """Lowercase, 0x-prefixed Sui address."""
    v = value.strip().lower()
    return v if v.startswith("0x") else "0x" + v


def normalize_coin_type(value: str) -> str:
    """Canonical coin type: `0x2::sui::SUI`, `0x<64 hex>::coin::COIN`."""
    addr, sep, rest = value.strip().partition("::")
    if not sep:
        return normalize_address(addr)
    h = normalize_address(addr)[2:]
    short = h.lstrip("0") or "0"
    h = short if len(short) <= _SHORT_ADDRESS_MAX else h.rjust(64, "0")
    return f"0x{h}::{rest}"


def _struct_key(event_type: str) -> str:
    """`0xpkg::module::Struct<T>` -> `module::Struct`."""
    base = event_type.split("<", 1)[0]
    parts = base.split("::")
    return "::".join(parts[-2:]) if len(parts) >= 3 else base


def _as_int(entry: RawLogEntry, name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise DecodeError(entry, f"{name} is not an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(entry, f"{name} is not an integer: {value!r}") from e


def _as_bool(entry: RawLogEntry, name: str, value: Any) -> bool:
    match value:
        case bool():
            return value
        case "true" | "True":
            return True
        case "false" | "False":
            return False
    raise DecodeError(entry, f"{name} is not a boolean: {value!r}")


def decode_move_event(entry: RawLogEntry, spec: MoveEventSpec) -> IntermediateEvent:
    """Decode one bridge Move event, raising DecodeError on a shape mismatch."""
    if len(entry.args) != len(spec.fields):
        raise DecodeError(entry, f"expected {len(spec.fields)} fields, got {len(entry.args)}")
    values = dict(zip(spec.fields, entry.args))
    meta = Meta.of(entry)
    amount = _as_int(entry, "amount", values["amount"])
    if amount < 0:
        raise DecodeError(entry, "negative amount")
    coin_type = normalize_coin_type(str(values["coin_type"]))

    if spec.kind == "TransferTokens":
        if not entry.sender:
            raise DecodeError(entry, "missing event sender")
        return TransferTokens(
            meta=meta,
            sender=normalize_address(entry.sender),
            amount=amount,
            token=coin_type,
            to_origin_chain=_as_bool(entry, "to_origin_chain", values["to_origin_chain"]),
        )
    recipient = normalize_address(str(values["recipient"]))
    if spec.kind == "Mint":
        return Mint(meta=meta, recipient=recipient, amount=amount, wrapped_token=coin_type)
    return CompleteTransfer(meta=meta, recipient=recipient, amount=amount, token=coin_type)


def decode_object_tx(
    chain: ChainDescriptor,
    entries: Sequence[RawLogEntry],
) -> tuple[list[IntermediateEvent], list[DecodeError]]:
    """Decode the Move events of one transaction digest."""
    if not chain.package:
        raise ValueError(f"chain {chain.name} has no bridge package configured")
    prefix = normalize_address(chain.package) + "::"

    events: list[IntermediateEvent] = []
    errors: list[DecodeError] = []
    for entry in entries:
        if not normalize_address(entry.signature).startswith(prefix):
            continue
        spec = MOVE_EVENTS.get(_struct_key(entry.signature))
        if spec is None:
            continue
        try:
            events.append(decode_move_event(entry, spec))
        except DecodeError as e:
            errors.append(e)
    return events, errors
