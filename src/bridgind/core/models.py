"""Core data models for bridge event extraction.

This module defines:
- `ChainDescriptor`: static, per-chain facts (bridge address, native sentinel, quirks).
- `RawLogEntry`: one raw log / Move event as returned by a log source.
- Intermediate events: one frozen dataclass per bridge operation kind.
- `TxEvents`: the intermediate events of one transaction, in emission order.
- `BridgeTransfer`: the canonical output record.
- `EventsResult`: transfers plus per-entry / per-transaction errors for one query.

Design notes
------------
- Amounts are plain Python ints end to end (exact, arbitrary precision).
- Intermediate events form a tagged union (`IntermediateEvent`); consumers
  dispatch with `match`, never on chain-family specific shapes.
- Everything here is immutable except the result containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bridgind.core.errors import AmbiguousTransactionError, DecodeError


class ChainFamily(str, Enum):
    """Event model of a chain."""

    ACCOUNT = "account-based"  # EVM logs (topics + data)
    OBJECT = "object-based"  # Move events, checkpoint indexed


# === Chain descriptor ===


@dataclass(slots=True, frozen=True)
class ChainDescriptor:
    """Static description of one supported chain."""

    name: str
    family: ChainFamily
    bridge_address: str  # token bridge contract, or bridge state object
    native_token: str  # wrapped-native token address, or native coin type
    decimal_shift: int = 0  # power of ten applied once to on-chain amounts
    relayers: frozenset[str] = frozenset()  # lowercased
    package: str | None = None  # object-based only: bridge Move package id

    @property
    def is_account_based(self) -> bool:
        return self.family is ChainFamily.ACCOUNT

    def is_relayer(self, address: str) -> bool:
        """Return True if `address` is a known relayer contract on this chain."""
        return address.lower() in self.relayers


# === Log source record ===


@dataclass(slots=True, frozen=True)
class RawLogEntry:
    """Raw log as fetched from a log source, minimally normalized.

    On account-based chains `signature` is topic0 and `args` holds the
    remaining indexed topics; non-indexed values live in `data_hex`.
    On object-based chains `signature` is the fully-qualified Move event type
    and `args` holds the struct field values in declaration order.
    """

    address: str  # lowercased emitter contract / Move package id
    signature: str
    block_number: int  # block or checkpoint
    tx_id: str  # tx hash or transaction digest
    log_index: int  # position within the block / checkpoint
    args: tuple[Any, ...] = ()
    data_hex: str = "0x"
    block_timestamp: int | None = None
    sender: str | None = None  # object-based event envelope sender

    @property
    def topics(self) -> tuple[str, ...]:
        """EVM view: topic0 followed by the indexed topics."""
        return (self.signature, *(str(a) for a in self.args))

    def data_bytes(self) -> bytes:
        h = self.data_hex[2:] if self.data_hex.lower().startswith("0x") else self.data_hex
        return bytes.fromhex(h) if h else b""


@dataclass(slots=True, frozen=True)
class Meta:
    """Where an intermediate event came from (used for ordering and tie-break)."""

    block_number: int
    tx_id: str
    log_index: int
    address: str

    @staticmethod
    def of(entry: RawLogEntry) -> Meta:
        return Meta(
            block_number=entry.block_number,
            tx_id=entry.tx_id,
            log_index=entry.log_index,
            address=entry.address,
        )


# === Intermediate events (tagged union) ===


@dataclass(slots=True, frozen=True)
class WrapAndTransfer:
    """Native asset deposit (the bridge wraps the native coin)."""

    meta: Meta
    sender: str
    amount: int
    raw_token: str


@dataclass(slots=True, frozen=True)
class TransferTokens:
    """Token deposit, with or without payload."""

    meta: Meta
    sender: str
    amount: int
    token: str
    to_origin_chain: bool = False  # wrapped asset burned on its way home


@dataclass(slots=True, frozen=True)
class CompleteTransfer:
    """Withdrawal releasing a locked asset."""

    meta: Meta
    recipient: str
    amount: int
    token: str


@dataclass(slots=True, frozen=True)
class CompleteTransferAndUnwrap:
    """Withdrawal unwrapping to the native coin."""

    meta: Meta
    recipient: str
    amount: int


@dataclass(slots=True, frozen=True)
class Mint:
    """Wrapped asset minted to a recipient (zero-address origin)."""

    meta: Meta
    recipient: str
    amount: int
    wrapped_token: str


IntermediateEvent = WrapAndTransfer | TransferTokens | CompleteTransfer | CompleteTransferAndUnwrap | Mint

DEPOSIT_KINDS = (WrapAndTransfer, TransferTokens)
WITHDRAWAL_KINDS = (CompleteTransfer, CompleteTransferAndUnwrap)


@dataclass(slots=True)
class TxEvents:
    """Intermediate events of one transaction / transaction digest."""

    tx_id: str
    block_number: int
    events: list[IntermediateEvent] = field(default_factory=list)


# === Canonical output ===


@dataclass(slots=True, frozen=True)
class BridgeTransfer:
    """Canonical bridge transfer record."""

    block_number: int
    tx_hash: str
    from_address: str
    to_address: str
    token: str
    amount: int
    is_deposit: bool
    via_relayer: bool = False

    def to_dict(self) -> dict[str, Any]:
        """External representation with the stable field names."""
        return {
            "blockNumber": self.block_number,
            "txHash": self.tx_hash,
            "from": self.from_address,
            "to": self.to_address,
            "token": self.token,
            "amount": self.amount,
            "isDeposit": self.is_deposit,
        }


@dataclass(slots=True)
class EventsResult:
    """Outcome of one (chain, range) query."""

    chain: str
    from_block: int
    to_block: int
    transfers: list[BridgeTransfer] = field(default_factory=list)
    errors: list[DecodeError | AmbiguousTransactionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
