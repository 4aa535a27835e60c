"""Error taxonomy.

- `UnknownChainError` and `InvalidRangeError` are raised to the caller.
- `DecodeError` and `AmbiguousTransactionError` are scoped to one entry / one
  transaction; the query collects them next to its transfers.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bridgind.core.models import IntermediateEvent, RawLogEntry


class BridgeIndexError(Exception):
    """Base class for all bridgind errors."""


class UnknownChainError(BridgeIndexError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown chain: {name!r}")
        self.name = name


class InvalidRangeError(BridgeIndexError, ValueError):
    def __init__(self, from_block: int, to_block: int) -> None:
        super().__init__(f"invalid range [{from_block}, {to_block}): from_block must be < to_block")
        self.from_block = from_block
        self.to_block = to_block


class DecodeError(BridgeIndexError, ValueError):
    """A recognized bridge event whose arguments do not match the known schema."""

    def __init__(self, entry: RawLogEntry, reason: str) -> None:
        super().__init__(f"cannot decode {entry.signature} in tx {entry.tx_id} (log {entry.log_index}): {reason}")
        self.entry = entry
        self.reason = reason

    @property
    def tx_id(self) -> str:
        return self.entry.tx_id


class AmbiguousTransactionError(BridgeIndexError):
    """More than one conflicting bridge operation in one transaction."""

    def __init__(self, tx_id: str, events: Sequence[IntermediateEvent]) -> None:
        kinds = ", ".join(type(ev).__name__ for ev in events)
        super().__init__(f"tx {tx_id} has conflicting bridge operations: {kinds}")
        self.tx_id = tx_id
        self.events = tuple(events)
