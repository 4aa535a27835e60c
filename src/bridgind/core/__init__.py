"""Core data models, configuration, errors and constants.

This package provides:
- Data models (ChainDescriptor, RawLogEntry, intermediate events, BridgeTransfer)
- Configuration (IndexerConfig)
- Error taxonomy (UnknownChainError, InvalidRangeError, DecodeError, AmbiguousTransactionError)
"""

from bridgind.core.config import IndexerConfig
from bridgind.core.errors import (
    AmbiguousTransactionError,
    BridgeIndexError,
    DecodeError,
    InvalidRangeError,
    UnknownChainError,
)
from bridgind.core.models import (
    BridgeTransfer,
    ChainDescriptor,
    ChainFamily,
    CompleteTransfer,
    CompleteTransferAndUnwrap,
    EventsResult,
    IntermediateEvent,
    Meta,
    Mint,
    RawLogEntry,
    TransferTokens,
    TxEvents,
    WrapAndTransfer,
)

__all__ = [
    "IndexerConfig",
    "AmbiguousTransactionError",
    "BridgeIndexError",
    "DecodeError",
    "InvalidRangeError",
    "UnknownChainError",
    "BridgeTransfer",
    "ChainDescriptor",
    "ChainFamily",
    "CompleteTransfer",
    "CompleteTransferAndUnwrap",
    "EventsResult",
    "IntermediateEvent",
    "Meta",
    "Mint",
    "RawLogEntry",
    "TransferTokens",
    "TxEvents",
    "WrapAndTransfer",
]
