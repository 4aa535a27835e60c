from __future__ import annotations

from .chains.registry import ChainRegistry
from .classification.classifier import classify
from .core.errors import AmbiguousTransactionError, DecodeError, InvalidRangeError, UnknownChainError
from .core.models import BridgeTransfer, ChainDescriptor, ChainFamily, EventsResult, RawLogEntry
from .decoding.decoder import decode
from .service import BridgeEventsService, EventsQuery

__all__ = [
    "ChainRegistry",
    "classify",
    "decode",
    "BridgeEventsService",
    "EventsQuery",
    "BridgeTransfer",
    "ChainDescriptor",
    "ChainFamily",
    "EventsResult",
    "RawLogEntry",
    "AmbiguousTransactionError",
    "DecodeError",
    "InvalidRangeError",
    "UnknownChainError",
]
