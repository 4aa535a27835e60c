from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from bridgind.core.models import RawLogEntry


# ---------------------------------------------------------------------------
# IAccountLogSource
# ---------------------------------------------------------------------------

@runtime_checkable
class IAccountLogSource(Protocol):
    """
    Abstract provider of raw logs for one account-based (EVM) chain.

    Domain expectations:
    - It returns RawLogEntry objects already mapped into internal domain models.
    - It returns every log the decoder may need for the range: logs emitted
      by the bridge contract and zero-address `Transfer` logs (mints).
    - Chunking, pagination and transport errors are its own concern;
      failures propagate to the caller unchanged.
    """

    async def fetch_logs(self, from_block: int, to_block: int) -> List[RawLogEntry]:
        """
        Return all relevant logs over the inclusive block range.

        Implementations:
        - RPC-based (`EvmLogSource`)
        - Log archive reader
        - In-memory provider for testing
        """
        ...


# ---------------------------------------------------------------------------
# IObjectEventSource
# ---------------------------------------------------------------------------

@runtime_checkable
class IObjectEventSource(Protocol):
    """
    Abstract provider of Move events for one object-based chain.

    Domain expectations:
    - `block_number` on each entry is the checkpoint sequence number.
    - `log_index` increases with emission order inside a checkpoint.
    """

    async def fetch_checkpoint_events(self, from_checkpoint: int, to_checkpoint: int) -> List[RawLogEntry]:
        """Return all events over the inclusive checkpoint range."""
        ...


LogSource = IAccountLogSource | IObjectEventSource
