"""Object-based log source for Sui (JSON-RPC over the shared `RPC` client).

Per checkpoint: `sui_getCheckpoint` lists the transaction digests, then
`sui_multiGetTransactionBlocks` (showEvents) returns their events. Events are
numbered in checkpoint order so `log_index` orders them inside a checkpoint.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from bridgind.clients.rpc import RPC
from bridgind.core.models import ChainDescriptor, RawLogEntry

logger = logging.getLogger(__name__)


def event_to_entry(ev: dict[str, Any], *, checkpoint: int, log_index: int, timestamp_ms: Any) -> RawLogEntry:
    """Map one Sui event (from a transaction block) to a RawLogEntry."""
    parsed = ev.get("parsedJson") or {}
    return RawLogEntry(
        address=str(ev.get("packageId", "")).lower(),
        signature=str(ev["type"]),
        args=tuple(parsed.values()) if isinstance(parsed, dict) else (),
        block_number=checkpoint,
        tx_id=ev["id"]["txDigest"],
        log_index=log_index,
        block_timestamp=int(timestamp_ms) // 1000 if timestamp_ms is not None else None,
        sender=ev.get("sender"),
    )


class SuiEventSource:
    """Checkpoint-indexed event source for one object-based chain."""

    def __init__(self, rpc: RPC, chain: ChainDescriptor, *, batch: int = 50, concurrency: int = 8) -> None:
        self.rpc = rpc
        self.chain = chain
        self.batch = batch
        self._sem = asyncio.Semaphore(concurrency)

    async def _checkpoint_events(self, checkpoint: int) -> list[RawLogEntry]:
        async with self._sem:
            cp = await self.rpc.call("sui_getCheckpoint", [str(checkpoint)])
            if not isinstance(cp, dict):
                raise RuntimeError(f"RPC error: checkpoint {checkpoint} not available")
            digests: list[str] = list(cp.get("transactions", []))
            blocks: list[dict[str, Any]] = []
            for i in range(0, len(digests), self.batch):
                res = await self.rpc.call(
                    "sui_multiGetTransactionBlocks",
                    [digests[i : i + self.batch], {"showEvents": True}],
                )
                blocks.extend(res or [])

        out: list[RawLogEntry] = []
        for block in blocks:
            for ev in block.get("events") or []:
                out.append(
                    event_to_entry(
                        ev,
                        checkpoint=checkpoint,
                        log_index=len(out),
                        timestamp_ms=block.get("timestampMs", cp.get("timestampMs")),
                    )
                )
        return out

    async def fetch_checkpoint_events(self, from_checkpoint: int, to_checkpoint: int) -> list[RawLogEntry]:
        per_checkpoint = await asyncio.gather(
            *(self._checkpoint_events(cp) for cp in range(from_checkpoint, to_checkpoint + 1))
        )
        entries = [e for events in per_checkpoint for e in events]
        logger.debug(
            "[%s] fetched %d events for checkpoints [%d, %d]",
            self.chain.name,
            len(entries),
            from_checkpoint,
            to_checkpoint,
        )
        return entries

    async def aclose(self) -> None:
        await self.rpc.aclose()
