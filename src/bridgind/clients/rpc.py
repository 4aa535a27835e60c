"""Lightweight JSON-RPC client and log source for Ethereum-compatible nodes.

This module provides:
- `RPC`: an async client with sane timeouts/connection limits
- `EvmLogSource`: the account-based log source used by the query service

It returns `RawLogEntry` records ready for downstream decoding. No retries:
HTTP and JSON-RPC errors propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from bridgind.core.constants import TRANSFER_T0, ZERO_TOPIC
from bridgind.core.models import ChainDescriptor, RawLogEntry
from bridgind.utils import iter_chunks, to_hex_block

logger = logging.getLogger(__name__)

TopicFilter = Sequence[Sequence[str] | str | None]


def _parse_int(value: str | int | None) -> int | None:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return None


def log_to_entry(rl: dict) -> RawLogEntry:
    """Map one eth_getLogs result item to a RawLogEntry."""
    topics = tuple((t if isinstance(t, str) else t.decode()).lower() for t in rl.get("topics", []))
    return RawLogEntry(
        address=rl["address"].lower(),
        signature=topics[0] if topics else "",
        args=topics[1:],
        data_hex=str(rl.get("data") or "0x"),
        block_number=int(rl["blockNumber"], 16),
        tx_id=(rl.get("transactionHash") or rl.get("transaction_hash") or "").lower(),
        log_index=int(rl["logIndex"], 16),
        block_timestamp=_parse_int(rl.get("blockTimestamp")),
    )


class RPC:
    """Minimal async RPC client.

    Parameters
    ----------
    url : str
        RPC endpoint URL.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    """

    def __init__(self, url: str, *, timeout_s: int = 20, max_connections: int = 64) -> None:
        self.url = url
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=True,
        )

    async def call(self, method: str, params: list) -> object:
        """Issue one JSON-RPC call and return its `result`."""
        r = await self.client.post(
            self.url,
            json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params},
        )
        r.raise_for_status()
        data = r.json()
        if "error" in data:
            e = data["error"]
            raise RuntimeError(f"RPC error: {e.get('code')} {e.get('message')}")
        return data.get("result")

    async def latest_block(self) -> int:
        """Return the latest block number as an int."""
        return int(await self.call("eth_blockNumber", []), 16)

    async def get_logs(
        self,
        *,
        address: str | None,
        topics: TopicFilter | None,
        from_block: int,
        to_block: int,
    ) -> list[RawLogEntry]:
        """Fetch logs for an optional address and topic filter within an inclusive block range."""
        flt: dict[str, object] = {
            "fromBlock": to_hex_block(from_block),
            "toBlock": to_hex_block(to_block),
        }
        if address is not None:
            flt["address"] = address.lower()
        if topics is not None:
            flt["topics"] = [
                t.lower() if isinstance(t, str) else (None if t is None else [x.lower() for x in t])
                for t in topics
            ]
        result = await self.call("eth_getLogs", [flt])
        return [log_to_entry(rl) for rl in result or []]

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()


class EvmLogSource:
    """Account-based log source for one chain.

    For every chunk of the range it fetches all logs emitted by the bridge
    contract and all zero-address `Transfer` logs (wrapped-token mints).

    Limitation: the bridge registry decodes `WrapAndTransfer`,
    `TransferTokens`, `CompleteTransfer` and `CompleteTransferAndUnwrap`
    under the signatures of the abstract event model. The deployed Portal
    token bridge does not emit logs with those topic0 values, so on a live
    node this source only surfaces mint-pattern withdrawals (`Transfer` from
    the zero address next to a bridge `TransferRedeemed`). Deposits and
    releases of native assets need a source that maps the deployed
    contract's calls or logs into these events.
    """

    def __init__(self, rpc: RPC, chain: ChainDescriptor, *, step: int = 5_000) -> None:
        self.rpc = rpc
        self.chain = chain
        self.step = step

    async def _fetch_chunk(self, a: int, b: int) -> list[RawLogEntry]:
        bridge_logs, mint_logs = await asyncio.gather(
            self.rpc.get_logs(address=self.chain.bridge_address, topics=None, from_block=a, to_block=b),
            self.rpc.get_logs(address=None, topics=[TRANSFER_T0, ZERO_TOPIC], from_block=a, to_block=b),
        )
        return bridge_logs + mint_logs

    async def fetch_logs(self, from_block: int, to_block: int) -> list[RawLogEntry]:
        seen: dict[tuple[str, int], RawLogEntry] = {}
        for a, b in iter_chunks(from_block, to_block, self.step):
            for entry in await self._fetch_chunk(a, b):
                seen.setdefault((entry.tx_id, entry.log_index), entry)
        logger.debug("[%s] fetched %d logs for [%d, %d]", self.chain.name, len(seen), from_block, to_block)
        return sorted(seen.values(), key=lambda e: (e.block_number, e.log_index))

    async def aclose(self) -> None:
        await self.rpc.aclose()
