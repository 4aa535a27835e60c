from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class IndexerConfig:
    """Configuration for wiring the query service to live RPC endpoints."""

    rpc_urls: dict[str, str] = field(default_factory=dict)  # chain name -> endpoint
    chains_file: Path | None = None  # None = bundled chains.json
    step: int = 5_000  # blocks per eth_getLogs request
    concurrency: int = 8  # parallel (chain, range) queries
    timeout_s: int = 20
    max_connections: int = 32
    checkpoint_batch: int = 50  # digests per sui_multiGetTransactionBlocks call
