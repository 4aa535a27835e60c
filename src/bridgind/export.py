"""Columnar export of bridge transfers.

- Amounts are stored as decimal *strings* to preserve exactness (uint256).
- Row order is the input order (block, then in-block transaction order).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from bridgind.core.models import BridgeTransfer

TRANSFER_SCHEMA = pa.schema(
    [
        pa.field("chain", pa.string()),
        pa.field("block_number", pa.uint64()),
        pa.field("tx_hash", pa.string()),
        pa.field("from", pa.string()),
        pa.field("to", pa.string()),
        pa.field("token", pa.string()),
        pa.field("amount", pa.string()),
        pa.field("is_deposit", pa.bool_()),
    ]
)


def transfers_to_table(transfers: Iterable[BridgeTransfer], *, chain: str = "") -> pa.Table:
    """Convert transfers to an Arrow table with a deterministic schema."""
    rows = list(transfers)
    arrays = {
        "chain": pa.array([chain] * len(rows), type=pa.string()),
        "block_number": pa.array([t.block_number for t in rows], type=pa.uint64()),
        "tx_hash": pa.array([t.tx_hash for t in rows], type=pa.string()),
        "from": pa.array([t.from_address for t in rows], type=pa.string()),
        "to": pa.array([t.to_address for t in rows], type=pa.string()),
        "token": pa.array([t.token for t in rows], type=pa.string()),
        "amount": pa.array([str(t.amount) for t in rows], type=pa.string()),
        "is_deposit": pa.array([t.is_deposit for t in rows], type=pa.bool_()),
    }
    return pa.Table.from_pydict(arrays, schema=TRANSFER_SCHEMA)


def write_parquet(table: pa.Table, path: Path, *, codec: str = "zstd") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, path, compression=codec)
    return path
