import pyarrow.parquet as pq

from bridgind.core.models import BridgeTransfer
from bridgind.export import TRANSFER_SCHEMA, transfers_to_table, write_parquet


def _transfer(block: int, tx: str, amount: int, is_deposit: bool = True) -> BridgeTransfer:
    return BridgeTransfer(
        block_number=block,
        tx_hash=tx,
        from_address="0xfrom",
        to_address="0xto",
        token="0xtoken",
        amount=amount,
        is_deposit=is_deposit,
    )


def test_table_keeps_exact_amounts():
    big = 2**200 + 1
    table = transfers_to_table([_transfer(10, "0xa", big, False), _transfer(20, "0xb", 1)], chain="ethereum")

    assert table.schema == TRANSFER_SCHEMA
    rows = table.to_pylist()
    assert [r["block_number"] for r in rows] == [10, 20]
    assert rows[0]["amount"] == str(big)
    assert rows[0]["is_deposit"] is False
    assert {r["chain"] for r in rows} == {"ethereum"}


def test_table_keeps_in_block_transaction_order():
    table = transfers_to_table([_transfer(7, "0xff01", 1), _transfer(7, "0x0a02", 2)])

    assert table.column("tx_hash").to_pylist() == ["0xff01", "0x0a02"]


def test_empty_table():
    table = transfers_to_table([])

    assert table.num_rows == 0
    assert table.schema == TRANSFER_SCHEMA


def test_write_parquet(tmp_path):
    table = transfers_to_table([_transfer(1, "0xa", 5)], chain="base")

    path = write_parquet(table, tmp_path / "out" / "transfers.parquet")

    assert path.exists()
    assert pq.read_table(path).to_pylist() == table.to_pylist()
