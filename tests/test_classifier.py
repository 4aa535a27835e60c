import pytest

from bridgind.classification import classify, normalize_amount
from bridgind.core.constants import ZERO_ADDRESS
from bridgind.core.errors import AmbiguousTransactionError
from bridgind.core.models import (
    CompleteTransfer,
    CompleteTransferAndUnwrap,
    Meta,
    Mint,
    TransferTokens,
    TxEvents,
    WrapAndTransfer,
)

SENDER = "0x2558963300Eb939F5b0d96eF9a4377d2bEF553a6"
TOKEN = "0xCd670d77f3dCAB82d43DFf9BD2C4b87339FB3560"
OTHER_TOKEN = "0x6F65Fa22e903122d274838F99840c9c1beE5F77c"
RELAYER = "0xCafd2f0A35A4459fA40C0517e17e6fA2939441CA"


def meta(log_index: int = 0, *, tx: str = "0xtx", block: int = 100) -> Meta:
    return Meta(block_number=block, tx_id=tx, log_index=log_index, address="0xemitter")


def test_wrap_and_transfer_is_native_deposit(ethereum) -> None:
    t = classify(ethereum, [WrapAndTransfer(meta(), SENDER, 1963000000000000000, ethereum.native_token)])

    assert t is not None
    assert t.is_deposit is True
    assert t.from_address == SENDER
    assert t.to_address == ethereum.bridge_address
    assert t.token == ethereum.native_token
    assert t.amount == 1963000000000000000
    assert t.tx_hash == "0xtx" and t.block_number == 100


def test_transfer_tokens_is_token_deposit(ethereum) -> None:
    t = classify(ethereum, [TransferTokens(meta(), SENDER, 20, TOKEN)])

    assert t.is_deposit is True
    assert t.to_address == ethereum.bridge_address
    assert t.token == TOKEN


def test_transfer_to_origin_chain_is_burn(ethereum) -> None:
    t = classify(ethereum, [TransferTokens(meta(), SENDER, 20, TOKEN, to_origin_chain=True)])

    assert t.is_deposit is True
    assert t.to_address == ZERO_ADDRESS
    assert t.token == TOKEN


def test_complete_transfer_is_withdrawal(ethereum) -> None:
    t = classify(ethereum, [CompleteTransfer(meta(), SENDER, 7, TOKEN)])

    assert t.is_deposit is False
    assert t.from_address == ethereum.bridge_address
    assert t.to_address == SENDER
    assert t.token == TOKEN


def test_unwrap_withdraws_native_token(ethereum) -> None:
    t = classify(ethereum, [CompleteTransferAndUnwrap(meta(), SENDER, 10**18)])

    assert t.is_deposit is False
    assert t.token == ethereum.native_token
    assert t.amount == 10**18


def test_mint_is_wrapped_withdrawal(ethereum) -> None:
    t = classify(ethereum, [Mint(meta(3), SENDER, 580069280, OTHER_TOKEN)])

    assert t.is_deposit is False
    assert t.from_address == ZERO_ADDRESS
    assert t.to_address == SENDER
    assert t.token == OTHER_TOKEN
    assert t.amount == 580069280


def test_primary_event_wins_over_mint_regardless_of_order(ethereum) -> None:
    events = [
        Mint(meta(0), SENDER, 5, OTHER_TOKEN),
        TransferTokens(meta(4), SENDER, 20, TOKEN),
    ]

    t = classify(ethereum, events)

    assert t.is_deposit is True
    assert t.token == TOKEN


def test_two_primaries_are_ambiguous(ethereum) -> None:
    events = [
        TransferTokens(meta(0), SENDER, 1, TOKEN),
        CompleteTransfer(meta(1), SENDER, 1, TOKEN),
    ]

    with pytest.raises(AmbiguousTransactionError) as exc:
        classify(ethereum, TxEvents("0xtx", 100, events))
    assert exc.value.tx_id == "0xtx"
    assert "TransferTokens" in str(exc.value) and "CompleteTransfer" in str(exc.value)


def test_same_token_mints_are_merged(ethereum) -> None:
    events = [
        Mint(meta(1), RELAYER, 10, TOKEN),
        Mint(meta(2), SENDER, 90, TOKEN),
    ]

    t = classify(ethereum, events)

    assert t.amount == 100
    assert t.to_address == SENDER


def test_different_token_mints_are_ambiguous(ethereum) -> None:
    events = [Mint(meta(1), SENDER, 10, TOKEN), Mint(meta(2), SENDER, 10, OTHER_TOKEN)]

    with pytest.raises(AmbiguousTransactionError):
        classify(ethereum, events)


def test_no_events(ethereum) -> None:
    assert classify(ethereum, []) is None
    assert classify(ethereum, TxEvents("0xtx", 1)) is None


def test_decimal_shift_applied_once(scaled_chain) -> None:
    t = classify(scaled_chain, [CompleteTransferAndUnwrap(meta(), SENDER, 3)])

    assert t.amount == 30_000_000_000
    assert normalize_amount(scaled_chain, 3) == 30_000_000_000


def test_normalize_amount_rejects_negative(ethereum) -> None:
    with pytest.raises(ValueError):
        normalize_amount(ethereum, -1)


def test_relayer_provenance(ethereum) -> None:
    via = classify(ethereum, [CompleteTransfer(meta(), RELAYER, 7, TOKEN)])
    direct = classify(ethereum, [CompleteTransfer(meta(), SENDER, 7, TOKEN)])

    assert via.via_relayer is True
    assert direct.via_relayer is False
    assert "via_relayer" not in via.to_dict()


def test_to_dict_field_names(ethereum) -> None:
    t = classify(ethereum, [TransferTokens(meta(), SENDER, 20, TOKEN)])

    assert t.to_dict() == {
        "blockNumber": 100,
        "txHash": "0xtx",
        "from": SENDER,
        "to": ethereum.bridge_address,
        "token": TOKEN,
        "amount": 20,
        "isDeposit": True,
    }
