"""Classification & normalization of one transaction's bridge events.

Rules, in priority order:
1. WrapAndTransfer / TransferTokens          -> deposit
2. CompleteTransfer / CompleteTransferAndUnwrap -> withdrawal released by the bridge
3. Mint (zero-address origin)                -> withdrawal of a wrapped asset
4. nothing                                   -> None

More than one event of category 1 or 2 in one transaction is an
`AmbiguousTransactionError`. Positions inside the transaction never matter;
all events are scanned before a rule is applied.

Amounts stay exact ints; the chain's decimal shift is applied exactly once here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bridgind.core.constants import ZERO_ADDRESS
from bridgind.core.errors import AmbiguousTransactionError
from bridgind.core.models import (
    DEPOSIT_KINDS,
    WITHDRAWAL_KINDS,
    BridgeTransfer,
    ChainDescriptor,
    CompleteTransfer,
    CompleteTransferAndUnwrap,
    IntermediateEvent,
    Mint,
    TransferTokens,
    TxEvents,
    WrapAndTransfer,
)

logger = logging.getLogger(__name__)


def normalize_amount(chain: ChainDescriptor, amount: int) -> int:
    """Scale an on-chain amount by the chain's decimal shift."""
    if amount < 0:
        raise ValueError(f"negative amount: {amount}")
    return amount * 10**chain.decimal_shift


def _deposit(chain: ChainDescriptor, ev: WrapAndTransfer | TransferTokens) -> BridgeTransfer:
    match ev:
        case WrapAndTransfer():
            to_address, token = chain.bridge_address, chain.native_token
        case TransferTokens(to_origin_chain=True):
            # wrapped asset burned on its way home
            to_address, token = ZERO_ADDRESS, ev.token
        case TransferTokens():
            to_address, token = chain.bridge_address, ev.token
    return BridgeTransfer(
        block_number=ev.meta.block_number,
        tx_hash=ev.meta.tx_id,
        from_address=ev.sender,
        to_address=to_address,
        token=token,
        amount=normalize_amount(chain, ev.amount),
        is_deposit=True,
        via_relayer=chain.is_relayer(ev.sender),
    )


def _withdrawal(chain: ChainDescriptor, ev: CompleteTransfer | CompleteTransferAndUnwrap) -> BridgeTransfer:
    match ev:
        case CompleteTransferAndUnwrap():
            token = chain.native_token
        case CompleteTransfer():
            token = ev.token
    return BridgeTransfer(
        block_number=ev.meta.block_number,
        tx_hash=ev.meta.tx_id,
        from_address=chain.bridge_address,
        to_address=ev.recipient,
        token=token,
        amount=normalize_amount(chain, ev.amount),
        is_deposit=False,
        via_relayer=chain.is_relayer(ev.recipient),
    )


def _minted(chain: ChainDescriptor, tx_id: str, mints: Sequence[Mint]) -> BridgeTransfer:
    tokens = {m.wrapped_token.lower() for m in mints}
    if len(tokens) > 1:
        raise AmbiguousTransactionError(tx_id, mints)
    # fee split: total minted, recipient of the largest share
    main = max(mints, key=lambda m: (m.amount, -m.meta.log_index))
    return BridgeTransfer(
        block_number=main.meta.block_number,
        tx_hash=main.meta.tx_id,
        from_address=ZERO_ADDRESS,
        to_address=main.recipient,
        token=main.wrapped_token,
        amount=normalize_amount(chain, sum(m.amount for m in mints)),
        is_deposit=False,
        via_relayer=chain.is_relayer(main.recipient),
    )


def classify(chain: ChainDescriptor, events: Sequence[IntermediateEvent] | TxEvents) -> BridgeTransfer | None:
    """Resolve the bridge events of one transaction into at most one transfer."""
    if isinstance(events, TxEvents):
        events = events.events
    if not events:
        return None

    tx_id = events[0].meta.tx_id
    primaries = [ev for ev in events if isinstance(ev, DEPOSIT_KINDS + WITHDRAWAL_KINDS)]
    if len(primaries) > 1:
        raise AmbiguousTransactionError(tx_id, primaries)

    if primaries:
        ev = primaries[0]
        if isinstance(ev, DEPOSIT_KINDS):
            return _deposit(chain, ev)
        return _withdrawal(chain, ev)

    mints = [ev for ev in events if isinstance(ev, Mint)]
    if mints:
        if len(mints) > 1:
            logger.debug("[%s] merging %d mints in tx %s", chain.name, len(mints), tx_id)
        return _minted(chain, tx_id, mints)
    return None
