"""Builders for raw EVM logs / Move events shaped like the canonical bridge transactions."""

from __future__ import annotations

from typing import Any

from bridgind.core.constants import APPROVAL_T0, TRANSFER_T0, ZERO_ADDRESS
from bridgind.core.models import ChainDescriptor, RawLogEntry
from bridgind.decoding.registries import make_bridge_registry
from bridgind.decoding.specs import topic0_of

BRIDGE_REGISTRY = make_bridge_registry()
WETH_DEPOSIT_T0 = "0xe1fffcc4923d04b559f4d29a8bfc6cda04eb5b0d3c460751c2402c5c5cc9109c"


def topic_address(addr: str) -> str:
    return "0x" + addr.lower()[2:].rjust(64, "0")


def topic_uint(n: int) -> str:
    return "0x" + format(n, "064x")


def word_uint(n: int) -> str:
    return format(n, "064x")


def word_address(addr: str) -> str:
    return addr.lower()[2:].rjust(64, "0")


def t0(name: str) -> str:
    return topic0_of(BRIDGE_REGISTRY, name)


class TxLogs:
    """Accumulates the logs of one transaction, numbering them in emission order."""

    def __init__(self, chain: ChainDescriptor, block: int, tx: str, *, first_index: int = 0) -> None:
        self.chain = chain
        self.block = block
        self.tx = tx
        self.next_index = first_index
        self.entries: list[RawLogEntry] = []

    def add(self, address: str, signature: str, args: tuple[Any, ...] = (), data: str = "", **kw: Any) -> TxLogs:
        self.entries.append(
            RawLogEntry(
                address=address.lower(),
                signature=signature,
                args=args,
                data_hex="0x" + data,
                block_number=self.block,
                tx_id=self.tx,
                log_index=self.next_index,
                **kw,
            )
        )
        self.next_index += 1
        return self

    # --- bridge events ---

    def wrap_and_transfer(self, sender: str, amount: int) -> TxLogs:
        return self.add(
            self.chain.bridge_address,
            t0("WrapAndTransfer"),
            (topic_address(sender),),
            word_address(self.chain.native_token) + word_uint(amount),
        )

    def transfer_tokens(self, sender: str, token: str, amount: int, *, to_origin_chain: bool = False) -> TxLogs:
        return self.add(
            self.chain.bridge_address,
            t0("TransferTokens"),
            (topic_address(sender), topic_address(token)),
            word_uint(amount) + word_uint(int(to_origin_chain)),
        )

    def complete_transfer(self, recipient: str, token: str, amount: int) -> TxLogs:
        return self.add(
            self.chain.bridge_address,
            t0("CompleteTransfer"),
            (topic_address(recipient), topic_address(token)),
            word_uint(amount),
        )

    def complete_unwrap(self, recipient: str, amount: int) -> TxLogs:
        return self.add(
            self.chain.bridge_address,
            t0("CompleteTransferAndUnwrap"),
            (topic_address(recipient),),
            word_uint(amount),
        )

    def redeemed(self, emitter_chain: int = 2, sequence: int = 1) -> TxLogs:
        return self.add(
            self.chain.bridge_address,
            t0("TransferRedeemed"),
            (topic_uint(emitter_chain), topic_uint(0xEC7372995D5CC8732397FB0AD35C0121E0EAA90D26F828A534CAB54391B3A4F5), topic_uint(sequence)),
        )

    # --- token noise ---

    def erc20_transfer(self, token: str, frm: str, to: str, value: int) -> TxLogs:
        return self.add(token, TRANSFER_T0, (topic_address(frm), topic_address(to)), word_uint(value))

    def mint(self, token: str, to: str, value: int) -> TxLogs:
        return self.erc20_transfer(token, ZERO_ADDRESS, to, value)

    def approval(self, token: str, owner: str, spender: str, value: int) -> TxLogs:
        return self.add(token, APPROVAL_T0, (topic_address(owner), topic_address(spender)), word_uint(value))

    def weth_deposit(self, dst: str, value: int) -> TxLogs:
        return self.add(self.chain.native_token, WETH_DEPOSIT_T0, (topic_address(dst),), word_uint(value))


def move_event(
    chain: ChainDescriptor,
    struct: str,
    args: tuple[Any, ...],
    *,
    checkpoint: int,
    digest: str,
    log_index: int = 0,
    sender: str | None = None,
    package: str | None = None,
) -> RawLogEntry:
    pkg = package or chain.package
    return RawLogEntry(
        address=pkg,
        signature=f"{pkg}::{struct}",
        args=args,
        block_number=checkpoint,
        tx_id=digest,
        log_index=log_index,
        sender=sender,
    )
