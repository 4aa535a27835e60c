"""Event registries for the Portal token bridge on account-based chains.

Available registries:
- Bridge events (strict): make_bridge_registry()
- ERC20 token events (non-strict noise / mint detection): make_erc20_registry()
- Both merged: make_portal_registry()

Example
-------
>>> from bridgind.decoding.registries import make_portal_registry
>>> reg = make_portal_registry()
"""

from __future__ import annotations

from .registry_builder import make_registry
from .specs import EventRegistry

# Event names used by the account-based decoder
WRAP_AND_TRANSFER = "WrapAndTransfer"
TRANSFER_TOKENS = "TransferTokens"
COMPLETE_TRANSFER = "CompleteTransfer"
COMPLETE_TRANSFER_AND_UNWRAP = "CompleteTransferAndUnwrap"
TRANSFER_REDEEMED = "TransferRedeemed"
ERC20_TRANSFER = "Transfer"
ERC20_APPROVAL = "Approval"


# -------------------------
# Token bridge registry
# -------------------------

def make_bridge_registry() -> EventRegistry:
    """Return registry for token bridge operation events."""
    return make_registry([
        "WrapAndTransfer(address indexed sender, address token, uint256 amount)",
        "TransferTokens(address indexed sender, address indexed token, uint256 amount, bool toOriginChain)",
        "CompleteTransfer(address indexed recipient, address indexed token, uint256 amount)",
        "CompleteTransferAndUnwrap(address indexed recipient, uint256 amount)",
        "TransferRedeemed(uint16 indexed emitterChainId, bytes32 indexed emitterAddress, uint64 indexed sequence)",
    ])


# -------------------------
# ERC20 registry
# -------------------------

def make_erc20_registry() -> EventRegistry:
    """Return registry for ERC20 Transfer/Approval (never decode errors)."""
    return make_registry(
        [
            "Transfer(address indexed from, address indexed to, uint256 value)",
            "Approval(address indexed owner, address indexed spender, uint256 value)",
        ],
        strict=False,
    )


def make_portal_registry() -> EventRegistry:
    """Return the full registry used to decode account-based chains."""
    return {**make_erc20_registry(), **make_bridge_registry()}
