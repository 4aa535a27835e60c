"""Registry builder utilities for creating event registries from signatures.

This module provides the core tools for building EventRegistry instances:
- Generic `make_registry()` function for single or multiple signatures
- Signature parsing helpers for converting Solidity event signatures to EventSpec
"""

from __future__ import annotations

from eth_utils import keccak

from .specs import DataFieldSpec, EventRegistry, EventSpec, TopicFieldSpec


# ---- Helpers: build specs from event signature ----
def _split_params(params_str: str) -> list[str]:
    """Split the parameter list by commas while respecting nested tuple types.

    Very lightweight splitter sufficient for typical event signatures.
    """
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in params_str:
        if ch == '(':
            depth += 1
            buf.append(ch)
        elif ch == ')':
            depth -= 1
            buf.append(ch)
        elif ch == ',' and depth == 0:
            items.append(''.join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if buf:
        items.append(''.join(buf).strip())
    return [i for i in items if i]


def _parse_param(p: str, fallback_name: str) -> tuple[str, str, bool]:
    """Parse one parameter fragment into (name, abi_type, indexed)."""
    s = f" {' '.join(p.strip().split())} "
    indexed = " indexed " in s
    if indexed:
        s = s.replace(" indexed ", " ")
    tokens = s.split()
    if len(tokens) == 1:
        # Unnamed parameter
        return (fallback_name, tokens[0], indexed)
    # Last token is the name, the rest is the type
    return (tokens[-1], ' '.join(tokens[:-1]), indexed)


def event_spec_from_signature(signature: str, *, strict: bool = True) -> EventSpec:
    """Build an EventSpec from a Solidity event signature string.

    Example input:
      "TransferTokens(address indexed sender, address indexed token, uint256 amount, bool toOriginChain)"
    """
    sig = signature.strip()
    open_paren = sig.find('(')
    close_paren = sig.rfind(')')
    if open_paren == -1 or close_paren == -1 or close_paren < open_paren:
        raise ValueError(f"Invalid event signature: {signature}")
    name = sig[:open_paren].strip()
    params_str = sig[open_paren + 1 : close_paren].strip()

    # topic0 hashes the canonical type list (no names, no 'indexed')
    parsed = [
        _parse_param(part, fallback_name=f"arg{i}") for i, part in enumerate(_split_params(params_str))
    ]
    canonical_signature = f"{name}({','.join(t for (_, t, _) in parsed)})"
    topic0 = '0x' + keccak(text=canonical_signature).hex()

    indexed_params = [(n, t) for (n, t, is_indexed) in parsed if is_indexed]
    data_params = [(n, t) for (n, t, is_indexed) in parsed if not is_indexed]

    return EventSpec(
        topic0=topic0,
        name=name,
        topic_fields=[TopicFieldSpec(n, idx + 1, t) for idx, (n, t) in enumerate(indexed_params)],
        data_fields=[DataFieldSpec(n, idx, t) for idx, (n, t) in enumerate(data_params)],
        strict=strict,
    )


def make_registry(signatures: str | list[str], *, strict: bool = True) -> EventRegistry:
    """Create a registry from one or multiple event signatures.

    Args:
        signatures: Single signature string or list of signature strings
        strict: Whether shape mismatches of these events are decode errors

    Returns:
        EventRegistry with entries for each signature
    """
    reg: EventRegistry = {}
    sig_list = [signatures] if isinstance(signatures, str) else signatures
    for signature in sig_list:
        spec = event_spec_from_signature(signature, strict=strict)
        reg[spec.topic0] = spec
    return reg
