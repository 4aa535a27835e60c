"""Block-range helpers.

All ranges here are inclusive on both ends: [start, end].
"""

from __future__ import annotations

from collections.abc import Generator


def iter_chunks(a: int, b: int, step: int) -> Generator[tuple[int, int], None, None]:
    """Yield inclusive [start, end] block ranges of size at most `step`."""
    if step <= 0:
        raise ValueError("step must be positive")
    x = a
    while x <= b:
        y = min(b, x + step - 1)
        yield (x, y)
        x = y + 1


def to_hex_block(block: int | str) -> str:
    """Convert block number to hex string if integer, else return as is."""
    if isinstance(block, int):
        return hex(block)
    return block
