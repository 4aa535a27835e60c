"""32-byte ABI word helpers shared by indexed topics and the data section."""

from __future__ import annotations

from typing import Any

WORD_SIZE = 32


def word_at(data: bytes, i: int) -> bytes:
    """Return the i-th ABI word of `data` (zero word past the end)."""
    start = WORD_SIZE * i
    chunk = data[start : start + WORD_SIZE]
    return chunk.ljust(WORD_SIZE, b"\x00") if chunk else b"\x00" * WORD_SIZE


def topic_bytes(topic: str) -> bytes:
    """Decode a 0x-prefixed topic; raises ValueError unless it is exactly one word."""
    if not topic.lower().startswith("0x"):
        raise ValueError(f"topic without 0x prefix: {topic!r}")
    raw = bytes.fromhex(topic[2:])
    if len(raw) != WORD_SIZE:
        raise ValueError(f"topic is {len(raw)} bytes")
    return raw


def parse_word(word: bytes, typ: str) -> Any:
    """Interpret one ABI word as `typ`; unknown types come back as hex."""
    match typ:
        case "address":
            return "0x" + word[-20:].hex()
        case "bool":
            return any(word)
        case t if t.startswith("uint"):
            return int.from_bytes(word, "big")
        case t if t.startswith("int"):
            # ABI sign-extends narrow ints to the full word
            return int.from_bytes(word, "big", signed=True)
    return "0x" + word.hex()
