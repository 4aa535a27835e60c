"""Immutable chain adapter registry.

The registry is built once and injected into the query service; adding a
chain means building a new registry (`with_chains`), never mutating one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from bridgind.chains.config import load_chains
from bridgind.core.errors import UnknownChainError
from bridgind.core.models import ChainDescriptor


class ChainRegistry(Mapping[str, ChainDescriptor]):
    """Read-only mapping chain name (lowercase) → ChainDescriptor."""

    def __init__(self, chains: Iterable[ChainDescriptor]) -> None:
        table: dict[str, ChainDescriptor] = {}
        for chain in chains:
            key = chain.name.lower()
            if key in table:
                raise ValueError(f"duplicate chain: {chain.name}")
            table[key] = chain
        self._chains = MappingProxyType(table)

    @classmethod
    def default(cls) -> ChainRegistry:
        """Registry of the bundled chains."""
        return cls(load_chains())

    @classmethod
    def from_file(cls, path: Path) -> ChainRegistry:
        return cls(load_chains(path))

    def resolve(self, name: str) -> ChainDescriptor:
        """Return the descriptor for `name`, or raise UnknownChainError."""
        try:
            return self._chains[name.lower()]
        except (KeyError, AttributeError):
            raise UnknownChainError(name) from None

    def with_chains(self, *chains: ChainDescriptor) -> ChainRegistry:
        """Return a new registry with `chains` added or replaced."""
        merged = dict(self._chains)
        merged.update({c.name.lower(): c for c in chains})
        return ChainRegistry(merged.values())

    def names(self) -> list[str]:
        return sorted(self._chains)

    def __getitem__(self, name: str) -> ChainDescriptor:
        return self._chains[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._chains
