"""Chain adapter registry and its bundled static configuration."""

from bridgind.chains.config import ChainEntry, ChainsFile, load_chains, parse_chains
from bridgind.chains.registry import ChainRegistry

__all__ = ["ChainEntry", "ChainsFile", "ChainRegistry", "load_chains", "parse_chains"]
