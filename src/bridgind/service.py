"""Public query interface: fetch → decode → classify.

This module provides:

1) `BridgeEventsService`:
   - Depends only on a ChainRegistry and on log sources (interfaces).
   - `get_events(chain, from_block, to_block)` for one half-open range.
   - `get_events_many(queries)` to run several (chain, range) queries concurrently.
   - `adapter()` exposing one `async (from, to) -> list[BridgeTransfer]` per chain.

2) `BridgeEventsService.from_config(...)` (convenience wiring):
   - Instantiates httpx log sources (EvmLogSource / SuiEventSource) for every
     chain that has an RPC URL in the IndexerConfig.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import partial

from bridgind.chains.registry import ChainRegistry
from bridgind.classification.classifier import classify
from bridgind.clients.rpc import RPC, EvmLogSource
from bridgind.clients.sui import SuiEventSource
from bridgind.core.config import IndexerConfig
from bridgind.core.errors import AmbiguousTransactionError, InvalidRangeError, UnknownChainError
from bridgind.core.interfaces import LogSource
from bridgind.core.models import BridgeTransfer, ChainDescriptor, ChainFamily, EventsResult, RawLogEntry
from bridgind.decoding.decoder import decode
from bridgind.decoding.specs import EventRegistry

logger = logging.getLogger(__name__)

ChainAdapter = Callable[[int, int], Awaitable[list[BridgeTransfer]]]


@dataclass(frozen=True)
class EventsQuery:
    """One half-open [from_block, to_block) query on one chain."""

    chain: str
    from_block: int
    to_block: int


def validate_range(from_block: int, to_block: int) -> None:
    if isinstance(from_block, bool) or isinstance(to_block, bool):
        raise InvalidRangeError(from_block, to_block)
    if not isinstance(from_block, int) or not isinstance(to_block, int):
        raise InvalidRangeError(from_block, to_block)
    if from_block < 0 or from_block >= to_block:
        raise InvalidRangeError(from_block, to_block)


class BridgeEventsService:
    """
    Query service turning raw chain activity into BridgeTransfer records.

    Parameters
    ----------
    registry : ChainRegistry
        Immutable chain table, injected.
    sources : Mapping[str, LogSource]
        Log source per chain name (account-based: `fetch_logs`,
        object-based: `fetch_checkpoint_events`).
    concurrency : int
        Maximum number of queries run at once by `get_events_many`.
    event_registry : EventRegistry | None
        Override of the account-based event registry (defaults to the portal one).
    """

    def __init__(
        self,
        registry: ChainRegistry,
        sources: Mapping[str, LogSource],
        *,
        concurrency: int = 8,
        event_registry: EventRegistry | None = None,
    ) -> None:
        self._registry = registry
        self._sources = {name.lower(): src for name, src in sources.items()}
        self._concurrency = concurrency
        self._event_registry = event_registry

    @property
    def registry(self) -> ChainRegistry:
        return self._registry

    def chains(self) -> list[str]:
        """Names of the chains that can actually be queried."""
        return [name for name in self._registry.names() if name in self._sources]

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: IndexerConfig, registry: ChainRegistry | None = None) -> BridgeEventsService:
        """Build a service with httpx log sources for every chain with an RPC URL."""
        if registry is None:
            registry = ChainRegistry.from_file(config.chains_file) if config.chains_file else ChainRegistry.default()
        sources: dict[str, LogSource] = {}
        for name, url in config.rpc_urls.items():
            chain = registry.resolve(name)
            rpc = RPC(url, timeout_s=config.timeout_s, max_connections=config.max_connections)
            if chain.family is ChainFamily.ACCOUNT:
                sources[chain.name] = EvmLogSource(rpc, chain, step=config.step)
            else:
                sources[chain.name] = SuiEventSource(rpc, chain, batch=config.checkpoint_batch)
        return cls(registry, sources, concurrency=config.concurrency)

    async def aclose(self) -> None:
        """Close log sources that own network clients."""
        for src in self._sources.values():
            close = getattr(src, "aclose", None)
            if close is not None:
                await close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _source_for(self, chain: ChainDescriptor) -> LogSource:
        src = self._sources.get(chain.name.lower())
        if src is None:
            raise UnknownChainError(chain.name)
        return src

    async def _fetch(self, chain: ChainDescriptor, src: LogSource, first: int, last: int) -> list[RawLogEntry]:
        if chain.family is ChainFamily.ACCOUNT:
            return await src.fetch_logs(first, last)  # type: ignore[union-attr]
        return await src.fetch_checkpoint_events(first, last)  # type: ignore[union-attr]

    async def get_events(self, chain: str, from_block: int, to_block: int) -> EventsResult:
        """Return the bridge transfers of `chain` in the half-open range [from_block, to_block)."""
        validate_range(from_block, to_block)
        descriptor = self._registry.resolve(chain)
        src = self._source_for(descriptor)

        raw = await self._fetch(descriptor, src, from_block, to_block - 1)
        in_range = [e for e in raw if from_block <= e.block_number < to_block]
        if len(in_range) != len(raw):
            logger.debug("[%s] dropped %d entries outside the range", descriptor.name, len(raw) - len(in_range))

        decoded = decode(descriptor, in_range, registry=self._event_registry)
        result = EventsResult(chain=descriptor.name, from_block=from_block, to_block=to_block)
        result.errors.extend(decoded.errors)

        for tx in decoded.transactions:
            try:
                transfer = classify(descriptor, tx)
            except AmbiguousTransactionError as e:
                logger.warning("[%s] %s", descriptor.name, e)
                result.errors.append(e)
                continue
            if transfer is not None:
                result.transfers.append(transfer)

        logger.info(
            "[%s] [%d, %d): %d transfers, %d errors",
            descriptor.name,
            from_block,
            to_block,
            len(result.transfers),
            len(result.errors),
        )
        return result

    async def get_events_many(self, queries: Iterable[EventsQuery]) -> list[EventsResult]:
        """Run several queries concurrently; results keep the order of `queries`."""
        sem = asyncio.Semaphore(self._concurrency)

        async def run(q: EventsQuery) -> EventsResult:
            async with sem:
                return await self.get_events(q.chain, q.from_block, q.to_block)

        return list(await asyncio.gather(*(run(q) for q in queries)))

    async def _transfers(self, chain: str, from_block: int, to_block: int) -> list[BridgeTransfer]:
        return (await self.get_events(chain, from_block, to_block)).transfers

    def adapter(self) -> dict[str, ChainAdapter]:
        """One `async (from_block, to_block) -> list[BridgeTransfer]` per queryable chain."""
        return {name: partial(self._transfers, name) for name in self.chains()}
