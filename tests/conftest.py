from unittest.mock import AsyncMock

import pytest

from bridgind.chains.registry import ChainRegistry
from bridgind.core.models import ChainDescriptor, ChainFamily


@pytest.fixture(scope="session")
def chains() -> ChainRegistry:
    return ChainRegistry.default()


@pytest.fixture
def ethereum(chains: ChainRegistry) -> ChainDescriptor:
    return chains.resolve("ethereum")


@pytest.fixture
def sui(chains: ChainRegistry) -> ChainDescriptor:
    return chains.resolve("sui")


@pytest.fixture
def scaled_chain() -> ChainDescriptor:
    return ChainDescriptor(
        name="testnet",
        family=ChainFamily.ACCOUNT,
        bridge_address="0x1111111111111111111111111111111111111111",
        native_token="0x2222222222222222222222222222222222222222",
        decimal_shift=10,
    )


@pytest.fixture
def mock_source():
    src = AsyncMock()
    src.fetch_logs = AsyncMock(return_value=[])
    src.fetch_checkpoint_events = AsyncMock(return_value=[])
    src.aclose = AsyncMock()
    return src
