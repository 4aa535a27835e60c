"""Default log sources backed by httpx JSON-RPC clients."""

from bridgind.clients.rpc import RPC, EvmLogSource
from bridgind.clients.sui import SuiEventSource

__all__ = ["RPC", "EvmLogSource", "SuiEventSource"]
