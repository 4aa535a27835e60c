"""Event decoding.

This package provides:
- Event specification system (EventSpec, TopicFieldSpec, DataFieldSpec)
- Registry builders from Solidity event signatures
- The portal bridge registry for account-based chains
- One decoder strategy per chain family and the `decode` entry point
"""

from bridgind.decoding.decoder import DecodeOutput, decode, group_by_tx
from bridgind.decoding.registries import make_bridge_registry, make_erc20_registry, make_portal_registry
from bridgind.decoding.registry_builder import event_spec_from_signature, make_registry
from bridgind.decoding.specs import (
    DataFieldSpec,
    EventRegistry,
    EventSpec,
    TopicFieldSpec,
    topic0_of,
)

__all__ = [
    "DecodeOutput",
    "decode",
    "group_by_tx",
    "make_bridge_registry",
    "make_erc20_registry",
    "make_portal_registry",
    "event_spec_from_signature",
    "make_registry",
    "DataFieldSpec",
    "EventRegistry",
    "EventSpec",
    "TopicFieldSpec",
    "topic0_of",
]
