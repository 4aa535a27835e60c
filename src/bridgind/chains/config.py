"""Static chain table: JSON schema (pydantic) and loading into ChainDescriptors."""

from __future__ import annotations

import json
from collections.abc import Sequence
from importlib import resources
from pathlib import Path
from typing import Any, Literal

from eth_utils import is_address, to_checksum_address  # type: ignore[attr-defined]
from pydantic import BaseModel, model_validator

from bridgind.core.models import ChainDescriptor, ChainFamily

BUNDLED_CHAINS = "chains.json"


class ChainEntry(BaseModel):
    name: str
    family: Literal["account-based", "object-based"]
    bridge_address: str
    native_token: str
    decimal_shift: int = 0
    relayers: Sequence[str] = ()
    package: str | None = None

    @model_validator(mode="after")
    def _check_family(self) -> ChainEntry:
        if self.decimal_shift < 0:
            raise ValueError(f"{self.name}: decimal_shift must be >= 0")
        if self.family == "account-based":
            for addr in (self.bridge_address, self.native_token, *self.relayers):
                if not is_address(addr):
                    raise ValueError(f"{self.name}: invalid address {addr!r}")
        elif not self.package:
            raise ValueError(f"{self.name}: object-based chains need a bridge package")
        return self

    def to_descriptor(self) -> ChainDescriptor:
        family = ChainFamily(self.family)
        if family is ChainFamily.ACCOUNT:
            bridge = to_checksum_address(self.bridge_address)
            native = to_checksum_address(self.native_token)
        else:
            bridge = self.bridge_address.lower()
            native = self.native_token
        return ChainDescriptor(
            name=self.name.lower(),
            family=family,
            bridge_address=bridge,
            native_token=native,
            decimal_shift=self.decimal_shift,
            relayers=frozenset(r.lower() for r in self.relayers),
            package=self.package.lower() if self.package else None,
        )


class ChainsFile(BaseModel):
    chains: Sequence[ChainEntry]


def parse_chains(raw: dict[str, Any]) -> list[ChainDescriptor]:
    return [entry.to_descriptor() for entry in ChainsFile.model_validate(raw).chains]


def load_chains(path: Path | None = None) -> list[ChainDescriptor]:
    """Load chain descriptors from `path`, or from the bundled table."""
    if path is None:
        text = resources.files("bridgind.chains").joinpath(BUNDLED_CHAINS).read_text()
    else:
        text = path.read_text()
    return parse_chains(json.loads(text))
