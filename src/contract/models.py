"""Build artifact document model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContractArtifact(BaseModel):
    """One compiled contract as emitted by the build system.

    Only ``contractName`` is structurally required here. ``abi`` is kept
    untyped and optional so that a missing or mis-shaped descriptor is
    reported by the registry as an extraction failure rather than as a
    malformed document.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    format: str | None = Field(default=None, alias="_format")
    contract_name: str = Field(alias="contractName")
    source_name: str | None = Field(default=None, alias="sourceName")
    abi: Any = None
    bytecode: str | None = None
    deployed_bytecode: str | None = Field(default=None, alias="deployedBytecode")

    @property
    def has_abi(self) -> bool:
        return self.abi is not None


__all__ = ["ContractArtifact"]
