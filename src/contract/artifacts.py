"""Tracked contract table.

This module is the static lookup from semantic contract identifier to build
artifact location. Tracking a new contract means adding one entry to
``TRACKED_CONTRACTS``; nothing else changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

# Hardhat artifact document format emitted by the contract build.
ARTIFACT_FORMAT = "hh-sol-artifact-1"

# Default build-output root, relative to the project root.
DEFAULT_ARTIFACTS_DIR = "artifacts"

# Stable semantic identifiers (public contract names).
WAREHOUSE = "warehouse"
ERC20 = "erc20"


@dataclass(frozen=True)
class TrackedContractSpec:
    """Location of one compiled contract inside the build output.

    ``source_name`` is the Solidity source path as recorded by the compiler
    (``contracts/rainbowbridge.sol``); the artifact lives at
    ``<artifacts_dir>/<source_name>/<contract_name>.json``.
    """

    identifier: str
    source_name: str
    contract_name: str

    @property
    def relative_path(self) -> PurePosixPath:
        return PurePosixPath(self.source_name) / f"{self.contract_name}.json"


TRACKED_CONTRACTS: dict[str, TrackedContractSpec] = {
    WAREHOUSE: TrackedContractSpec(
        identifier=WAREHOUSE,
        source_name="contracts/rainbowbridge.sol",
        contract_name="RainbowWarehouse",
    ),
    ERC20: TrackedContractSpec(
        identifier=ERC20,
        source_name="contracts/mocks/MockERC20.sol",
        contract_name="MockERC20",
    ),
}
