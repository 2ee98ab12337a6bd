"""Process-wide contract interfaces.

Importing this module builds the registry from the default project root
(``ABI_REGISTRY_ROOT`` or the working directory). A missing or malformed
artifact fails the import itself, before any consumer can see a partial
registry.
"""

from __future__ import annotations

from contract.registry import build_registry

REGISTRY = build_registry()

WAREHOUSE_ABI = REGISTRY.warehouse
ERC20_ABI = REGISTRY.erc20

__all__ = ["ERC20_ABI", "REGISTRY", "WAREHOUSE_ABI"]
