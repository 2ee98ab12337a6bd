"""Stable contract-interface surface.

``WAREHOUSE_ABI`` and ``ERC20_ABI`` are the canonical interface descriptors
for the tracked contracts. They are resolved from the contract build output
on first access and are read-only afterwards.
"""

from contract.artifacts import (
    ARTIFACT_FORMAT,
    ERC20,
    TRACKED_CONTRACTS,
    WAREHOUSE,
    TrackedContractSpec,
)
from contract.errors import (
    AbiRegistryError,
    ArtifactMalformedError,
    ArtifactNotFoundError,
    DescriptorExtractionError,
)


def __getattr__(name: str) -> object:
    if name in {"ERC20_ABI", "REGISTRY", "WAREHOUSE_ABI"}:
        from contract import abi

        return getattr(abi, name)

    if name in {"InterfaceDescriptor", "InterfaceRegistry", "build_registry"}:
        from contract.registry import (
            InterfaceDescriptor,
            InterfaceRegistry,
            build_registry,
        )

        return {
            "InterfaceDescriptor": InterfaceDescriptor,
            "InterfaceRegistry": InterfaceRegistry,
            "build_registry": build_registry,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_FORMAT",
    "ERC20",
    "ERC20_ABI",
    "REGISTRY",
    "TRACKED_CONTRACTS",
    "WAREHOUSE",
    "WAREHOUSE_ABI",
    "AbiRegistryError",
    "ArtifactMalformedError",
    "ArtifactNotFoundError",
    "DescriptorExtractionError",
    "InterfaceDescriptor",
    "InterfaceRegistry",
    "TrackedContractSpec",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
