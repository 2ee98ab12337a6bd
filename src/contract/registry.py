"""Interface registry: one canonical ABI per tracked contract.

The registry is built once from the resolved build artifacts and is
read-only afterwards. Descriptor entries are deep-frozen copies of the
artifact's ``abi`` array; ``InterfaceDescriptor.to_list()`` thaws them back
into plain data equal to the artifact content.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, overload

import orjson

from contract import signatures
from contract.artifacts import ERC20, TRACKED_CONTRACTS, WAREHOUSE, TrackedContractSpec
from contract.config import default_root, load_config, resolve_artifacts_dir
from contract.errors import DescriptorExtractionError
from contract.observability import get_logger
from contract.resolver import artifact_path, resolve_all

if TYPE_CHECKING:
    from pathlib import Path

    from contract.config import AbiRegistryConfig
    from contract.models import ContractArtifact
    from contract.signatures import AbiEntry

logger = get_logger(__name__)


def freeze(value: Any) -> Any:
    """Deep-freeze JSON data: objects become read-only mappings, arrays tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class InterfaceDescriptor(Sequence):
    """Ordered, read-only ABI of one tracked contract."""

    identifier: str
    contract_name: str
    entries: tuple[Mapping[str, Any], ...]
    source_name: str | None = field(default=None, compare=False)

    @overload
    def __getitem__(self, index: int) -> Mapping[str, Any]: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Mapping[str, Any], ...]: ...

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __hash__(self) -> int:
        return hash((self.identifier, self.contract_name, self.fingerprint()))

    def fingerprint(self) -> str:
        """SHA-256 over the canonical JSON of the entries."""
        payload = orjson.dumps(self.to_list(), option=orjson.OPT_SORT_KEYS)
        return hashlib.sha256(payload).hexdigest()

    def to_list(self) -> list[dict[str, Any]]:
        """Plain JSON-compatible copy, e.g. for ``w3.eth.contract(abi=...)``."""
        return signatures.thaw(self.entries)

    def parsed(self) -> tuple[AbiEntry, ...]:
        return signatures.parse_entries(self.entries)

    def functions(self) -> tuple[AbiEntry, ...]:
        return signatures.entries_of_type(self.entries, "function")

    def events(self) -> tuple[AbiEntry, ...]:
        return signatures.entries_of_type(self.entries, "event")

    def errors(self) -> tuple[AbiEntry, ...]:
        return signatures.entries_of_type(self.entries, "error")

    def function_names(self) -> tuple[str, ...]:
        return signatures.function_names(self.entries)

    def find_functions(self, name: str) -> tuple[AbiEntry, ...]:
        return signatures.find_functions(self.entries, name)


@dataclass(frozen=True, eq=False)
class InterfaceRegistry(Mapping):
    """Semantic contract identifier -> InterfaceDescriptor.

    Equality compares descriptor content only, so two builds against the
    same artifacts are equal regardless of where they were read from.
    """

    descriptors: Mapping[str, InterfaceDescriptor]
    artifacts_dir: Path | None = None

    def __getitem__(self, identifier: str) -> InterfaceDescriptor:
        try:
            return self.descriptors[identifier]
        except KeyError:
            known = ", ".join(self.descriptors)
            msg = f"Unknown contract {identifier!r}; tracked contracts: {known}"
            raise KeyError(msg) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    @property
    def warehouse(self) -> InterfaceDescriptor:
        return self[WAREHOUSE]

    @property
    def erc20(self) -> InterfaceDescriptor:
        return self[ERC20]

    def identifiers(self) -> tuple[str, ...]:
        return tuple(self.descriptors)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {identifier: d.to_list() for identifier, d in self.descriptors.items()}

    def fingerprint(self) -> str:
        """SHA-256 over the canonical JSON of every descriptor."""
        payload = orjson.dumps(self.to_dict(), option=orjson.OPT_SORT_KEYS)
        return hashlib.sha256(payload).hexdigest()


def extract_descriptor(
    spec: TrackedContractSpec,
    artifact: ContractArtifact,
    path: Path | None = None,
) -> InterfaceDescriptor:
    """Lift the ``abi`` field of ``artifact`` into a frozen descriptor.

    Entries are not validated individually; consumers that need typed
    access parse them through ``contract.signatures``.

    Raises:
        DescriptorExtractionError: If the artifact has no ``abi`` field or
            the field is not an array of JSON objects.
    """
    abi = artifact.abi
    if abi is None:
        raise DescriptorExtractionError(
            spec.identifier, path, "artifact has no 'abi' field"
        )
    if not isinstance(abi, list):
        raise DescriptorExtractionError(
            spec.identifier,
            path,
            f"'abi' must be an array, got {type(abi).__name__}",
        )
    for index, entry in enumerate(abi):
        if not isinstance(entry, dict):
            raise DescriptorExtractionError(
                spec.identifier,
                path,
                f"'abi' entry {index} must be an object, got {type(entry).__name__}",
            )

    return InterfaceDescriptor(
        identifier=spec.identifier,
        contract_name=artifact.contract_name,
        entries=freeze(abi),
        source_name=artifact.source_name or spec.source_name,
    )


def build_registry(
    root: Path | None = None,
    *,
    artifacts_dir: Path | None = None,
    config: AbiRegistryConfig | None = None,
    specs: Mapping[str, TrackedContractSpec] = TRACKED_CONTRACTS,
) -> InterfaceRegistry:
    """Resolve every tracked contract and build the frozen registry.

    Args:
        root: Project root; defaults to ``ABI_REGISTRY_ROOT`` or the working
            directory. Ignored when ``artifacts_dir`` is given.
        artifacts_dir: Explicit build output root.
        config: Optional configuration; loaded from ``root`` when omitted.
        specs: Tracked contract table.

    Returns:
        InterfaceRegistry holding exactly one descriptor per tracked contract.

    Raises:
        ArtifactNotFoundError, ArtifactMalformedError,
        DescriptorExtractionError: On the first failing contract. Nothing is
            published in that case.
    """
    if artifacts_dir is None:
        if root is None:
            root = default_root()
        if config is None:
            config = load_config(root)
        artifacts_dir = resolve_artifacts_dir(root, config)

    artifacts = resolve_all(artifacts_dir, specs)
    descriptors = {
        identifier: extract_descriptor(
            spec, artifacts[identifier], artifact_path(artifacts_dir, spec)
        )
        for identifier, spec in specs.items()
    }

    registry = InterfaceRegistry(
        descriptors=MappingProxyType(descriptors),
        artifacts_dir=artifacts_dir,
    )
    logger.info(
        "registry_built",
        artifacts_dir=str(artifacts_dir),
        contracts=list(registry.identifiers()),
        entries={identifier: len(d) for identifier, d in descriptors.items()},
    )
    return registry


__all__ = [
    "InterfaceDescriptor",
    "InterfaceRegistry",
    "build_registry",
    "extract_descriptor",
    "freeze",
]
