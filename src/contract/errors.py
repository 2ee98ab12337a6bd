"""Exception hierarchy for contract interface resolution.

- AbiRegistryError (base)
- ArtifactNotFoundError
- ArtifactMalformedError
- DescriptorExtractionError

None of these are recoverable at the registry layer. They propagate to
process startup so that no partially-built registry is ever published.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class AbiRegistryError(Exception):
    """Base class for contract interface resolution failures."""

    def __init__(
        self,
        message: str,
        *,
        identifier: str,
        path: Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.path = path
        self.details = details or {}

    def __reduce__(self) -> tuple[Any, ...]:
        rebuild = functools.partial(
            type(self), identifier=self.identifier, path=self.path, details=self.details
        )
        return rebuild, self.args


class ArtifactNotFoundError(AbiRegistryError):
    """Build output for a tracked contract does not exist.

    Usually the contract build step was skipped, or it targeted a different
    contract or source file.
    """

    def __init__(self, identifier: str, path: Path) -> None:
        msg = (
            f"Build artifact for '{identifier}' not found: {path}. "
            "Compile the contracts before loading the registry."
        )
        super().__init__(msg, identifier=identifier, path=path)

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.identifier, self.path)


class ArtifactMalformedError(AbiRegistryError):
    """Build output exists but is not a structured contract artifact."""

    def __init__(self, identifier: str, path: Path, reason: str) -> None:
        msg = f"Malformed build artifact for '{identifier}' at {path}: {reason}"
        super().__init__(
            msg, identifier=identifier, path=path, details={"reason": reason}
        )
        self.reason = reason

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.identifier, self.path, self.reason)


class DescriptorExtractionError(AbiRegistryError):
    """Artifact parsed but carries no usable ``abi`` field."""

    def __init__(self, identifier: str, path: Path | None, reason: str) -> None:
        location = f" at {path}" if path is not None else ""
        msg = f"Cannot extract interface descriptor for '{identifier}'{location}: {reason}"
        super().__init__(
            msg, identifier=identifier, path=path, details={"reason": reason}
        )
        self.reason = reason

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.identifier, self.path, self.reason)


__all__ = [
    "AbiRegistryError",
    "ArtifactMalformedError",
    "ArtifactNotFoundError",
    "DescriptorExtractionError",
]
