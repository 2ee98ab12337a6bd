"""Artifact resolution for tracked contracts.

Reads compiled contract artifacts from the build output. Resolution is a
pure read of files the build step has already materialized; failures raise
and are never retried here.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import orjson
from pydantic import ValidationError

from contract.artifacts import TRACKED_CONTRACTS, TrackedContractSpec
from contract.errors import ArtifactMalformedError, ArtifactNotFoundError
from contract.models import ContractArtifact
from contract.observability import get_logger

logger = get_logger(__name__)


def artifact_path(artifacts_dir: Path, spec: TrackedContractSpec) -> Path:
    """Location of ``spec``'s artifact under ``artifacts_dir``."""
    return artifacts_dir.joinpath(*spec.relative_path.parts)


def resolve_artifact(artifacts_dir: Path, spec: TrackedContractSpec) -> ContractArtifact:
    """Load and parse the build artifact for one tracked contract.

    Args:
        artifacts_dir: Build output root (e.g. ``<project>/artifacts``).
        spec: Tracked contract to resolve.

    Returns:
        The parsed ContractArtifact.

    Raises:
        ArtifactNotFoundError: If the artifact file does not exist.
        ArtifactMalformedError: If the file is not a JSON object with a
            ``contractName`` matching ``spec.contract_name``.
    """
    path = artifact_path(artifacts_dir, spec)
    if not path.is_file():
        raise ArtifactNotFoundError(spec.identifier, path)

    try:
        raw = orjson.loads(path.read_bytes())
    except OSError as exc:
        raise ArtifactMalformedError(
            spec.identifier, path, f"failed to read file: {exc}"
        ) from exc
    except orjson.JSONDecodeError as exc:
        raise ArtifactMalformedError(
            spec.identifier, path, f"invalid JSON: {exc}"
        ) from exc

    if not isinstance(raw, dict):
        raise ArtifactMalformedError(
            spec.identifier, path, "expected a JSON object"
        )

    try:
        artifact = ContractArtifact.model_validate(raw)
    except ValidationError as exc:
        raise ArtifactMalformedError(
            spec.identifier, path, f"schema validation failed: {exc}"
        ) from exc

    if artifact.contract_name != spec.contract_name:
        raise ArtifactMalformedError(
            spec.identifier,
            path,
            (
                f"contractName mismatch: expected {spec.contract_name!r}, "
                f"got {artifact.contract_name!r}"
            ),
        )

    logger.debug(
        "artifact_resolved",
        contract=spec.identifier,
        contract_name=artifact.contract_name,
        path=str(path),
    )
    return artifact


def resolve_all(
    artifacts_dir: Path,
    specs: Mapping[str, TrackedContractSpec] = TRACKED_CONTRACTS,
) -> dict[str, ContractArtifact]:
    """Resolve every tracked contract, in table order.

    Stops at the first failure; no partial result is returned.
    """
    return {
        identifier: resolve_artifact(artifacts_dir, spec)
        for identifier, spec in specs.items()
    }


__all__ = ["artifact_path", "resolve_all", "resolve_artifact"]
