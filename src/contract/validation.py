"""Diagnostics for tracked contract build artifacts.

Unlike ``build_registry``, which stops at the first failure, this collects
every problem across all tracked artifacts so they can be reported at once.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from contract.artifacts import ARTIFACT_FORMAT, TRACKED_CONTRACTS, TrackedContractSpec
from contract.models import ContractArtifact
from contract.resolver import artifact_path
from contract.signatures import duplicate_signatures, parse_entry

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    entry: int | None = None

    def location(self) -> str:
        if self.entry is None:
            return str(self.path)
        return f"{self.path}#abi[{self.entry}]"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "entry": self.entry,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(
    artifacts_dir: Path,
    *,
    strict: bool = False,
    specs: Mapping[str, TrackedContractSpec] = TRACKED_CONTRACTS,
) -> ValidationResult:
    """Check every tracked artifact without raising.

    Structural problems (missing file, bad JSON, wrong contract, missing or
    mis-shaped ``abi``) are errors. Entry-level problems and unknown artifact
    formats are warnings, or errors when ``strict`` is set.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    for identifier, spec in specs.items():
        path = artifact_path(artifacts_dir, spec)
        if not path.is_file():
            result.errors.append(
                ValidationMessage(
                    artifact=identifier,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        artifact = _load_artifact(identifier, path, spec, result)
        if artifact is None:
            continue

        _check_format(identifier, path, artifact, result, strict=strict)
        _validate_abi(identifier, path, artifact.abi, result, strict=strict)

    return result


def _load_artifact(
    identifier: str,
    path: Path,
    spec: TrackedContractSpec,
    result: ValidationResult,
) -> ContractArtifact | None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=identifier,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(
                artifact=identifier,
                path=path,
                message="Expected JSON object for contract artifact.",
            )
        )
        return None

    try:
        artifact = ContractArtifact.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=identifier,
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None

    if artifact.contract_name != spec.contract_name:
        result.errors.append(
            ValidationMessage(
                artifact=identifier,
                path=path,
                message=(
                    "contractName mismatch: "
                    f"expected {spec.contract_name}, got {artifact.contract_name}."
                ),
            )
        )
        return None

    return artifact


def _check_format(
    identifier: str,
    path: Path,
    artifact: ContractArtifact,
    result: ValidationResult,
    *,
    strict: bool,
) -> None:
    if artifact.format is None:
        message = f"Missing _format; assuming {ARTIFACT_FORMAT}."
    elif artifact.format != ARTIFACT_FORMAT:
        message = (
            f"Unknown artifact format: expected {ARTIFACT_FORMAT}, "
            f"got {artifact.format}."
        )
    else:
        return

    _report(result, ValidationMessage(identifier, path, message), strict=strict)


def _validate_abi(
    identifier: str,
    path: Path,
    abi: Any,
    result: ValidationResult,
    *,
    strict: bool,
) -> None:
    if abi is None:
        result.errors.append(
            ValidationMessage(
                artifact=identifier,
                path=path,
                message="Artifact has no 'abi' field.",
            )
        )
        return

    if not isinstance(abi, list):
        result.errors.append(
            ValidationMessage(
                artifact=identifier,
                path=path,
                message=f"'abi' must be an array, got {type(abi).__name__}.",
            )
        )
        return

    parseable = True
    for index, entry in enumerate(abi):
        if not isinstance(entry, dict):
            result.errors.append(
                ValidationMessage(
                    artifact=identifier,
                    path=path,
                    entry=index,
                    message=f"ABI entry must be an object, got {type(entry).__name__}.",
                )
            )
            parseable = False
            continue
        try:
            parsed = parse_entry(entry)
        except ValidationError as exc:
            _report(
                result,
                ValidationMessage(
                    artifact=identifier,
                    path=path,
                    entry=index,
                    message=f"ABI entry does not parse: {exc}.",
                ),
                strict=strict,
            )
            parseable = False
            continue
        if parsed.is_unnamed:
            _report(
                result,
                ValidationMessage(
                    artifact=identifier,
                    path=path,
                    entry=index,
                    message=f"ABI {parsed.type} entry has no name.",
                ),
                strict=strict,
            )

    if not parseable:
        return

    for signature in duplicate_signatures(abi):
        _report(
            result,
            ValidationMessage(
                artifact=identifier,
                path=path,
                message=f"Duplicate ABI signature: {signature}.",
            ),
            strict=strict,
        )


def _report(
    result: ValidationResult, message: ValidationMessage, *, strict: bool
) -> None:
    if strict:
        result.errors.append(message)
    else:
        result.warnings.append(message)


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
