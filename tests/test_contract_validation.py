from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contract.artifacts import ERC20, WAREHOUSE
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    validate_artifacts,
)

from conftest import ERC20_ARTIFACT, WAREHOUSE_ARTIFACT


def _update(path: Path, **changes: Any) -> None:
    data = json.loads(path.read_text(encoding="utf-8"))
    data.update(changes)
    path.write_text(json.dumps(data), encoding="utf-8")


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_entry() -> None:
    """ValidationMessage.location points at the ABI entry when present."""
    msg = ValidationMessage("erc20", Path("x.json"), "bad", entry=7)
    assert msg.location() == "x.json#abi[7]"


def test_validation_message_location_without_entry() -> None:
    """ValidationMessage.location returns only path when entry is missing."""
    msg = ValidationMessage("erc20", Path("x.json"), "bad")
    assert msg.location() == "x.json"


def test_validation_message_to_dict() -> None:
    """ValidationMessage.to_dict returns the expected payload."""
    msg = ValidationMessage("warehouse", Path("x.json"), "bad", entry=3)
    assert msg.to_dict() == {
        "artifact": "warehouse",
        "path": "x.json",
        "entry": 3,
        "message": "bad",
    }


def test_validation_result_ok_when_no_errors() -> None:
    """ValidationResult.ok is true when no errors are present."""
    result = ValidationResult(warnings=[ValidationMessage("x", Path("a"), "meh")])
    assert result.ok is True


def test_validation_result_not_ok_when_errors() -> None:
    """ValidationResult.ok is false when at least one error exists."""
    result = ValidationResult(errors=[ValidationMessage("x", Path("a"), "boom")])
    assert result.ok is False


# Group 2: Directory handling


def test_missing_directory() -> None:
    """validate_artifacts reports a missing artifacts directory."""
    result = validate_artifacts(Path("/nonexistent"))
    assert result.ok is False
    assert _messages_contain(result.errors, "Artifacts directory does not exist")


def test_not_a_directory(tmp_path: Path) -> None:
    """validate_artifacts reports a path that is not a directory."""
    file_path = tmp_path / "not-a-dir"
    file_path.write_text("x", encoding="utf-8")

    result = validate_artifacts(file_path)

    assert result.ok is False
    assert _messages_contain(result.errors, "Artifacts path is not a directory")


# Group 3: Artifact documents


def test_fixture_artifacts_are_clean(project_root: Path) -> None:
    result = validate_artifacts(project_root / "artifacts", strict=True)
    assert result.errors == []
    assert result.warnings == []


def test_every_missing_artifact_is_reported(tmp_path: Path) -> None:
    result = validate_artifacts(tmp_path)

    assert [m.artifact for m in result.errors] == [WAREHOUSE, ERC20]
    assert all(m.message == "Required artifact file is missing." for m in result.errors)


def test_invalid_json(project_root: Path) -> None:
    (project_root / ERC20_ARTIFACT).write_text("{", encoding="utf-8")

    result = validate_artifacts(project_root / "artifacts")

    assert [m.artifact for m in result.errors] == [ERC20]
    assert _messages_contain(result.errors, "Invalid JSON")


def test_non_object_document(project_root: Path) -> None:
    (project_root / ERC20_ARTIFACT).write_text('"abi"', encoding="utf-8")

    result = validate_artifacts(project_root / "artifacts")

    assert _messages_contain(result.errors, "Expected JSON object")


def test_contract_name_mismatch(project_root: Path) -> None:
    _update(project_root / WAREHOUSE_ARTIFACT, contractName="Warehouse")

    result = validate_artifacts(project_root / "artifacts")

    assert _messages_contain(
        result.errors, "expected RainbowWarehouse, got Warehouse"
    )


def test_missing_abi_field(project_root: Path) -> None:
    path = project_root / WAREHOUSE_ARTIFACT
    data = json.loads(path.read_text(encoding="utf-8"))
    del data["abi"]
    path.write_text(json.dumps(data), encoding="utf-8")

    result = validate_artifacts(project_root / "artifacts")

    assert result.ok is False
    assert _messages_contain(result.errors, "Artifact has no 'abi' field")


def test_abi_not_an_array(project_root: Path) -> None:
    _update(project_root / ERC20_ARTIFACT, abi="[]")

    result = validate_artifacts(project_root / "artifacts")

    assert _messages_contain(result.errors, "'abi' must be an array, got str")


def test_non_object_entry_is_an_error(project_root: Path) -> None:
    _update(project_root / ERC20_ARTIFACT, abi=[{"name": "f"}, 42])

    result = validate_artifacts(project_root / "artifacts")

    assert [m.entry for m in result.errors] == [1]


# Group 4: Warnings and strict mode


def test_unparseable_entry_is_a_warning(project_root: Path) -> None:
    _update(
        project_root / ERC20_ARTIFACT,
        abi=[{"type": "function", "name": "f", "inputs": [{"name": "x"}]}],
    )

    result = validate_artifacts(project_root / "artifacts")

    assert result.ok is True
    assert [m.entry for m in result.warnings] == [0]
    assert _messages_contain(result.warnings, "ABI entry does not parse")


def test_unparseable_entry_is_an_error_when_strict(project_root: Path) -> None:
    _update(project_root / ERC20_ARTIFACT, abi=[{"type": "modifier", "name": "m"}])

    result = validate_artifacts(project_root / "artifacts", strict=True)

    assert result.ok is False
    assert _messages_contain(result.errors, "ABI entry does not parse")


def test_duplicate_signature_warning(project_root: Path) -> None:
    entry = {"type": "function", "name": "f", "inputs": [{"type": "uint256"}]}
    _update(project_root / ERC20_ARTIFACT, abi=[entry, entry])

    result = validate_artifacts(project_root / "artifacts")

    assert result.ok is True
    assert _messages_contain(result.warnings, "Duplicate ABI signature: f(uint256)")


def test_missing_format_warns(project_root: Path) -> None:
    path = project_root / WAREHOUSE_ARTIFACT
    data = json.loads(path.read_text(encoding="utf-8"))
    del data["_format"]
    path.write_text(json.dumps(data), encoding="utf-8")

    result = validate_artifacts(project_root / "artifacts")

    assert result.ok is True
    assert _messages_contain(result.warnings, "Missing _format")


def test_unknown_format_is_an_error_when_strict(project_root: Path) -> None:
    _update(project_root / WAREHOUSE_ARTIFACT, _format="foundry")

    result = validate_artifacts(project_root / "artifacts", strict=True)

    assert _messages_contain(result.errors, "Unknown artifact format")


def test_unnamed_function_warns(project_root: Path) -> None:
    _update(
        project_root / ERC20_ARTIFACT,
        abi=[
            {"type": "function", "inputs": [{"type": "uint256"}]},
            {"type": "function", "inputs": [{"type": "uint256"}]},
            {"type": "receive", "stateMutability": "payable"},
        ],
    )

    result = validate_artifacts(project_root / "artifacts")

    assert result.ok is True
    assert [m.entry for m in result.warnings] == [0, 1]
    assert _messages_contain(result.warnings, "ABI function entry has no name")
    assert not _messages_contain(result.warnings, "Duplicate ABI signature")


def test_unnamed_event_is_an_error_when_strict(project_root: Path) -> None:
    _update(project_root / ERC20_ARTIFACT, abi=[{"type": "event", "inputs": []}])

    result = validate_artifacts(project_root / "artifacts", strict=True)

    assert _messages_contain(result.errors, "ABI event entry has no name")
