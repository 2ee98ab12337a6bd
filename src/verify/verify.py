"""Determinism verification for the static ABI bundle."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from bundle.write import export_bundle


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def verify_bundle(*, root: Path, bundle_dir: Path) -> DeterminismResult:
    """Verify that an exported bundle matches the current build artifacts.

    Re-exports the bundle into a temporary directory and compares it
    byte-for-byte against ``bundle_dir``. A stale bundle (artifacts rebuilt
    since the last export) shows up as mismatches.

    Args:
        root: Project root containing the contract build output.
        bundle_dir: Directory containing a previously exported bundle.

    Returns:
        DeterminismResult with ok status and lists of missing, extra, and
        mismatched relative paths.

    Raises:
        FileNotFoundError: If bundle_dir does not exist.
        NotADirectoryError: If bundle_dir is not a directory.
    """
    if not bundle_dir.exists():
        msg = f"Bundle directory does not exist: {bundle_dir}"
        raise FileNotFoundError(msg)
    if not bundle_dir.is_dir():
        msg = f"Bundle path is not a directory: {bundle_dir}"
        raise NotADirectoryError(msg)
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        export_bundle(root=root, out_dir=temp_path)

        original_files = _list_relative_files(bundle_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in regenerated_files - original_files)
        extra = sorted(str(path) for path in original_files - regenerated_files)

        mismatches = sorted(
            str(path)
            for path in original_files & regenerated_files
            if not filecmp.cmp(bundle_dir / path, temp_path / path, shallow=False)
        )

    ok = not missing and not extra and not mismatches
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )
