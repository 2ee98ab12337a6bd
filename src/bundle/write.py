"""Write the static ABI bundle.

The bundle is a self-contained directory of plain JSON files, one per
tracked contract plus a manifest, that a static frontend export can ship
without any server-side runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from contract.config import load_config, resolve_bundle_dir
from contract.observability import get_logger
from contract.registry import build_registry

if TYPE_CHECKING:
    from pathlib import Path

    from contract.config import AbiRegistryConfig
    from contract.registry import InterfaceRegistry

logger = get_logger(__name__)

MANIFEST_JSON = "manifest.json"


def bundle_filename(identifier: str) -> str:
    return f"{identifier}.json"


def _write_json(path: Path, payload: object, *, sort_keys: bool) -> None:
    opts = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
    if sort_keys:
        opts |= orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(payload, option=opts))


def write_bundle(registry: InterfaceRegistry, out_dir: Path) -> list[Path]:
    """Write one ABI file per descriptor plus ``manifest.json``.

    ABI files keep entry order and key order exactly as published. The
    manifest is key-sorted. Output bytes depend only on registry content.

    Returns:
        Written paths, manifest last.
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    contracts: dict[str, dict[str, object]] = {}
    for identifier, descriptor in registry.items():
        path = out_dir / bundle_filename(identifier)
        _write_json(path, descriptor.to_list(), sort_keys=False)
        written.append(path)
        contracts[identifier] = {
            "file": path.name,
            "contract_name": descriptor.contract_name,
            "source_name": descriptor.source_name,
            "entries": len(descriptor),
        }

    manifest_path = out_dir / MANIFEST_JSON
    _write_json(
        manifest_path,
        {"contracts": contracts, "fingerprint": registry.fingerprint()},
        sort_keys=True,
    )
    written.append(manifest_path)

    logger.info(
        "bundle_written",
        out_dir=str(out_dir),
        files=[path.name for path in written],
    )
    return written


def export_bundle(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: AbiRegistryConfig | None = None,
) -> list[Path]:
    """Build the registry for ``root`` and write its static bundle.

    Args:
        root: Project root containing the contract build output.
        out_dir: Optional output directory (default: config ``bundle_dir``).
        config: Optional configuration; loaded from ``root`` when omitted.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_bundle_dir(root, config)

    registry = build_registry(root, config=config)
    return write_bundle(registry, out_dir)
