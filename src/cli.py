"""Command-line interface for the contract interface registry."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson

from bundle.write import export_bundle
from contract.config import (
    ConfigError,
    load_config,
    resolve_artifacts_dir,
    resolve_bundle_dir,
)
from contract.errors import AbiRegistryError
from contract.observability import configure_logging
from contract.registry import build_registry
from contract.validation import validate_artifacts
from verify.verify import verify_bundle


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="abi-registry")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate", help="Check tracked contract artifacts"
    )
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Build output directory (default: config artifacts dir)",
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat entry-level and format warnings as errors",
    )

    show_parser = subparsers.add_parser("show", help="Print a contract ABI as JSON")
    show_parser.add_argument("contract", help="Tracked contract identifier")
    _add_common_paths(show_parser)

    functions_parser = subparsers.add_parser(
        "functions", help="List callable functions of a contract"
    )
    functions_parser.add_argument("contract", help="Tracked contract identifier")
    _add_common_paths(functions_parser)

    export_parser = subparsers.add_parser("export", help="Write the static ABI bundle")
    _add_common_paths(export_parser)
    export_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for the bundle (default: config bundle dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Check an exported bundle against current artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--bundle-dir",
        default=None,
        help="Bundle directory (default: config bundle dir)",
    )

    return parser


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        return resolve_artifacts_dir(root, load_config(root))
    return Path(artifacts_dir).expanduser().resolve()


def _resolve_bundle_dir(root: Path, bundle_dir: str | None) -> Path:
    if bundle_dir is None:
        return resolve_bundle_dir(root, load_config(root))
    return Path(bundle_dir).expanduser().resolve()


def _handle_validate(root: Path, artifacts_dir: str | None, *, strict: bool) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir, strict=strict)
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_show(root: Path, contract: str) -> int:
    registry = build_registry(root)
    if contract not in registry:
        sys.stderr.write(
            f"error: unknown contract {contract!r} "
            f"(tracked: {', '.join(registry.identifiers())})\n"
        )
        return 2
    payload = orjson.dumps(registry[contract].to_list(), option=orjson.OPT_INDENT_2)
    sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


def _handle_functions(root: Path, contract: str) -> int:
    registry = build_registry(root)
    if contract not in registry:
        sys.stderr.write(
            f"error: unknown contract {contract!r} "
            f"(tracked: {', '.join(registry.identifiers())})\n"
        )
        return 2
    for function in registry[contract].functions():
        sys.stdout.write(f"{function.human_readable()}\n")
    return 0


def _handle_export(root: Path, out_dir: str | None) -> int:
    resolved_out_dir = (
        Path(out_dir).expanduser().resolve() if out_dir is not None else None
    )
    for path in export_bundle(root=root, out_dir=resolved_out_dir):
        sys.stdout.write(f"{path}\n")
    return 0


def _handle_verify(root: Path, bundle_dir: str | None) -> int:
    resolved_bundle_dir = _resolve_bundle_dir(root, bundle_dir)
    try:
        result = verify_bundle(root=root, bundle_dir=resolved_bundle_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"bundle-dir: {resolved_bundle_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _dispatch(args: argparse.Namespace, root: Path) -> int:
    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir, strict=args.strict)

    if args.command == "show":
        return _handle_show(root, args.contract)

    if args.command == "functions":
        return _handle_functions(root, args.contract)

    if args.command == "export":
        return _handle_export(root, args.out_dir)

    if args.command == "verify":
        return _handle_verify(root, args.bundle_dir)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level="DEBUG" if args.verbose else "WARNING")

    root = Path(args.root).expanduser().resolve()

    try:
        return _dispatch(args, root)
    except (AbiRegistryError, ConfigError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
