from __future__ import annotations

import os
from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from contract.artifacts import DEFAULT_ARTIFACTS_DIR

CONFIG_FILENAME = "abi-registry.toml"

# Selects the project root used for the process-wide registry.
ROOT_ENV_VAR = "ABI_REGISTRY_ROOT"


class AbiRegistryConfig(BaseModel):
    """Configuration for interface resolution and static export."""

    model_config = ConfigDict(extra="forbid")

    artifacts_dir: str = Field(
        default=DEFAULT_ARTIFACTS_DIR,
        description="Contract build output root, relative to the project root",
    )
    bundle_dir: str = Field(
        default="out/abi",
        description="Output directory for the static ABI bundle",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def default_root() -> Path:
    """Project root for the process-wide registry.

    Taken from ``ABI_REGISTRY_ROOT`` when set, the working directory otherwise.
    """
    raw = os.environ.get(ROOT_ENV_VAR)
    if raw:
        return Path(raw).expanduser().resolve()
    return Path.cwd().resolve()


# Human-readable names for directory settings, used in error messages.
DIR_SETTINGS = {
    "artifacts_dir": "Contract build output",
    "bundle_dir": "ABI bundle",
}


def resolve_project_dir(root: Path, relative_dir: str, *, setting: str) -> Path:
    """Resolve a configured directory against the project root.

    ``relative_dir`` must be a non-empty relative path (no ``~``) that still
    lies under ``root`` after ``..`` and symlinks are resolved.
    """
    label = DIR_SETTINGS.get(setting, setting)
    resolved_root = root.resolve()

    if (
        not relative_dir
        or relative_dir.startswith("~")
        or Path(relative_dir).is_absolute()
    ):
        msg = (
            f"{label} directory ({setting} = {relative_dir!r}) must be a path "
            f"relative to the project root {resolved_root}"
        )
        raise ConfigError(msg)

    try:
        resolved = (resolved_root / relative_dir).resolve()
    except OSError as exc:
        msg = f"Cannot resolve {label} directory {relative_dir!r} under {resolved_root}: {exc}"
        raise ConfigError(msg) from exc

    if not resolved.is_relative_to(resolved_root):
        msg = (
            f"{label} directory {relative_dir!r} resolves to {resolved}, "
            f"outside the project root {resolved_root}"
        )
        raise ConfigError(msg)

    return resolved


def resolve_artifacts_dir(root: Path, config: AbiRegistryConfig) -> Path:
    return resolve_project_dir(root, config.artifacts_dir, setting="artifacts_dir")


def resolve_bundle_dir(root: Path, config: AbiRegistryConfig) -> Path:
    return resolve_project_dir(root, config.bundle_dir, setting="bundle_dir")


def load_config(root: Path) -> AbiRegistryConfig:
    """Load configuration from abi-registry.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return AbiRegistryConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AbiRegistryConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
