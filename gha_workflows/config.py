"""
config.py

Responsibility: Resolve the run configuration from CLI flags and the project manifest.

The manifest is the nearest `pyproject.toml` or `package.json`, walking up from the
working directory, that carries a `gha-workflows` section:
- pyproject.toml: `[tool.gha-workflows]` table
- package.json: top-level `"gha-workflows"` object

Manifests without the section are skipped and the search continues upward.
Manifest values take precedence over CLI flags, key by key.
"""

from __future__ import annotations

import argparse
import json
import tomllib
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

MANIFEST_KEY = "gha-workflows"
MANIFEST_NAMES = ("pyproject.toml", "package.json")


class ConfigError(ValueError):
    pass


class ValidationError(RuntimeError):
    """A configuration that cannot run; `exit_code` is the process exit status."""

    exit_code = 1


class SourceNotFoundError(ValidationError):
    pass


class DestinationNotSpecifiedError(ValidationError):
    exit_code = 2


@dataclass(frozen=True)
class WorkflowsConfig:
    """Resolved inputs for a single compile run."""

    source: Path | None = None
    destination: Path | None = None
    comments: str | list[str] | None = None


def iter_manifests(start: str | Path) -> Iterator[Path]:
    """
    Yield manifest files from `start` up to the filesystem root, nearest first.
    """
    here = Path(start).resolve()
    for directory in (here, *here.parents):
        for name in MANIFEST_NAMES:
            candidate = directory / name
            if candidate.is_file():
                yield candidate


def find_manifest(start: str | Path) -> Path | None:
    """
    Return the nearest manifest that has a `gha-workflows` section.
    """
    for manifest in iter_manifests(start):
        if load_manifest_section(manifest):
            return manifest
    return None


def _read_pyproject(path: Path) -> dict[str, Any] | None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in manifest: {path}") from e
    return data.get("tool", {}).get(MANIFEST_KEY)


def _read_package_json(path: Path) -> dict[str, Any] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in manifest: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Manifest must be a JSON object at the top level: {path}")
    return data.get(MANIFEST_KEY)


def load_manifest_section(path: str | Path) -> dict[str, Any]:
    """
    Return the `gha-workflows` section of a manifest, or {} when it has none.
    """
    manifest = Path(path)
    if manifest.name == "pyproject.toml":
        section = _read_pyproject(manifest)
    else:
        section = _read_package_json(manifest)

    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"`{MANIFEST_KEY}` must be an object/mapping in {manifest}")
    return section


def _manifest_path(value: Any, base: Path) -> Path | None:
    if value is None:
        return None
    path = Path(str(value))
    return path if path.is_absolute() else base / path


def _comments(value: Any) -> str | list[str] | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list):
        return [str(line) for line in value]
    raise ConfigError("`comments` must be a string or a list of strings.")


def resolve_config(args: argparse.Namespace, cwd: str | Path | None = None) -> WorkflowsConfig:
    """
    Merge the manifest section (if any) over the CLI flags.

    Relative manifest paths are resolved against the manifest's directory,
    relative CLI paths against `cwd`.
    """
    section: dict[str, Any] = {}
    cli_base = Path.cwd() if cwd is None else Path(cwd)
    base = cli_base
    manifest = find_manifest(cli_base)
    if manifest is not None:
        section = load_manifest_section(manifest)
        base = manifest.parent

    source = _manifest_path(section.get("source"), base)
    destination = _manifest_path(section.get("destination"), base)
    comments = _comments(section.get("comments"))

    # CLI fallbacks
    if source is None and args.source is not None:
        source = cli_base / args.source
    if destination is None and args.destination is not None:
        destination = cli_base / args.destination
    if comments is None:
        comments = args.comments

    return WorkflowsConfig(source=source, destination=destination, comments=comments)


def validate_config(config: WorkflowsConfig) -> None:
    if config.source is None or not config.source.exists():
        raise SourceNotFoundError(f"Source file/folder not found: {config.source}")
    if config.destination is None:
        raise DestinationNotSpecifiedError("A destination must be specified, none given.")
