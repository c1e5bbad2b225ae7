"""
compiler.py

Responsibility: "Compile" workflow YAML files into a destination.

Rules:
- Parse each file as YAML and re-dump it with normalized formatting.
- Prepend an optional `#` comment header, separated from the body by a blank line.
- Output always ends with exactly one newline.
- Walk directory sources in sorted order; only `.yml`/`.yaml` files are compiled.

This module intentionally does NOT know about CLI parsing or manifests.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

import yaml

from gha_workflows.yaml_utils import dump_yaml, load_yaml

WORKFLOW_SUFFIXES = (".yml", ".yaml")

# A real newline, or the two characters `\n` as typed in a shell argument.
_HEADER_SPLIT_RE = re.compile(r"\r?\n|\\n")

Header = str | Sequence[str] | None


class WorkflowError(RuntimeError):
    pass


@dataclass(frozen=True)
class CompileResult:
    written: list[Path]


def format_header(header: Header) -> str:
    """
    Turn a header string or list of lines into a `#` comment block.
    """
    if not header:
        return ""
    lines = _HEADER_SPLIT_RE.split(header) if isinstance(header, str) else [str(line) for line in header]
    return "\n".join(f"# {line}".rstrip() for line in lines)


def process_workflow(path: str | Path, header: Header = None) -> str:
    """
    Return the compiled text for one workflow file.
    """
    src = Path(path)
    raw = src.read_text(encoding="utf-8")
    try:
        contents = load_yaml(raw)
    except yaml.YAMLError as e:
        raise WorkflowError(f"Failed parsing workflow file: {src}") from e

    expanded = dump_yaml(contents)
    return f"{format_header(header)}\n\n{expanded}".strip() + "\n"


def target_path(source_file: Path, destination: Path) -> Path:
    if destination.is_dir():
        return destination / source_file.name
    return destination


def write_workflow(source_file: str | Path, destination: str | Path, header: Header = None) -> Path:
    """
    Compile `source_file` and write it into (or as) `destination`.
    """
    src = Path(source_file)
    target = target_path(src, Path(destination))
    target.write_text(process_workflow(src, header), encoding="utf-8", newline="\n")
    return target


def iter_workflow_files(source: Path) -> Iterator[Path]:
    """
    Yield `source` itself when it is a file, otherwise its workflow files in name order.
    """
    if not source.is_dir():
        yield source
        return
    for path in sorted(source.iterdir(), key=lambda p: p.name):
        if path.is_file() and path.suffix.lower() in WORKFLOW_SUFFIXES:
            yield path


def _prepare_destination(source: Path, destination: Path) -> None:
    if destination.exists():
        return
    # A single file compiled to `foo.yml` is written as that file.
    if source.is_file() and destination.suffix.lower() in WORKFLOW_SUFFIXES:
        destination.parent.mkdir(parents=True, exist_ok=True)
    else:
        destination.mkdir(parents=True, exist_ok=True)


def compile_workflows(source: str | Path, destination: str | Path, header: Header = None) -> CompileResult:
    """
    Compile a workflow file, or every workflow file in a directory, into destination.

    - Creates the destination directory when it does not exist.
    - Existing output files are overwritten.
    """
    src = Path(source)
    dst = Path(destination)
    _prepare_destination(src, dst)

    written = [write_workflow(path, dst, header) for path in iter_workflow_files(src)]
    return CompileResult(written=written)
