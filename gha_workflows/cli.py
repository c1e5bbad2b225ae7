"""
cli.py

Responsibility: CLI entrypoint for gha-workflows.

High-level flow:
1) Parse CLI flags
2) Resolve configuration (project manifest overrides flags) -> `WorkflowsConfig`
3) Validate source/destination
4) Compile each workflow file into the destination

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- Parse/dump/write: `compiler.py`
"""

from __future__ import annotations

import argparse
import sys

from gha_workflows import __version__
from gha_workflows.compiler import compile_workflows
from gha_workflows.config import ValidationError, resolve_config, validate_config


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gha-workflows",
        description="Compile GitHub Actions workflow YAML files into normalized output files",
    )
    p.add_argument("-v", "--version", action="version", version=__version__)
    p.add_argument("-c", "--comments", default=None, help="Add a header comment")
    p.add_argument(
        "-s",
        "--source",
        default=None,
        help='The source directory of YAML files or single YAML file that will be "compiled"',
    )
    p.add_argument(
        "-d",
        "--destination",
        default=None,
        help='The output directory where "compiled" YAML files will be written to',
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = resolve_config(args)
    try:
        validate_config(config)
    except ValidationError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code

    compile_workflows(config.source, config.destination, config.comments)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
