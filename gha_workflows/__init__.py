"""
gha_workflows package

This package implements gha-workflows as a CLI-first utility.

Key responsibilities are split across modules:
- `yaml_utils.py`: YAML loader/dumper tuned for CI workflow files
- `compiler.py`: parse -> re-dump -> prepend header -> write, per workflow file
- `config.py`: resolve source/destination/comments from CLI flags and the project manifest
- `cli.py`: CLI entrypoint and orchestration (resolve -> validate -> compile)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
