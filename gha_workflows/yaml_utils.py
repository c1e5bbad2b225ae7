"""
yaml_utils.py

Responsibility: YAML loading/dumping with consistent formatting for workflow files.

Workflow files are read by CI runners with YAML 1.2 core semantics:
- only `true`/`false` are booleans; keys like `on` and values like `yes` stay strings
- ints are decimal, `0o` octal or `0x` hex; `0755` is 755 and `2222:22` is a string

The dumper keeps PyYAML's YAML 1.1 resolvers, so any string a 1.1 reader would
take for a bool or number (`'on'`, `'yes'`, `'2222:22'`) is written quoted.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"

_BOOL_RE = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")
_INT_RE = re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$")
_FLOAT_RE = re.compile(
    r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
    |[-+]?\.(?:inf|Inf|INF)
    |\.(?:nan|NaN|NAN))$""",
    re.X,
)
_DECIMAL_RE = re.compile(r"^[-+]?[0-9]+$")

_YAML11_TAGS = (_BOOL_TAG, _INT_TAG, _FLOAT_TAG)


class WorkflowLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 core resolution for bools, ints and floats."""


class WorkflowDumper(yaml.SafeDumper):
    """SafeDumper that expands aliases and indents block sequences."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _construct_int(loader: WorkflowLoader, node: yaml.ScalarNode) -> int:
    value = loader.construct_scalar(node)
    if value.startswith("0o"):
        return int(value[2:], 8)
    if value.startswith("0x"):
        return int(value[2:], 16)
    if _DECIMAL_RE.match(value):
        return int(value, 10)
    # explicitly tagged `!!int` values in other notations
    return loader.construct_yaml_int(node)


def _represent_str(dumper: WorkflowDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


WorkflowLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in entries if tag not in _YAML11_TAGS]
    for first, entries in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
# ints before floats: every int literal also matches the float pattern
WorkflowLoader.add_implicit_resolver(_BOOL_TAG, _BOOL_RE, list("tTfF"))
WorkflowLoader.add_implicit_resolver(_INT_TAG, _INT_RE, list("-+0123456789"))
WorkflowLoader.add_implicit_resolver(_FLOAT_TAG, _FLOAT_RE, list("-+0123456789."))
WorkflowLoader.add_constructor(_INT_TAG, _construct_int)

WorkflowDumper.add_representer(str, _represent_str)


def load_yaml(text: str) -> Any:
    """Parse a single YAML document."""
    return yaml.load(text, Loader=WorkflowLoader)


def dump_yaml(data: Any) -> str:
    """
    Serialize `data` as block-style YAML without line wrapping.

    Key order is preserved. An empty document serializes to "".
    """
    if data is None:
        return ""
    return yaml.dump(
        data,
        Dumper=WorkflowDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
