from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from gha_workflows.config import (
    ConfigError,
    DestinationNotSpecifiedError,
    SourceNotFoundError,
    WorkflowsConfig,
    find_manifest,
    load_manifest_section,
    resolve_config,
    validate_config,
)


def _args(**kwargs: object) -> argparse.Namespace:
    values = {"source": None, "destination": None, "comments": None}
    values.update(kwargs)
    return argparse.Namespace(**values)


def _write_package_json(directory: Path, section: object) -> Path:
    path = directory / "package.json"
    path.write_text(json.dumps({"name": "demo", "gha-workflows": section}), encoding="utf-8")
    return path


def test_find_manifest_walks_up(tmp_path: Path) -> None:
    manifest = _write_package_json(tmp_path, {"source": "wf"})
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_manifest(nested) == manifest.resolve()


def test_find_manifest_prefers_nearest(tmp_path: Path) -> None:
    _write_package_json(tmp_path, {"source": "outer"})
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / "pyproject.toml").write_text('[tool.gha-workflows]\nsource = "inner"\n', encoding="utf-8")
    assert find_manifest(inner) == (inner / "pyproject.toml").resolve()


def test_find_manifest_skips_manifests_without_section(tmp_path: Path) -> None:
    outer = _write_package_json(tmp_path, {"source": "wf"})
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / "pyproject.toml").write_text("[project]\nname = 'inner'\n", encoding="utf-8")
    _write_package_json(inner, None)
    assert find_manifest(inner) == outer.resolve()


def test_load_pyproject_section(tmp_path: Path) -> None:
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text(
        '[tool.gha-workflows]\nsource = "wf"\ndestination = ".github/workflows"\ncomments = ["a", "b"]\n',
        encoding="utf-8",
    )
    assert load_manifest_section(manifest) == {
        "source": "wf",
        "destination": ".github/workflows",
        "comments": ["a", "b"],
    }


def test_pyproject_without_table_yields_to_package_json(tmp_path: Path) -> None:
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text("[project]\nname = 'demo'\n", encoding="utf-8")
    package_json = _write_package_json(tmp_path, {"source": "wf"})
    assert load_manifest_section(manifest) == {}
    assert find_manifest(tmp_path) == package_json.resolve()


def test_missing_section_is_empty(tmp_path: Path) -> None:
    manifest = tmp_path / "package.json"
    manifest.write_text('{"name": "demo"}', encoding="utf-8")
    assert load_manifest_section(manifest) == {}


def test_invalid_section_raises(tmp_path: Path) -> None:
    manifest = _write_package_json(tmp_path, "wf")
    with pytest.raises(ConfigError):
        load_manifest_section(manifest)


def test_invalid_json_raises(tmp_path: Path) -> None:
    manifest = tmp_path / "package.json"
    manifest.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_manifest_section(manifest)


def test_cli_flags_used_without_manifest_section(tmp_path: Path) -> None:
    _write_package_json(tmp_path, None)
    config = resolve_config(_args(source="wf", destination="out", comments="hi"), cwd=tmp_path)
    assert config == WorkflowsConfig(source=tmp_path / "wf", destination=tmp_path / "out", comments="hi")


def test_manifest_overrides_cli_and_resolves_relative_paths(tmp_path: Path) -> None:
    _write_package_json(tmp_path, {"source": "wf", "comments": ["x", 1]})
    sub = tmp_path / "sub"
    sub.mkdir()
    config = resolve_config(_args(source="other", destination="out", comments="ignored"), cwd=sub)
    assert config.source == tmp_path.resolve() / "wf"
    assert config.destination == sub / "out"
    assert config.comments == ["x", "1"]


def test_validate_missing_source(tmp_path: Path) -> None:
    with pytest.raises(SourceNotFoundError) as exc:
        validate_config(WorkflowsConfig(source=tmp_path / "nope", destination=tmp_path))
    assert exc.value.exit_code == 1
    assert "Source file/folder not found" in str(exc.value)

    with pytest.raises(SourceNotFoundError):
        validate_config(WorkflowsConfig(source=None, destination=tmp_path))


def test_validate_missing_destination(tmp_path: Path) -> None:
    with pytest.raises(DestinationNotSpecifiedError) as exc:
        validate_config(WorkflowsConfig(source=tmp_path))
    assert exc.value.exit_code == 2


def test_validate_ok(tmp_path: Path) -> None:
    validate_config(WorkflowsConfig(source=tmp_path, destination=tmp_path / "out"))
