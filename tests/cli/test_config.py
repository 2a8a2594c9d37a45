from __future__ import annotations

import importlib
from pathlib import Path

import pytest


def test_load_yaml_config_none_returns_empty() -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    assert mod.load_yaml_config(None) == {}


def test_load_yaml_config_missing_file_raises(tmp_path: Path) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    with pytest.raises(FileNotFoundError):
        mod.load_yaml_config(tmp_path / "missing.yml")


def test_load_yaml_config_non_mapping_raises(write_yaml) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    path = write_yaml("bad.yml", [0.02, 0.01])
    with pytest.raises(ValueError, match="YAML mapping"):
        mod.load_yaml_config(path)


def test_load_yaml_config_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert mod.load_yaml_config(path) == {}


def test_load_yaml_config_reads_mapping(write_yaml) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    path = write_yaml("ok.yml", {"model": {"periods": 15, "sigma": 0.3}})
    assert mod.load_yaml_config(path) == {"model": {"periods": 15, "sigma": 0.3}}


def test_deep_merge_merges_nested_and_replaces_lists() -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    base = {"model": {"rate": 0.02, "periods": 15}, "styles": ["ce", "pe"]}
    updates = {"model": {"periods": 30}, "styles": ["pa"], "chooser": {"step": 5}}
    merged = mod.deep_merge(base, updates)
    assert merged == {
        "model": {"rate": 0.02, "periods": 30},
        "styles": ["pa"],
        "chooser": {"step": 5},
    }
    assert base["model"]["periods"] == 15


def test_build_config_precedence_defaults_yaml_overrides(write_yaml) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    defaults = {"model": {"rate": 0.01, "sigma": 0.2}, "option": {"spot": 100.0}}
    yaml_path = write_yaml("cfg.yml", {"model": {"sigma": 0.3}, "option": {"spot": 90}})
    overrides = {"model": {"rate": 0.05}, "dry_run": True}
    config = mod.build_config(defaults, yaml_path, overrides)
    assert config == {
        "model": {"rate": 0.05, "sigma": 0.3},
        "option": {"spot": 90},
        "dry_run": True,
    }


def test_resolve_path_expands_home_and_env(monkeypatch, tmp_path: Path) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("LATTICE_OUT", str(tmp_path / "out"))

    assert mod.resolve_path("~/lattices") == tmp_path / "lattices"
    assert mod.resolve_path("$LATTICE_OUT/run1") == tmp_path / "out" / "run1"


def test_resolve_path_passthrough_and_none(tmp_path: Path) -> None:
    mod = importlib.import_module("binomial_lattice.cli.config")
    assert mod.resolve_path(None) is None
    assert mod.resolve_path(tmp_path) == tmp_path
