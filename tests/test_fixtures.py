"""Unit tests for storecheck.fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from storecheck.config import StoreCheckConfigError
from storecheck.fixtures import load_fixture


class TestLoadFixture:
    def test_yaml_preferred(self, tmp_path: Path):
        (tmp_path / "example.yaml").write_text("name: Yaml Reviewer\n", encoding="utf-8")
        (tmp_path / "example.json").write_text(json.dumps({"name": "Json Reviewer"}), encoding="utf-8")

        assert load_fixture("example", tmp_path) == {"name": "Yaml Reviewer"}

    def test_json_fallback(self, tmp_path: Path):
        (tmp_path / "example.json").write_text(json.dumps({"review": "Great phone"}), encoding="utf-8")
        assert load_fixture("example", tmp_path)["review"] == "Great phone"

    def test_explicit_suffix(self, tmp_path: Path):
        (tmp_path / "data.yml").write_text("search_term: iPhone\n", encoding="utf-8")
        assert load_fixture("data.yml", tmp_path) == {"search_term": "iPhone"}

    def test_missing_fixture(self, tmp_path: Path):
        with pytest.raises(StoreCheckConfigError, match="Fixture not found: example"):
            load_fixture("example", tmp_path)

    def test_unparseable_fixture(self, tmp_path: Path):
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreCheckConfigError, match="could not be parsed"):
            load_fixture("broken.json", tmp_path)

    def test_non_mapping_fixture(self, tmp_path: Path):
        (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(StoreCheckConfigError, match="must contain a mapping"):
            load_fixture("list", tmp_path)

    def test_shipped_example_fixture(self):
        fixtures_dir = Path(__file__).resolve().parent.parent / "acceptance" / "fixtures"
        data = load_fixture("example", fixtures_dir)
        assert {"name", "review"} <= data.keys()
