"""Test data loading for page objects (review text, search terms, ...)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from storecheck.config import StoreCheckConfigError

_SUFFIXES = (".yaml", ".yml", ".json")


def load_fixture(name: str, fixtures_dir: Path) -> dict[str, Any]:
    """Load ``fixtures_dir/<name>`` as a mapping.

    ``name`` may include a suffix; otherwise .yaml, .yml and .json are
    tried in that order.
    """
    candidates = [fixtures_dir / name] if Path(name).suffix else [fixtures_dir / f"{name}{s}" for s in _SUFFIXES]
    path = next((c for c in candidates if c.is_file()), None)
    if path is None:
        raise StoreCheckConfigError(
            f"Fixture not found: {name}\n\n"
            f"Looked in: {fixtures_dir}\n"
            "To fix: storecheck init (creates fixtures/example.yaml)"
        )

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise StoreCheckConfigError(f"Fixture {path} could not be parsed: {exc}") from exc

    if not isinstance(data, dict):
        raise StoreCheckConfigError(f"Fixture {path} must contain a mapping")
    return data
