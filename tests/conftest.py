"""Shared fixtures for StoreCheck unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from storecheck.config import StoreCheckConfig

pytest_plugins = ["pytester"]

# ---------------------------------------------------------------------------
# Fixture: fast config
# ---------------------------------------------------------------------------


@pytest.fixture
def fast_config(tmp_path: Path) -> StoreCheckConfig:
    """Config with short budgets so polling loops finish in a few passes."""
    return StoreCheckConfig(
        project_dir=tmp_path / ".storecheck",
        evidence_dir=tmp_path / ".storecheck" / "evidence",
        fixtures_dir=tmp_path / "acceptance" / "fixtures",
        spec_dir=tmp_path / "acceptance",
        command_timeout_ms=300,
        page_load_timeout_ms=1_000,
        form_timeout_ms=300,
        submit_probe_timeout_ms=200,
        error_timeout_ms=300,
        poll_interval_ms=100,
        video=False,
    )


# ---------------------------------------------------------------------------
# Fixture: temporary project directory with .storecheck/ structure
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Create a temporary .storecheck/ project directory and suite skeleton."""
    project_dir = tmp_path / ".storecheck"
    (project_dir / "evidence").mkdir(parents=True)
    (tmp_path / "acceptance" / "fixtures").mkdir(parents=True)

    config_data = {
        "base_url": "http://localhost:8080",
        "headless": True,
        "viewport": {"width": 1280, "height": 720},
        "timeouts": {"command": 4000},
    }
    (project_dir / "config.yaml").write_text(yaml.dump(config_data, default_flow_style=False), encoding="utf-8")
    return project_dir


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a valid StoreCheck config.yaml as a string."""
    return """\
base_url: "http://shop.test"
headless: false
viewport:
  width: 1920
  height: 1080
video: false
screenshot_on_failure: true
timeouts:
  command: 4000
  page_load: 20000
  form: 6000
  submit_probe: 1500
  error: 3000
  poll_interval: 50
retries:
  run_mode: 3
  open_mode: 1
spec_dir: suite
exclude_patterns:
  - "**/drafts/*"
"""


@pytest.fixture(autouse=True)
def _clean_storecheck_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer credentials and overrides out of unit tests."""
    for var in (
        "STORECHECK_BASE_URL",
        "STORECHECK_HEADLESS",
        "STORECHECK_DEFAULT_EMAIL",
        "STORECHECK_DEFAULT_PASSWORD",
        "STORECHECK_INVALID_EMAIL",
        "STORECHECK_INVALID_PASSWORD",
    ):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
