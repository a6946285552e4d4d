"""StoreCheck configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from storecheck.models import (
    DEFAULT_BASE_URL,
    DEFAULT_COMMAND_TIMEOUT_MS,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_SPEC_DIR,
    DEFAULT_VIEWPORT,
    ERROR_TIMEOUT_MS,
    FORM_TIMEOUT_MS,
    LOGIN_ROUTE,
    LOGIN_ROUTE_FRAGMENT,
    PAGE_LOAD_TIMEOUT_MS,
    POLL_INTERVAL_MS,
    RECORD_VIDEO,
    RETRIES_OPEN_MODE,
    RETRIES_RUN_MODE,
    SCREENSHOT_ON_FAILURE,
    SUBMIT_PROBE_TIMEOUT_MS,
)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# YAML ``timeouts:`` keys -> config attributes
_TIMEOUT_KEYS = {
    "command": "command_timeout_ms",
    "page_load": "page_load_timeout_ms",
    "form": "form_timeout_ms",
    "submit_probe": "submit_probe_timeout_ms",
    "error": "error_timeout_ms",
    "poll_interval": "poll_interval_ms",
}


class StoreCheckConfigError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


@dataclass
class StoreCheckConfig:
    """Configuration for a StoreCheck run."""

    # Application under test
    base_url: str = DEFAULT_BASE_URL
    login_route: str = LOGIN_ROUTE
    login_route_fragment: str = LOGIN_ROUTE_FRAGMENT

    # Paths
    project_dir: Path = field(default_factory=lambda: Path(".storecheck"))
    evidence_dir: Path = field(default_factory=lambda: Path(".storecheck/evidence"))
    fixtures_dir: Path = field(default_factory=lambda: Path(DEFAULT_SPEC_DIR) / "fixtures")
    spec_dir: Path = field(default_factory=lambda: Path(DEFAULT_SPEC_DIR))
    exclude_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))

    # Browser
    viewport: tuple[int, int] = DEFAULT_VIEWPORT
    headless: bool = True
    video: bool = RECORD_VIDEO
    screenshot_on_failure: bool = SCREENSHOT_ON_FAILURE

    # Timeouts (ms)
    command_timeout_ms: int = DEFAULT_COMMAND_TIMEOUT_MS
    page_load_timeout_ms: int = PAGE_LOAD_TIMEOUT_MS
    form_timeout_ms: int = FORM_TIMEOUT_MS
    submit_probe_timeout_ms: int = SUBMIT_PROBE_TIMEOUT_MS
    error_timeout_ms: int = ERROR_TIMEOUT_MS
    poll_interval_ms: int = POLL_INTERVAL_MS

    # Whole-test re-execution
    retries_run_mode: int = RETRIES_RUN_MODE
    retries_open_mode: int = RETRIES_OPEN_MODE

    @classmethod
    def from_file(cls, config_path: Path) -> StoreCheckConfig:
        """Load config from a YAML file."""
        if not config_path.exists():
            raise StoreCheckConfigError(f"Config file not found: {config_path}\n\nTo fix: storecheck init")
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise StoreCheckConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreCheckConfigError(f"Config file must be a YAML mapping: {config_path}")
        return cls._from_dict(data, config_path.parent)

    @classmethod
    def load(cls, project_dir: Path) -> StoreCheckConfig:
        """Load ``project_dir/config.yaml`` if present, else defaults, then apply env overrides."""
        config_path = project_dir / "config.yaml"
        if config_path.is_file():
            config = cls.from_file(config_path)
        else:
            config = cls()
            config.project_dir = project_dir
            config.evidence_dir = project_dir / "evidence"
            config.spec_dir = project_dir.parent / DEFAULT_SPEC_DIR
            config.fixtures_dir = config.spec_dir / "fixtures"
        config.apply_env_overrides()
        return config

    @classmethod
    def _from_dict(cls, data: dict[str, Any], project_dir: Path) -> StoreCheckConfig:
        """Create config from a dictionary."""
        config = cls()
        config.project_dir = project_dir
        # Suite paths are relative to the repository root, one level above .storecheck/
        root = project_dir.parent

        if "base_url" in data:
            config.base_url = str(data["base_url"])
        if "login_route" in data:
            config.login_route = str(data["login_route"])
        if "login_route_fragment" in data:
            config.login_route_fragment = str(data["login_route_fragment"])

        if "evidence_dir" in data:
            config.evidence_dir = project_dir / data["evidence_dir"]
        else:
            config.evidence_dir = project_dir / "evidence"

        if "spec_dir" in data:
            config.spec_dir = root / data["spec_dir"]
        else:
            config.spec_dir = root / DEFAULT_SPEC_DIR

        if "fixtures_dir" in data:
            config.fixtures_dir = root / data["fixtures_dir"]
        else:
            config.fixtures_dir = config.spec_dir / "fixtures"

        if "exclude_patterns" in data:
            patterns = data["exclude_patterns"] or []
            if not isinstance(patterns, list):
                raise StoreCheckConfigError("exclude_patterns must be a list of glob patterns")
            config.exclude_patterns = [str(p) for p in patterns]

        if "headless" in data:
            config.headless = bool(data["headless"])
        if "video" in data:
            config.video = bool(data["video"])
        if "screenshot_on_failure" in data:
            config.screenshot_on_failure = bool(data["screenshot_on_failure"])
        if "viewport" in data:
            vp = data["viewport"]
            if isinstance(vp, dict):
                config.viewport = (
                    _positive_int(vp.get("width", DEFAULT_VIEWPORT[0]), "viewport.width"),
                    _positive_int(vp.get("height", DEFAULT_VIEWPORT[1]), "viewport.height"),
                )

        timeouts = data.get("timeouts") or {}
        if not isinstance(timeouts, dict):
            raise StoreCheckConfigError("timeouts must be a mapping of name -> milliseconds")
        for key, attr in _TIMEOUT_KEYS.items():
            if key in timeouts:
                setattr(config, attr, _positive_int(timeouts[key], f"timeouts.{key}"))

        retries = data.get("retries")
        if isinstance(retries, dict):
            if "run_mode" in retries:
                config.retries_run_mode = _non_negative_int(retries["run_mode"], "retries.run_mode")
            if "open_mode" in retries:
                config.retries_open_mode = _non_negative_int(retries["open_mode"], "retries.open_mode")
        elif retries is not None:
            # A bare number applies to run mode only
            config.retries_run_mode = _non_negative_int(retries, "retries")

        return config

    def apply_env_overrides(self) -> None:
        """Let the process environment override file values (CI use)."""
        if base_url := os.environ.get("STORECHECK_BASE_URL"):
            self.base_url = base_url
        headless = os.environ.get("STORECHECK_HEADLESS")
        if headless is not None:
            value = headless.strip().lower()
            if value in _TRUTHY:
                self.headless = True
            elif value in _FALSY:
                self.headless = False
            else:
                raise StoreCheckConfigError(
                    f"STORECHECK_HEADLESS must be true or false, got: {headless!r}"
                )

    def resolve_url(self, route: str) -> str:
        """Join a relative route onto ``base_url``. Absolute URLs pass through."""
        if route.startswith(("http://", "https://")):
            return route
        return f"{self.base_url.rstrip('/')}/{route.lstrip('/')}"


def _positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise StoreCheckConfigError(f"{name} must be an integer, got: {value!r}") from None
    if number <= 0:
        raise StoreCheckConfigError(f"{name} must be positive, got: {number}")
    return number


def _non_negative_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise StoreCheckConfigError(f"{name} must be an integer, got: {value!r}") from None
    if number < 0:
        raise StoreCheckConfigError(f"{name} must not be negative, got: {number}")
    return number


def find_project_dir() -> Path:
    """Locate the .storecheck/ project directory by searching upward from cwd."""
    current = Path.cwd()
    for base in [current, *current.parents]:
        candidate = base / ".storecheck"
        if candidate.is_dir():
            return candidate
    return current / ".storecheck"
