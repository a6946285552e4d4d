"""pytest integration -- fixtures that hand acceptance tests a ready command layer.

Registered through the ``pytest11`` entry point, so any suite run with
StoreCheck installed can request ``store`` (a ``StorefrontCommands`` bound
to a fresh, isolated page).  The browser only launches when a test asks
for a page.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Callable

import pytest

from storecheck.config import StoreCheckConfig, StoreCheckConfigError, find_project_dir
from storecheck.credentials import Credentials, resolve_credentials
from storecheck.engine.browser import BrowserSession
from storecheck.engine.commands import StorefrontCommands
from storecheck.fixtures import load_fixture

logger = logging.getLogger("storecheck.pytest_plugin")


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("storecheck")
    group.addoption(
        "--storecheck-config",
        action="store",
        default=None,
        help="Path to the .storecheck/ project directory (default: search upward from cwd).",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "acceptance: storefront scenario that drives a live browser")


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: Any):
    # Expose each phase's report on the item so fixtures can react to failures
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ---------------------------------------------------------------------------
# Configuration and credentials
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def storecheck_config(pytestconfig: pytest.Config) -> StoreCheckConfig:
    option = pytestconfig.getoption("storecheck_config")
    project_dir = Path(option) if option else find_project_dir()
    return StoreCheckConfig.load(project_dir)


def _optional_credentials(profile: str, project_dir: Path) -> Credentials | None:
    try:
        return resolve_credentials(profile, project_dir)
    except StoreCheckConfigError:
        logger.warning("No '%s' credentials configured; login commands will fail if used", profile)
        return None


@pytest.fixture(scope="session")
def default_credentials(storecheck_config: StoreCheckConfig) -> Credentials | None:
    return _optional_credentials("default", storecheck_config.project_dir)


@pytest.fixture(scope="session")
def invalid_credentials(storecheck_config: StoreCheckConfig) -> Credentials | None:
    return _optional_credentials("invalid", storecheck_config.project_dir)


@pytest.fixture
def storecheck_fixture(storecheck_config: StoreCheckConfig) -> Callable[[str], dict[str, Any]]:
    """Loader for files in the configured fixtures directory."""

    def _load(name: str) -> dict[str, Any]:
        return load_fixture(name, storecheck_config.fixtures_dir)

    return _load


# ---------------------------------------------------------------------------
# Browser, page, command layer
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def storecheck_browser(storecheck_config: StoreCheckConfig) -> Iterator[BrowserSession]:
    session = BrowserSession(storecheck_config)
    session.start()
    yield session
    session.stop()


@pytest.fixture
def storecheck_page(
    request: pytest.FixtureRequest,
    storecheck_browser: BrowserSession,
    storecheck_config: StoreCheckConfig,
) -> Iterator[Any]:
    page = storecheck_browser.new_page()
    yield page
    report = getattr(request.node, "rep_call", None)
    if storecheck_config.screenshot_on_failure and report is not None and report.failed:
        storecheck_browser.screenshot(page, request.node.nodeid)
    storecheck_browser.close_page(page)


@pytest.fixture
def store(
    storecheck_page: Any,
    storecheck_config: StoreCheckConfig,
    default_credentials: Credentials | None,
    invalid_credentials: Credentials | None,
) -> StorefrontCommands:
    return StorefrontCommands(
        storecheck_page,
        storecheck_config,
        default_credentials=default_credentials,
        invalid_credentials=invalid_credentials,
    )
