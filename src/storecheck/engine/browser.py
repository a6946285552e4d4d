"""StoreCheck browser session -- Playwright lifecycle for the acceptance suite.

Launches Chromium once per test session and hands out an isolated context
(cookies, storage, video) per test.  Default command and navigation
timeouts come from the configuration so Playwright's own auto-waiting
uses the same budgets as the command layer.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from storecheck.config import StoreCheckConfig

logger = logging.getLogger("storecheck.engine.browser")


class BrowserSession:
    """Owns one Playwright browser and the per-test contexts opened from it."""

    def __init__(self, config: StoreCheckConfig) -> None:
        self._config = config
        # Managed browser lifecycle -- set by start()/stop()
        self._playwright: Any = None
        self._browser: Any = None
        self._contexts: dict[int, Any] = {}

    @property
    def started(self) -> bool:
        return self._browser is not None

    # -- Browser Lifecycle ---------------------------------------------------

    def start(self) -> None:
        """Launch the Playwright browser. Call once before new_page()."""
        from playwright.sync_api import sync_playwright

        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(headless=self._config.headless)
        logger.info("Browser launched (headless=%s)", self._config.headless)

    def stop(self) -> None:
        """Close every open context, the browser, and Playwright."""
        for context in list(self._contexts.values()):
            try:
                context.close()
            except Exception as exc:
                logger.debug("Context close failed during stop: %s", exc)
        try:
            if self._browser is not None:
                self._browser.close()
        except Exception as exc:
            logger.debug("Browser close failed: %s", exc)
        try:
            if self._playwright is not None:
                self._playwright.stop()
        except Exception as exc:
            logger.debug("Playwright stop failed: %s", exc)
        self._contexts.clear()
        self._browser = None
        self._playwright = None

    # -- Per-test pages ------------------------------------------------------

    def new_page(self) -> Any:
        """Open a fresh context and page (test isolation)."""
        if self._browser is None:
            raise RuntimeError("BrowserSession.start() must be called before new_page()")

        width, height = self._config.viewport
        options: dict[str, Any] = {"viewport": {"width": width, "height": height}}
        if self._config.video:
            video_dir = self._config.evidence_dir / "videos"
            video_dir.mkdir(parents=True, exist_ok=True)
            options["record_video_dir"] = str(video_dir)
            options["record_video_size"] = {"width": width, "height": height}

        context = self._browser.new_context(**options)
        context.set_default_timeout(self._config.command_timeout_ms)
        context.set_default_navigation_timeout(self._config.page_load_timeout_ms)
        page = context.new_page()
        self._contexts[id(page)] = context
        return page

    def close_page(self, page: Any) -> None:
        """Close the context that owns ``page``; this also finalizes its video."""
        context = self._contexts.pop(id(page), None)
        if context is None:
            return
        try:
            context.close()
        except Exception as exc:
            logger.warning("Context close failed: %s", exc)

    def screenshot(self, page: Any, name: str) -> Path | None:
        """Save a PNG of the current viewport. Returns None if capture fails."""
        directory = self._config.evidence_dir / "screenshots"
        directory.mkdir(parents=True, exist_ok=True)
        filepath = directory / f"{_safe_filename(name)}.png"
        try:
            filepath.write_bytes(page.screenshot(full_page=False))
        except Exception as exc:
            logger.warning("Screenshot failed: %s", exc)
            return None
        logger.info("Screenshot saved: %s", filepath)
        return filepath


def _safe_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "screenshot"
