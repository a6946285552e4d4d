"""Shared base for page objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.sync_api import Page

    from storecheck.engine.commands import StorefrontCommands


class BasePage:
    """Holds the command layer and the page it is bound to."""

    def __init__(self, store: StorefrontCommands) -> None:
        self.store = store

    @property
    def page(self) -> Page:
        return self.store.page
