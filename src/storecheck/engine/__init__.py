"""StoreCheck engine -- resilient interaction and verification layer.

- Locator / resolve: ordered fallback selectors, first match wins, never raises on absence
- click_if_present: conditional interaction on a resolved element
- StorefrontCommands: outcome commands (open page, login, visibility assertions)
- BrowserSession: Playwright lifecycle and per-test isolation
"""

from storecheck.engine.browser import BrowserSession
from storecheck.engine.commands import StorefrontCommands, Submission
from storecheck.engine.interaction import click_if_present, fill_if_present, press_if_present
from storecheck.engine.locator import Locator, ResolvedElement, resolve, resolve_within
from storecheck.engine.outcomes import (
    AssertionMismatchError,
    CommandAssertionError,
    Expectation,
    Outcome,
    OutcomeSignal,
    StructuralNotFoundError,
)

__all__ = [
    "AssertionMismatchError",
    "BrowserSession",
    "CommandAssertionError",
    "Expectation",
    "Locator",
    "Outcome",
    "OutcomeSignal",
    "ResolvedElement",
    "StorefrontCommands",
    "StructuralNotFoundError",
    "Submission",
    "click_if_present",
    "fill_if_present",
    "press_if_present",
    "resolve",
    "resolve_within",
]
