"""StoreCheck outcome commands -- the entry points page objects and tests call.

Each command composes locator resolution and conditional interaction into
one deterministic pass/fail step:

- ``open_entry_page``: navigate, dismiss an optional cookie banner, assert the route
- ``login`` / ``login_should_fail``: fill the login form and submit it exactly once
- ``is_visible`` / ``is_hidden``: presence/absence assertions

Optional elements (banner, individual submit-control shapes) are recovered
locally.  Structural preconditions and expected UI states that do not hold
within the configured wait budget raise ``CommandAssertionError``
subclasses.  There is no step-level retry; whole-test re-execution is the
runner's job.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from storecheck.config import StoreCheckConfig, StoreCheckConfigError
from storecheck.credentials import Credentials
from storecheck.engine.interaction import click_if_present, fill_if_present, press_if_present
from storecheck.engine.locator import (
    Locator,
    LocatorLike,
    ResolvedElement,
    first_line,
    resolve,
    resolve_within,
)
from storecheck.engine.outcomes import (
    AssertionMismatchError,
    Expectation,
    Outcome,
    StructuralNotFoundError,
)

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger("storecheck.engine.commands")

# -- Locators ------------------------------------------------------------

# Consent overlays, most specific first.  Absence is normal.
BANNER_LOCATOR = Locator.of(
    ".cookie",
    ".cc-window",
    ".cookie-banner",
    '[id*="cookie"]',
    ".btn-accept",
    ".cc-accept",
    'button:has-text("Accept")',
    'button:has-text("Aceptar")',
    name="cookie banner",
)

EMAIL_FIELD = Locator.of("#input-email", 'input[name="email"]', 'input[type="email"]', name="email field")

PASSWORD_FIELD = Locator.of(
    "#input-password", 'input[name="password"]', 'input[type="password"]', name="password field"
)

# Priority order decides which control is used when several are present.
SUBMIT_CONTROL = Locator.of(
    'button[type="submit"]',
    'input[type="submit"]',
    'input[value="Login"]',
    'button:text-matches("login|sign in", "i")',
    'button:has(:text-matches("login|sign in", "i"))',
    name="submit control",
)

# Any one of the storefront's generic error classes counts.
ERROR_INDICATOR = Locator.of(
    ".alert",
    ".text-danger",
    ".warning",
    ".invalid-feedback",
    name="error indicator",
)


def login_form_locator(route_fragment: str) -> Locator:
    return Locator.of(f'form[action*="{route_fragment}"]', name="login form")


@dataclasses.dataclass(frozen=True)
class Submission:
    """How a credential form was submitted."""

    method: str  # "click" or "enter"
    descriptor: str | None = None


class StorefrontCommands:
    """Outcome commands bound to one page session.

    Credentials come in through the constructor (or per call) and are never
    written to logs; only the identifier is.
    """

    def __init__(
        self,
        page: Page,
        config: StoreCheckConfig,
        default_credentials: Credentials | None = None,
        invalid_credentials: Credentials | None = None,
    ) -> None:
        self._page = page
        self._config = config
        self._default_credentials = default_credentials
        self._invalid_credentials = invalid_credentials
        self._login_form = login_form_locator(config.login_route_fragment)

    @property
    def page(self) -> Page:
        return self._page

    @property
    def config(self) -> StoreCheckConfig:
        return self._config

    # -- Navigate-And-Dismiss --------------------------------------------

    def open_entry_page(self, route: str, expected_fragment: str | None = None) -> str | None:
        """Navigate to ``route``, dismiss a cookie banner if one shows, assert the location.

        Returns the banner descriptor that was clicked, or None when no
        banner was present.
        """
        url = self._config.resolve_url(route)
        expected = route if expected_fragment is None else expected_fragment

        logger.info("Navigating to %s", url)
        try:
            self._page.goto(url, wait_until="domcontentloaded", timeout=self._config.page_load_timeout_ms)
        except PlaywrightError as exc:
            raise AssertionMismatchError(f"Navigation to {url} failed: {first_line(exc)}") from exc
        logger.debug("DOM ready at %s", self._page.url)

        dismissed = self.dismiss_banner()
        self._require_location(expected)
        logger.info("Settled at %s", self._page.url)
        return dismissed

    def open_login_page(self) -> str | None:
        """Open the account login route."""
        return self.open_entry_page(self._config.login_route, self._config.login_route_fragment)

    def dismiss_banner(self) -> str | None:
        """Click the first banner candidate present. Never fails the test."""
        for descriptor in BANNER_LOCATOR.descriptors:
            resolved = resolve(Locator.of(descriptor), self._page)
            try:
                clicked = click_if_present(resolved)
            except PlaywrightError as exc:
                logger.warning("Banner candidate %r could not be clicked: %s", descriptor, first_line(exc))
                continue
            if clicked:
                logger.info("Dismissed cookie banner via %r", descriptor)
                return descriptor
        logger.debug("No cookie banner present")
        return None

    def _require_location(self, fragment: str) -> None:
        waited = 0
        while fragment not in self._page.url:
            if waited >= self._config.command_timeout_ms:
                Outcome.failure(
                    f"Expected location to contain {fragment!r}, got {self._page.url!r}"
                ).require()
            self._page.wait_for_timeout(self._config.poll_interval_ms)
            waited += self._config.poll_interval_ms

    # -- Submit-Credentials ----------------------------------------------

    def login(self, credentials: Credentials | None = None) -> Submission:
        """Submit valid credentials. Success is verified by the caller's page assertions."""
        return self.submit(self._pick(credentials, self._default_credentials, "default"), Expectation.SUCCESS)

    def login_should_fail(self, credentials: Credentials | None = None) -> Submission:
        """Submit invalid credentials and assert a visible error indicator appears."""
        return self.submit(self._pick(credentials, self._invalid_credentials, "invalid"), Expectation.FAILURE)

    def submit(self, credentials: Credentials, expected: Expectation) -> Submission:
        """Fill the login form, dispatch exactly one submission, verify per ``expected``."""
        form = resolve_within(
            self._page,
            self._login_form,
            self._config.form_timeout_ms,
            self._config.poll_interval_ms,
        )
        if not form.present:
            raise StructuralNotFoundError(
                f"Login form not found within {self._config.form_timeout_ms} ms", self._login_form
            )
        scope = form.element

        email = self._require_field(EMAIL_FIELD, scope)
        password = self._require_field(PASSWORD_FIELD, scope)
        fill_if_present(email, credentials.identifier)
        fill_if_present(password, credentials.secret, sensitive=True)

        submission = self._dispatch_submission(scope, password)
        logger.info(
            "Submitted login for %s via %s%s (expecting %s)",
            credentials.identifier,
            submission.method,
            f" {submission.descriptor!r}" if submission.descriptor else "",
            expected.value,
        )

        if expected is Expectation.FAILURE:
            self._verify_error_indicator().require()
        return submission

    def _dispatch_submission(self, scope, password: ResolvedElement) -> Submission:
        """Click the highest-priority submit control, else press Enter. Never both."""
        control = resolve_within(
            self._page,
            SUBMIT_CONTROL,
            self._config.submit_probe_timeout_ms,
            self._config.poll_interval_ms,
            scope=scope,
        )
        try:
            if click_if_present(control):
                return Submission("click", control.descriptor)
            logger.info("No submit control matched; pressing Enter in the password field")
            press_if_present(password, "Enter")
        except PlaywrightError as exc:
            raise AssertionMismatchError(f"Login submission failed: {first_line(exc)}", SUBMIT_CONTROL) from exc
        return Submission("enter")

    def _verify_error_indicator(self) -> Outcome:
        visible = resolve_within(
            self._page,
            ERROR_INDICATOR,
            self._config.error_timeout_ms,
            self._config.poll_interval_ms,
            visible_only=True,
        )
        if visible.present:
            logger.info("Login rejected as expected; error indicator %r visible", visible.descriptor)
            return Outcome.success()
        if resolve(ERROR_INDICATOR, self._page).present:
            return Outcome.failure("Error indicator exists but is not visible", ERROR_INDICATOR)
        return Outcome.indeterminate(
            f"no error indicator within {self._config.error_timeout_ms} ms after submitting invalid credentials",
            ERROR_INDICATOR,
        )

    def _require_field(self, locator: Locator, scope) -> ResolvedElement:
        resolved = resolve(locator, scope)
        if not resolved.present:
            raise StructuralNotFoundError("Login form is missing a required field", locator)
        return resolved

    @staticmethod
    def _pick(explicit: Credentials | None, configured: Credentials | None, profile: str) -> Credentials:
        credentials = explicit or configured
        if credentials is None:
            raise StoreCheckConfigError(
                f"No '{profile}' credentials configured\n\nTo fix: storecheck config show"
            )
        return credentials

    # -- Presence / Absence ----------------------------------------------

    def is_visible(self, locator: LocatorLike) -> ResolvedElement:
        """Assert that ``locator`` resolves to a visible element within the command budget."""
        locator = Locator.coerce(locator)
        resolved = resolve_within(
            self._page,
            locator,
            self._config.command_timeout_ms,
            self._config.poll_interval_ms,
            visible_only=True,
        )
        if resolved.present:
            return resolved
        if resolve(locator, self._page).present:
            outcome = Outcome.failure("Element is present but not visible", locator)
        else:
            outcome = Outcome.indeterminate(f"element not found within {self._config.command_timeout_ms} ms", locator)
        outcome.require()
        return resolved

    def is_hidden(self, locator: LocatorLike) -> None:
        """Assert ``locator`` is absent or not visible.

        "Not in the DOM" and "in the DOM but not visible" both pass.  A
        visible match is given the command budget to disappear.
        """
        locator = Locator.coerce(locator)
        waited = 0
        while True:
            if not resolve(locator, self._page).present:
                logger.debug("%s absent; counts as hidden", locator)
                return
            if not resolve(locator, self._page, visible_only=True).present:
                logger.debug("%s present but not visible", locator)
                return
            if waited >= self._config.command_timeout_ms:
                break
            self._page.wait_for_timeout(self._config.poll_interval_ms)
            waited += self._config.poll_interval_ms
        Outcome.failure("Element is visible, expected hidden or absent", locator).require()

