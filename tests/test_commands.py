"""Tests for storecheck.engine.commands -- outcome commands against a fake page."""

from __future__ import annotations

import logging

import pytest
from fakes import FakeElement, FakePage
from playwright.sync_api import Error as PlaywrightError

from storecheck.config import StoreCheckConfigError
from storecheck.credentials import Credentials
from storecheck.engine.commands import StorefrontCommands, Submission
from storecheck.engine.outcomes import AssertionMismatchError, StructuralNotFoundError

LOGIN_URL = "https://demo.codenbox.com/index.php?route=account/login"
LOGIN_FORM = 'form[action*="route=account/login"]'

VALID = Credentials("shopper@example.com", "correct-horse-battery")
INVALID = Credentials("nobody@example.com", "wrong-password-123")


def login_page(controls: dict[str, list[FakeElement]] | None = None, fields: bool = True) -> FakePage:
    """A page holding the account login form with the given submit controls."""
    children: dict[str, list[FakeElement]] = {}
    if fields:
        children["#input-email"] = [FakeElement("email")]
        children["#input-password"] = [FakeElement("password")]
    children.update(controls or {})
    page = FakePage(url=LOGIN_URL)
    page.add(LOGIN_FORM, FakeElement("login-form", children=children))
    return page


@pytest.fixture
def commands(fast_config):
    def make(page: FakePage) -> StorefrontCommands:
        return StorefrontCommands(page, fast_config, default_credentials=VALID, invalid_credentials=INVALID)

    return make


# ---------------------------------------------------------------------------
# 1. Navigate-and-dismiss
# ---------------------------------------------------------------------------


class TestOpenEntryPage:
    def test_dismisses_cookie_banner_and_keeps_route(self, commands):
        page = FakePage()
        page.add(".cookie", FakeElement("cookie-banner"))

        dismissed = commands(page).open_login_page()

        assert dismissed == ".cookie"
        assert page.clicks() == [("click", "cookie-banner", True)]
        assert "route=account/login" in page.url

    def test_navigates_to_resolved_url(self, commands):
        page = FakePage()
        commands(page).open_login_page()
        assert page.actions[0] == ("goto", LOGIN_URL)

    def test_no_banner_means_no_click(self, commands):
        page = FakePage()

        dismissed = commands(page).open_login_page()

        assert dismissed is None
        assert page.clicks() == []

    def test_accept_text_banner(self, commands):
        page = FakePage()
        page.add('button:has-text("Accept")', FakeElement("accept-button"))

        assert commands(page).open_login_page() == 'button:has-text("Accept")'
        assert page.clicks() == [("click", "accept-button", True)]

    def test_only_first_banner_candidate_clicked(self, commands):
        page = FakePage()
        page.add(".cc-window", FakeElement("cc-window"))
        page.add(".cc-accept", FakeElement("cc-accept"))

        assert commands(page).open_login_page() == ".cc-window"
        assert len(page.clicks()) == 1

    def test_banner_click_error_moves_to_next_candidate(self, commands, caplog):
        def detached(_page):
            raise PlaywrightError("Element is not attached to the DOM")

        page = FakePage()
        page.add(".cookie", FakeElement("stale", on_click=detached))
        page.add(".btn-accept", FakeElement("accept"))

        with caplog.at_level(logging.WARNING, logger="storecheck.engine.commands"):
            dismissed = commands(page).open_login_page()

        assert dismissed == ".btn-accept"
        assert "could not be clicked" in caplog.text

    def test_wrong_location_fails(self, commands):
        page = FakePage()
        page.redirects[LOGIN_URL] = "https://demo.codenbox.com/index.php?route=common/home"

        with pytest.raises(AssertionMismatchError, match="Expected location to contain"):
            commands(page).open_login_page()
        assert page.waits == [100, 100, 100]

    def test_location_settles_within_budget(self, commands):
        page = FakePage()
        page.redirects[LOGIN_URL] = "https://demo.codenbox.com/index.php?route=common/home"

        def client_redirect(p, n):
            p.url = LOGIN_URL

        page.on_wait = client_redirect

        commands(page).open_login_page()
        assert page.waits == [100]

    def test_navigation_error_is_assertion_mismatch(self, commands):
        page = FakePage()
        page.goto_error = "net::ERR_NAME_NOT_RESOLVED at https://demo.codenbox.com\ncall log"

        with pytest.raises(AssertionMismatchError, match="ERR_NAME_NOT_RESOLVED"):
            commands(page).open_login_page()

    def test_custom_route_and_fragment(self, commands):
        page = FakePage()
        commands(page).open_entry_page("index.php?route=checkout/cart", "checkout/cart")
        assert page.url.endswith("route=checkout/cart")


# ---------------------------------------------------------------------------
# 2. Submit-credentials
# ---------------------------------------------------------------------------


class TestLoginSubmission:
    def test_missing_form_is_structural(self, commands):
        page = FakePage(url=LOGIN_URL)

        with pytest.raises(StructuralNotFoundError, match="Login form not found"):
            commands(page).login()
        assert page.submissions() == []

    def test_missing_fields_is_structural(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]}, fields=False)

        with pytest.raises(StructuralNotFoundError, match="missing a required field"):
            commands(page).login()
        assert page.submissions() == []

    def test_fills_both_fields(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        form = page.dom[LOGIN_FORM][0]

        commands(page).login()

        assert form.children["#input-email"][0].value == VALID.identifier
        assert form.children["#input-password"][0].value == VALID.secret

    def test_submit_button_beats_value_input(self, commands):
        page = login_page(
            {
                'button[type="submit"]': [FakeElement("submit-button")],
                'input[value="Login"]': [FakeElement("login-input")],
            }
        )

        submission = commands(page).login()

        assert submission == Submission("click", 'button[type="submit"]')
        assert page.submissions() == [("click", "submit-button", True)]

    def test_value_input_used_when_no_typed_control(self, commands):
        page = login_page({'input[value="Login"]': [FakeElement("login-input")]})

        submission = commands(page).login()

        assert submission.descriptor == 'input[value="Login"]'
        assert page.submissions() == [("click", "login-input", True)]

    def test_text_only_sign_in_button(self, commands):
        page = login_page({'button:text-matches("login|sign in", "i")': [FakeElement("sign-in")]})

        submission = commands(page).login()

        assert submission.method == "click"
        assert page.submissions() == [("click", "sign-in", True)]

    def test_button_with_wrapped_label(self, commands):
        page = login_page({'button:has(:text-matches("login|sign in", "i"))': [FakeElement("icon-sign-in")]})

        submission = commands(page).login()

        assert submission.descriptor == 'button:has(:text-matches("login|sign in", "i"))'
        assert page.submissions() == [("click", "icon-sign-in", True)]

    def test_no_control_presses_enter_once(self, commands):
        page = login_page()

        submission = commands(page).login()

        assert submission == Submission("enter")
        assert page.submissions() == [("press", "password", "Enter")]

    def test_late_submit_control_is_found(self, commands):
        page = login_page()
        form = page.dom[LOGIN_FORM][0]

        def render_button(p, n):
            form.children['button[type="submit"]'] = [FakeElement("late-submit")]

        page.on_wait = render_button

        submission = commands(page).login()

        assert submission.method == "click"
        assert page.submissions() == [("click", "late-submit", True)]

    def test_submit_click_error_does_not_fall_back_to_enter(self, commands):
        def covered(_page):
            raise PlaywrightError("Timeout 5000ms exceeded")

        page = login_page({'button[type="submit"]': [FakeElement("submit", on_click=covered)]})

        with pytest.raises(AssertionMismatchError, match="Login submission failed"):
            commands(page).login()
        assert [a for a in page.actions if a[0] == "press"] == []

    def test_controls_outside_form_are_ignored(self, commands):
        page = login_page()
        page.add('button[type="submit"]', FakeElement("newsletter-submit"))

        commands(page).login()

        assert page.submissions() == [("press", "password", "Enter")]

    def test_secret_never_logged(self, commands, caplog):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        page.add(".alert", FakeElement("alert"))

        with caplog.at_level(logging.DEBUG, logger="storecheck"):
            commands(page).login()
            commands(page).login_should_fail()

        assert VALID.secret not in caplog.text
        assert INVALID.secret not in caplog.text
        assert VALID.identifier in caplog.text

    def test_explicit_credentials_override_configured(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        other = Credentials("other@example.com", "another-secret")

        commands(page).login(other)

        assert page.dom[LOGIN_FORM][0].children["#input-email"][0].value == "other@example.com"

    def test_missing_credentials_is_config_error(self, fast_config):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        store = StorefrontCommands(page, fast_config)

        with pytest.raises(StoreCheckConfigError, match="No 'default' credentials"):
            store.login()
        assert page.actions == []


# ---------------------------------------------------------------------------
# 3. Error-state verification
# ---------------------------------------------------------------------------


class TestLoginShouldFail:
    def test_synchronous_alert_passes(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        page.add(".alert", FakeElement("alert"))

        commands(page).login_should_fail()

        assert page.waits == []

    def test_alert_rendered_after_submit_passes(self, commands):
        def show_alert(p):
            p.on_wait = lambda p2, n: n == 2 and p2.add(".alert", FakeElement("alert"))

        page = login_page({'button[type="submit"]': [FakeElement("submit", on_click=show_alert)]})

        commands(page).login_should_fail()

        assert page.waits == [100, 100]

    def test_invalid_feedback_counts(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        page.add(".invalid-feedback", FakeElement("feedback"))

        commands(page).login_should_fail()

    def test_no_indicator_times_out(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})

        with pytest.raises(AssertionMismatchError, match="Timed out: no error indicator within 300 ms"):
            commands(page).login_should_fail()

    def test_hidden_indicator_fails(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        page.add(".alert", FakeElement("alert", visible=False))

        with pytest.raises(AssertionMismatchError, match="exists but is not visible"):
            commands(page).login_should_fail()

    def test_uses_invalid_profile(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})
        page.add(".alert", FakeElement("alert"))

        commands(page).login_should_fail()

        assert page.dom[LOGIN_FORM][0].children["#input-email"][0].value == INVALID.identifier

    def test_success_login_does_not_check_indicator(self, commands):
        page = login_page({'button[type="submit"]': [FakeElement("submit")]})

        commands(page).login()

        assert page.waits == []


# ---------------------------------------------------------------------------
# 4. Presence / absence
# ---------------------------------------------------------------------------


class TestVisibility:
    def test_is_visible_returns_element(self, commands):
        page = FakePage()
        page.add("#logo", FakeElement("logo"))

        resolved = commands(page).is_visible("#logo")

        assert resolved.descriptor == "#logo"

    def test_is_visible_uses_fallback(self, commands):
        page = FakePage()
        page.add("header img", FakeElement("logo"))

        assert commands(page).is_visible(["#logo", "header img"]).descriptor == "header img"

    def test_is_visible_absent_times_out(self, commands):
        page = FakePage()

        with pytest.raises(AssertionMismatchError, match="Timed out: element not found"):
            commands(page).is_visible("#logo")

    def test_is_visible_present_but_hidden(self, commands):
        page = FakePage()
        page.add("#logo", FakeElement("logo", visible=False))

        with pytest.raises(AssertionMismatchError, match="present but not visible"):
            commands(page).is_visible("#logo")

    def test_is_hidden_absent_passes(self, commands):
        page = FakePage()
        commands(page).is_hidden(".alert")
        assert page.waits == []

    def test_is_hidden_invisible_passes(self, commands):
        page = FakePage()
        page.add(".alert", FakeElement("alert", visible=False))
        commands(page).is_hidden(".alert")

    def test_is_hidden_waits_for_element_to_go(self, commands):
        page = FakePage()
        page.add(".spinner", FakeElement("spinner"))
        page.on_wait = lambda p, n: n == 2 and p.dom.pop(".spinner")

        commands(page).is_hidden(".spinner")

        assert page.waits == [100, 100]

    def test_is_hidden_visible_fails(self, commands):
        page = FakePage()
        page.add(".alert", FakeElement("alert"))

        with pytest.raises(AssertionMismatchError, match="expected hidden or absent"):
            commands(page).is_hidden(".alert")
        assert page.waits == [100, 100, 100]
