"""Account login screen."""

from __future__ import annotations

from storecheck.engine.commands import Submission
from storecheck.pages.base import BasePage

WARNING_MESSAGE = ".alert.alert-danger.alert-dismissible"


class LoginPage(BasePage):
    def open(self) -> None:
        self.store.open_login_page()

    def success_login(self) -> Submission:
        return self.store.login()

    def failed_login(self) -> Submission:
        return self.store.login_should_fail()

    def warning_message(self):
        return self.page.locator(WARNING_MESSAGE)
