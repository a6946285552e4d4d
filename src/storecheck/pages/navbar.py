"""Top navigation bar: logo, search, account menu."""

from __future__ import annotations

from storecheck.pages.base import BasePage

LOGO = 'img[title="Your Store"]'
SEARCH_INPUT = 'input[placeholder="Search"]'
SEARCH_RESULTS = "#product-list"
MY_ACCOUNT = 'a[class="dropdown-toggle"] span[class="d-none d-lg-inline"]'
OPEN_DROPDOWN = ".dropdown-menu.show"


class Navbar(BasePage):
    def click_on_logo(self) -> None:
        self.page.locator(LOGO).click()

    def search_product(self, text: str) -> None:
        field = self.page.locator(SEARCH_INPUT)
        field.fill(text)
        field.press("Enter")

    def search_results(self):
        return self.page.locator(SEARCH_RESULTS)

    def click_on_my_account(self) -> None:
        self.page.locator(MY_ACCOUNT).click()

    def click_on_login(self) -> None:
        self.page.locator(OPEN_DROPDOWN).locator("a", has_text="Login").first.click()
