"""Single product page: details, reviews, cart."""

from __future__ import annotations

from typing import Any

from storecheck.fixtures import load_fixture
from storecheck.pages.base import BasePage

PRODUCT_NAME = "div.col-sm h1"
PRODUCT_PRICE = ".price-new"
DESCRIPTION_TAB = ".nav-link.active"
DESCRIPTION_HEADLINE = "#tab-description p:nth-child(1) b:nth-child(1)"
REVIEW_TAB = "#content > .nav > :nth-child(3) > .nav-link"
REVIEW_AUTHOR = "#input-author"
REVIEW_TEXT = "#input-text"
RATING_FIVE = 'input[value="5"]'
REVIEW_BUTTON = "#button-review"
ALERT = ".alert"
CART_BUTTON = "#button-cart"
CART_SUCCESS = ".alert.alert-success.alert-dismissible"
CART_DROPDOWN = ".dropdown.d-grid"
CART_MENU = ".dropdown-menu.dropdown-menu-end.p-2.show"


class ProductPage(BasePage):
    def product_name(self):
        return self.page.locator(PRODUCT_NAME)

    def product_price(self):
        return self.page.locator(PRODUCT_PRICE)

    def product_description(self):
        return self.page.locator(DESCRIPTION_TAB)

    def description_headline(self):
        return self.page.locator(DESCRIPTION_HEADLINE)

    def write_review(self, review: dict[str, Any] | None = None) -> None:
        """Open the review tab and type author and text (``example`` fixture by default)."""
        if review is None:
            review = load_fixture("example", self.store.config.fixtures_dir)
        self.page.locator(REVIEW_TAB).click()
        self.page.locator(REVIEW_AUTHOR).fill(str(review["name"]))
        self.page.locator(REVIEW_TEXT).fill(str(review["review"]))

    def click_on_rating(self) -> None:
        self.page.locator(RATING_FIVE).click()

    def submit_review(self) -> None:
        self.page.locator(REVIEW_BUTTON).click()

    def validate_success_message(self):
        return self.store.is_visible(ALERT)

    def click_on_cart(self) -> None:
        self.page.locator(CART_BUTTON).click()

    def validate_cart_success_message(self):
        return self.store.is_visible(CART_SUCCESS)

    def click_on_cart_button(self) -> None:
        self.page.locator(CART_DROPDOWN).click()

    def cart_item_menu(self):
        return self.page.locator(CART_MENU)

    def click_on_checkout(self) -> None:
        self.page.locator(CART_MENU).locator("a", has_text="Checkout").first.click()
