"""Home page product grid."""

from __future__ import annotations

from storecheck.engine.outcomes import AssertionMismatchError
from storecheck.pages.base import BasePage

PRODUCT_CARD = ".col.mb-3"


class HomePage(BasePage):
    def display_products(self):
        return self.page.locator(PRODUCT_CARD)

    def select_product(self, product_name: str) -> None:
        """Open the single product card whose text contains ``product_name``."""
        self.store.is_visible(PRODUCT_CARD)
        cards = self.page.locator(PRODUCT_CARD).filter(has_text=product_name)
        count = cards.count()
        if count != 1:
            raise AssertionMismatchError(
                f"Expected exactly one product card matching {product_name!r}, found {count}"
            )
        cards.locator("a", has_text=product_name).first.click()
