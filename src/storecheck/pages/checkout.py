"""Checkout page: login link and order total verification."""

from __future__ import annotations

import logging
import re

from storecheck.engine.outcomes import AssertionMismatchError
from storecheck.pages.base import BasePage

logger = logging.getLogger("storecheck.pages.checkout")

LOGIN_LINK = 'form[id="form-register"] p a strong'
TOTALS_COLUMN = "table.table.table-bordered.table-hover tfoot tr td:nth-child(2)"

_NON_NUMERIC = re.compile(r"[^0-9.-]+")


def parse_amount(text: str) -> float:
    """Parse a displayed price such as ``"$1,202.00"`` into a float."""
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"Not a price: {text!r}") from None


def check_totals(amounts: list[float]) -> float:
    """Assert every amount except the last sums to the last one. Returns the total.

    Compared at cent precision so float noise does not fail the check.
    """
    if len(amounts) < 2:
        raise AssertionMismatchError(f"Expected line items and a total, got {len(amounts)} amount(s)")
    *line_items, total = amounts
    subtotal = sum(line_items)
    if round(subtotal, 2) != round(total, 2):
        raise AssertionMismatchError(f"Line items sum to {subtotal:.2f} but the displayed total is {total:.2f}")
    return total


class CheckoutPage(BasePage):
    def click_on_login_link(self) -> None:
        self.page.locator(LOGIN_LINK).click()

    def validate_checkout_amount(self) -> float:
        self.store.is_visible(TOTALS_COLUMN)
        texts = self.page.locator(TOTALS_COLUMN).all_inner_texts()
        try:
            amounts = [parse_amount(t) for t in texts]
        except ValueError as exc:
            raise AssertionMismatchError(f"Unreadable checkout amount: {exc}") from exc
        logger.info("Checkout amounts: %s", amounts)
        return check_totals(amounts)
