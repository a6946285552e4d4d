"""Page objects for the storefront screens.

Each class groups one screen's selectors and drives it through the
command layer (assertions) or plain Playwright calls (direct clicks).
"""

from storecheck.pages.base import BasePage
from storecheck.pages.checkout import CheckoutPage, parse_amount
from storecheck.pages.home import HomePage
from storecheck.pages.login import LoginPage
from storecheck.pages.navbar import Navbar
from storecheck.pages.product import ProductPage

__all__ = [
    "BasePage",
    "CheckoutPage",
    "HomePage",
    "LoginPage",
    "Navbar",
    "ProductPage",
    "parse_amount",
]
