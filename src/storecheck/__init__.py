"""StoreCheck -- resilient browser acceptance checks for storefronts."""

__version__ = "0.3.0"
