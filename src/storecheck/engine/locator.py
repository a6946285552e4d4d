"""Locator resolution -- find the first matching alternative without raising.

A ``Locator`` is an ordered tuple of Playwright selector strings that all
describe the same logical element (e.g. three possible submit-button
shapes).  ``resolve()`` walks the descriptors in priority order with a
single query pass each and returns the first match, or an empty
``ResolvedElement`` when nothing matches.  Malformed descriptors are
skipped.  Waiting is left to the caller; ``resolve_within()`` re-runs the
pass under an explicit wait budget.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Union

from playwright.sync_api import Error as PlaywrightError

if TYPE_CHECKING:
    from playwright.sync_api import Locator as PlaywrightLocator
    from playwright.sync_api import Page

logger = logging.getLogger("storecheck.engine.locator")


@dataclasses.dataclass(frozen=True)
class Locator:
    """Ordered fallback alternatives for one logical UI target. First match wins."""

    descriptors: tuple[str, ...]
    name: str = ""

    def __post_init__(self) -> None:
        descriptors = (self.descriptors,) if isinstance(self.descriptors, str) else tuple(self.descriptors)
        if not descriptors:
            raise ValueError("Locator needs at least one descriptor")
        if not all(isinstance(d, str) and d.strip() for d in descriptors):
            raise ValueError(f"Locator descriptors must be non-empty strings: {descriptors!r}")
        object.__setattr__(self, "descriptors", descriptors)

    @classmethod
    def of(cls, *descriptors: str, name: str = "") -> Locator:
        return cls(descriptors, name)

    @classmethod
    def coerce(cls, value: LocatorLike) -> Locator:
        """Accept a Locator, a single selector string, or a sequence of selectors."""
        if isinstance(value, Locator):
            return value
        if isinstance(value, str):
            return cls((value,))
        return cls(tuple(value))

    def __str__(self) -> str:
        joined = " | ".join(self.descriptors)
        return f"{self.name} ({joined})" if self.name else joined


LocatorLike = Union[Locator, str, Sequence[str]]


@dataclasses.dataclass(frozen=True)
class ResolvedElement:
    """Zero or one live element, tagged with the descriptor that matched.

    Valid only for the command invocation that produced it -- the document
    may re-render between steps, so callers re-resolve instead of caching.
    """

    element: PlaywrightLocator | None = None
    descriptor: str | None = None

    @property
    def present(self) -> bool:
        return self.element is not None

    @classmethod
    def empty(cls) -> ResolvedElement:
        return _EMPTY


_EMPTY = ResolvedElement()


def resolve(locator: LocatorLike, scope: Any, visible_only: bool = False) -> ResolvedElement:
    """Evaluate ``locator`` against ``scope`` (a Page or a scoping element).

    Returns the first element of the first non-empty descriptor match.  With
    ``visible_only`` a descriptor only counts when one of its matches is
    visible, and that visible match is returned.
    """
    locator = Locator.coerce(locator)
    for descriptor in locator.descriptors:
        try:
            matches = scope.locator(descriptor)
            count = matches.count()
            if count == 0:
                logger.debug("No match for %r", descriptor)
                continue
            if not visible_only:
                logger.debug("Resolved %r (%d match%s)", descriptor, count, "" if count == 1 else "es")
                return ResolvedElement(matches.first, descriptor)
            for index in range(count):
                candidate = matches.nth(index)
                if candidate.is_visible():
                    logger.debug("Resolved visible %r at index %d", descriptor, index)
                    return ResolvedElement(candidate, descriptor)
            logger.debug("Only hidden matches for %r", descriptor)
        except PlaywrightError as exc:
            logger.warning("Skipping descriptor %r: %s", descriptor, first_line(exc))
            continue
    return ResolvedElement.empty()


def resolve_within(
    page: Page,
    locator: LocatorLike,
    timeout_ms: int,
    poll_interval_ms: int,
    scope: Any = None,
    visible_only: bool = False,
) -> ResolvedElement:
    """Repeat ``resolve()`` until it finds something or the wait budget is spent.

    Suspends only through ``page.wait_for_timeout`` between passes.  An empty
    result after the budget means the element could not be confirmed.
    """
    scope = page if scope is None else scope
    waited = 0
    while True:
        resolved = resolve(locator, scope, visible_only=visible_only)
        if resolved.present or waited >= timeout_ms:
            return resolved
        page.wait_for_timeout(poll_interval_ms)
        waited += poll_interval_ms


def first_line(exc: Exception) -> str:
    """First line of an exception message (Playwright errors carry long call logs)."""
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__
