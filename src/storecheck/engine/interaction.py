"""Conditional interaction -- act on a resolved element, or skip silently."""

from __future__ import annotations

import logging

from storecheck.engine.locator import ResolvedElement

logger = logging.getLogger("storecheck.engine.interaction")

# Upper bound for the click itself once the element is known to exist (ms)
CLICK_TIMEOUT_MS = 5_000


def click_if_present(resolved: ResolvedElement) -> bool:
    """Force-click ``resolved`` if it holds an element.

    The click bypasses visibility and occlusion checks, so partially covered
    overlays such as cookie banners still receive it.  Returns True when
    the click was dispatched, False (and does nothing) for an empty result.
    Do not call twice with the same ``resolved``; re-resolve instead.
    """
    if not resolved.present:
        return False
    resolved.element.click(force=True, timeout=CLICK_TIMEOUT_MS)
    logger.debug("Clicked %r", resolved.descriptor)
    return True


def press_if_present(resolved: ResolvedElement, key: str) -> bool:
    """Press ``key`` in ``resolved`` if it holds an element."""
    if not resolved.present:
        return False
    resolved.element.press(key)
    logger.debug("Pressed %s in %r", key, resolved.descriptor)
    return True


def fill_if_present(resolved: ResolvedElement, value: str, sensitive: bool = False) -> bool:
    """Replace the field's content with ``value`` if it holds an element.

    ``fill`` clears the field before typing.  With ``sensitive`` the value
    is kept out of log output entirely.
    """
    if not resolved.present:
        return False
    resolved.element.fill(value)
    if sensitive:
        logger.debug("Filled %r (value hidden)", resolved.descriptor)
    else:
        logger.debug("Filled %r with %r", resolved.descriptor, value)
    return True
