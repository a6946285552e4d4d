"""Command outcomes and the failure taxonomy surfaced to the test runner.

Resolution and conditional interaction never raise on absence; they return
empty results.  Only the outcome-command boundary converts a missing or
mismatched element into one of the exceptions below, which subclass
``AssertionError`` so pytest reports them as ordinary failed assertions.
"""

from __future__ import annotations

import dataclasses
import enum

from storecheck.engine.locator import Locator


class CommandAssertionError(AssertionError):
    """Base class for failures raised at the outcome-command boundary."""

    def __init__(self, message: str, locator: Locator | None = None) -> None:
        self.locator = locator
        if locator is not None:
            message = f"{message} [locator: {locator}]"
        super().__init__(message)


class StructuralNotFoundError(CommandAssertionError):
    """A precondition element (e.g. the login form) is absent."""


class AssertionMismatchError(CommandAssertionError):
    """An expected visible/hidden/error-state condition did not hold within budget."""


class OutcomeSignal(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    INDETERMINATE = "indeterminate"


class Expectation(enum.Enum):
    """Expected result of a credential submission."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclasses.dataclass(frozen=True)
class Outcome:
    """Terminal result of a command check."""

    signal: OutcomeSignal
    reason: str = ""
    locator: Locator | None = None

    @classmethod
    def success(cls) -> Outcome:
        return cls(OutcomeSignal.SUCCESS)

    @classmethod
    def failure(cls, reason: str, locator: Locator | None = None) -> Outcome:
        return cls(OutcomeSignal.FAILURE, reason, locator)

    @classmethod
    def indeterminate(cls, reason: str, locator: Locator | None = None) -> Outcome:
        return cls(OutcomeSignal.INDETERMINATE, reason, locator)

    @property
    def passed(self) -> bool:
        return self.signal is OutcomeSignal.SUCCESS

    def require(self) -> None:
        """Raise ``AssertionMismatchError`` unless this outcome is a success.

        An indeterminate outcome is never treated as a pass.
        """
        if self.signal is OutcomeSignal.SUCCESS:
            return
        if self.signal is OutcomeSignal.INDETERMINATE:
            raise AssertionMismatchError(f"Timed out: {self.reason}", self.locator)
        raise AssertionMismatchError(self.reason, self.locator)
