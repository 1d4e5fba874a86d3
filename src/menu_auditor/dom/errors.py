# src/menu_auditor/dom/errors.py
from typing import Any, Optional


class ParseError(Exception):
    """
    Raised when a fixture cannot be materialized into an HTMLDocument.
    Fatal for the whole run: no checks are evaluated.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not parse '{source}': {reason}")


class SelectorError(ValueError):
    """Raised when a selector expression cannot be compiled."""


class AssertionFailure(AssertionError):
    """
    A single structural expectation was not met.

    Carries the selector that located the target together with the expected
    and observed values so that reports can show both sides of the mismatch.
    """

    def __init__(
            self,
            message: str,
            selector: Optional[str] = None,
            expected: Any = None,
            observed: Any = None
    ):
        self.message = message
        self.selector = selector
        self.expected = expected
        self.observed = observed
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.message]
        if self.selector:
            parts.append(f"selector={self.selector!r}")
        if self.expected is not None:
            parts.append(f"expected={self.expected!r}")
        if self.observed is not None:
            parts.append(f"observed={self.observed!r}")
        return " | ".join(parts)


class MissingElementError(AssertionFailure):
    """A required element is absent from the document."""

    def __init__(self, selector: str, what: str):
        self.what = what
        super().__init__(f"Missing {what}", selector=selector, expected="at least 1 match", observed=0)
