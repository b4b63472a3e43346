"""
Exception types raised by the suite's own helpers.

DOM expectation failures are not wrapped: they surface as Playwright's
AssertionError / TimeoutError so pytest reports them unchanged.
"""
from typing import List, Optional


class E2EError(Exception):
    """Base class for suite errors."""


class ConfigurationError(E2EError):
    """Configuration file or environment value is invalid."""


class AccessibilityError(E2EError):
    """Raised when critical accessibility violations are found."""

    def __init__(self, message: str, violations: Optional[List] = None):
        super().__init__(message)
        self.violations = violations or []


class VisualMismatchError(E2EError):
    """Screenshot differs from its stored baseline beyond the tolerance."""

    def __init__(self, name: str, ratio: float, diff_pixels: int, actual_path: str = None):
        self.name = name
        self.ratio = ratio
        self.diff_pixels = diff_pixels
        self.actual_path = actual_path
        super().__init__(
            f"Screenshot '{name}' differs from baseline: "
            f"{diff_pixels} pixels ({ratio:.2%})"
        )
