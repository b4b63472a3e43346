"""
Accessibility Testing Helpers

Lightweight WCAG-oriented checks run directly against the DOM. Each check
returns a list of violations; callers decide which severities fail a test.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List

from playwright.sync_api import Page

from ..exceptions import AccessibilityError

logger = logging.getLogger(__name__)

INTERACTIVE_ELEMENTS = "a, button, input, select, textarea, [tabindex]"
FOCUS_CHECK_LIMIT = 10


class Severity(str, Enum):
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"


@dataclass(frozen=True)
class A11yViolation:
    """A single accessibility finding."""

    element: str
    issue: str
    severity: Severity

    def __str__(self) -> str:
        return f"{self.element}: {self.issue}"


def filter_by_severity(violations: Iterable[A11yViolation], *severities: Severity) -> List[A11yViolation]:
    """Keep only the violations with one of the given severities."""
    return [v for v in violations if v.severity in severities]


# =============================================================================
# Checks
# =============================================================================


def check_images_have_alt(page: Page) -> List[A11yViolation]:
    """Missing alt is critical; an empty alt may be decorative and is minor."""
    violations = []
    images = page.locator("img")

    for i in range(images.count()):
        image = images.nth(i)
        alt = image.get_attribute("alt")
        src = image.get_attribute("src")

        if alt is None:
            violations.append(
                A11yViolation(
                    element=f'img[src="{src}"]',
                    issue="Image missing alt attribute",
                    severity=Severity.CRITICAL,
                )
            )
        elif not alt.strip():
            violations.append(
                A11yViolation(
                    element=f'img[src="{src}"]',
                    issue="Image has empty alt (verify if decorative)",
                    severity=Severity.MINOR,
                )
            )

    return violations


def check_links_accessible(page: Page) -> List[A11yViolation]:
    """Links need visible text or an aria-label."""
    violations = []
    links = page.locator("a")

    for i in range(links.count()):
        link = links.nth(i)
        text = (link.text_content() or "").strip()
        aria_label = link.get_attribute("aria-label")

        if not text and not aria_label:
            href = link.get_attribute("href")
            violations.append(
                A11yViolation(
                    element=f'a[href="{href}"]',
                    issue="Link has no accessible name",
                    severity=Severity.CRITICAL,
                )
            )

    return violations


def evaluate_heading_levels(levels: List[int]) -> List[A11yViolation]:
    """
    Judge a document's heading outline.

    Args:
        levels: Heading levels in document order (h2 -> 2)
    """
    violations = []

    last_level = 0
    for level in levels:
        if last_level and level > last_level + 1:
            violations.append(
                A11yViolation(
                    element=f"h{level}",
                    issue=f"Heading level skipped from h{last_level} to h{level}",
                    severity=Severity.MODERATE,
                )
            )
        last_level = level

    h1_count = levels.count(1)
    if h1_count > 1:
        violations.append(
            A11yViolation(
                element="h1",
                issue=f"Multiple h1 elements found ({h1_count})",
                severity=Severity.MODERATE,
            )
        )
    elif h1_count == 0:
        violations.append(
            A11yViolation(
                element="h1",
                issue="No h1 element found on page",
                severity=Severity.SERIOUS,
            )
        )

    return violations


def check_heading_hierarchy(page: Page) -> List[A11yViolation]:
    headings: List[Dict] = page.evaluate(
        """() => Array.from(document.querySelectorAll('h1, h2, h3, h4, h5, h6')).map((h) => ({
            level: parseInt(h.tagName.charAt(1)),
            text: (h.textContent || '').trim(),
        }))"""
    )
    return evaluate_heading_levels([h["level"] for h in headings])


def check_focus_visible(page: Page) -> List[A11yViolation]:
    """Focus the first interactive elements and look for an outline or box-shadow."""
    violations = []
    elements = page.locator(INTERACTIVE_ELEMENTS)

    for i in range(min(elements.count(), FOCUS_CHECK_LIMIT)):
        element = elements.nth(i)
        element.focus()

        has_visible_focus = element.evaluate(
            """(el) => {
                const style = window.getComputedStyle(el);
                const outlineStyle = style.getPropertyValue('outline-style');
                const outlineWidth = style.getPropertyValue('outline-width');
                const boxShadow = style.getPropertyValue('box-shadow');
                return (outlineStyle !== 'none' && outlineWidth !== '0px') || boxShadow !== 'none';
            }"""
        )
        if not has_visible_focus:
            tag_name = element.evaluate("(el) => el.tagName.toLowerCase()")
            violations.append(
                A11yViolation(
                    element=tag_name,
                    issue="Element may not have visible focus indicator",
                    severity=Severity.SERIOUS,
                )
            )

    return violations


def check_page_language(page: Page) -> List[A11yViolation]:
    lang = page.evaluate("() => document.documentElement.lang")
    if not lang:
        return [
            A11yViolation(
                element="html",
                issue="Page language not specified",
                severity=Severity.SERIOUS,
            )
        ]
    return []


# =============================================================================
# Aggregates
# =============================================================================


def run_accessibility_checks(page: Page) -> List[A11yViolation]:
    """Images, links, headings and language, in that order."""
    violations = []
    violations.extend(check_images_have_alt(page))
    violations.extend(check_links_accessible(page))
    violations.extend(check_heading_hierarchy(page))
    violations.extend(check_page_language(page))

    if violations:
        logger.info(f"{len(violations)} accessibility findings on {page.url}")
    return violations


def assert_no_critical_violations(page: Page) -> None:
    """Raise AccessibilityError listing every critical violation."""
    critical = filter_by_severity(run_accessibility_checks(page), Severity.CRITICAL)
    if critical:
        messages = "\n".join(str(v) for v in critical)
        raise AccessibilityError(
            f"Critical accessibility violations found:\n{messages}", violations=critical
        )
