"""
Base Page Object

Provides common functionality for all page objects.
"""
import logging
import re
from pathlib import Path
from typing import Optional, Pattern, Union
from urllib.parse import urljoin

from playwright.sync_api import Locator, Page, expect

from ..data import SITE_METADATA

logger = logging.getLogger(__name__)


class BasePage:
    """Base class for all page objects.

    Subclasses set PAGE_PATH (relative to the base URL) and PAGE_TITLE.
    """

    PAGE_PATH: str
    PAGE_TITLE: Union[Pattern, str]

    def __init__(
        self,
        page: Page,
        base_url: str = SITE_METADATA.base_url,
        screenshots_dir: Union[str, Path] = "test-results/screenshots",
    ):
        self.page = page
        self.base_url = base_url
        self.screenshots_dir = Path(screenshots_dir)

    # =========================================================================
    # Navigation
    # =========================================================================

    def url_for(self, path: str = "") -> str:
        """Absolute URL for a path relative to the base URL."""
        return urljoin(self.base_url, path)

    def goto(self, path: str = "") -> None:
        """Navigate to a path relative to base URL."""
        url = self.url_for(path)
        logger.debug(f"Navigating to {url}")
        self.page.goto(url)

    def navigate(self) -> "BasePage":
        """Navigate to the page and wait for it to settle."""
        self.goto(self.PAGE_PATH)
        self.wait_for_page_load()
        return self

    def wait_for_page_load(self) -> None:
        """Wait for the DOM and then the network to go quiet."""
        self.page.wait_for_load_state("domcontentloaded")
        self.page.wait_for_load_state("networkidle")

    def wait_for_navigation(self) -> None:
        self.page.wait_for_load_state("networkidle")

    def current_url(self) -> str:
        """Get current page URL."""
        return self.page.url

    def page_title(self) -> str:
        """Get the document title."""
        return self.page.title()

    def verify_page_title(self) -> None:
        """Assert the title matches PAGE_TITLE."""
        expect(self.page).to_have_title(self.PAGE_TITLE)

    # =========================================================================
    # Element Interaction
    # =========================================================================

    def click_element(self, locator: Locator) -> None:
        """Wait for an element to be visible, then click it."""
        locator.wait_for(state="visible")
        locator.click()

    def hover_element(self, locator: Locator) -> None:
        locator.hover()

    def scroll_to_element(self, locator: Locator) -> None:
        locator.scroll_into_view_if_needed()

    def press_key(self, key: str) -> None:
        """Press a keyboard key."""
        self.page.keyboard.press(key)

    # =========================================================================
    # Element State
    # =========================================================================

    def is_element_visible(self, locator: Locator) -> bool:
        return locator.is_visible()

    def get_element_text(self, locator: Locator) -> str:
        """Get element text content ("" when the element has none)."""
        return locator.text_content() or ""

    def get_attribute(self, locator: Locator, attribute: str) -> Optional[str]:
        """Get element attribute."""
        return locator.get_attribute(attribute)

    def get_element_count(self, locator: Locator) -> int:
        """Count matching elements."""
        return locator.count()

    # =========================================================================
    # Waiting
    # =========================================================================

    def wait_for_element(self, locator: Locator, timeout: int = 10000) -> None:
        """Wait for element to become visible."""
        locator.wait_for(state="visible", timeout=timeout)

    # =========================================================================
    # Assertions
    # =========================================================================

    def verify_element_text(self, locator: Locator, expected: Union[str, Pattern]) -> None:
        """Assert element text."""
        expect(locator).to_have_text(expected)

    def verify_element_visible(self, locator: Locator) -> None:
        """Assert element is visible."""
        expect(locator).to_be_visible()

    def verify_element_attribute(
        self, locator: Locator, attribute: str, value: Union[str, Pattern]
    ) -> None:
        """Assert element attribute value."""
        expect(locator).to_have_attribute(attribute, value)

    def expect_url(self, pattern: Union[str, Pattern]) -> None:
        """Assert URL matches pattern (strings are treated as case-insensitive regex)."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern, re.IGNORECASE)
        expect(self.page).to_have_url(pattern)

    # =========================================================================
    # Screenshots
    # =========================================================================

    def take_screenshot(self, name: str) -> bytes:
        """Save a full page screenshot as <screenshots_dir>/<name>.png."""
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        path = self.screenshots_dir / f"{name}.png"
        logger.info(f"Saving screenshot: {path}")
        return self.page.screenshot(path=str(path), full_page=True)
