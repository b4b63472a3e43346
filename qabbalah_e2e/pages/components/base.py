"""
Base Component

Shared plumbing for reusable page sections.
"""
from typing import List

from playwright.sync_api import Locator, Page


class BaseComponent:
    """A section of a page that several page objects compose."""

    def __init__(self, page: Page):
        self.page = page

    def _texts(self, locator: Locator) -> List[str]:
        """Trimmed, non-empty text of every element the locator matches."""
        texts = []
        for i in range(locator.count()):
            text = (locator.nth(i).text_content() or "").strip()
            if text:
                texts.append(text)
        return texts

    def _attributes(self, locator: Locator, name: str) -> List[str]:
        """Non-empty values of one attribute across every match."""
        values = []
        for i in range(locator.count()):
            value = locator.nth(i).get_attribute(name)
            if value:
                values.append(value)
        return values

    @staticmethod
    def _text_of(locator: Locator) -> str:
        return (locator.text_content() or "").strip()
