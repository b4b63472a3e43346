"""
Footer Component
"""
from typing import List, Optional

from playwright.sync_api import Page

from .base import BaseComponent


class FooterComponent(BaseComponent):
    """Page footer: copyright line, feed link and follow links."""

    FOOTER = "footer"
    COPYRIGHT = "footer .page__footer-copyright, footer p, .page__footer-follow"
    RSS_LINK = 'a[href*="feed.xml"], a.fa-rss-square, a[href*="feed"]'
    FOOTER_LINKS = "footer a, .page__footer a"

    def __init__(self, page: Page):
        super().__init__(page)
        self.container = page.locator(self.FOOTER)
        self.copyright = page.locator(self.COPYRIGHT).first
        self.rss_link = page.locator(self.RSS_LINK).first
        self.footer_links = page.locator(self.FOOTER_LINKS)

    def is_visible(self) -> bool:
        return self.container.is_visible()

    def get_copyright_text(self) -> str:
        return self._text_of(self.copyright)

    def contains_year(self, year: str) -> bool:
        return year in self.get_copyright_text()

    def has_rss_link(self) -> bool:
        return self.rss_link.is_visible()

    def get_rss_feed_url(self) -> Optional[str]:
        """Feed URL, or None when the link is not shown."""
        if self.rss_link.is_visible():
            return self.rss_link.get_attribute("href")
        return None

    def click_rss_link(self) -> None:
        self.rss_link.click()

    def get_all_footer_links(self) -> List[str]:
        return self._attributes(self.footer_links, "href")

    def scroll_into_view(self) -> None:
        self.container.scroll_into_view_if_needed()
