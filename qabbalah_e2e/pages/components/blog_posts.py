"""
Blog Post Component

Post listings (archive__item cards) on the home page and archive pages.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .base import BaseComponent

logger = logging.getLogger(__name__)


@dataclass
class BlogPostData:
    """What a post preview card shows."""

    title: str
    date: str
    description: str
    tags: List[str] = field(default_factory=list)
    url: Optional[str] = None


class BlogPostComponent(BaseComponent):
    """Blog post listing and its interactions."""

    POSTS_CONTAINER = "#main, .entries-list, .archive"
    POST_CARDS = "article.archive__item, .archive__item"
    POST_TITLE_LINKS = (
        '.archive__item-title a, .archive__item h2 a, article.archive__item a[rel="permalink"]'
    )
    CLICKABLE_TITLES = '.archive__item-title a, article.archive__item a[rel="permalink"]'

    # Relative to a single card
    CARD_TITLE = '.archive__item-title a, h2 a, a[rel="permalink"]'
    CARD_DATE = "time, .page__meta-date, .archive__item-excerpt time"
    CARD_EXCERPT = ".archive__item-excerpt p, p.archive__item-excerpt"
    CARD_TAGS = ".page__taxonomy a, .archive__item-tags a"

    def __init__(self, page: Page):
        super().__init__(page)
        self.container = page.locator(self.POSTS_CONTAINER).first
        self.post_cards = page.locator(self.POST_CARDS)

    def get_post_count(self, timeout: int = 10000) -> int:
        """Number of post cards, after a best-effort wait for the listing."""
        try:
            self.container.wait_for(state="visible", timeout=timeout)
        except PlaywrightError as e:
            logger.debug(f"Post listing not visible before counting: {e}")
        return self.post_cards.count()

    def get_all_post_titles(self) -> List[str]:
        return self._texts(self.page.locator(self.POST_TITLE_LINKS))

    def get_post_by_index(self, index: int) -> BlogPostData:
        """Read the card at position index."""
        card = self.post_cards.nth(index)
        title_link = card.locator(self.CARD_TITLE).first

        return BlogPostData(
            title=self._text_of(title_link),
            date=self._text_of(card.locator(self.CARD_DATE).first),
            description=self._text_of(card.locator(self.CARD_EXCERPT).first),
            tags=self._texts(card.locator(self.CARD_TAGS)),
            url=title_link.get_attribute("href"),
        )

    def click_post_by_title(self, title: str) -> None:
        link = self.page.locator(
            f'.archive__item-title a:has-text("{title}"), a[rel="permalink"]:has-text("{title}")'
        ).first
        link.click()
        self.page.wait_for_load_state("networkidle")

    def click_post_by_index(self, index: int) -> None:
        self.page.locator(self.CLICKABLE_TITLES).nth(index).click()
        self.page.wait_for_load_state("networkidle")

    def is_visible(self) -> bool:
        return self.container.is_visible()

    def find_post_containing(self, search_text: str) -> Optional[BlogPostData]:
        """First post whose title contains search_text (case-insensitive)."""
        needle = search_text.lower()
        for index, title in enumerate(self.get_all_post_titles()):
            if needle in title.lower():
                return self.get_post_by_index(index)
        return None
