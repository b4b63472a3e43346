"""
Post Page Object

A single blog post. Posts live under posts/<slug>/ relative to the site root.
"""
import re
from typing import List

from playwright.sync_api import Page, expect

from .base_page import BasePage
from .components import FooterComponent, NavigationComponent, ProfileComponent


class PostPage(BasePage):
    """Page object for an individual post."""

    PAGE_PATH = "posts/"
    PAGE_TITLE = re.compile(r"QAbbalah", re.IGNORECASE)

    POST_CONTENT = "main article, .post, .post-content, article"
    POST_TITLE = "h1.post-title, article h1, .post-title, .page__title"
    POST_DATE = ".post-meta time, time.dt-published, .post-date, .page__meta time"
    POST_BODY = ".post-content, article .content, .e-content, .page__content"
    POST_TAGS = '.post-tag, .tag, a[href*="/tags/"]'
    POST_CATEGORY = '.post-category, a[href*="/categories/"]'
    READING_TIME = ".reading-time, .read-time, .page__meta-readtime"

    def __init__(self, page: Page, *args, **kwargs):
        super().__init__(page, *args, **kwargs)
        self.navigation = NavigationComponent(page)
        self.profile = ProfileComponent(page)
        self.footer = FooterComponent(page)

        self.post_content = page.locator(self.POST_CONTENT).first
        self.post_title = page.locator(self.POST_TITLE).first
        self.post_date = page.locator(self.POST_DATE).first
        self.post_body = page.locator(self.POST_BODY).first
        self.post_tags = page.locator(self.POST_TAGS)
        self.post_category = page.locator(self.POST_CATEGORY)
        self.reading_time = page.locator(self.READING_TIME).first

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate_to_post(self, slug: str) -> "PostPage":
        """Open posts/<slug>/ and wait for the article."""
        self.goto(f"{self.PAGE_PATH}{slug.strip('/')}/")
        self.wait_for_post_content()
        return self

    def wait_for_post_content(self) -> None:
        self.post_content.wait_for(state="visible", timeout=15000)

    def click_tag(self, tag_name: str) -> None:
        """Follow a tag link to its filtered listing."""
        self.page.locator(f'a[href*="/tags/"]:has-text("{tag_name}")').first.click()
        self.page.wait_for_load_state("networkidle")

    # =========================================================================
    # Content
    # =========================================================================

    def get_post_title(self) -> str:
        return (self.post_title.text_content() or "").strip()

    def get_post_date(self) -> str:
        return (self.post_date.text_content() or "").strip()

    def get_post_body(self) -> str:
        return (self.post_body.text_content() or "").strip()

    def get_post_tags(self) -> List[str]:
        tags = []
        for i in range(self.post_tags.count()):
            text = (self.post_tags.nth(i).text_content() or "").strip()
            if text:
                tags.append(text)
        return tags

    def has_tag(self, tag_name: str) -> bool:
        """Case-insensitive: does any tag contain tag_name?"""
        needle = tag_name.lower()
        return any(needle in tag.lower() for tag in self.get_post_tags())

    def get_word_count(self) -> int:
        return len(self.get_post_body().split())

    def content_contains(self, text: str) -> bool:
        return text.lower() in self.get_post_body().lower()

    def verify_page_loaded(self) -> None:
        expect(self.post_content).to_be_visible()
        expect(self.post_title).to_be_visible()
