"""
About Page Object
"""
import re

from playwright.sync_api import Page, expect

from .base_page import BasePage
from .components import FooterComponent, NavigationComponent, ProfileComponent


class AboutPage(BasePage):
    """Page object for the About / bio page."""

    PAGE_PATH = "about/"
    PAGE_TITLE = re.compile(r"About|QAbbalah", re.IGNORECASE)

    ABOUT_CONTENT = "main, .post-content, article, .content"
    ABOUT_HEADING = "h1, .post-title, article h1"
    BIO_TEXT = ".post-content p, article p, .content p"

    def __init__(self, page: Page, *args, **kwargs):
        super().__init__(page, *args, **kwargs)
        self.navigation = NavigationComponent(page)
        self.profile = ProfileComponent(page)
        self.footer = FooterComponent(page)

        self.about_content = page.locator(self.ABOUT_CONTENT).first
        self.about_heading = page.locator(self.ABOUT_HEADING).first
        self.bio_text = page.locator(self.BIO_TEXT).first

    def navigate(self) -> "AboutPage":
        super().navigate()
        self.wait_for_about_content()
        return self

    def wait_for_about_content(self) -> None:
        self.about_content.wait_for(state="visible", timeout=15000)

    def get_heading_text(self) -> str:
        return (self.about_heading.text_content() or "").strip()

    def get_bio_text(self) -> str:
        return (self.bio_text.text_content() or "").strip()

    def is_content_visible(self) -> bool:
        return self.about_content.is_visible()

    def verify_page_loaded(self) -> None:
        expect(self.about_content).to_be_visible()
