"""
Home Page Object

Landing page of the blog: masthead, author sidebar, recent posts, footer.
"""
import re
from typing import List

from playwright.sync_api import Page, expect

from .base_page import BasePage
from .components import BlogPostComponent, FooterComponent, NavigationComponent, ProfileComponent


class HomePage(BasePage):
    """Page object for the home page."""

    PAGE_PATH = ""
    PAGE_TITLE = re.compile(r"QAbbalah|Alejandro", re.IGNORECASE)

    MAIN_CONTENT = "#main"
    RECENT_POSTS = ".archive__item"
    MASTHEAD = ".masthead"
    MAIN_HEADING = "h1, .site-title"

    def __init__(self, page: Page, *args, **kwargs):
        super().__init__(page, *args, **kwargs)
        self.navigation = NavigationComponent(page)
        self.profile = ProfileComponent(page)
        self.blog_posts = BlogPostComponent(page)
        self.footer = FooterComponent(page)

        self.main_content = page.locator(self.MAIN_CONTENT)
        self.recent_posts_section = page.locator(self.RECENT_POSTS).first
        self.masthead = page.locator(self.MASTHEAD)

    def navigate(self) -> "HomePage":
        """Navigate to the home page and wait for its content."""
        super().navigate()
        self.wait_for_home_page_content()
        return self

    def wait_for_home_page_content(self) -> None:
        self.main_content.wait_for(state="visible", timeout=15000)

    def get_main_heading(self) -> str:
        heading = self.page.locator(self.MAIN_HEADING).first
        return (heading.text_content() or "").strip()

    def has_recent_posts_section(self) -> bool:
        return self.recent_posts_section.is_visible()

    def get_recent_posts_count(self) -> int:
        return self.blog_posts.get_post_count()

    def navigate_to_post(self, post_title: str) -> None:
        """Open a post from the listing by its title."""
        self.blog_posts.click_post_by_title(post_title)

    def get_visible_sections(self) -> List[str]:
        """Names of the page sections currently visible, in page order."""
        sections = []
        if self.navigation.is_visible():
            sections.append("navigation")
        if self.profile.is_visible():
            sections.append("profile")
        if self.blog_posts.is_visible():
            sections.append("blog-posts")
        if self.footer.is_visible():
            sections.append("footer")
        return sections

    # Assertions
    def verify_all_sections_visible(self) -> None:
        expect(self.main_content).to_be_visible()

    def verify_page_loaded(self) -> None:
        """Assert title and main content."""
        self.verify_page_title()
        self.verify_all_sections_visible()
