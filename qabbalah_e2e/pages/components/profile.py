"""
Profile Component

Sidebar author card: avatar, name, bio, location and social links.
"""
from typing import List, Optional

from playwright.sync_api import Locator, Page

from .base import BaseComponent


class ProfileComponent(BaseComponent):
    """Author profile in the sidebar."""

    PROFILE_CONTAINER = '.sidebar, .author__avatar, [itemtype*="Person"]'
    AVATAR = '.author__avatar img, img[alt*="Alejandro"]'
    AUTHOR_NAME = ".author__name, h3.author__name"
    TAGLINE = '.author__bio, p[itemprop="description"]'
    LOCATION = '[itemprop="homeLocation"] span, span[itemprop="name"]:has-text("Spain")'
    FOLLOW_BUTTON = ".author__urls-wrapper button, button.btn--inverse"
    SOCIAL_LINKS = ".author__urls, ul.social-icons"
    GITHUB_LINK = 'a[href*="github.com/Othrondir"]'
    LINKEDIN_LINK = 'a[href*="linkedin.com"]'
    WEBSITE_LINK = ".author__urls a"

    def __init__(self, page: Page):
        super().__init__(page)
        self.container = page.locator(self.PROFILE_CONTAINER).first
        self.avatar = page.locator(self.AVATAR).first
        self.author_name = page.locator(self.AUTHOR_NAME).first
        self.tagline = page.locator(self.TAGLINE).first
        self.location = page.locator(self.LOCATION).first
        self.follow_button = page.locator(self.FOLLOW_BUTTON)
        self.social_links = page.locator(self.SOCIAL_LINKS)
        self.github_link = page.locator(self.GITHUB_LINK).first
        self.linkedin_link = page.locator(self.LINKEDIN_LINK).first
        self.website_link = page.locator(self.WEBSITE_LINK).first

    def is_visible(self) -> bool:
        return self.container.is_visible()

    def get_author_name(self) -> str:
        return self._text_of(self.author_name)

    def get_tagline(self) -> str:
        return self._text_of(self.tagline)

    def get_location(self) -> str:
        return self._text_of(self.location)

    def is_avatar_displayed(self) -> bool:
        return self.avatar.is_visible()

    def get_avatar_src(self) -> Optional[str]:
        return self.avatar.get_attribute("src")

    def click_author_name(self) -> None:
        """Click the author name, which links back to the home page."""
        self.author_name.click()
        self.page.wait_for_load_state("networkidle")

    def click_github_link(self) -> Optional[str]:
        """Click the GitHub link and return the href it pointed to."""
        return self._click_external(self.github_link)

    def click_linkedin_link(self) -> Optional[str]:
        """Click the LinkedIn link and return the href it pointed to."""
        return self._click_external(self.linkedin_link)

    def get_github_url(self) -> Optional[str]:
        return self.github_link.get_attribute("href")

    def get_linkedin_url(self) -> Optional[str]:
        return self.linkedin_link.get_attribute("href")

    def get_all_social_urls(self) -> List[str]:
        """Every href listed under the author's links."""
        return self._attributes(self.social_links.locator("a"), "href")

    @staticmethod
    def _click_external(link: Locator) -> Optional[str]:
        href = link.get_attribute("href")
        link.click()
        return href
