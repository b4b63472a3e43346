"""
Navigation Component

The masthead's greedy-nav menu, including its collapsed mobile form.
"""
from typing import List

from playwright.sync_api import Locator, Page

from .base import BaseComponent

# Hidden-links menu slide-in
MENU_ANIMATION_MS = 300


class NavigationComponent(BaseComponent):
    """Main navigation bar."""

    NAV_CONTAINER = "#site-nav"
    SITE_LOGO = ".site-logo, a.site-logo"
    HOME_LINK = '.visible-links a[href="/QAbbalah/"], .masthead__menu-item a:has-text("Home")'
    POSTS_LINK = '.visible-links a[href*="year-archive"], .masthead__menu-item a:has-text("Posts")'
    CATEGORIES_LINK = (
        '.visible-links a[href*="categories"], .masthead__menu-item a:has-text("Categories")'
    )
    TAGS_LINK = '.visible-links a[href*="tags"], .masthead__menu-item a:has-text("Tags")'
    ABOUT_LINK = '.visible-links a[href*="about"], .masthead__menu-item a:has-text("About")'
    NAV_LINKS = "#site-nav a, .masthead__menu-item a"
    MOBILE_MENU_TOGGLE = ".greedy-nav__toggle, button.navicon"
    MOBILE_MENU = ".hidden-links"

    def __init__(self, page: Page):
        super().__init__(page)
        self.nav_container = page.locator(self.NAV_CONTAINER)
        self.home_link = page.locator(self.HOME_LINK).first
        self.posts_link = page.locator(self.POSTS_LINK).first
        self.categories_link = page.locator(self.CATEGORIES_LINK).first
        self.tags_link = page.locator(self.TAGS_LINK).first
        self.about_link = page.locator(self.ABOUT_LINK).first
        self.mobile_menu_toggle = page.locator(self.MOBILE_MENU_TOGGLE)
        self.mobile_menu = page.locator(self.MOBILE_MENU)

    def is_visible(self) -> bool:
        return self.nav_container.is_visible()

    # =========================================================================
    # Navigation
    # =========================================================================

    def go_to_home(self) -> None:
        """Navigate to the home page.

        The logo works on every viewport; without it, fall back to the
        collapsed mobile menu and finally the plain Home link.
        """
        logo = self.page.locator(self.SITE_LOGO).first
        if logo.is_visible():
            logo.click()
        elif self.mobile_menu_toggle.is_visible():
            self._open_mobile_menu()
            self.home_link.click()
        else:
            self.home_link.click()
        self.page.wait_for_load_state("networkidle")

    def go_to_posts(self) -> None:
        self._follow(self.posts_link)

    def go_to_categories(self) -> None:
        self._follow(self.categories_link)

    def go_to_tags(self) -> None:
        self._follow(self.tags_link)

    def go_to_about(self) -> None:
        """Navigate to the About page, opening the mobile menu when collapsed."""
        if self.mobile_menu_toggle.is_visible():
            self._open_mobile_menu()
        self._follow(self.about_link)

    def _follow(self, link: Locator) -> None:
        link.click()
        self.page.wait_for_load_state("networkidle")

    def _open_mobile_menu(self) -> None:
        self.mobile_menu_toggle.click()
        self.page.wait_for_timeout(MENU_ANIMATION_MS)

    # =========================================================================
    # Menu state
    # =========================================================================

    def get_nav_link_texts(self) -> List[str]:
        """Text of every navigation link."""
        return self._texts(self.page.locator(self.NAV_LINKS))

    def toggle_mobile_menu(self) -> None:
        """Toggle the collapsed menu (no-op on wide viewports)."""
        if self.mobile_menu_toggle.is_visible():
            self.mobile_menu_toggle.click()

    def is_mobile_menu_expanded(self) -> bool:
        return self.mobile_menu.is_visible()
