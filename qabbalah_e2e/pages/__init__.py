"""
Page Object Models for Playwright E2E Tests

This package provides page objects that encapsulate UI interactions
and provide a clean API for test code.
"""

from .about_page import AboutPage
from .base_page import BasePage
from .components import (
    BlogPostComponent,
    BlogPostData,
    FooterComponent,
    NavigationComponent,
    ProfileComponent,
)
from .home_page import HomePage
from .post_page import PostPage

__all__ = [
    "BasePage",
    "HomePage",
    "AboutPage",
    "PostPage",
    "NavigationComponent",
    "ProfileComponent",
    "BlogPostComponent",
    "BlogPostData",
    "FooterComponent",
]
