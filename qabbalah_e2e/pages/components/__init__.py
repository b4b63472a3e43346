"""
Reusable page sections composed by the page objects.
"""

from .blog_posts import BlogPostComponent, BlogPostData
from .footer import FooterComponent
from .navigation import NavigationComponent
from .profile import ProfileComponent

__all__ = [
    "BlogPostComponent",
    "BlogPostData",
    "FooterComponent",
    "NavigationComponent",
    "ProfileComponent",
]
