"""
Test Data

Expected site content, kept apart from test logic. Every record is frozen
and every table is a read-only mapping.
"""
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple


@dataclass(frozen=True)
class SiteInfo:
    title: str
    author: str
    tagline: str
    location: str
    base_url: str


@dataclass(frozen=True)
class NavLink:
    text: str
    href: str


@dataclass(frozen=True)
class SocialLink:
    name: str
    url_pattern: Pattern


@dataclass(frozen=True)
class ExpectedPost:
    title_contains: str
    date_pattern: Pattern


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int
    name: str

    def as_dict(self) -> dict:
        """Size in the shape Playwright's set_viewport_size expects."""
        return {"width": self.width, "height": self.height}

    def rotated(self) -> "Viewport":
        """Same device turned sideways."""
        return Viewport(width=self.height, height=self.width, name=f"{self.name} (landscape)")


# =============================================================================
# Site
# =============================================================================

SITE_METADATA = SiteInfo(
    title="QAbbalah",
    author="Alejandro O. Jiménez",
    tagline="QA Engineer, Issue exorcist. I like frogs",
    location="Spain",
    base_url="https://othrondir.github.io/QAbbalah/",
)

NAVIGATION_LINKS: Mapping[str, NavLink] = MappingProxyType(
    {
        "home": NavLink(text="Home", href="/QAbbalah/"),
        "posts": NavLink(text="Posts", href="/posts/"),
        "categories": NavLink(text="Categories", href="/categories/"),
        "tags": NavLink(text="Tags", href="/tags/"),
        "about": NavLink(text="About", href="/about/"),
    }
)

SOCIAL_LINKS: Mapping[str, SocialLink] = MappingProxyType(
    {
        "github": SocialLink(name="GitHub", url_pattern=re.compile(r"github\.com")),
        "linkedin": SocialLink(name="LinkedIn", url_pattern=re.compile(r"linkedin\.com")),
    }
)

EXPECTED_POSTS: Tuple[ExpectedPost, ...] = (
    ExpectedPost(title_contains="k6", date_pattern=re.compile(r"2023")),
    ExpectedPost(title_contains="Github", date_pattern=re.compile(r"2023")),
    ExpectedPost(title_contains="ISTQB", date_pattern=re.compile(r"2023")),
)

# =============================================================================
# Responsive testing
# =============================================================================

VIEWPORTS: Mapping[str, Viewport] = MappingProxyType(
    {
        "mobile": Viewport(width=375, height=667, name="iPhone SE"),
        "tablet": Viewport(width=768, height=1024, name="iPad"),
        "desktop": Viewport(width=1280, height=720, name="Desktop"),
        "large_desktop": Viewport(width=1920, height=1080, name="Full HD"),
    }
)

# =============================================================================
# Timeouts (milliseconds) and tags
# =============================================================================

TIMEOUTS: Mapping[str, int] = MappingProxyType(
    {
        "short": 5000,
        "medium": 10000,
        "long": 30000,
        "very_long": 60000,
    }
)

# Tags map onto pytest markers of the same name: pytest -m smoke
TEST_TAGS: Tuple[str, ...] = (
    "smoke",
    "regression",
    "accessibility",
    "visual",
    "performance",
    "mobile",
    "critical",
)
