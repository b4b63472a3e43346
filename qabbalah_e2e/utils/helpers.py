"""
Test Helper Utilities

Reusable helpers for waits, retries, link health and page inspection.
"""
import logging
import random
import string
import time
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Pattern, Tuple, Type, TypeVar, Union
from urllib.parse import urljoin, urlparse

import requests
from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCROLL_STEP_PX = 100
SCROLL_INTERVAL_MS = 100


def wait(ms: int) -> None:
    """Wait for a fixed time (use sparingly)."""
    time.sleep(ms / 1000)


def retry(
    fn: Callable[[], T],
    max_attempts: int = 3,
    delay: int = 1000,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """
    Call fn until it succeeds or max_attempts is reached.

    Args:
        fn: Zero-argument callable
        max_attempts: Total number of calls allowed
        delay: Pause between attempts, in milliseconds
        retry_on: Exception types that trigger another attempt

    Returns:
        The first successful result

    Raises:
        The last error once every attempt has failed
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Optional[BaseException] = None
    for attempt in range(1, max_attempts + 1):
        try:
            return fn()
        except retry_on as e:
            last_error = e
            if attempt < max_attempts:
                logger.warning(
                    f"Attempt {attempt}/{max_attempts} failed: {e}. Retrying in {delay}ms..."
                )
                wait(delay)

    logger.error(f"All {max_attempts} attempts failed: {last_error}")
    raise last_error


def url_matches(url: str, pattern: Union[str, Pattern]) -> bool:
    """Substring match for plain strings, regex search for compiled patterns."""
    if isinstance(pattern, str):
        return pattern in url
    return pattern.search(url) is not None


def generate_random_string(length: int) -> str:
    """Random alphanumeric string for test data."""
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def get_timestamp() -> str:
    """Current UTC time in ISO-8601 with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_date(value: date) -> str:
    """Format as e.g. 'January 5, 2024'."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


# =============================================================================
# Page inspection
# =============================================================================


def verify_links_not_broken(
    page: Page, session: Optional[requests.Session] = None, timeout: float = 10.0
) -> List[str]:
    """
    HEAD every link on the page and report the ones answering >= 400.

    Fragment-only and javascript: links are ignored. Links that cannot be
    requested at all (DNS failure, refused connection, unsupported scheme)
    are logged and skipped rather than reported.

    Returns:
        Entries of the form "<href> (<status>)"
    """
    if session is not None:
        return _check_links(page, session, timeout)
    with requests.Session() as http:
        return _check_links(page, http, timeout)


def _check_links(page: Page, http: requests.Session, timeout: float) -> List[str]:
    links = page.locator("a[href]")
    statuses: Dict[str, Optional[int]] = {}
    broken = []

    for i in range(links.count()):
        href = links.nth(i).get_attribute("href")
        if not href or href.startswith("#") or href.startswith("javascript:"):
            continue

        absolute_url = urljoin(page.url, href)
        if urlparse(absolute_url).scheme not in ("http", "https"):
            logger.debug(f"Skipping non-HTTP link: {href}")
            continue

        if absolute_url not in statuses:
            try:
                response = http.head(absolute_url, allow_redirects=True, timeout=timeout)
                statuses[absolute_url] = response.status_code
            except requests.RequestException as e:
                logger.debug(f"Skipping unreachable link {href}: {e}")
                statuses[absolute_url] = None

        status = statuses[absolute_url]
        if status is not None and status >= 400:
            broken.append(f"{href} ({status})")

    if broken:
        logger.info(f"Found {len(broken)} broken links on {page.url}")
    return broken


def scroll_full_page(page: Page) -> None:
    """Scroll to the bottom in small steps so lazy content loads."""
    page.evaluate(
        """([distance, interval]) => new Promise((resolve) => {
            let totalHeight = 0;
            const timer = setInterval(() => {
                const scrollHeight = document.body.scrollHeight;
                window.scrollBy(0, distance);
                totalHeight += distance;
                if (totalHeight >= scrollHeight) {
                    clearInterval(timer);
                    resolve();
                }
            }, interval);
        })""",
        [SCROLL_STEP_PX, SCROLL_INTERVAL_MS],
    )


def get_all_page_text(page: Page) -> str:
    return page.evaluate("() => document.body.innerText")


def is_element_in_viewport(locator: Locator) -> bool:
    """True when the element's bounding box lies entirely inside the window."""
    return locator.evaluate(
        """(element) => {
            const rect = element.getBoundingClientRect();
            return (
                rect.top >= 0 &&
                rect.left >= 0 &&
                rect.bottom <= (window.innerHeight || document.documentElement.clientHeight) &&
                rect.right <= (window.innerWidth || document.documentElement.clientWidth)
            );
        }"""
    )


def take_timestamped_screenshot(
    page: Page, name: str, directory: Union[str, Path] = "test-results/screenshots"
) -> str:
    """Full page screenshot named <name>-<epoch ms>.png; returns the file name."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    filename = f"{name}-{int(time.time() * 1000)}.png"
    page.screenshot(path=str(directory / filename), full_page=True)
    return filename
