"""
Playwright E2E Test Configuration and Fixtures

Browser, context and page object fixtures for the live site tests. The
browser itself comes from pytest-playwright; these fixtures shape it from
the E2E configuration and the selected project.
"""
import logging
import os
import re
from datetime import datetime
from typing import Any, Dict, Generator, List, Optional

import pytest
import requests

# Skip entire module if playwright not installed
pytest.importorskip("playwright")

from playwright.sync_api import ConsoleMessage, Page, expect

from qabbalah_e2e.config import BrowserProject, E2EConfig
from qabbalah_e2e.pages import AboutPage, HomePage, PostPage
from qabbalah_e2e.utils.visual import SnapshotStore

logger = logging.getLogger(__name__)

SITE_CHECK_TIMEOUT = 10


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def site_available(e2e_config: E2EConfig) -> None:
    """Skip the session when the site under test cannot be reached."""
    try:
        resp = requests.get(e2e_config.base_url, timeout=SITE_CHECK_TIMEOUT)
    except requests.exceptions.RequestException as e:
        pytest.skip(f"Site unreachable: {e2e_config.base_url} ({e})")
    if resp.status_code >= 500:
        pytest.skip(f"Site unavailable: {e2e_config.base_url} returned {resp.status_code}")
    logger.info(f"Site reachable: {e2e_config.base_url} ({resp.status_code})")


@pytest.fixture(scope="session", autouse=True)
def expect_timeout(e2e_config: E2EConfig) -> None:
    """Default timeout for expect() assertions."""
    expect.set_options(timeout=e2e_config.expect_timeout)


@pytest.fixture(scope="session")
def e2e_project(pytestconfig, e2e_config: E2EConfig) -> Optional[BrowserProject]:
    """The browser project selected with --project / E2E_PROJECT, if any."""
    name = pytestconfig.getoption("project") or os.environ.get("E2E_PROJECT")
    if not name:
        return None
    return e2e_config.project(name)


# =============================================================================
# Browser Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def browser_type_launch_args(
    browser_type_launch_args: Dict, e2e_config: E2EConfig, e2e_project: Optional[BrowserProject]
) -> Dict[str, Any]:
    """Browser launch arguments; --headed and --slowmo still take precedence."""
    args = {"headless": e2e_config.headless, "slow_mo": e2e_config.slow_mo}
    if e2e_project and e2e_project.launch_args:
        args["args"] = list(e2e_project.launch_args)
    args.update(browser_type_launch_args)
    return args


@pytest.fixture(scope="session")
def browser_context_args(
    browser_context_args: Dict,
    e2e_config: E2EConfig,
    e2e_project: Optional[BrowserProject],
    playwright,
) -> Dict[str, Any]:
    """Browser context arguments: config defaults, then the project's device."""
    args = e2e_config.context_args()
    if e2e_project:
        args.update(e2e_project.context_args(playwright.devices))
    args.update(browser_context_args)
    args.pop("default_browser_type", None)
    return args


@pytest.fixture
def page(page: Page, e2e_config: E2EConfig) -> Page:
    """The pytest-playwright page with the configured action and navigation timeouts."""
    page.set_default_timeout(e2e_config.action_timeout)
    page.set_default_navigation_timeout(e2e_config.navigation_timeout)
    return page


# =============================================================================
# Page Object Fixtures
# =============================================================================


@pytest.fixture
def home_page(page: Page, e2e_config: E2EConfig) -> HomePage:
    return HomePage(page, base_url=e2e_config.base_url, screenshots_dir=e2e_config.screenshots_dir)


@pytest.fixture
def about_page(page: Page, e2e_config: E2EConfig) -> AboutPage:
    return AboutPage(page, base_url=e2e_config.base_url, screenshots_dir=e2e_config.screenshots_dir)


@pytest.fixture
def post_page(page: Page, e2e_config: E2EConfig) -> PostPage:
    return PostPage(page, base_url=e2e_config.base_url, screenshots_dir=e2e_config.screenshots_dir)


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def snapshots(
    pytestconfig, e2e_config: E2EConfig, e2e_project: Optional[BrowserProject], browser_name: str
) -> SnapshotStore:
    """Visual baselines, kept apart per project (or per browser without one)."""
    folder = e2e_project.name if e2e_project else browser_name
    folder = re.sub(r"[^a-z0-9]+", "-", folder.lower()).strip("-")
    return SnapshotStore(
        snapshot_dir=e2e_config.snapshot_dir / folder,
        output_dir=e2e_config.output_dir,
        update=pytestconfig.getoption("update_snapshots"),
        max_diff_pixels=e2e_config.max_diff_pixels,
    )


@pytest.fixture
def console_errors(page: Page) -> List[str]:
    """Text of every console error the page logs during the test."""
    errors: List[str] = []

    def on_console(msg: ConsoleMessage) -> None:
        if msg.type == "error":
            errors.append(msg.text)

    page.on("console", on_console)
    return errors


@pytest.fixture(autouse=True)
def screenshot_on_failure(request, page: Page, e2e_config: E2EConfig) -> Generator[None, None, None]:
    """Capture screenshot on test failure (or after every test with screenshot: on)."""
    yield

    rep_call = getattr(request.node, "rep_call", None)
    if rep_call is None or not e2e_config.wants_screenshot(rep_call.failed):
        return

    e2e_config.screenshots_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    test_name = re.sub(r"[^\w.-]+", "_", request.node.name)
    prefix = "failure" if rep_call.failed else "final"
    screenshot_path = e2e_config.screenshots_dir / f"{prefix}_{test_name}_{timestamp}.png"
    try:
        page.screenshot(path=str(screenshot_path), full_page=True)
    except Exception as e:
        logger.warning(f"Could not capture failure screenshot for {request.node.nodeid}: {e}")
        return
    logger.info(f"Screenshot saved: {screenshot_path}")


# =============================================================================
# Hooks
# =============================================================================


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store test results for use in fixtures."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
