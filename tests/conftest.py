"""
Pytest configuration for the QAbbalah suites

Registers the suite's command line options, loads the E2E configuration,
maps reporters and retries onto the installed plugins and gates the browser
tests behind --run-e2e.
"""
import importlib.util
import logging
import os
from pathlib import Path

import pytest

from qabbalah_e2e.config import ConfigLoader, E2EConfig
from qabbalah_e2e.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

E2E_DIR = Path(__file__).resolve().parent / "e2e"
E2E_CONFIG_KEY = pytest.StashKey[E2EConfig]()

# pytest-playwright's --output default
PLAYWRIGHT_OUTPUT = "test-results"

# Reporter name -> (registered plugin name, option dest holding the output path)
REPORTER_PLUGINS = {
    "html": ("html", "htmlpath"),
    "json": ("pytest_jsonreport", "json_report_file"),
    "allure": ("allure_pytest", "allure_report_dir"),
}


def pytest_addoption(parser):
    group = parser.getgroup("qabbalah", "QAbbalah end-to-end suite")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run browser tests against the live site (also: E2E_RUN=1)",
    )
    group.addoption(
        "--project",
        action="store",
        default=None,
        help='Browser project from the E2E config, e.g. "Mobile Chrome" (also: E2E_PROJECT)',
    )
    group.addoption(
        "--update-snapshots",
        action="store_true",
        default=False,
        help="Rewrite visual baselines instead of comparing against them",
    )


def e2e_enabled(config) -> bool:
    return config.getoption("run_e2e") or os.environ.get("E2E_RUN", "").lower() in ("1", "true")


def selected_project_name(config):
    return config.getoption("project") or os.environ.get("E2E_PROJECT")


# =============================================================================
# Configuration
# =============================================================================


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config):
    """Load the E2E config and hand its settings to the plugins that own them."""
    try:
        e2e_config = ConfigLoader.load()
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e
    config.stash[E2E_CONFIG_KEY] = e2e_config

    if not e2e_enabled(config):
        return

    _configure_reporters(config, e2e_config)
    _configure_retries(config, e2e_config)
    _configure_timeout(config, e2e_config)
    _configure_browser(config, e2e_config)


def _configure_reporters(config, e2e_config: E2EConfig) -> None:
    for reporter in e2e_config.reporters:
        if reporter.name == "list":
            config.option.verbose = max(config.option.verbose, 1)
            continue

        plugin_name, dest = REPORTER_PLUGINS[reporter.name]
        if not config.pluginmanager.hasplugin(plugin_name):
            logger.warning(f"Reporter '{reporter.name}' skipped: plugin {plugin_name} not installed")
            continue
        if getattr(config.option, dest, None):
            # Explicit command line choice wins
            continue

        output = reporter.output or str(e2e_config.output_dir / reporter.name)
        setattr(config.option, dest, output)
        if reporter.name == "json":
            config.option.json_report = True
        if reporter.name == "html" and hasattr(config.option, "self_contained_html"):
            config.option.self_contained_html = True
        logger.debug(f"Reporter '{reporter.name}' writing to {output}")


def _configure_retries(config, e2e_config: E2EConfig) -> None:
    if not e2e_config.retries:
        return
    if not config.pluginmanager.hasplugin("rerunfailures"):
        logger.warning("Retries configured but pytest-rerunfailures is not installed")
        return
    if not getattr(config.option, "reruns", None):
        config.option.reruns = e2e_config.retries


def _configure_timeout(config, e2e_config: E2EConfig) -> None:
    if not config.pluginmanager.hasplugin("timeout"):
        logger.warning("Test timeout configured but pytest-timeout is not installed")
        return
    if getattr(config.option, "timeout", None) is None:
        config.option.timeout = e2e_config.test_timeout_seconds


def _configure_browser(config, e2e_config: E2EConfig) -> None:
    if not config.pluginmanager.hasplugin("playwright"):
        return

    # pytest-playwright artifacts; failure screenshots are taken by the e2e fixtures
    if getattr(config.option, "tracing", "off") == "off":
        config.option.tracing = e2e_config.trace
    if getattr(config.option, "video", "off") == "off":
        config.option.video = e2e_config.video
    if getattr(config.option, "output", PLAYWRIGHT_OUTPUT) == PLAYWRIGHT_OUTPUT:
        config.option.output = str(e2e_config.output_dir)

    name = selected_project_name(config)
    if name and not config.option.browser:
        try:
            project = e2e_config.project(name)
        except ConfigurationError as e:
            raise pytest.UsageError(str(e)) from e
        config.option.browser = [project.browser]


def pytest_report_header(config):
    e2e_config = config.stash.get(E2E_CONFIG_KEY, None)
    if e2e_config is None:
        return None
    if not e2e_enabled(config):
        return "e2e: disabled (use --run-e2e)"
    return (
        f"e2e: base_url={e2e_config.base_url} project={selected_project_name(config) or '-'} "
        f"retries={e2e_config.retries} workers={e2e_config.workers}"
    )


# =============================================================================
# Collection
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Mark browser tests as e2e and skip them unless enabled."""
    run_e2e = e2e_enabled(config)
    playwright_installed = importlib.util.find_spec("playwright") is not None

    skip_disabled = pytest.mark.skip(reason="E2E tests disabled (use --run-e2e or E2E_RUN=1)")
    skip_missing = pytest.mark.skip(reason="Playwright not installed")

    for item in items:
        if E2E_DIR in Path(item.path).resolve().parents:
            item.add_marker(pytest.mark.e2e)

        if "e2e" not in item.keywords:
            continue
        if not run_e2e:
            item.add_marker(skip_disabled)
        elif not playwright_installed:
            item.add_marker(skip_missing)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def e2e_config(pytestconfig) -> E2EConfig:
    """The merged E2E configuration for this session."""
    return pytestconfig.stash[E2E_CONFIG_KEY]
