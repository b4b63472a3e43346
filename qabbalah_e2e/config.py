"""
E2E Configuration

Declarative settings for the suite: target URL, timeouts, retries, browser
projects (desktop engines and emulated devices) and reporter outputs.

Loading order:
    1. Built-in defaults (DEFAULTS)
    2. YAML file from E2E_CONFIG (default: e2e.yaml), when present
    3. The file's environments.<name> section (E2E_ENV, or "ci" when CI is set)
    4. Individual environment variables (E2E_BASE_URL, E2E_HEADLESS, ...)
"""
import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .data import SITE_METADATA
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

REPORTER_NAMES = ("html", "list", "json", "allure")
BROWSER_NAMES = ("chromium", "firefox", "webkit")
ARTIFACT_MODES = ("on", "off", "retain-on-failure")
SCREENSHOT_MODES = ("on", "off", "only-on-failure")

DEFAULTS: Dict[str, Any] = {
    "base_url": SITE_METADATA.base_url,
    "headless": True,
    "slow_mo": 0,
    "timeouts": {
        "test": 30000,
        "expect": 10000,
        "action": 15000,
        "navigation": 30000,
    },
    "retries": 0,
    "workers": "auto",
    "viewport": {"width": 1280, "height": 720},
    "output_dir": "test-results",
    "snapshot_dir": "tests/e2e/snapshots",
    "max_diff_pixels": 100,
    "trace": "retain-on-failure",
    "screenshot": "only-on-failure",
    "video": "retain-on-failure",
    "reporters": [
        {"name": "html", "output": "test-results/report.html"},
        {"name": "list"},
        {"name": "json", "output": "test-results/results.json"},
        {"name": "allure", "output": "test-results/allure-results"},
    ],
    "projects": [
        {"name": "chromium", "browser": "chromium", "launch_args": ["--disable-web-security"]},
        {"name": "firefox", "browser": "firefox"},
        {"name": "webkit", "browser": "webkit"},
        {"name": "Mobile Chrome", "browser": "chromium", "device": "Pixel 5"},
        {"name": "Mobile Safari", "browser": "webkit", "device": "iPhone 12"},
        {"name": "Tablet", "browser": "webkit", "device": "iPad (gen 7)"},
    ],
    "environments": {
        "ci": {"retries": 2, "workers": 1},
    },
}


# =============================================================================
# Records
# =============================================================================


@dataclass
class BrowserProject:
    """A browser engine, optionally emulating a device."""

    name: str
    browser: str = "chromium"
    device: Optional[str] = None
    launch_args: List[str] = field(default_factory=list)

    def context_args(self, devices: Optional[Dict[str, Dict]] = None) -> Dict[str, Any]:
        """Context kwargs from the device descriptor (empty for desktop projects)."""
        if not self.device:
            return {}
        if not devices or self.device not in devices:
            raise ConfigurationError(f"Unknown device for project {self.name}: {self.device}")
        descriptor = dict(devices[self.device])
        # Engine choice belongs to the project, not the context
        descriptor.pop("default_browser_type", None)
        return descriptor


@dataclass
class ReporterConfig:
    name: str
    output: Optional[str] = None


@dataclass
class E2EConfig:
    """E2E test configuration."""

    base_url: str = SITE_METADATA.base_url
    headless: bool = True
    slow_mo: int = 0

    # Timeouts (milliseconds)
    test_timeout: int = 30000
    expect_timeout: int = 10000
    action_timeout: int = 15000
    navigation_timeout: int = 30000

    retries: int = 0
    workers: Union[int, str] = "auto"
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1280, "height": 720})

    # Artifacts
    output_dir: Path = Path("test-results")
    snapshot_dir: Path = Path("tests/e2e/snapshots")
    max_diff_pixels: int = 100
    trace: str = "retain-on-failure"
    screenshot: str = "only-on-failure"
    video: str = "retain-on-failure"

    reporters: List[ReporterConfig] = field(default_factory=list)
    projects: List[BrowserProject] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "E2EConfig":
        """
        Build a config from a merged settings dictionary.

        Raises:
            ConfigurationError: If a section has the wrong shape or a value the wrong type
        """
        timeouts = _mapping(data, "timeouts")
        viewport = _mapping(data, "viewport")

        reporters = []
        for entry in _entries(data, "reporters"):
            name = entry.get("name")
            if name not in REPORTER_NAMES:
                raise ConfigurationError(
                    f"Unknown reporter: {name} (expected one of {', '.join(REPORTER_NAMES)})"
                )
            reporters.append(ReporterConfig(name=name, output=entry.get("output")))

        projects = []
        for entry in _entries(data, "projects"):
            if "name" not in entry:
                raise ConfigurationError("Project entry is missing a name")
            browser = entry.get("browser", "chromium")
            if browser not in BROWSER_NAMES:
                raise ConfigurationError(f"Unknown browser for project {entry['name']}: {browser}")
            launch_args = entry.get("launch_args") or []
            if not isinstance(launch_args, list):
                raise ConfigurationError(f"launch_args for project {entry['name']} must be a list")
            projects.append(
                BrowserProject(
                    name=entry["name"],
                    browser=browser,
                    device=entry.get("device"),
                    launch_args=list(launch_args),
                )
            )

        return cls(
            base_url=_with_trailing_slash(str(data.get("base_url", SITE_METADATA.base_url))),
            headless=bool(data.get("headless", True)),
            slow_mo=_int(data, "slow_mo", 0),
            test_timeout=_int(timeouts, "test", 30000, section="timeouts"),
            expect_timeout=_int(timeouts, "expect", 10000, section="timeouts"),
            action_timeout=_int(timeouts, "action", 15000, section="timeouts"),
            navigation_timeout=_int(timeouts, "navigation", 30000, section="timeouts"),
            retries=_int(data, "retries", 0),
            workers=_workers(data.get("workers", "auto")),
            viewport={
                "width": _int(viewport, "width", 1280, section="viewport"),
                "height": _int(viewport, "height", 720, section="viewport"),
            },
            output_dir=Path(data.get("output_dir", "test-results")),
            snapshot_dir=Path(data.get("snapshot_dir", "tests/e2e/snapshots")),
            max_diff_pixels=_int(data, "max_diff_pixels", 100),
            trace=_choice(data, "trace", "retain-on-failure", ARTIFACT_MODES),
            screenshot=_choice(data, "screenshot", "only-on-failure", SCREENSHOT_MODES),
            video=_choice(data, "video", "retain-on-failure", ARTIFACT_MODES),
            reporters=reporters,
            projects=projects,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "headless": self.headless,
            "slow_mo": self.slow_mo,
            "retries": self.retries,
            "workers": self.workers,
            "projects": [p.name for p in self.projects],
            "reporters": [r.name for r in self.reporters],
        }

    def project(self, name: str) -> BrowserProject:
        """Look up a browser project by name."""
        for project in self.projects:
            if project.name == name:
                return project
        raise ConfigurationError(f"Unknown project: {name}")

    def reporter(self, name: str) -> Optional[ReporterConfig]:
        for reporter in self.reporters:
            if reporter.name == name:
                return reporter
        return None

    def context_args(self) -> Dict[str, Any]:
        """Browser context arguments shared by every project."""
        return {
            "base_url": self.base_url,
            "viewport": dict(self.viewport),
            "ignore_https_errors": True,
        }

    def wants_screenshot(self, failed: bool) -> bool:
        """Whether a test with this outcome gets an end-of-test screenshot."""
        if self.screenshot == "on":
            return True
        return failed and self.screenshot == "only-on-failure"

    @property
    def test_timeout_seconds(self) -> float:
        return self.test_timeout / 1000

    @property
    def screenshots_dir(self) -> Path:
        return self.output_dir / "screenshots"


# =============================================================================
# Loader
# =============================================================================


class ConfigLoader:
    """Loads E2EConfig from defaults, an optional YAML file and the environment."""

    @classmethod
    def load(cls, path: Optional[str] = None, environment: Optional[str] = None) -> E2EConfig:
        """
        Load the merged configuration.

        Args:
            path: YAML file to read; defaults to $E2E_CONFIG or e2e.yaml
            environment: Section of the file's "environments" to apply

        Raises:
            ConfigurationError: If the file or an environment value is invalid
        """
        config = copy.deepcopy(DEFAULTS)

        config_path = Path(path or os.environ.get("E2E_CONFIG", "e2e.yaml"))
        if config_path.exists():
            config = cls._merge_config(config, cls._read_yaml(config_path))
            logger.debug(f"Loaded E2E config file: {config_path}")
        elif path:
            raise ConfigurationError(f"Config file not found: {config_path}")

        environment = environment or os.environ.get("E2E_ENV")
        if not environment and os.environ.get("CI"):
            environment = "ci"
        if environment:
            overrides = _mapping(config, "environments").get(environment)
            if overrides is None:
                logger.warning(f"No settings for environment '{environment}', using defaults")
            elif not isinstance(overrides, dict):
                raise ConfigurationError(f"environments.{environment} must be a mapping")
            else:
                config = cls._merge_config(config, overrides)

        config = cls._apply_env(config)
        return E2EConfig.from_dict(config)

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def _merge_config(cls, base: Dict, override: Dict) -> Dict:
        """Deep merge override config into base config."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = cls._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def _apply_env(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        if "E2E_BASE_URL" in os.environ:
            config["base_url"] = os.environ["E2E_BASE_URL"]
        if "E2E_HEADLESS" in os.environ:
            config["headless"] = os.environ["E2E_HEADLESS"].lower() == "true"
        if "E2E_SLOW_MO" in os.environ:
            config["slow_mo"] = cls._get_int_env("E2E_SLOW_MO")
        if "E2E_RETRIES" in os.environ:
            config["retries"] = cls._get_int_env("E2E_RETRIES")
        if "E2E_WORKERS" in os.environ:
            value = os.environ["E2E_WORKERS"]
            config["workers"] = value if value == "auto" else cls._get_int_env("E2E_WORKERS")
        return config

    @staticmethod
    def _get_int_env(key: str) -> int:
        value = os.environ[key]
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got: {value}")


def _with_trailing_slash(url: str) -> str:
    # Relative page paths ("about/") resolve under the base only with a trailing slash
    return url if url.endswith("/") else f"{url}/"


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"{key} must be a mapping, got: {value!r}")
    return value


def _entries(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ConfigurationError(f"{key} must be a list, got: {value!r}")
    for entry in value:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Each {key} entry must be a mapping, got: {entry!r}")
    return value


def _int(data: Dict[str, Any], key: str, default: int, section: Optional[str] = None) -> int:
    value = data.get(key, default)
    name = f"{section}.{key}" if section else key
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}")


def _workers(value: Any) -> Union[int, str]:
    if value == "auto":
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    raise ConfigurationError(f"workers must be 'auto' or a positive integer, got: {value!r}")


def _choice(data: Dict[str, Any], key: str, default: str, choices: tuple) -> str:
    value = data.get(key, default)
    # YAML reads unquoted on/off as booleans
    if isinstance(value, bool):
        value = "on" if value else "off"
    if value not in choices:
        raise ConfigurationError(f"{key} must be one of {', '.join(choices)}, got: {value!r}")
    return value
