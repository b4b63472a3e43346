"""
QAbbalah E2E Test Suite

End-to-end browser tests using Playwright, run against the live blog.

Structure:
    conftest.py            - Browser, page object and utility fixtures
    test_smoke.py          - Critical path checks
    test_homepage.py       - Home page sections
    test_navigation.py     - Menu, profile and post navigation
    test_journeys.py       - Complete reader journeys
    test_responsive.py     - Viewport layouts
    test_accessibility.py  - WCAG oriented checks
    test_visual.py         - Screenshot baselines

Running Tests:
    pip install -e ".[test]"
    playwright install

    # Run all tests
    pytest tests/e2e/ --run-e2e

    # Run with visible browser
    pytest tests/e2e/ --run-e2e --headed

    # Run a configured project
    pytest tests/e2e/ --run-e2e --project "Mobile Chrome"

    # Run smoke tests only
    pytest tests/e2e/ --run-e2e -m smoke

    # Refresh visual baselines
    pytest tests/e2e/test_visual.py --run-e2e --update-snapshots
"""
