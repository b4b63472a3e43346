"""
QAbbalah Test Suite

Test categories:
- unit/ - Offline tests of config, data, helpers and page object logic
- e2e/  - Browser tests against the live site (--run-e2e)
"""
