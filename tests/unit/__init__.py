"""Offline unit tests: no browser, no network."""
