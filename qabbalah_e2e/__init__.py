"""
QAbbalah E2E

Page objects, test data and helpers for the Playwright end-to-end suite
that covers the QAbbalah blog.
"""

__version__ = "0.1.0"
