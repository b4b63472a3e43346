"""
Helpers shared by the test suites.
"""

from .accessibility import (
    A11yViolation,
    Severity,
    assert_no_critical_violations,
    check_focus_visible,
    check_heading_hierarchy,
    check_images_have_alt,
    check_links_accessible,
    check_page_language,
    filter_by_severity,
    run_accessibility_checks,
)
from .helpers import (
    format_date,
    generate_random_string,
    get_all_page_text,
    get_timestamp,
    is_element_in_viewport,
    retry,
    scroll_full_page,
    take_timestamped_screenshot,
    url_matches,
    verify_links_not_broken,
    wait,
)
from .visual import ImageDiff, SnapshotStore, compare_images
