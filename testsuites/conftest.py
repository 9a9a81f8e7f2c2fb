"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the test suites.
It registers common markers and tags tests by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser tests against the live site"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests without a browser"
    )
    config.addinivalue_line(
        "markers", "mobile: Tests run in the mobile viewport"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "header: Tests related to the site header and navigation"
    )
    config.addinivalue_line(
        "markers", "footer: Tests related to the site footer"
    )
    config.addinivalue_line(
        "markers", "about: Tests related to the About page"
    )
    config.addinivalue_line(
        "markers", "about_app: Tests related to the About This App page"
    )
    config.addinivalue_line(
        "markers", "contact: Tests related to the Contact page"
    )
    config.addinivalue_line(
        "markers", "live_automation: Tests related to the Live Automation dashboard"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by the directory they live in."""
    for item in items:
        path = item.path.as_posix()

        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        # Auto-add 'unit' marker to tests in unit directory
        if "testsuites/unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Portfolio Site UI Automation",
        "=" * 60,
        "",
    ]
