"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- One browser per session, checked for availability before the first test
- Isolated desktop and mobile contexts per test
- Page Object fixtures for every page and shared component
- Failure details (screenshot, URL, recent API calls) attached to Allure

================================================================================
"""

from typing import Any, AsyncGenerator, Dict, List

import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page

from portfolio_tools.common import get_config
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.pages import (
    AboutAppPage,
    AboutPage,
    ContactPage,
    FooterComponent,
    HeaderComponent,
    LiveAutomationPage,
)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    Launches one browser for the whole session and checks the site once.
    An unavailable site is logged, not fatal: the tests then fail on their own.
    """
    manager = BrowserManager()
    await manager.start()

    base_url = get_config("site.base_url")
    if not await manager.check_site_availability(base_url):
        logger.warning("Continuing test run despite site availability issues")

    yield manager
    await manager.close()


@pytest.fixture
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """Desktop-viewport context, new for each test."""
    context = await browser_manager.new_context()
    yield context
    await browser_manager.close_context(context)


@pytest.fixture
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """Desktop page; failure details are captured before it closes."""
    page = await context.new_page()
    yield page
    await _capture_if_failed(request, page)
    await page.close()


@pytest.fixture
async def mobile_context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """Mobile-viewport context (touch enabled), new for each test."""
    context = await browser_manager.new_context(mobile=True)
    yield context
    await browser_manager.close_context(context)


@pytest.fixture
async def mobile_page(request, mobile_context: BrowserContext) -> AsyncGenerator[Page, None]:
    page = await mobile_context.new_page()
    yield page
    await _capture_if_failed(request, page)
    await page.close()


async def _capture_if_failed(request, page: Page) -> None:
    report = getattr(request.node, "rep_call", None)
    if report is None or not report.failed:
        return
    try:
        await BasePage(page).capture_failure(request.node.name)
    except Exception as e:
        # Log but don't fail the teardown if capture fails
        logger.warning(f"Failed to capture failure details: {e}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def about_page(page: Page) -> AboutPage:
    return AboutPage(page)


@pytest.fixture
def about_app_page(page: Page) -> AboutAppPage:
    return AboutAppPage(page)


@pytest.fixture
def contact_page(page: Page) -> ContactPage:
    return ContactPage(page)


@pytest.fixture
def live_automation_page(page: Page) -> LiveAutomationPage:
    return LiveAutomationPage(page)


@pytest.fixture
def header(page: Page) -> HeaderComponent:
    """Header bound to the desktop page."""
    return HeaderComponent(page)


@pytest.fixture
def footer(page: Page) -> FooterComponent:
    return FooterComponent(page)


@pytest.fixture
def mobile_about_page(mobile_page: Page) -> AboutPage:
    return AboutPage(mobile_page)


@pytest.fixture
def mobile_header(mobile_page: Page) -> HeaderComponent:
    """Header bound to the mobile page (collapsed navigation)."""
    return HeaderComponent(mobile_page)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase's report on the item.

    The page fixtures read `rep_call` during teardown to decide whether to
    capture failure details while the page is still open.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def sample_test_runs() -> List[Dict[str, Any]]:
    """
    Run records as the results backend returns them, newest first.
    """
    return [
        {
            "id": "run-0002",
            "timestamp": "2026-10-18T09:01:05.000Z",
            "project": "Playwright",
            "status": "failed",
            "startedAt": "2026-10-18T09:00:00.000Z",
            "finishedAt": "2026-10-18T09:01:05.000Z",
            "duration": 65000,
            "results": {"passed": 41, "failed": 2, "skipped": 1},
            "failures": [
                {
                    "suite": "Contact Page",
                    "title": "shows all contact cards",
                    "projectName": "chromium",
                    "error": "Timed out 5000ms waiting for element",
                },
            ],
            "tests": [
                {"name": "Contact Page > shows all contact cards", "status": "failed"},
                {"name": "Header > navigates to every page", "status": "passed"},
            ],
        },
        {
            "id": "run-0001",
            "timestamp": "2026-10-17T09:00:58.000Z",
            "project": "Playwright",
            "status": "passed",
            "startedAt": "2026-10-17T09:00:00.000Z",
            "finishedAt": "2026-10-17T09:00:58.000Z",
            "duration": 58000,
            "results": {"passed": 44, "failed": 0, "skipped": 0},
            "tests": [
                {"name": "Header > navigates to every page", "status": "passed"},
            ],
        },
    ]
