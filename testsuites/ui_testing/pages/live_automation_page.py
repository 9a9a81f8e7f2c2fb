"""
================================================================================
Live Automation Page Object (Async / Playwright)
================================================================================

Dashboard that lists the uploaded results of this very suite, fetched from
the results backend (`/api/test-runs`), one collapsible card per run.

Highlights:
  - Card parts addressed by index through `card_part()`
  - Expand/collapse verified through `aria-expanded`, falling back to the
    visibility of the card's content region
  - "Load more results" paging
  - Route interception to serve deterministic run records or an error

================================================================================
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import Route

from testsuites.ui_testing.framework.element_locator import WaitTimeoutError
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.selectors import CommonSelectors, LiveAutomationSelectors


TEST_RUNS_API_PATTERN = "**/api/test-runs**"

# Labels every expanded card shows in its summary
RUN_SUMMARY_LABELS = ("Duration", "Success Rate", "Passed", "Failed")

_DIGITS = re.compile(r"\d+")


def _first_number(text: str) -> int:
    match = _DIGITS.search(text or "")
    return int(match.group()) if match else 0


class LiveAutomationPage(BasePage):
    """Live-Automation page object (async)."""

    URL_PATH = "/live-automation"
    PAGE_ROOT = LiveAutomationSelectors.SECTION

    # Interval between expanded-state checks after a header click
    EXPAND_POLL_MS = 100

    @allure.step("Open Live Automation page")
    async def open(self) -> "LiveAutomationPage":
        await super().open()
        return self

    async def get_page_title(self) -> str:
        return await self.get_text(CommonSelectors.PAGE_TITLE)

    # =========================================================================
    # Backend mocking
    # =========================================================================

    @allure.step("Serve mocked test runs")
    async def mock_test_runs_api(self, records: List[Dict[str, Any]]) -> None:
        """
        Answer the dashboard's results request with the given run records.

        Must be called before open() so the first fetch is intercepted.
        """
        body = json.dumps(records)

        async def handler(route: Route) -> None:
            logger.debug(f"Serving {len(records)} mocked runs for {route.request.url}")
            await route.fulfill(status=200, content_type="application/json", body=body)

        await self.page.route(TEST_RUNS_API_PATTERN, handler)

    @allure.step("Fail test runs API with HTTP {status}")
    async def mock_test_runs_api_failure(self, status: int = 500) -> None:
        async def handler(route: Route) -> None:
            await route.fulfill(
                status=status,
                content_type="application/json",
                body=json.dumps({"error": "Internal Server Error"}),
            )

        await self.page.route(TEST_RUNS_API_PATTERN, handler)

    async def clear_mocks(self) -> None:
        await self.page.unroute(TEST_RUNS_API_PATTERN)

    # =========================================================================
    # Loading
    # =========================================================================

    @allure.step("Wait for test runs to load")
    async def wait_for_runs_loaded(self, timeout: Optional[int] = None) -> None:
        """
        Loading placeholder gone, then either the error state or the run
        list with at least one card.

        Raises:
            WaitTimeoutError: Neither appeared in time
        """
        await self.wait_for_hidden(LiveAutomationSelectors.LOADING, timeout=timeout)
        if await self.is_error_displayed():
            return
        await self.wait_for_visible(LiveAutomationSelectors.RUN_LIST, timeout=timeout)
        await self.wait_for_visible(LiveAutomationSelectors.RUN_CARDS, timeout=timeout)

    async def is_loading_displayed(self) -> bool:
        return await self.is_visible(LiveAutomationSelectors.LOADING)

    async def is_error_displayed(self) -> bool:
        return await self.is_visible(LiveAutomationSelectors.ERROR_MESSAGE)

    async def get_error_text(self) -> str:
        return await self.get_text(LiveAutomationSelectors.ERROR_MESSAGE)

    async def get_run_count(self) -> int:
        return await self.count(LiveAutomationSelectors.RUN_CARDS)

    @allure.step("Load more results")
    async def click_load_more(self) -> bool:
        """
        Click "Load more results" when the button is shown.

        Returns:
            False when there was nothing more to load
        """
        if not await self.is_visible(LiveAutomationSelectors.LOAD_MORE):
            logger.debug("No 'Load more results' button")
            return False
        await self.click(LiveAutomationSelectors.LOAD_MORE, wait_for_navigation=False)
        await self.page.wait_for_load_state("networkidle", timeout=self.navigation_timeout)
        return True

    @allure.step("Reload dashboard")
    async def reload(self) -> None:
        await self.page.reload(timeout=self.navigation_timeout)
        await self.wait_for_navigation_settle()
        await self.wait_for_runs_loaded()

    # =========================================================================
    # Run cards
    # =========================================================================

    @staticmethod
    def card_part(index: int, part: LiveAutomationSelectors) -> str:
        """Selector for a part inside the index-th run card."""
        return f"{LiveAutomationSelectors.RUN_CARDS.value} >> nth={index} >> {part.value}"

    async def get_header_aria_expanded(self, index: int) -> Optional[str]:
        return await self.get_attribute(
            self.card_part(index, LiveAutomationSelectors.RUN_HEADER), "aria-expanded"
        )

    async def is_run_expanded(self, index: int) -> bool:
        """aria-expanded when the header carries it, content visibility otherwise."""
        aria = await self.get_header_aria_expanded(index)
        if aria is not None:
            return aria == "true"
        return await self.is_visible(self.card_part(index, LiveAutomationSelectors.RUN_CONTENT))

    @allure.step("Expand test run {index}")
    async def expand_run(self, index: int) -> None:
        """
        Raises:
            WaitTimeoutError: The card did not open
        """
        if await self.is_run_expanded(index):
            return
        await self._toggle_run(index, expanded=True)

    @allure.step("Collapse test run {index}")
    async def collapse_run(self, index: int) -> None:
        """
        Raises:
            WaitTimeoutError: The card did not close
        """
        if not await self.is_run_expanded(index):
            return
        await self._toggle_run(index, expanded=False)

    async def _toggle_run(self, index: int, expanded: bool) -> None:
        header = self.card_part(index, LiveAutomationSelectors.RUN_HEADER)
        await self.click(header, wait_for_navigation=False)

        waited = 0
        while await self.is_run_expanded(index) is not expanded:
            if waited >= self.action_timeout:
                state = "expanded" if expanded else "collapsed"
                raise WaitTimeoutError(f"test run card {index}", state, self.action_timeout)
            await self.page.wait_for_timeout(self.EXPAND_POLL_MS)
            waited += self.EXPAND_POLL_MS

    @allure.step("Verify content of test run {index}")
    async def verify_run_content(self, index: int) -> bool:
        """Expanded card shows every summary label."""
        await self.expand_run(index)
        content = (
            await self.get_text(self.card_part(index, LiveAutomationSelectors.RUN_CONTENT))
        ).lower()
        missing = [label for label in RUN_SUMMARY_LABELS if label.lower() not in content]
        if missing:
            logger.warning(f"Test run {index} content lacks: {missing}")
        return not missing

    async def get_run_name(self, index: int) -> str:
        return await self.get_text(self.card_part(index, LiveAutomationSelectors.RUN_HEADER))

    async def get_run_duration(self, index: int) -> str:
        """Duration is only rendered inside an expanded card."""
        await self.expand_run(index)
        return await self.get_text(self.card_part(index, LiveAutomationSelectors.RUN_DURATION))

    async def get_run_counts(self, index: int) -> Dict[str, int]:
        return {
            "passed": _first_number(
                await self.get_text(self.card_part(index, LiveAutomationSelectors.RUN_PASSED))
            ),
            "failed": _first_number(
                await self.get_text(self.card_part(index, LiveAutomationSelectors.RUN_FAILED))
            ),
        }

    async def get_run_status(self, index: int) -> str:
        """"passed" when some tests passed and none failed, else "failed"."""
        counts = await self.get_run_counts(index)
        return "passed" if counts["passed"] > 0 and counts["failed"] == 0 else "failed"
