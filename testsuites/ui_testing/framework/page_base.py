"""
================================================================================
Base Page Object
================================================================================

Foundation class for the portfolio site's Page Object Model.

Provides:
    - Navigation with rate-limit protection and settle waiting
    - Strict-mode tolerant element actions (click, fill, hover)
    - Failure-tolerant queries (visibility, existence, text)
    - Visibility / load-state waits with explicit timeouts
    - Mobile-responsive navigation guard
    - Screenshot and debugging utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import weakref
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import Page, Response
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from portfolio_tools.common import ConfigLoader
from portfolio_tools.report_tools.allure_utils import attach_json, attach_text

from .element_locator import (
    ElementLocator,
    ElementNotFoundError,
    Resolution,
    WaitTimeoutError,
)
from .mobile_menu import MobileMenu
from .rate_limit import RateLimitConfig, navigate_with_protection
from .selectors import HeaderSelectors, SelectorLike


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

DEFAULT_BASE_URL = "https://www.arthursenko.com"

# Load states that must all be reached before a navigation counts as settled
LOAD_STATES = ("domcontentloaded", "networkidle", "load")

# Selector fragments that mark an element as navigation-triggering
NAVIGATION_HINTS = ("nav",)

# Markup size plus running animations; equal consecutive samples with no
# running animation mean the page stopped changing
DOM_SNAPSHOT_SCRIPT = """() => [
    document.body ? document.body.innerHTML.length : 0,
    document.getAnimations
        ? document.getAnimations().filter(a => a.playState === "running").length
        : 0,
]"""


def is_navigation_selector(selector: str) -> bool:
    """True when the selector text suggests a navigation element."""
    lowered = selector.lower()
    return any(hint in lowered for hint in NAVIGATION_HINTS)


class ApiResponseLog:
    """
    Recent `/api/` responses of one Playwright page, kept for failure
    diagnostics.

    Header, footer and page objects usually wrap the same Page; they all
    share the single log (and single listener) registered for it.
    """

    MAX_ENTRIES = 20

    _logs: "weakref.WeakKeyDictionary[Any, ApiResponseLog]" = weakref.WeakKeyDictionary()

    def __init__(self, page: Page):
        self.page = page
        self.entries: List[Dict[str, Any]] = []
        page.on("response", self._on_response)
        page.on("close", self._on_close)

    @classmethod
    def for_page(cls, page: Page) -> "ApiResponseLog":
        log = cls._logs.get(page)
        if log is None:
            log = cls(page)
            cls._logs[page] = log
        return log

    async def _on_response(self, response: Response) -> None:
        if "/api/" not in response.url:
            return
        try:
            body = await response.text()
        except Exception:
            body = "<unable to read>"

        self.entries.append({
            "timestamp": datetime.now().isoformat(),
            "url": response.url,
            "status": response.status,
            "body": body[:1000],
        })
        del self.entries[:-self.MAX_ENTRIES]

    def _on_close(self, *_: Any) -> None:
        self.detach()

    def detach(self) -> None:
        """Stop listening and forget this page."""
        self.page.remove_listener("response", self._on_response)
        self.page.remove_listener("close", self._on_close)
        self._logs.pop(self.page, None)


class BasePage:
    """
    Base class for all page objects.

    Actions (click, fill, hover, wait_for_*) raise when the interaction
    cannot happen. Queries (is_visible, element_exists, get_text, ...)
    never raise: a missing or detached element reads as False / "" / [].

    Usage:
        class ContactPage(BasePage):
            URL_PATH = "/contact"
            PAGE_ROOT = ContactSelectors.EMAIL_CARD

            async def get_card_titles(self) -> List[str]:
                return await self.get_elements_text(ContactSelectors.CONTACT_CARDS)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    PAGE_ROOT: Optional[SelectorLike] = None

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Site base URL (defaults to site.base_url)
            config: Configuration loader (defaults to the shared instance)
        """
        self.page = page
        self.config = config or ConfigLoader()
        if not base_url:
            base_url = self.config.get("site.base_url", DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")

        self.action_timeout = int(self.config.get("timeouts.action", 5000))
        self.navigation_timeout = int(self.config.get("timeouts.navigation", 30000))
        self.settle_delay = int(self.config.get("timeouts.settle", 1000))
        self.menu_settle_delay = int(self.config.get("timeouts.menu_settle", 300))
        self.settle_poll_interval = int(self.config.get("timeouts.settle_poll_interval", 100))
        self.mobile_breakpoint = int(self.config.get("responsive.mobile_breakpoint", 768))
        self.rate_limit = RateLimitConfig.from_config(self.config)

        self.api_log = ApiResponseLog.for_page(page)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        """URL the browser is currently on."""
        return self.page.url

    @property
    def mobile_menu(self) -> MobileMenu:
        """Hamburger menu state machine bound to this page."""
        return MobileMenu(self)

    def element(self, target: SelectorLike) -> ElementLocator:
        """Bind a selector (or registry member) to this page."""
        return ElementLocator(self.page, target)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(self) -> None:
        """Navigate to this page and wait for it to settle."""
        await self.navigate_to(self.URL_PATH)

    async def navigate_to(self, path: str) -> None:
        """
        Navigate to a path under the base URL.

        Args:
            path: URL path, e.g. "/contact"
        """
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await navigate_with_protection(
                self.page,
                full_url,
                self.rate_limit,
                timeout=self.navigation_timeout,
            )
            await self.wait_for_navigation_settle()
            logger.debug(f"Navigated to: {full_url}")

    async def open(self) -> "BasePage":
        """Navigate to the page and wait for its root element."""
        await self.navigate()
        if self.PAGE_ROOT is not None:
            await self.wait_for_visible(self.PAGE_ROOT, timeout=self.navigation_timeout)
        return self

    async def get_title(self) -> str:
        """Document title."""
        return await self.page.title()

    # =========================================================================
    # Element Actions (raise on failure)
    # =========================================================================

    async def click(
        self,
        target: SelectorLike,
        timeout: Optional[int] = None,
        wait_for_navigation: Optional[bool] = None,
    ) -> None:
        """
        Click an element, tolerating selectors that match several elements.

        One match is clicked directly. With several matches the first
        visible one is clicked; when none is visible nothing is clicked.

        Args:
            target: Selector string or registry member
            timeout: Click timeout in milliseconds
            wait_for_navigation: Wait for the page to settle afterwards.
                Defaults to True for navigation-looking selectors.

        Raises:
            ElementNotFoundError: The selector matched nothing
            WaitTimeoutError: The element did not become clickable in time
        """
        element = self.element(target)
        timeout = self.action_timeout if timeout is None else timeout

        with allure.step(f"Click: {element.name}"):
            resolved = await element.resolve(Resolution.FIRST_VISIBLE)
            if resolved is None:
                logger.debug(f"No visible match for {element.name}, click skipped")
                return

            try:
                await resolved.click(timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise WaitTimeoutError(element.selector, "clickable", timeout) from e

            if wait_for_navigation is None:
                wait_for_navigation = is_navigation_selector(element.selector)
            if wait_for_navigation:
                await self.wait_for_navigation_settle()

    async def fill(
        self,
        target: SelectorLike,
        value: str,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Fill the first visible input matching the selector.

        Raises:
            ElementNotFoundError: Nothing matched, or no match is visible
        """
        element = self.element(target)
        timeout = self.action_timeout if timeout is None else timeout

        with allure.step(f"Fill {element.name}: {value}"):
            resolved = await element.resolve(Resolution.FIRST_VISIBLE)
            if resolved is None:
                raise ElementNotFoundError(
                    element.selector,
                    f"No visible element to fill: {element.selector}",
                )
            try:
                await resolved.fill(value, timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise WaitTimeoutError(element.selector, "editable", timeout) from e

    async def hover(
        self,
        target: SelectorLike,
        timeout: Optional[int] = None,
    ) -> None:
        """Hover the first visible element matching the selector."""
        element = self.element(target)
        timeout = self.action_timeout if timeout is None else timeout

        resolved = await element.resolve(Resolution.FIRST_VISIBLE)
        if resolved is None:
            raise ElementNotFoundError(
                element.selector,
                f"No visible element to hover: {element.selector}",
            )
        try:
            await resolved.hover(timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(element.selector, "hoverable", timeout) from e

    # =========================================================================
    # Queries (never raise)
    # =========================================================================

    async def is_visible(self, target: SelectorLike) -> bool:
        """
        Visibility of the first match; False for no match or any error.
        """
        element = self.element(target)
        try:
            first = await element.resolve(Resolution.FIRST)
            return await first.is_visible()
        except Exception as e:
            logger.debug(f"is_visible({element.name}) -> False: {e}")
            return False

    async def element_exists(self, target: SelectorLike) -> bool:
        """True when at least one element matches."""
        return await self.count(target) > 0

    async def count(self, target: SelectorLike) -> int:
        """Number of matching elements (0 on error)."""
        return await self.element(target).count()

    async def get_text(self, target: SelectorLike) -> str:
        """Trimmed text of the first match; "" for no match or any error."""
        element = self.element(target)
        try:
            first = await element.resolve(Resolution.FIRST)
            text = await first.text_content()
        except Exception as e:
            logger.debug(f"get_text({element.name}) -> '': {e}")
            return ""
        return (text or "").strip()

    async def get_elements_text(self, target: SelectorLike) -> List[str]:
        """Trimmed, non-empty texts of every match; [] on error."""
        element = self.element(target)
        try:
            texts = await element.locator.all_text_contents()
        except Exception as e:
            logger.debug(f"get_elements_text({element.name}) -> []: {e}")
            return []
        return [text.strip() for text in texts if text and text.strip()]

    async def get_attribute(self, target: SelectorLike, name: str) -> Optional[str]:
        """Attribute of the first match; None for no match or any error."""
        element = self.element(target)
        try:
            first = await element.resolve(Resolution.FIRST)
            return await first.get_attribute(name)
        except Exception as e:
            logger.debug(f"get_attribute({element.name}, {name}) -> None: {e}")
            return None

    async def get_css_property(self, target: SelectorLike, name: str) -> str:
        """Computed style property of the first match; "" on error."""
        element = self.element(target)
        try:
            first = await element.resolve(Resolution.FIRST)
            value = await first.evaluate(
                "(el, name) => window.getComputedStyle(el).getPropertyValue(name)",
                name,
            )
        except Exception as e:
            logger.debug(f"get_css_property({element.name}, {name}) -> '': {e}")
            return ""
        return (value or "").strip()

    async def scroll_into_view(self, target: SelectorLike) -> bool:
        """Scroll the first match into view; False when it cannot be."""
        element = self.element(target)
        try:
            first = await element.resolve(Resolution.FIRST)
            await first.scroll_into_view_if_needed(timeout=self.action_timeout)
        except Exception as e:
            logger.debug(f"scroll_into_view({element.name}) skipped: {e}")
            return False
        return True

    async def get_elements_attribute(self, target: SelectorLike, name: str) -> List[str]:
        """Non-empty attribute values of every match."""
        element = self.element(target)
        values: List[str] = []
        try:
            for item in await element.resolve(Resolution.ALL):
                value = await item.get_attribute(name)
                if value:
                    values.append(value)
        except Exception as e:
            logger.debug(f"get_elements_attribute({element.name}, {name}) failed: {e}")
        return values

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def wait_for_visible(
        self,
        target: SelectorLike,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait until the first match is visible.

        Raises:
            WaitTimeoutError: Not visible within the timeout
        """
        await self._wait_for_state(target, "visible", timeout)

    async def wait_for_hidden(
        self,
        target: SelectorLike,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait until the first match is hidden or detached.

        Raises:
            WaitTimeoutError: Still visible after the timeout
        """
        await self._wait_for_state(target, "hidden", timeout)

    async def _wait_for_state(
        self,
        target: SelectorLike,
        state: str,
        timeout: Optional[int],
    ) -> None:
        element = self.element(target)
        timeout = self.action_timeout if timeout is None else timeout
        try:
            await element.locator.first.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(element.selector, state, timeout) from e

    async def wait_for_navigation_settle(self, timeout: Optional[int] = None) -> None:
        """
        Wait for every load state, then for the DOM to stop changing.

        Raises:
            WaitTimeoutError: A load state was not reached in time
        """
        timeout = self.navigation_timeout if timeout is None else timeout
        for state in LOAD_STATES:
            try:
                await self.page.wait_for_load_state(state, timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise WaitTimeoutError("page", state, timeout) from e

        await self.wait_for_dom_stable(self.settle_delay)

    async def wait_for_dom_stable(self, max_wait_ms: int) -> bool:
        """
        Poll the DOM until two consecutive samples match with no running
        animation, waiting at most max_wait_ms.

        Returns:
            True if the DOM settled early, False if the full delay elapsed
        """
        waited = 0
        previous = None

        while waited < max_wait_ms:
            try:
                snapshot = await self.page.evaluate(DOM_SNAPSHOT_SCRIPT)
            except Exception as e:
                logger.debug(f"DOM snapshot failed: {e}")
                snapshot = None

            if snapshot is not None and snapshot == previous and not snapshot[1]:
                return True

            previous = snapshot
            step = min(self.settle_poll_interval, max_wait_ms - waited)
            await self.page.wait_for_timeout(step)
            waited += step

        logger.debug(f"DOM did not settle within {max_wait_ms}ms")
        return False

    # =========================================================================
    # Responsive Navigation
    # =========================================================================

    async def get_viewport_width(self) -> Optional[int]:
        """Viewport width from the context, falling back to window.innerWidth."""
        size = self.page.viewport_size
        if size:
            return size["width"]
        try:
            return int(await self.page.evaluate("() => window.innerWidth"))
        except Exception as e:
            logger.debug(f"Could not read viewport width: {e}")
            return None

    async def is_mobile_viewport(self) -> bool:
        """True at or below the mobile breakpoint."""
        width = await self.get_viewport_width()
        return width is not None and width <= self.mobile_breakpoint

    async def ensure_navigation_visible(self, timeout: Optional[int] = None) -> None:
        """
        Make the primary navigation usable before asserting on it.

        On mobile viewports the collapsed menu is opened first when its
        toggle is present.

        Raises:
            WaitTimeoutError: The navigation list never became visible
        """
        with allure.step("Ensure primary navigation is visible"):
            if await self.has_collapsed_navigation():
                await self.mobile_menu.open()
            await self.wait_for_visible(HeaderSelectors.NAV_LIST, timeout=timeout)

    async def has_collapsed_navigation(self) -> bool:
        """True on a mobile viewport that renders the hamburger toggle."""
        if not await self.is_mobile_viewport():
            return False
        if await self.element_exists(HeaderSelectors.MOBILE_MENU_TOGGLE):
            return True
        logger.debug("Mobile viewport without a menu toggle")
        return False

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """Attach screenshot, current URL and recent API calls to Allure."""
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)

            attach_text(self.page.url, name="Current URL")
            if self.api_log.entries:
                attach_json(self.api_log.entries[-10:], name="Recent API Requests")


__all__ = [
    "ApiResponseLog",
    "BasePage",
    "is_navigation_selector",
]
