"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for the portfolio UI suite.

Features:
    - Single browser instance per worker process
    - Isolated desktop and mobile contexts
    - Site availability pre-check with rate-limit aware retries
    - Browser configuration from config/config.yaml

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from portfolio_tools.common import ConfigLoader


class BrowserManager:
    """
    Manages the browser instance and its contexts.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("https://www.arthursenko.com")

        # Mobile viewport (hamburger navigation)
        async with BrowserManager() as manager:
            page = await manager.new_page(mobile=True)
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": ["--ignore-certificate-errors"],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
        "locale": "en-US",
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (defaults to browser.headless)
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to browser.type)
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.headless = (
            headless if headless is not None
            else bool(self.config.get("browser.headless", True))
        )
        self.browser_type = browser_type or self.config.get("browser.type", "chromium")

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    @property
    def desktop_viewport(self) -> Dict[str, int]:
        return {
            "width": int(self.config.get("browser.viewport_width", 1280)),
            "height": int(self.config.get("browser.viewport_height", 720)),
        }

    @property
    def mobile_viewport(self) -> Dict[str, int]:
        return {
            "width": int(self.config.get("browser.mobile_viewport_width", 390)),
            "height": int(self.config.get("browser.mobile_viewport_height", 844)),
        }

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(
        self,
        mobile: bool = False,
        **options: Any,
    ) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            mobile: Use the mobile viewport with touch enabled
            **options: Additional context options (override defaults)

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options: Dict[str, Any] = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": self.mobile_viewport if mobile else self.desktop_viewport,
            "user_agent": self.config.get("browser.user_agent"),
        }
        if mobile:
            context_options.update({"has_touch": True, "is_mobile": True})
        if self.browser_type == "chromium":
            context_options["permissions"] = ["clipboard-read", "clipboard-write"]
        context_options.update(options)
        context_options = {k: v for k, v in context_options.items() if v is not None}

        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    async def close_context(self, context: BrowserContext) -> None:
        """Close a context and stop tracking it."""
        if context in self._contexts:
            self._contexts.remove(context)
        try:
            await context.close()
        except Exception as e:
            logger.debug(f"Context already closed: {e}")

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        mobile: bool = False,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            mobile: Create a mobile context when no context is given
            **context_options: Options for new context

        Returns:
            New Page
        """
        if context is None:
            context = await self.new_context(mobile=mobile, **context_options)

        return await context.new_page()

    async def check_site_availability(
        self,
        url: str,
        attempts: Optional[int] = None,
        retry_delay_ms: int = 2000,
        rate_limit_delay_ms: int = 5000,
    ) -> bool:
        """
        Check the site is reachable before the suite starts.

        A 429 answer waits longer before the next attempt. Failures are
        reported, not raised: the suite still runs and fails on its own.

        Args:
            url: Site URL to check
            attempts: Number of attempts (defaults to browser.availability_attempts)
            retry_delay_ms: Pause between attempts
            rate_limit_delay_ms: Extra pause after a 429 answer

        Returns:
            True if the site answered 200
        """
        attempts = attempts or int(self.config.get("browser.availability_attempts", 3))
        context = await self.new_context()
        page = await context.new_page()

        try:
            for attempt in range(1, attempts + 1):
                try:
                    response = await page.goto(url, wait_until="domcontentloaded", timeout=30000)
                    status = response.status if response else None
                    if status == 200:
                        logger.info(f"Site is available: {url}")
                        return True
                    if status == 429:
                        logger.warning(
                            f"Rate limiting detected (429). Waiting before retry "
                            f"(attempt {attempt}/{attempts})"
                        )
                        await page.wait_for_timeout(rate_limit_delay_ms)
                    else:
                        logger.warning(
                            f"Site returned status {status} (attempt {attempt}/{attempts})"
                        )
                except Exception as e:
                    logger.warning(f"Site access failed: {e} (attempt {attempt}/{attempts})")

                if attempt < attempts:
                    await page.wait_for_timeout(retry_delay_ms)

            logger.error(f"Site is not available or rate limiting is active: {url}")
            return False
        finally:
            await self.close_context(context)

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
]
