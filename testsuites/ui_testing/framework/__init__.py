"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based resilient interaction layer for the portfolio site.

Components:
    - selectors: Typed selector registry per page/component
    - element_locator: Selector resolution with explicit strategies
    - page_base: Base page object (actions, queries, waits, settle policy)
    - mobile_menu: Hamburger menu state machine
    - rate_limit: Retry helper for rate-limited navigation and clicks
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .element_locator import (
    ElementLocator,
    ElementNotFoundError,
    Resolution,
    WaitTimeoutError,
)
from .page_base import BasePage
from .mobile_menu import MenuState, MobileMenu
from .rate_limit import RateLimitConfig, RateLimitError, with_rate_limit_retry
from .browser_manager import BrowserManager

__all__ = [
    "ElementLocator",
    "ElementNotFoundError",
    "Resolution",
    "WaitTimeoutError",
    "BasePage",
    "MenuState",
    "MobileMenu",
    "RateLimitConfig",
    "RateLimitError",
    "with_rate_limit_retry",
    "BrowserManager",
]
