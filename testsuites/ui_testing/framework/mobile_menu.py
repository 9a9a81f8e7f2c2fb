"""
================================================================================
Mobile Navigation Menu
================================================================================

Two-state (closed / open) model of the hamburger menu shown below the
mobile breakpoint.

The menu keeps no state of its own: every call reads the current state
from the DOM (visibility of the expanded navigation list), because
animations and resize events change it outside the test's control.
open() and close() are idempotent.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

import allure
from loguru import logger

from .selectors import HeaderSelectors

if TYPE_CHECKING:
    from .page_base import BasePage


class MenuState(Enum):
    CLOSED = "closed"
    OPEN = "open"


class MobileMenu:
    """
    Hamburger menu state machine layered on BasePage primitives.

    Usage:
        >>> menu = MobileMenu(base_page)
        >>> await menu.open()
        >>> assert await menu.state() is MenuState.OPEN
    """

    TOGGLE = HeaderSelectors.MOBILE_MENU_TOGGLE
    NAV_LIST = HeaderSelectors.NAV_LIST

    def __init__(self, base_page: "BasePage"):
        self.base_page = base_page

    async def state(self) -> MenuState:
        """Current state, derived from the navigation list's visibility."""
        if await self.base_page.is_visible(self.NAV_LIST):
            return MenuState.OPEN
        return MenuState.CLOSED

    async def is_open(self) -> bool:
        return await self.state() is MenuState.OPEN

    async def open(self, timeout: Optional[int] = None) -> None:
        """Open the menu unless it is already open."""
        if await self.is_open():
            logger.debug("Mobile menu already open")
            return

        with allure.step("Open mobile menu"):
            await self.base_page.click(self.TOGGLE, wait_for_navigation=False)
            await self.base_page.wait_for_visible(self.NAV_LIST, timeout=timeout)
            await self.base_page.wait_for_dom_stable(self.base_page.menu_settle_delay)

    async def close(self, timeout: Optional[int] = None) -> None:
        """Close the menu unless it is already closed."""
        if not await self.is_open():
            logger.debug("Mobile menu already closed")
            return

        with allure.step("Close mobile menu"):
            await self.base_page.click(self.TOGGLE, wait_for_navigation=False)
            await self.base_page.wait_for_hidden(self.NAV_LIST, timeout=timeout)

    async def toggle(self, timeout: Optional[int] = None) -> MenuState:
        """Flip the menu and return the new state."""
        if await self.is_open():
            await self.close(timeout=timeout)
        else:
            await self.open(timeout=timeout)
        return await self.state()


__all__ = [
    "MenuState",
    "MobileMenu",
]
