"""
================================================================================
Element Locator with Explicit Resolution Strategies
================================================================================

Wraps a Playwright selector and resolves it to concrete elements with a
strategy chosen at the call site:

    - FIRST:          the first match in document order
    - FIRST_VISIBLE:  the first match that is currently visible
                      (a single match is returned as-is)
    - ALL:            every match

Broad selectors on the portfolio site routinely match the desktop and the
mobile copy of the same element, which Playwright refuses to act on in
strict mode. Resolving explicitly keeps the "which element wins" policy
visible where the action is performed.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from loguru import logger
from playwright.async_api import Locator, Page

from .selectors import SelectorLike, describe, resolve_selector


class ElementNotFoundError(Exception):
    """Raised when a required selector matches no element."""

    def __init__(self, selector: str, message: Optional[str] = None):
        self.selector = selector
        super().__init__(message or f"Element not found: {selector}")


class WaitTimeoutError(Exception):
    """Raised when an element or load-state wait exceeds its budget."""

    def __init__(self, target: str, state: str, timeout: int):
        self.target = target
        self.state = state
        self.timeout = timeout
        super().__init__(
            f"Timed out after {timeout}ms waiting for {target} to be {state}"
        )


class Resolution(Enum):
    """How a multi-match selector is narrowed down to elements."""

    FIRST = "first"
    FIRST_VISIBLE = "first_visible"
    ALL = "all"


class ElementLocator:
    """
    Selector bound to a page, resolved on demand.

    Usage:
        >>> element = ElementLocator(page, HeaderSelectors.NAV_CONTACT)
        >>> target = await element.resolve(Resolution.FIRST_VISIBLE)
        >>> if target is not None:
        ...     await target.click()
    """

    def __init__(self, page: Page, target: SelectorLike):
        self.page = page
        self.selector = resolve_selector(target)
        self.name = describe(target)

    @property
    def locator(self) -> Locator:
        """Raw Playwright locator for the selector (may match many)."""
        return self.page.locator(self.selector)

    async def count(self) -> int:
        """Number of matching elements; 0 on any engine error."""
        try:
            return await self.locator.count()
        except Exception as e:
            logger.debug(f"Counting {self.name} failed: {e}")
            return 0

    async def resolve(
        self,
        strategy: Resolution = Resolution.FIRST_VISIBLE,
    ) -> Union[Optional[Locator], List[Locator]]:
        """
        Resolve the selector with the given strategy.

        Args:
            strategy: Resolution strategy

        Returns:
            FIRST / FIRST_VISIBLE: a single-element Locator, or None when
            FIRST_VISIBLE finds no visible candidate.
            ALL: list of single-element Locators (possibly empty).

        Raises:
            ElementNotFoundError: FIRST / FIRST_VISIBLE with zero matches
        """
        total = await self.locator.count()

        if strategy is Resolution.ALL:
            return [self.locator.nth(i) for i in range(total)]

        if total == 0:
            raise ElementNotFoundError(self.selector)

        if strategy is Resolution.FIRST or total == 1:
            return self.locator.first

        for index in range(total):
            candidate = self.locator.nth(index)
            try:
                if await candidate.is_visible():
                    if index > 0:
                        logger.debug(
                            f"{self.name} matched {total} elements, using visible #{index}"
                        )
                    return candidate
            except Exception as e:
                logger.debug(f"Skipping {self.name} #{index}: {e}")
                continue

        logger.debug(f"{self.name} matched {total} elements, none visible")
        return None


__all__ = [
    "ElementLocator",
    "ElementNotFoundError",
    "Resolution",
    "WaitTimeoutError",
]
