"""
================================================================================
Footer Component (Async / Playwright)
================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.selectors import FooterSelectors


class FooterComponent(BasePage):
    """Footer with the copyright line (async)."""

    PAGE_ROOT = FooterSelectors.FOOTER

    @allure.step("Verify footer is visible")
    async def verify_footer_visible(self) -> bool:
        await self.scroll_into_view(FooterSelectors.FOOTER)
        return await self.is_visible(FooterSelectors.FOOTER)

    async def get_copyright_text(self) -> str:
        return await self.get_text(FooterSelectors.COPYRIGHT)

    async def verify_copyright_present(self) -> bool:
        """Copyright line is shown and carries the © sign."""
        if not await self.is_visible(FooterSelectors.COPYRIGHT):
            return False
        return "©" in await self.get_copyright_text()
