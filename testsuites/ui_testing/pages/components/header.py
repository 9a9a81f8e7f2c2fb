"""
================================================================================
Header Component (Async / Playwright)
================================================================================

Site header with the primary navigation.

Highlights:
  - Navigation verbs for each of the four pages
  - Mobile-aware: the hamburger menu is opened before touching a nav link
    and closed again once the navigation settled
  - Active-link detection through the link's computed colour

================================================================================
"""

from __future__ import annotations

from typing import Dict, List

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.selectors import HeaderSelectors


# Colour the site gives the link of the page being shown (#3498db)
ACTIVE_LINK_COLOR = "rgb(52, 152, 219)"


class HeaderComponent(BasePage):
    """Header component shared by every page (async)."""

    PAGE_ROOT = HeaderSelectors.HEADER

    # Link -> path it leads to
    NAV_TARGETS: Dict[HeaderSelectors, str] = {
        HeaderSelectors.NAV_ABOUT: "/",
        HeaderSelectors.NAV_ABOUT_APP: "/about-app",
        HeaderSelectors.NAV_LIVE_AUTOMATION: "/live-automation",
        HeaderSelectors.NAV_CONTACT: "/contact",
    }

    # Link -> label shown to visitors
    NAV_LABELS: Dict[HeaderSelectors, str] = {
        HeaderSelectors.NAV_ABOUT: "About Me",
        HeaderSelectors.NAV_ABOUT_APP: "About This App",
        HeaderSelectors.NAV_LIVE_AUTOMATION: "Live Automation",
        HeaderSelectors.NAV_CONTACT: "Contact",
    }

    @allure.step("Verify header is visible")
    async def verify_header_visible(self) -> bool:
        return await self.is_visible(HeaderSelectors.HEADER)

    @allure.step("Verify navigation is usable")
    async def verify_navigation_active(self) -> bool:
        """Open the mobile menu if needed, then check the nav list is visible."""
        await self.ensure_navigation_visible()
        return await self.is_visible(HeaderSelectors.NAV_LIST)

    async def is_hamburger_menu_visible(self) -> bool:
        return await self.is_visible(HeaderSelectors.MOBILE_MENU_TOGGLE)

    async def get_nav_link_texts(self) -> List[str]:
        """Visible labels of the navigation links."""
        await self.ensure_navigation_visible()
        return await self.get_elements_text(HeaderSelectors.NAV_LINKS)

    async def verify_all_links_present(self) -> bool:
        """Every page has a navigation link with its expected label."""
        labels = await self.get_nav_link_texts()
        missing = [label for label in self.NAV_LABELS.values() if label not in labels]
        if missing:
            logger.warning(f"Navigation links missing: {missing}")
        return not missing

    async def is_nav_link_active(self, link: HeaderSelectors) -> bool:
        """The link is painted in the active colour."""
        return await self.get_css_property(link, "color") == ACTIVE_LINK_COLOR

    @allure.step("Verify mobile navigation")
    async def verify_mobile_navigation(self) -> bool:
        """
        Open the hamburger menu, check every link is shown, close it again.

        Returns:
            False on viewports without the hamburger menu
        """
        if not await self.has_collapsed_navigation():
            return False

        await self.mobile_menu.open()
        links_ok = await self.verify_all_links_present()
        await self.mobile_menu.close()
        return links_ok and not await self.mobile_menu.is_open()

    async def _navigate_via(self, link: HeaderSelectors) -> None:
        collapsed = await self.has_collapsed_navigation()
        await self.ensure_navigation_visible()
        await self.click(link, wait_for_navigation=True)
        if collapsed:
            await self.mobile_menu.close()

    @allure.step("Navigate to About Me via header")
    async def navigate_to_about(self) -> None:
        await self._navigate_via(HeaderSelectors.NAV_ABOUT)

    @allure.step("Navigate to About This App via header")
    async def navigate_to_about_app(self) -> None:
        await self._navigate_via(HeaderSelectors.NAV_ABOUT_APP)

    @allure.step("Navigate to Live Automation via header")
    async def navigate_to_live_automation(self) -> None:
        await self._navigate_via(HeaderSelectors.NAV_LIVE_AUTOMATION)

    @allure.step("Navigate to Contact via header")
    async def navigate_to_contact(self) -> None:
        await self._navigate_via(HeaderSelectors.NAV_CONTACT)
