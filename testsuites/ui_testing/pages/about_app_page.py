"""
================================================================================
About-This-App Page Object (Async / Playwright)
================================================================================

Describes how the portfolio site itself is built: one section per
component (frontend, backend, automation framework, development tools),
an architecture overview and links to the source repositories.

Source links open in a new tab; `open_code_link` follows the popup and
reports where it landed.

================================================================================
"""

from __future__ import annotations

from typing import Dict

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.selectors import AboutAppSelectors


# Shortest text a section may carry and still count as described
MIN_SECTION_TEXT = 10


class AboutAppPage(BasePage):
    """About-This-App page object (async)."""

    URL_PATH = "/about-app"
    PAGE_ROOT = AboutAppSelectors.COMPONENTS

    SECTIONS: Dict[str, AboutAppSelectors] = {
        "components": AboutAppSelectors.COMPONENTS,
        "architecture": AboutAppSelectors.ARCHITECTURE,
        "frontend": AboutAppSelectors.FRONTEND,
        "backend": AboutAppSelectors.BACKEND,
        "automation_framework": AboutAppSelectors.AUTOMATION_FRAMEWORK,
        "development_tools": AboutAppSelectors.DEVELOPMENT_TOOLS,
    }

    LINKS: Dict[str, AboutAppSelectors] = {
        "frontend_code": AboutAppSelectors.FRONTEND_CODE_LINK,
        "backend_code": AboutAppSelectors.BACKEND_CODE_LINK,
        "automation_code": AboutAppSelectors.AUTOMATION_CODE_LINK,
        "live_results": AboutAppSelectors.LIVE_RESULTS_LINK,
    }

    # Links that leave the site for GitHub
    CODE_LINKS = ("frontend_code", "backend_code", "automation_code")

    @allure.step("Open About This App page")
    async def open(self) -> "AboutAppPage":
        await super().open()
        return self

    # =========================================================================
    # Sections
    # =========================================================================

    @allure.step("Verify component sections")
    async def verify_component_sections(self) -> bool:
        """Every component section is visible."""
        missing = []
        for name, selector in self.SECTIONS.items():
            await self.scroll_into_view(selector)
            if not await self.is_visible(selector):
                missing.append(name)

        if missing:
            logger.warning(f"About This App sections not visible: {missing}")
        return not missing

    @allure.step("Verify architecture section")
    async def verify_architecture_section(self) -> bool:
        await self.scroll_into_view(AboutAppSelectors.ARCHITECTURE)
        if not await self.is_visible(AboutAppSelectors.ARCHITECTURE):
            return False
        return len(await self.get_section_content("architecture")) > MIN_SECTION_TEXT

    async def get_section_content(self, name: str) -> str:
        return await self.get_text(self.SECTIONS[name])

    async def get_all_section_content(self) -> Dict[str, str]:
        return {name: await self.get_section_content(name) for name in self.SECTIONS}

    async def verify_all_section_content(self) -> bool:
        """Every section carries more than a heading's worth of text."""
        contents = await self.get_all_section_content()
        thin = [name for name, text in contents.items() if len(text) <= MIN_SECTION_TEXT]
        if thin:
            logger.warning(f"Sections with too little content: {thin}")
        return not thin

    # =========================================================================
    # Links
    # =========================================================================

    @allure.step("Verify all links")
    async def verify_all_links(self) -> bool:
        """Every link is visible and has an href."""
        for name, selector in self.LINKS.items():
            await self.scroll_into_view(selector)
            if not await self.is_visible(selector):
                logger.warning(f"Link not visible: {name}")
                return False
            if not await self.get_attribute(selector, "href"):
                logger.warning(f"Link without href: {name}")
                return False
        return True

    async def get_link_urls(self) -> Dict[str, str]:
        return {
            name: await self.get_attribute(selector, "href") or ""
            for name, selector in self.LINKS.items()
        }

    @allure.step("Follow {name} link in a new tab")
    async def open_code_link(self, name: str) -> str:
        """
        Click a source link, wait for the tab it opens and close it.

        Returns:
            URL the new tab loaded
        """
        async with self.page.expect_popup(timeout=self.navigation_timeout) as popup_info:
            await self.click(self.LINKS[name], wait_for_navigation=False)
        popup = await popup_info.value
        try:
            await popup.wait_for_load_state("domcontentloaded", timeout=self.navigation_timeout)
            return popup.url
        finally:
            await popup.close()

    @allure.step("Go to live results")
    async def click_live_results_link(self) -> None:
        await self.scroll_into_view(AboutAppSelectors.LIVE_RESULTS_LINK)
        await self.click(AboutAppSelectors.LIVE_RESULTS_LINK, wait_for_navigation=True)
