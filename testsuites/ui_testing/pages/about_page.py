"""
================================================================================
About Me Page Object (Async / Playwright)
================================================================================

The landing page: profile, resume link, bio, current role with company
links, technical skills, notable achievements and the back-to-top button.

Sections further down the page render lazily, so each section check
scrolls it into view first.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from testsuites.ui_testing.framework.element_locator import WaitTimeoutError
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.selectors import AboutSelectors, CommonSelectors


class AboutPage(BasePage):
    """About Me page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Arthur Senko"
    PAGE_ROOT = AboutSelectors.PROFILE_SECTION

    # Time given to smooth scrolling before the position is read
    SCROLL_SETTLE_MS = 1000

    @allure.step("Open About Me page")
    async def open(self) -> "AboutPage":
        await super().open()
        return self

    async def get_page_title(self) -> str:
        return await self.get_text(CommonSelectors.PAGE_TITLE)

    async def _is_section_visible(self, section: AboutSelectors) -> bool:
        await self.scroll_into_view(section)
        return await self.is_visible(section)

    # =========================================================================
    # Profile
    # =========================================================================

    @allure.step("Verify profile content")
    async def verify_profile(self) -> bool:
        """Name, image, bio and resume link are all visible."""
        for target in (
            AboutSelectors.PROFILE_NAME,
            AboutSelectors.PROFILE_IMAGE,
            AboutSelectors.BIO,
            AboutSelectors.RESUME_LINK,
        ):
            if not await self._is_section_visible(target):
                return False
        return True

    async def get_profile_name(self) -> str:
        return await self.get_text(AboutSelectors.PROFILE_NAME)

    async def get_bio(self) -> str:
        return await self.get_text(AboutSelectors.BIO)

    async def get_profile_image_alt(self) -> str:
        return await self.get_attribute(AboutSelectors.PROFILE_IMAGE, "alt") or ""

    async def is_profile_image_loaded(self) -> bool:
        """The image decoded with a non-zero natural width."""
        image = self.element(AboutSelectors.PROFILE_IMAGE).locator.first
        try:
            return bool(await image.evaluate("img => img.complete && img.naturalWidth > 0"))
        except Exception:
            return False

    async def get_resume_href(self) -> str:
        return await self.get_attribute(AboutSelectors.RESUME_LINK, "href") or ""

    # =========================================================================
    # Current Role
    # =========================================================================

    async def is_current_role_visible(self) -> bool:
        return await self._is_section_visible(AboutSelectors.CURRENT_ROLE_SECTION)

    async def get_current_role_title(self) -> str:
        return await self.get_text(AboutSelectors.CURRENT_ROLE_TITLE)

    async def get_allergan_href(self) -> str:
        await self.scroll_into_view(AboutSelectors.CURRENT_ROLE_SECTION)
        return await self.get_attribute(AboutSelectors.ALLERGAN_LINK, "href") or ""

    async def get_abbvie_href(self) -> str:
        await self.scroll_into_view(AboutSelectors.CURRENT_ROLE_SECTION)
        return await self.get_attribute(AboutSelectors.ABBVIE_LINK, "href") or ""

    # =========================================================================
    # Skills and Achievements
    # =========================================================================

    async def is_skills_section_visible(self) -> bool:
        return await self._is_section_visible(AboutSelectors.SKILLS_SECTION)

    async def get_skills_title(self) -> str:
        return await self.get_text(AboutSelectors.SKILLS_TITLE)

    async def get_skills(self) -> List[str]:
        return await self.get_elements_text(AboutSelectors.SKILL_ITEMS)

    async def is_achievements_section_visible(self) -> bool:
        return await self._is_section_visible(AboutSelectors.ACHIEVEMENTS_SECTION)

    async def get_achievements_title(self) -> str:
        return await self.get_text(AboutSelectors.ACHIEVEMENTS_TITLE)

    async def get_achievements(self) -> List[str]:
        return await self.get_elements_text(AboutSelectors.ACHIEVEMENT_ITEMS)

    # =========================================================================
    # Scrolling
    # =========================================================================

    @allure.step("Scroll to the bottom of the page")
    async def scroll_to_bottom(self) -> None:
        await self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        await self.page.wait_for_timeout(self.SCROLL_SETTLE_MS)

    async def get_scroll_position(self) -> int:
        return int(await self.page.evaluate("() => window.scrollY") or 0)

    async def is_back_to_top_visible(self) -> bool:
        """The button only appears once the page is scrolled down."""
        try:
            await self.wait_for_visible(AboutSelectors.BACK_TO_TOP)
        except WaitTimeoutError:
            return False
        return True

    @allure.step("Click back to top")
    async def click_back_to_top(self) -> None:
        await self.click(AboutSelectors.BACK_TO_TOP, wait_for_navigation=False)
        await self.page.wait_for_timeout(self.SCROLL_SETTLE_MS)
