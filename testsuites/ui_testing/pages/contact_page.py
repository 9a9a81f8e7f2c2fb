"""
================================================================================
Contact Page Object (Async / Playwright)
================================================================================

Contact cards for email, phone and LinkedIn.

Highlights:
  - One verb to verify every card at once (`verify_all_contact_cards`)
  - Copy-to-clipboard buttons with their confirmation message
  - Clipboard read-back (needs the clipboard permissions granted on the
    browser context)

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.selectors import ContactSelectors


@dataclass(frozen=True)
class ContactCard:
    """Selectors of one contact card."""

    card: ContactSelectors
    link: ContactSelectors
    copy_button: ContactSelectors
    copy_message: ContactSelectors


class ContactPage(BasePage):
    """Contact page object (async)."""

    URL_PATH = "/contact"
    PAGE_ROOT = ContactSelectors.EMAIL_CARD

    # Card name -> selectors, in the order the page renders them
    CARDS: Dict[str, ContactCard] = {
        "email": ContactCard(
            ContactSelectors.EMAIL_CARD,
            ContactSelectors.EMAIL_LINK,
            ContactSelectors.EMAIL_COPY_BUTTON,
            ContactSelectors.EMAIL_COPY_MESSAGE,
        ),
        "phone": ContactCard(
            ContactSelectors.PHONE_CARD,
            ContactSelectors.PHONE_LINK,
            ContactSelectors.PHONE_COPY_BUTTON,
            ContactSelectors.PHONE_COPY_MESSAGE,
        ),
        "linkedin": ContactCard(
            ContactSelectors.LINKEDIN_CARD,
            ContactSelectors.LINKEDIN_LINK,
            ContactSelectors.LINKEDIN_COPY_BUTTON,
            ContactSelectors.LINKEDIN_COPY_MESSAGE,
        ),
    }

    @allure.step("Open Contact page")
    async def open(self) -> "ContactPage":
        await super().open()
        return self

    async def is_heading_visible(self) -> bool:
        return await self.is_visible(ContactSelectors.HEADING)

    async def get_contact_card_count(self) -> int:
        return await self.count(ContactSelectors.CONTACT_CARDS)

    async def get_contact_card_texts(self) -> List[str]:
        return await self.get_elements_text(ContactSelectors.CONTACT_CARDS)

    async def is_card_visible(self, name: str) -> bool:
        return await self.is_visible(self.CARDS[name].card)

    async def get_card_text(self, name: str) -> str:
        return await self.get_text(self.CARDS[name].card)

    @allure.step("Verify all contact cards")
    async def verify_all_contact_cards(self) -> bool:
        """Every known card is visible, has text and a link."""
        missing = []
        for name, card in self.CARDS.items():
            if not await self.is_visible(card.card) or not await self.get_text(card.card):
                missing.append(name)
            elif not await self.get_card_href(name):
                missing.append(name)

        if missing:
            logger.warning(f"Contact cards missing or incomplete: {missing}")
            return False
        return True

    # =========================================================================
    # Links
    # =========================================================================

    async def get_card_href(self, name: str) -> str:
        return await self.get_attribute(self.CARDS[name].link, "href") or ""

    async def get_email_address(self) -> str:
        return (await self.get_card_href("email")).replace("mailto:", "", 1)

    async def get_phone_number(self) -> str:
        return (await self.get_card_href("phone")).replace("tel:", "", 1)

    async def get_linkedin_link_attributes(self) -> Dict[str, str]:
        """href, target and rel of the LinkedIn link."""
        link = ContactSelectors.LINKEDIN_LINK
        return {
            attr: await self.get_attribute(link, attr) or ""
            for attr in ("href", "target", "rel")
        }

    # =========================================================================
    # Clipboard
    # =========================================================================

    @allure.step("Copy {name} contact")
    async def copy_contact(self, name: str) -> None:
        """
        Click the card's copy button and wait for its confirmation.

        Raises:
            WaitTimeoutError: The confirmation message never appeared
        """
        card = self.CARDS[name]
        await self.click(card.copy_button, wait_for_navigation=False)
        await self.wait_for_visible(card.copy_message)

    async def is_copy_message_visible(self, name: str) -> bool:
        return await self.is_visible(self.CARDS[name].copy_message)

    async def get_copy_message(self, name: str) -> str:
        return await self.get_text(self.CARDS[name].copy_message)

    async def read_clipboard(self) -> str:
        """Clipboard text; "" when the browser refuses to read it."""
        try:
            return await self.page.evaluate("() => navigator.clipboard.readText()") or ""
        except Exception as e:
            logger.debug(f"Clipboard read failed: {e}")
            return ""
