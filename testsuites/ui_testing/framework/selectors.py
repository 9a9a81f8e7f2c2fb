"""
================================================================================
Selector Registry
================================================================================

Named element references for every page and shared component of the site.

Each page/component gets its own Enum so a renamed or mistyped element
fails at import time instead of at run time. The member value is the
Playwright selector string.

The site tags its stable elements with `data-testid`; those ids are used
wherever they exist. Sections without a test id fall back to text and
structure selectors (`:has-text`, `role=`, href fragments).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class CommonSelectors(Enum):
    """Elements every page shares outside the header and footer."""

    PAGE_TITLE = 'h1, [data-testid="page-title"], .page-title'


class HeaderSelectors(Enum):
    """Site header and primary navigation."""

    HEADER = '[data-testid="header-nav"]'
    NAV_LIST = '[data-testid="nav-list"]'
    NAV_LINKS = '[data-testid^="nav-link-"]'
    NAV_ABOUT = '[data-testid="nav-link-about"]'
    NAV_ABOUT_APP = '[data-testid="nav-link-about-app"]'
    NAV_LIVE_AUTOMATION = '[data-testid="nav-link-automation"]'
    NAV_CONTACT = '[data-testid="nav-link-contact"]'
    MOBILE_MENU_TOGGLE = '[data-testid="nav-menu-button"]'


class FooterSelectors(Enum):
    """Site footer."""

    FOOTER = '[data-testid="footer"]'
    COPYRIGHT = '[data-testid="footer-copyright"]'


class AboutSelectors(Enum):
    """About Me (landing) page."""

    PROFILE_SECTION = '[data-testid="profile-section"]'
    PROFILE_NAME = '[data-testid="profile-name"]'
    PROFILE_IMAGE = '[data-testid="profile-image"]'
    RESUME_LINK = '[data-testid="resume-link"]'
    BIO = '[data-testid="about-bio"]'

    CURRENT_ROLE_SECTION = 'section:has-text("Current Role")'
    CURRENT_ROLE_TITLE = 'h2:has-text("Current Role"), h3:has-text("Current Role")'
    ALLERGAN_LINK = 'a[href*="allerganaesthetics.com"]'
    ABBVIE_LINK = 'a[href*="abbvie.com"]'

    SKILLS_SECTION = 'section:has-text("Skills")'
    SKILLS_TITLE = 'h2:has-text("Skills"), h3:has-text("Skills")'
    SKILL_ITEMS = '.skill, .skills li, .skill-item, .technology'

    ACHIEVEMENTS_SECTION = 'section:has-text("Achievement")'
    ACHIEVEMENTS_TITLE = 'h2:has-text("Achievement"), h3:has-text("Achievement")'
    ACHIEVEMENT_ITEMS = '.achievements li, .accomplishments li, .achievement-item'

    BACK_TO_TOP = 'button[aria-label*="top" i], button:has-text("Back to top")'


class AboutAppSelectors(Enum):
    """About This App page."""

    COMPONENTS = '[data-testid="about-app-components"]'
    ARCHITECTURE = '[data-testid="about-app-architecture"]'
    FRONTEND = '[data-testid="about-app-frontend"]'
    BACKEND = '[data-testid="about-app-backend"]'
    AUTOMATION_FRAMEWORK = '[data-testid="about-app-automation-framework"]'
    DEVELOPMENT_TOOLS = '[data-testid="about-app-development-tools"]'

    FRONTEND_CODE_LINK = '[data-testid="github-frontend-link"]'
    BACKEND_CODE_LINK = '[data-testid="github-backend-link"]'
    AUTOMATION_CODE_LINK = '[data-testid="about-app-automation-link"]'
    LIVE_RESULTS_LINK = '[data-testid="live-automation-link"]'


class ContactSelectors(Enum):
    """Contact page: one card per channel, each with a copy button."""

    HEADING = "text=/Get In touch/i"
    CONTACT_CARDS = '[data-testid^="contact-card-"]'

    EMAIL_CARD = '[data-testid="contact-card-email"]'
    EMAIL_LINK = '[data-testid="contact-card-email"] a[href^="mailto:"]'
    EMAIL_COPY_BUTTON = '[data-testid="contact-card-email"] button'
    EMAIL_COPY_MESSAGE = '[data-testid="copy-message-email"]'

    PHONE_CARD = '[data-testid="contact-card-phone"]'
    PHONE_LINK = '[data-testid="contact-card-phone"] a[href^="tel:"]'
    PHONE_COPY_BUTTON = '[data-testid="contact-card-phone"] button'
    PHONE_COPY_MESSAGE = '[data-testid="copy-message-phone"]'

    LINKEDIN_CARD = '[data-testid="contact-card-linkedin"]'
    LINKEDIN_LINK = '[data-testid="contact-card-linkedin"] a[href*="linkedin.com"]'
    LINKEDIN_COPY_BUTTON = '[data-testid="contact-card-linkedin"] button'
    LINKEDIN_COPY_MESSAGE = '[data-testid="copy-message-linkedin"]'


class LiveAutomationSelectors(Enum):
    """
    Live Automation dashboard.

    RUN_* parts below RUN_CARDS are looked up inside one card; see
    LiveAutomationPage.card_part().
    """

    PAGE_TITLE = '[data-testid="page-title"]'
    SECTION = '[data-testid="test-automation-section"]'
    LOADING = '[data-testid="loading-placeholder"]'
    ERROR_MESSAGE = '[data-testid="error-message"], .error-state'
    RUN_LIST = '[data-testid="test-run-list"]'
    RUN_CARDS = '[data-testid^="test-run-card-"]'
    LOAD_MORE = 'role=button[name="Load more results"]'

    RUN_HEADER = '[aria-expanded], .test-run-header, .card-header'
    RUN_CONTENT = '.test-run-content, [role="region"], [role="tabpanel"]'
    RUN_DURATION = '.duration, .test-duration, .run-time'
    RUN_PASSED = '[data-testid="test-run-passed-tests"]'
    RUN_FAILED = '[data-testid="test-run-failed-tests"]'


# Every registry Enum, used to validate the registry as a whole
ALL_SELECTOR_GROUPS = (
    CommonSelectors,
    HeaderSelectors,
    FooterSelectors,
    AboutSelectors,
    AboutAppSelectors,
    ContactSelectors,
    LiveAutomationSelectors,
)

SelectorLike = Union[str, Enum]


def resolve_selector(target: SelectorLike) -> str:
    """Return the selector string for a registry member or a raw selector."""
    if isinstance(target, Enum):
        return target.value
    return target


def describe(target: SelectorLike) -> str:
    """Human-readable element name for logs and Allure steps."""
    if isinstance(target, Enum):
        return f"{type(target).__name__}.{target.name}"
    return target


__all__ = [
    "CommonSelectors",
    "HeaderSelectors",
    "FooterSelectors",
    "AboutSelectors",
    "AboutAppSelectors",
    "ContactSelectors",
    "LiveAutomationSelectors",
    "ALL_SELECTOR_GROUPS",
    "SelectorLike",
    "resolve_selector",
    "describe",
]
