"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the portfolio site.

Each page class encapsulates:
    - Its selector registry group
    - Page-specific verbs
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .about_page import AboutPage
from .about_app_page import AboutAppPage
from .contact_page import ContactPage
from .live_automation_page import LiveAutomationPage
from .components import FooterComponent, HeaderComponent

__all__ = [
    "AboutPage",
    "AboutAppPage",
    "ContactPage",
    "LiveAutomationPage",
    "FooterComponent",
    "HeaderComponent",
]
