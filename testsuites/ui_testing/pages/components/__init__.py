"""
Shared page components (header and footer) present on every page.
"""

from .footer import FooterComponent
from .header import HeaderComponent

__all__ = [
    "FooterComponent",
    "HeaderComponent",
]
