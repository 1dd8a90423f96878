"""
Navigator strategies for listing discovery.

Navigators handle the discovery phase - finding the articles listed on
a section page.

Strategies:
- LegalNavigator: title item followed by a date sibling item
- ScienceNavigator: title and date under a shared parent
"""

from metrology_feed.core.models import LayoutKind

from .base import NavigatorStrategy, SourceConfig, LayoutConfig, ListingPage
from .legal import LegalNavigator
from .science import ScienceNavigator

NAVIGATORS: dict[LayoutKind, type[NavigatorStrategy]] = {
    LayoutKind.LEGAL: LegalNavigator,
    LayoutKind.SCIENCE: ScienceNavigator,
}

__all__ = [
    "NAVIGATORS",
    "NavigatorStrategy",
    "SourceConfig",
    "LayoutConfig",
    "ListingPage",
    "LegalNavigator",
    "ScienceNavigator",
]
