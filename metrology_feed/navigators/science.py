"""
Scientific metrology (科学计量) listing layout.

Title and date are both descendants of a shared parent, not
necessarily siblings.
"""

from typing import Optional

from bs4 import Tag

from metrology_feed.core.models import LayoutKind

from .base import DATE_CLASS, DATE_SELECTOR, NavigatorStrategy


class ScienceNavigator(NavigatorStrategy):
    """Searches the title element's parent for the date element."""

    kind = LayoutKind.SCIENCE

    def find_date_element(self, title_element: Tag) -> Optional[Tag]:
        parent = title_element.parent
        if parent is None:
            return None

        # Several items can share one parent; take the date after this title
        following = title_element.find_next(class_=DATE_CLASS)
        if following is not None and any(p is parent for p in following.parents):
            return following

        return parent.select_one(DATE_SELECTOR)
