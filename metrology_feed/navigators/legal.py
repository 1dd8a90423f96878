"""
Legal metrology (法制计量) listing layout.

Each article is a pair of list items: the title item, immediately
followed by a sibling item holding the date.
"""

from typing import Optional

from bs4 import Tag

from metrology_feed.core.models import LayoutKind

from .base import DATE_CLASS, NavigatorStrategy


class LegalNavigator(NavigatorStrategy):
    """Pairs each title element with its immediate next sibling."""

    kind = LayoutKind.LEGAL

    def find_date_element(self, title_element: Tag) -> Optional[Tag]:
        sibling = title_element.find_next_sibling()
        if sibling is not None and DATE_CLASS in (sibling.get("class") or []):
            return sibling

        self.logger.debug("date_sibling_missing", title=title_element.get_text(strip=True))
        return None
