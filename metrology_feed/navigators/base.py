"""
Base class for listing navigators.

Navigators implement the discovery phase - turning a listing page
into an ordered list of candidate items. Each listing layout has its
own strategy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

import structlog

from metrology_feed.core.http_client import HttpClient
from metrology_feed.core.links import normalize_link
from metrology_feed.core.models import CandidateItem, LayoutKind
from metrology_feed.core.normalizer import clean_text
from metrology_feed.core.selectors import PARAGRAPH_THRESHOLD, extract_page_title

logger = structlog.get_logger(__name__)


# Listing markup shared by both layouts
TITLE_SELECTOR = ".gts_contentLeftList01"
DATE_CLASS = "gts_contentLeftList01time"
DATE_SELECTOR = f".{DATE_CLASS}"


@dataclass
class LayoutConfig:
    """Listing section of one layout kind."""
    path: str  # relative to the source listing_url, e.g. "fzjl/"
    label: str  # human-readable section name used in feed titles


@dataclass
class SourceConfig:
    """Configuration for the feed source."""

    source_id: str
    source_name: str
    root_url: str
    listing_url: str

    layouts: dict[str, LayoutConfig] = field(default_factory=dict)

    # Feed metadata
    default_author: str = ""

    # Detail extraction
    paragraph_threshold: int = PARAGRAPH_THRESHOLD

    # Transport
    requests_per_second: float = 5.0
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, data: dict) -> "SourceConfig":
        """Create from dictionary (e.g., from YAML)."""
        layouts = {
            kind: LayoutConfig(path=entry["path"], label=entry.get("label", kind))
            for kind, entry in (data.get("layouts") or {}).items()
        }
        return cls(
            source_id=data["source_id"],
            source_name=data["source_name"],
            root_url=data["root_url"],
            listing_url=data["listing_url"],
            layouts=layouts,
            default_author=data.get("default_author") or data["source_name"],
            paragraph_threshold=int(data.get("paragraph_threshold", PARAGRAPH_THRESHOLD)),
            requests_per_second=float(data.get("requests_per_second", 5.0)),
            timeout=float(data.get("timeout", 30.0)),
        )

    def layout(self, kind: LayoutKind) -> LayoutConfig:
        """Look up the layout section, raising ValueError when unknown."""
        kind = LayoutKind(kind)
        if kind.value not in self.layouts:
            raise ValueError(f"Layout not configured: {kind.value}")
        return self.layouts[kind.value]

    def layout_url(self, kind: LayoutKind) -> str:
        """Absolute listing URL for a layout."""
        return urljoin(self.listing_url, self.layout(kind).path)


@dataclass
class ListingPage:
    """Result of one listing fetch."""
    url: str
    title: str
    items: list[CandidateItem] = field(default_factory=list)


class NavigatorStrategy(ABC):
    """
    Abstract base class for listing layouts.

    Subclasses only decide where an item's date lives relative to its
    title element; fetching, limiting and link handling are shared.
    """

    kind: LayoutKind

    def __init__(self, http_client: Optional[HttpClient] = None):
        """
        Initialize navigator.

        Args:
            http_client: Shared HTTP client, required by ``discover`` only
        """
        self.http_client = http_client
        self.logger = logger.bind(navigator=self.__class__.__name__)

    async def discover(self, source: SourceConfig, limit: int) -> ListingPage:
        """
        Fetch this layout's listing page and extract candidates.

        Args:
            source: Source configuration
            limit: Maximum number of items

        Returns:
            ListingPage with page title and candidates in document order
        """
        if not self.http_client:
            raise RuntimeError("Navigator has no HTTP client.")

        url = source.layout_url(self.kind)
        self.logger.info("fetching_listing", source=source.source_id, url=url)

        html = await self.http_client.get_text(url)
        soup = BeautifulSoup(html, "lxml")

        items = self.extract_listing(soup, limit, source.root_url)
        self.logger.info("listing_extracted", url=url, count=len(items))

        return ListingPage(url=url, title=extract_page_title(soup), items=items)

    def extract_listing(
        self,
        soup: BeautifulSoup,
        limit: int,
        base_url: str,
    ) -> list[CandidateItem]:
        """
        Extract up to ``limit`` candidates in document order.

        Args:
            soup: Parsed listing page
            limit: Maximum number of items (<= 0 yields none)
            base_url: URL relative hrefs are resolved against

        Returns:
            List of CandidateItem
        """
        if limit <= 0:
            return []

        items = []
        for title_element in soup.select(TITLE_SELECTOR)[:limit]:
            title, href = self._extract_anchor(title_element)
            date_element = self.find_date_element(title_element)
            raw_date = clean_text(date_element.get_text()) if date_element is not None else ""

            items.append(
                CandidateItem(
                    title=title,
                    link=normalize_link(href, base_url),
                    raw_date=raw_date,
                )
            )

        return items

    @abstractmethod
    def find_date_element(self, title_element: Tag) -> Optional[Tag]:
        """
        Locate the date element belonging to a title element.

        Returns:
            Date element or None when the structure does not provide one
        """

    @staticmethod
    def _extract_anchor(title_element: Tag) -> tuple[str, Optional[str]]:
        """Return (trimmed title text, raw href) of the title's anchor."""
        anchor = title_element.find("a")
        if anchor is None:
            return clean_text(title_element.get_text()), None
        return clean_text(anchor.get_text()), anchor.get("href")
