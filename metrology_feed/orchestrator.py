"""
Feed orchestrator.

Coordinates:
- Layout selection
- Listing discovery
- Concurrent detail resolution
- Feed assembly and output
"""

import json
from pathlib import Path
from typing import Optional, Union

import httpx
import structlog

from .core.http_client import HttpClient
from .core.models import CandidateItem, DetailOutcome, Feed, LayoutKind, ResolvedItem
from .core.normalizer import parse_date
from .config.loader import load_source
from .navigators import NAVIGATORS
from .navigators.base import SourceConfig
from .parsers.html_detail import HtmlDetailParser

logger = structlog.get_logger(__name__)


DEFAULT_LIMIT = 10


class ListingUnavailable(RuntimeError):
    """The listing page could not be fetched; no feed can be built."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"Listing unavailable: {url} ({cause})")
        self.url = url
        self.cause = cause


class FeedBuilder:
    """
    Builds one feed per request.

    A single HTTP client is shared by the listing fetch and every
    detail fetch of the request.
    """

    def __init__(
        self,
        source: SourceConfig,
        http_client: Optional[HttpClient] = None,
    ):
        """
        Initialize feed builder.

        Args:
            source: Source configuration
            http_client: Optional client (one is created per build otherwise)
        """
        self.source = source
        self.http_client = http_client

        self.stats = {
            "items_listed": 0,
            "items_resolved": 0,
            "items_unresolved": 0,
        }

    async def build(
        self,
        layout: Union[LayoutKind, str] = LayoutKind.LEGAL,
        limit: int = DEFAULT_LIMIT,
    ) -> Feed:
        """
        Build the feed for one layout.

        Args:
            layout: Listing layout (``legal`` or ``science``)
            limit: Maximum number of items

        Returns:
            Assembled Feed

        Raises:
            ValueError: Unknown layout
            ListingUnavailable: Listing page could not be fetched
        """
        kind = LayoutKind(layout)
        layout_config = self.source.layout(kind)

        logger.info("building_feed", source=self.source.source_id, layout=kind.value, limit=limit)

        if self.http_client is not None:
            return await self._build(kind, limit, self.http_client, layout_config.label)

        async with HttpClient(
            requests_per_second=self.source.requests_per_second,
            timeout=self.source.timeout,
        ) as client:
            return await self._build(kind, limit, client, layout_config.label)

    async def _build(
        self,
        kind: LayoutKind,
        limit: int,
        client: HttpClient,
        label: str,
    ) -> Feed:
        navigator = NAVIGATORS[kind](http_client=client)
        try:
            page = await navigator.discover(self.source, limit)
        except httpx.HTTPError as e:
            url = self.source.layout_url(kind)
            logger.error("listing_failed", url=url, error=str(e))
            raise ListingUnavailable(url, e) from e

        self.stats["items_listed"] = len(page.items)

        parser = HtmlDetailParser(
            http_client=client,
            default_author=self.source.default_author,
            paragraph_threshold=self.source.paragraph_threshold,
        )
        outcomes = await parser.resolve_all(page.items)

        feed = Feed(
            title=f"{page.title} - {label}",
            link=self.source.listing_url,
            description=f"{self.source.source_name}{label}相关信息",
            items=self.assemble(page.items, outcomes),
        )

        logger.info("feed_built", layout=kind.value, **self.stats)
        return feed

    def assemble(
        self,
        candidates: list[CandidateItem],
        outcomes: list[DetailOutcome],
    ) -> list[ResolvedItem]:
        """
        Merge candidates with their outcomes positionally.

        Args:
            candidates: Listing items in document order
            outcomes: Detail outcomes in the same order

        Returns:
            Feed items in listing order
        """
        if len(candidates) != len(outcomes):
            raise ValueError(
                f"Outcome count {len(outcomes)} does not match {len(candidates)} items"
            )

        items = []
        for candidate, outcome in zip(candidates, outcomes):
            item = ResolvedItem.from_outcome(candidate, outcome, parse_date(candidate.raw_date))
            if item.author is None:
                self.stats["items_unresolved"] += 1
            else:
                self.stats["items_resolved"] += 1
            items.append(item)
        return items


def save_json(feed: Feed, filepath: Union[str, Path]) -> str:
    """
    Save feed payload to a JSON file.

    Args:
        feed: Assembled feed
        filepath: Output path (parent directories are created)

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(feed.to_dict(), f, ensure_ascii=False, indent=2)

    logger.info("saved_json", path=str(filepath), items=len(feed.items))
    return str(filepath)


async def build_feed(
    layout: Union[LayoutKind, str] = LayoutKind.LEGAL,
    limit: int = DEFAULT_LIMIT,
    config_path: Optional[str] = None,
    http_client: Optional[HttpClient] = None,
    requests_per_second: Optional[float] = None,
) -> Feed:
    """
    Convenience function to build a feed.

    Args:
        layout: ``legal`` (default) or ``science``
        limit: Maximum number of items (default 10)
        config_path: Path to sources.yml
        http_client: Optional shared client
        requests_per_second: Overrides the configured rate limit

    Returns:
        Assembled Feed
    """
    source = load_source(config_path=config_path)
    if requests_per_second is not None:
        source.requests_per_second = requests_per_second

    return await FeedBuilder(source, http_client=http_client).build(layout, limit)
