"""
Base class for detail parsers.

Parsers implement the enrichment phase - turning an article's detail
page into a description and author.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from metrology_feed.core.http_client import HttpClient
from metrology_feed.core.models import CandidateItem, DetailOutcome, Unresolved

logger = structlog.get_logger(__name__)


class ParserStrategy(ABC):
    """
    Abstract base class for detail parsers.

    ``resolve`` must not raise on fetch or parse errors: a failing item is turned
    into an ``Unresolved`` outcome so sibling items are unaffected.
    """

    def __init__(self, http_client: Optional[HttpClient] = None):
        """
        Initialize parser.

        Args:
            http_client: Shared HTTP client, entered by the caller
        """
        self.http_client = http_client
        self.logger = logger.bind(parser=self.__class__.__name__)

    @abstractmethod
    async def resolve(self, item: CandidateItem) -> DetailOutcome:
        """
        Resolve one candidate's detail page.

        Args:
            item: Candidate from the listing

        Returns:
            Resolved or Unresolved outcome
        """

    async def resolve_all(self, items: list[CandidateItem]) -> list[DetailOutcome]:
        """
        Resolve all candidates concurrently.

        Args:
            items: Candidates in listing order

        Returns:
            Outcomes in the same order as ``items``

        Raises:
            RuntimeError: If items need fetching and no client is set
        """
        if not self.http_client and any(item.link for item in items):
            raise RuntimeError("Parser has no HTTP client.")

        outcomes: list[DetailOutcome] = [Unresolved(reason="pending")] * len(items)

        async def run(index: int, item: CandidateItem) -> None:
            outcomes[index] = await self.resolve(item)

        await asyncio.gather(*(run(i, item) for i, item in enumerate(items)))

        resolved = sum(1 for o in outcomes if not isinstance(o, Unresolved))
        self.logger.info("details_resolved", total=len(items), resolved=resolved)

        return outcomes
