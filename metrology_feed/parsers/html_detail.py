"""
HTML detail page parser.

Resolves an article's content body and author through ordered
selector chains, then sanitizes the content.
"""

from typing import Optional

from bs4 import BeautifulSoup

from metrology_feed.core.http_client import HttpClient
from metrology_feed.core.models import (
    CandidateItem,
    DetailOutcome,
    Resolved,
    Unresolved,
)
from metrology_feed.core.sanitizer import sanitize_html
from metrology_feed.core.selectors import (
    PARAGRAPH_THRESHOLD,
    SelectorChain,
    author_chain,
    content_chain,
)

from .base import ParserStrategy


class HtmlDetailParser(ParserStrategy):
    """
    Parser for article detail pages.

    Extracts:
    - Content body (container chain, then paragraph aggregation)
    - Author (author/source/editor/byline markers, else default_author)
    """

    def __init__(
        self,
        http_client: Optional[HttpClient] = None,
        default_author: str = "",
        paragraph_threshold: int = PARAGRAPH_THRESHOLD,
        content_rules: Optional[SelectorChain] = None,
        author_rules: Optional[SelectorChain] = None,
    ):
        """
        Initialize parser.

        Args:
            http_client: Shared HTTP client
            default_author: Author used when the author chain is exhausted
            paragraph_threshold: Paragraph fallback needs more than this many <p>
            content_rules: Override for the content chain
            author_rules: Override for the author chain
        """
        super().__init__(http_client)
        if not default_author:
            raise ValueError("default_author must not be empty")

        self.default_author = default_author
        self.content_rules = content_rules or content_chain(paragraph_threshold)
        self.author_rules = author_rules or author_chain()

    async def resolve(self, item: CandidateItem) -> DetailOutcome:
        """
        Fetch and parse one detail page.

        Args:
            item: Candidate with absolute link

        Returns:
            Resolved outcome, or Unresolved on missing link or any failure
        """
        if not item.link:
            self.logger.debug("detail_skipped", title=item.title, reason="missing_link")
            return Unresolved(reason="missing_link")

        if not self.http_client:
            raise RuntimeError("Parser has no HTTP client.")

        try:
            html = await self.http_client.get_text(item.link)
            outcome = self.parse_html(html)
        except Exception as e:
            self.logger.warning("detail_failed", url=item.link, error=str(e))
            return Unresolved(reason=f"{e.__class__.__name__}: {e}")

        if not outcome.description:
            self.logger.info("content_not_found", url=item.link)

        return outcome

    def parse_html(self, html: str) -> Resolved:
        """
        Parse detail HTML into a Resolved outcome.

        Args:
            html: Raw HTML of the detail page

        Returns:
            Resolved with sanitized description (None when no rule matched)
        """
        soup = BeautifulSoup(html, "lxml")

        raw_content = self.content_rules.first(soup)
        description = sanitize_html(raw_content) if raw_content else None

        author = self.author_rules.first(soup) or self.default_author

        return Resolved(description=description, author=author)
