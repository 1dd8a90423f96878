"""
Selector chains for detail page extraction.

A chain is an ordered list of rules, most site-specific first. Each
rule either returns a non-empty string or None; the first non-empty
result wins.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from bs4 import BeautifulSoup, Tag

import structlog

from metrology_feed.core.sanitizer import inner_html

logger = structlog.get_logger(__name__)


# Content containers, from the site's own markup to generic CMS markers
CONTENT_SELECTORS = [
    "#con_con",  # article body on samr.gov.cn
    ".content",
    ".mainContent",
    ".article_content",
    ".TRS_Editor",  # TRS WCM editor, common on government sites
    ".TRS_Editor_QQPUB",
    "#zoom",
    ".infoContent",
    ".gts_contentBox",
    ".gts_contentLeftBox",
]

AUTHOR_SELECTORS = [
    ".author",
    ".source",
    ".editor",
    ".byline",
]

# Paragraph fallback needs more than this many <p> elements
PARAGRAPH_THRESHOLD = 3

HIDDEN_STYLE_MARKERS = ["display:none", "visibility:hidden"]


class ExtractionMode(str, Enum):
    """What a CSS rule takes from its match."""
    HTML = "html"  # inner HTML of the first match
    TEXT = "text"  # joined text of all matches


class SelectorRule(ABC):
    """Single extraction rule in a chain."""

    @abstractmethod
    def extract(self, soup: BeautifulSoup) -> Optional[str]:
        """
        Apply the rule to a parsed document.

        Returns:
            Non-empty string or None
        """

    @property
    def name(self) -> str:
        return self.__class__.__name__


@dataclass(frozen=True)
class CssRule(SelectorRule):
    """CSS locator plus extraction mode."""
    locator: str
    mode: ExtractionMode = ExtractionMode.HTML

    def extract(self, soup: BeautifulSoup) -> Optional[str]:
        if self.mode == ExtractionMode.HTML:
            element = soup.select_one(self.locator)
            if element is None:
                return None
            html = inner_html(element)
            return html if html.strip() else None

        text = "".join(e.get_text() for e in soup.select(self.locator)).strip()
        return text or None

    @property
    def name(self) -> str:
        return self.locator


@dataclass(frozen=True)
class ParagraphAggregationRule(SelectorRule):
    """
    Last-resort heuristic: stitch together every visible paragraph.

    Only applies when the document holds more than ``threshold``
    paragraphs; each kept paragraph is re-wrapped in its own <p>.
    """
    threshold: int = PARAGRAPH_THRESHOLD

    def extract(self, soup: BeautifulSoup) -> Optional[str]:
        paragraphs = soup.find_all("p")
        if len(paragraphs) <= self.threshold:
            return None

        parts = []
        for p in paragraphs:
            if is_hidden(p):
                continue
            inner = inner_html(p)
            if inner:
                parts.append(f"<p>{inner}</p>")

        return "".join(parts) or None

    @property
    def name(self) -> str:
        return "paragraphs"


def is_hidden(element: Tag) -> bool:
    """Check whether an element's markup carries inline hidden styling."""
    markup = str(element).replace(" ", "").lower()
    return any(marker in markup for marker in HIDDEN_STYLE_MARKERS)


@dataclass
class SelectorChain:
    """Ordered rules tried until one yields a non-empty result."""
    rules: list[SelectorRule] = field(default_factory=list)

    def first(self, soup: BeautifulSoup) -> Optional[str]:
        """
        Return the first non-empty rule result.

        Args:
            soup: Parsed document

        Returns:
            Extracted string or None when the chain is exhausted
        """
        for rule in self.rules:
            value = rule.extract(soup)
            if value:
                logger.debug("selector_matched", rule=rule.name)
                return value
        return None


def content_chain(paragraph_threshold: int = PARAGRAPH_THRESHOLD) -> SelectorChain:
    """Build the content-region chain ending in paragraph aggregation."""
    rules: list[SelectorRule] = [CssRule(s, ExtractionMode.HTML) for s in CONTENT_SELECTORS]
    rules.append(ParagraphAggregationRule(threshold=paragraph_threshold))
    return SelectorChain(rules)


def author_chain() -> SelectorChain:
    """Build the author-region chain."""
    return SelectorChain([CssRule(s, ExtractionMode.TEXT) for s in AUTHOR_SELECTORS])


def extract_page_title(soup: BeautifulSoup) -> str:
    """Extract the document <title> text."""
    if soup.title:
        return soup.title.get_text(strip=True)
    return ""
