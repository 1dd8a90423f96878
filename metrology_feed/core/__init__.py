"""
Core layer - stable foundation for the feed pipeline.

Components:
- models: CandidateItem, ResolvedItem, DetailOutcome, Feed dataclasses
- http_client: Rate-limited, retrying HTTP client
- links: Relative to absolute URL normalization
- selectors: Ordered selector chains for content and author
- sanitizer: Script, hidden and boilerplate removal
- normalizer: Listing date parsing and text cleanup
"""

from .models import (
    CandidateItem,
    ResolvedItem,
    Resolved,
    Unresolved,
    DetailOutcome,
    Feed,
)
from .links import normalize_link
from .normalizer import parse_date, clean_text
from .sanitizer import sanitize_html

__all__ = [
    "CandidateItem",
    "ResolvedItem",
    "Resolved",
    "Unresolved",
    "DetailOutcome",
    "Feed",
    "normalize_link",
    "parse_date",
    "clean_text",
    "sanitize_html",
]
