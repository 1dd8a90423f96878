"""
Parser strategies for detail page enrichment.

Strategies:
- HtmlDetailParser: content and author from HTML detail pages
"""

from .base import ParserStrategy
from .html_detail import HtmlDetailParser

__all__ = [
    "ParserStrategy",
    "HtmlDetailParser",
]
