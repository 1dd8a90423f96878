"""
Content sanitizer for extracted HTML fragments.

Removes script elements, inline-hidden elements and boilerplate
blocks (ads, share widgets, copyright notices).
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter


# Each entry is a CSS selector; matches are removed at any depth
SCRIPT_SELECTORS = ["script"]

HIDDEN_SELECTORS = [
    '[style*="display:none" i]',
    '[style*="display: none" i]',
    '[style*="visibility:hidden" i]',
    '[style*="visibility: hidden" i]',
]

BOILERPLATE_SELECTORS = [
    ".advertisement",
    ".ad",
    ".share",
    ".copyright",
]

SANITIZE_SELECTORS = SCRIPT_SELECTORS + HIDDEN_SELECTORS + BOILERPLATE_SELECTORS


def _substitute_entities(value: str) -> str:
    return EntitySubstitution.substitute_xml(value).replace("\xa0", "&nbsp;")


# Serializes like the source pages: <br> not <br/>, &nbsp; kept
CONTENT_FORMATTER = HTMLFormatter(
    entity_substitution=_substitute_entities,
    void_element_close_prefix=None,
)


def inner_html(element: Tag) -> str:
    """Inner HTML of an element, serialized with CONTENT_FORMATTER."""
    return element.decode_contents(formatter=CONTENT_FORMATTER)


def sanitize_html(fragment: Optional[str]) -> str:
    """
    Strip unwanted elements from an HTML fragment.

    The fragment is wrapped in a container div, cleaned once and the
    container's inner HTML returned.

    Args:
        fragment: Raw HTML fragment

    Returns:
        Cleaned HTML fragment ("" for empty input)
    """
    if not fragment:
        return ""

    soup = BeautifulSoup(f"<div>{fragment}</div>", "lxml")
    container = soup.find("div")
    if container is None:
        return ""

    for elem in container.select(", ".join(SANITIZE_SELECTORS)):
        # Parent may already have been removed
        if elem.decomposed:
            continue
        elem.decompose()

    return inner_html(container)
