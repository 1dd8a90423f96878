"""
Data models for the metrology feed.

Listing-derived candidates, detail resolution outcomes and the
assembled feed payload.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class LayoutKind(str, Enum):
    """Listing page layout, selected by the ``type`` parameter."""
    LEGAL = "legal"  # 法制计量: title and date in sibling elements
    SCIENCE = "science"  # 科学计量: title and date under a shared parent


@dataclass(frozen=True)
class CandidateItem:
    """
    Article discovered on a listing page.

    ``link`` is absolute (or None when the anchor had no href) and
    doubles as the feed GUID.
    """
    title: str
    link: Optional[str]
    raw_date: str = ""


@dataclass(frozen=True)
class Resolved:
    """Detail page was fetched and parsed."""
    description: Optional[str]
    author: str


@dataclass(frozen=True)
class Unresolved:
    """Detail page could not be fetched or parsed."""
    reason: str


DetailOutcome = Union[Resolved, Unresolved]


@dataclass
class ResolvedItem:
    """
    Feed item: listing fields plus whatever the detail page yielded.

    ``description`` and ``author`` stay None when the detail
    resolution failed.
    """
    title: str
    link: Optional[str]
    raw_date: str = ""
    pub_date: Optional[datetime] = None
    description: Optional[str] = None
    author: Optional[str] = None

    @property
    def guid(self) -> Optional[str]:
        return self.link

    @classmethod
    def from_outcome(
        cls,
        candidate: CandidateItem,
        outcome: DetailOutcome,
        pub_date: Optional[datetime] = None,
    ) -> "ResolvedItem":
        """Merge a candidate with its detail outcome."""
        item = cls(
            title=candidate.title,
            link=candidate.link,
            raw_date=candidate.raw_date,
            pub_date=pub_date,
        )
        if isinstance(outcome, Resolved):
            item.description = outcome.description
            item.author = outcome.author
        return item

    def to_dict(self) -> dict:
        """Convert to feed item dict, omitting absent optional fields."""
        data = {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date.isoformat() if self.pub_date else None,
            "guid": self.guid,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.author is not None:
            data["author"] = self.author
        return data


@dataclass
class Feed:
    """Assembled feed with page-level metadata."""
    title: str
    link: str
    description: str
    items: list[ResolvedItem] = field(default_factory=list)
    language: str = "zh"
    allow_empty: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "language": self.language,
            "allowEmpty": self.allow_empty,
            "item": [item.to_dict() for item in self.items],
        }
