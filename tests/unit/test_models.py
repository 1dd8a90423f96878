"""Tests for core models."""

import dataclasses

import pytest
from datetime import datetime

from metrology_feed.core.models import (
    CandidateItem,
    Feed,
    LayoutKind,
    Resolved,
    ResolvedItem,
    Unresolved,
)
from metrology_feed.core.normalizer import CHINA_TZ


@pytest.fixture
def candidate():
    return CandidateItem(
        title="计量器具型式批准公告",
        link="https://www.samr.gov.cn/jls/fzjl/art/2024/art_1.html",
        raw_date="2024-03-01",
    )


class TestCandidateItem:
    """Tests for CandidateItem dataclass."""

    def test_immutable(self, candidate):
        """Candidates cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            candidate.title = "changed"

    def test_default_date(self):
        assert CandidateItem(title="t", link=None).raw_date == ""


class TestResolvedItem:
    """Tests for ResolvedItem."""

    def test_from_resolved(self, candidate):
        """Resolved outcome adds description and author."""
        item = ResolvedItem.from_outcome(
            candidate,
            Resolved(description="<p>正文</p>", author="计量司"),
        )

        assert item.title == candidate.title
        assert item.link == candidate.link
        assert item.description == "<p>正文</p>"
        assert item.author == "计量司"

    def test_from_unresolved(self, candidate):
        """Unresolved outcome keeps listing fields only."""
        item = ResolvedItem.from_outcome(candidate, Unresolved(reason="HTTPStatusError"))
        data = item.to_dict()

        assert data["title"] == candidate.title
        assert data["link"] == candidate.link
        assert "description" not in data
        assert "author" not in data

    def test_guid_is_link(self, candidate):
        item = ResolvedItem.from_outcome(candidate, Unresolved(reason="x"))
        assert item.guid == candidate.link
        assert item.to_dict()["guid"] == candidate.link

    def test_to_dict_pub_date(self, candidate):
        """pubDate is ISO formatted or None."""
        dated = ResolvedItem.from_outcome(
            candidate,
            Resolved(description=None, author="计量司"),
            pub_date=datetime(2024, 3, 1, tzinfo=CHINA_TZ),
        )
        undated = ResolvedItem.from_outcome(candidate, Unresolved(reason="x"))

        assert dated.to_dict()["pubDate"] == "2024-03-01T00:00:00+08:00"
        assert undated.to_dict()["pubDate"] is None

    def test_resolved_without_content(self, candidate):
        """No content found still carries the author."""
        data = ResolvedItem.from_outcome(
            candidate, Resolved(description=None, author="计量司")
        ).to_dict()

        assert "description" not in data
        assert data["author"] == "计量司"


class TestFeed:
    """Tests for Feed."""

    def test_to_dict_defaults(self):
        feed = Feed(title="计量司 - 法制计量", link="https://www.samr.gov.cn/jls/", description="d")
        data = feed.to_dict()

        assert data["language"] == "zh"
        assert data["allowEmpty"] is True
        assert data["item"] == []

    def test_items_in_order(self, candidate):
        second = CandidateItem(title="second", link="https://www.samr.gov.cn/2.html")
        feed = Feed(
            title="t",
            link="l",
            description="d",
            items=[
                ResolvedItem.from_outcome(candidate, Unresolved(reason="x")),
                ResolvedItem.from_outcome(second, Unresolved(reason="x")),
            ],
        )
        assert [i["title"] for i in feed.to_dict()["item"]] == [candidate.title, "second"]


class TestLayoutKind:
    """Tests for LayoutKind enum."""

    def test_values(self):
        assert LayoutKind("legal") is LayoutKind.LEGAL
        assert LayoutKind.SCIENCE.value == "science"
