"""Tests for listing layouts."""

import pytest
from bs4 import BeautifulSoup

from metrology_feed.core.models import CandidateItem, LayoutKind
from metrology_feed.navigators import NAVIGATORS, LegalNavigator, ScienceNavigator

ROOT = "https://www.samr.gov.cn"


@pytest.fixture
def legal_html():
    """Legal layout: title item followed by a date sibling item."""
    return """
    <html>
    <head><title>法制计量</title></head>
    <body>
    <ul class="gts_contentLeftList">
        <li class="gts_contentLeftList01"><a href="/jls/fzjl/art/2024/art_1.html">关于开展计量监督检查的通知</a></li>
        <li class="gts_contentLeftList01time">2024-03-01</li>
        <li class="gts_contentLeftList01"><a href="https://www.samr.gov.cn/jls/fzjl/art/2024/art_2.html"> 计量器具型式批准公告 </a></li>
        <li class="gts_contentLeftList01time">2024-02-15</li>
        <li class="gts_contentLeftList01"><a href="./art/2024/art_3.html">计量技术规范征求意见</a></li>
        <li class="gts_contentLeftList01time">2024-01-20</li>
    </ul>
    </body>
    </html>
    """


@pytest.fixture
def science_html():
    """Science layout: date lives somewhere under the title's parent."""
    return """
    <html>
    <body>
    <ul>
        <li class="gts_contentLeftList01"><a href="/jls/kxjl/a1.html">国家计量基准名录</a></li>
        <li class="note">置顶</li>
        <li class="gts_contentLeftList01time">2024-05-06</li>
    </ul>
    <ul>
        <li>
            <div class="gts_contentLeftList01"><a href="/jls/kxjl/a2.html">校准规范发布</a></div>
            <span class="meta"><em class="gts_contentLeftList01time">2024-04-01</em></span>
        </li>
    </ul>
    </body>
    </html>
    """


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestLegalNavigator:
    """Tests for the legal layout."""

    def test_extracts_all_pairs(self, legal_html):
        """Three title/date pairs with a larger limit give three items in order."""
        items = LegalNavigator().extract_listing(soup_of(legal_html), 10, ROOT)

        assert len(items) == 3
        assert [i.title for i in items] == [
            "关于开展计量监督检查的通知",
            "计量器具型式批准公告",
            "计量技术规范征求意见",
        ]
        assert [i.raw_date for i in items] == ["2024-03-01", "2024-02-15", "2024-01-20"]
        assert all(i.link and i.link.startswith("https://") for i in items)

    def test_links_normalized(self, legal_html):
        """Relative links are made absolute, absolute ones kept."""
        items = LegalNavigator().extract_listing(soup_of(legal_html), 10, ROOT)

        assert items[0].link == "https://www.samr.gov.cn/jls/fzjl/art/2024/art_1.html"
        assert items[1].link == "https://www.samr.gov.cn/jls/fzjl/art/2024/art_2.html"
        assert items[2].link == "https://www.samr.gov.cn/art/2024/art_3.html"

    @pytest.mark.parametrize("limit,expected", [(1, 1), (2, 2), (3, 3), (50, 3)])
    def test_limit(self, legal_html, limit, expected):
        """Item count is min(limit, number of titles)."""
        items = LegalNavigator().extract_listing(soup_of(legal_html), limit, ROOT)
        assert len(items) == expected

    def test_zero_limit(self, legal_html):
        """limit=0 yields no items."""
        assert LegalNavigator().extract_listing(soup_of(legal_html), 0, ROOT) == []

    def test_missing_date_sibling(self):
        """Broken adjacency degrades the date to empty string."""
        html = """
        <ul>
            <li class="gts_contentLeftList01"><a href="/a.html">无日期</a></li>
            <li class="gts_contentLeftList01"><a href="/b.html">有日期</a></li>
            <li class="gts_contentLeftList01time">2024-01-01</li>
        </ul>
        """
        items = LegalNavigator().extract_listing(soup_of(html), 10, ROOT)

        assert items[0].raw_date == ""
        assert items[1].raw_date == "2024-01-01"

    def test_date_not_immediately_adjacent(self, science_html):
        """Legal layout does not look past the immediate sibling."""
        items = LegalNavigator().extract_listing(soup_of(science_html), 10, ROOT)
        assert items[0].raw_date == ""

    def test_missing_href_kept(self):
        """Anchor without href keeps the item with link None."""
        html = """
        <ul>
            <li class="gts_contentLeftList01"><a>内部通知</a></li>
            <li class="gts_contentLeftList01time">2024-06-01</li>
        </ul>
        """
        items = LegalNavigator().extract_listing(soup_of(html), 10, ROOT)

        assert items == [CandidateItem(title="内部通知", link=None, raw_date="2024-06-01")]

    def test_empty_page(self):
        """Page without listing markup yields no items."""
        assert LegalNavigator().extract_listing(soup_of("<html></html>"), 10, ROOT) == []


class TestScienceNavigator:
    """Tests for the science layout."""

    def test_date_within_parent(self, science_html):
        """Date is found inside the parent, not only as sibling."""
        items = ScienceNavigator().extract_listing(soup_of(science_html), 10, ROOT)

        assert [(i.title, i.raw_date) for i in items] == [
            ("国家计量基准名录", "2024-05-06"),
            ("校准规范发布", "2024-04-01"),
        ]
        assert items[1].link == "https://www.samr.gov.cn/jls/kxjl/a2.html"

    def test_shared_parent_pairs_in_order(self, legal_html):
        """Several items under one parent each get their own date."""
        items = ScienceNavigator().extract_listing(soup_of(legal_html), 10, ROOT)
        assert [i.raw_date for i in items] == ["2024-03-01", "2024-02-15", "2024-01-20"]

    def test_no_date_in_parent(self):
        """Missing date element degrades to empty string."""
        html = '<div><p class="gts_contentLeftList01"><a href="/x.html">X</a></p></div>'
        items = ScienceNavigator().extract_listing(soup_of(html), 10, ROOT)
        assert items[0].raw_date == ""

    def test_limit(self, science_html):
        """Science layout truncates at limit."""
        items = ScienceNavigator().extract_listing(soup_of(science_html), 1, ROOT)
        assert len(items) == 1


class TestNavigatorRegistry:
    """Tests for layout selection."""

    def test_registry(self):
        assert NAVIGATORS[LayoutKind.LEGAL] is LegalNavigator
        assert NAVIGATORS[LayoutKind.SCIENCE] is ScienceNavigator

    def test_kind_from_string(self):
        assert NAVIGATORS[LayoutKind("science")].kind == LayoutKind.SCIENCE

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            LayoutKind("economy")
