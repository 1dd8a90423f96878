"""
Normalization utilities for listing data.

Handles:
- Listing date formats (2024-01-15, 2024/1/5, 2024年1月5日, [2024-01-15])
- Text whitespace cleanup
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


# Listing pages publish Beijing time without an offset
CHINA_TZ = timezone(timedelta(hours=8), name="Asia/Shanghai")

DATE_PATTERN = re.compile(
    r"(\d{4})\s*[-/.年]\s*(\d{1,2})\s*[-/.月]\s*(\d{1,2})\s*日?"
    r"(?:\s*(\d{1,2}):(\d{2})(?::(\d{2}))?)?"
)


def parse_date(text: Optional[str]) -> Optional[datetime]:
    """
    Parse a listing date string into an aware datetime.

    Supported formats:
    - "2024-01-15" / "2024/01/15" / "2024.01.15"
    - "2024年1月15日"
    - any of the above followed by "HH:MM" or "HH:MM:SS"

    Args:
        text: String containing a date

    Returns:
        datetime in UTC+8 or None if parsing fails
    """
    if not text:
        return None

    match = DATE_PATTERN.search(text)
    if not match:
        return None

    year, month, day, hour, minute, second = match.groups()
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            tzinfo=CHINA_TZ,
        )
    except ValueError as e:
        logger.warning("invalid_date", text=text, error=str(e))
        return None


def clean_text(text: Optional[str]) -> str:
    """
    Collapse whitespace, including non-breaking and ideographic spaces.

    Args:
        text: Raw text

    Returns:
        Trimmed text with single spaces
    """
    if not text:
        return ""

    text = text.replace("\u00a0", " ").replace("\u3000", " ")
    return re.sub(r"\s+", " ", text).strip()
