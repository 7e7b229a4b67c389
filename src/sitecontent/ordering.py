"""
Date handling, publish-date ordering and banner assignment
"""

from collections import defaultdict
from datetime import date, datetime, timezone
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional, Sequence

from dateutil import parser as dateparse


BANNER_PATH = '/generated/{slug}.banner.jpg'


def parse_date(value) -> Optional[datetime]:
    """Turn a frontmatter date into an aware datetime.

    YAML gives us date/datetime objects for unquoted values and strings
    otherwise. Bare dates and naive datetimes are taken as UTC. Returns
    None for missing or unparsable values.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = dateparse.isoparse(value)
        except ValueError:
            try:
                parsed = dateparse.parse(value)
            except (ValueError, OverflowError):
                return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value) -> Optional[str]:
    """Format a frontmatter date as e.g. 'January 5, 2023'."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def compare_published(first, second) -> int:
    """-1 if `first` was published strictly later than `second`, else 1.

    Never reports equality. Records without a usable date are never
    "later" than anything.
    """
    date1 = parse_date(first.published)
    date2 = parse_date(second.published)
    if date1 is not None and date2 is not None and date1 > date2:
        return -1
    return 1


def sort_by_published(records: Iterable) -> List:
    """Newest first. Same-date records keep the order they came in."""
    return sorted(records, key=cmp_to_key(compare_published))


def banner_path(slug: str) -> str:
    return BANNER_PATH.format(slug=slug)


def assign_banners(posts: Sequence, page_size: int = 8,
                   positions: Sequence[int] = (0, 4)) -> Dict[str, int]:
    """Give posts at the banner slots of their listing page a banner image.

    `posts` must already be sorted. Each locale is paginated separately,
    so the running count is kept per locale. Returns the final count of
    posts seen per locale.
    """
    counts: Dict[str, int] = defaultdict(int)
    for post in posts:
        index = counts[post.locale] % page_size
        counts[post.locale] += 1
        if index in positions:
            post.banner_img = banner_path(post.slug)
    return dict(counts)
