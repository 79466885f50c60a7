"""Filtering, sorting and pagination of the in-memory profile collection."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from domain.entities.profile import Profile

DEFAULT_PAGE_SIZE = 6


class SortKey(StrEnum):
    """Supported directory orderings."""

    RECENT = "recent"
    NAME = "name"
    NATIVE = "native"
    PRACTICE = "practice"


@dataclass
class ProfileQuery:
    """Filter, sort and page selection for the directory.

    Empty strings mean "no filter".
    """

    q: str = ""
    native: str = ""
    practice: str = ""
    sort_by: SortKey = SortKey.RECENT
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True, slots=True)
class Page:
    """Read-only value object: one contiguous slice of a result set."""

    items: list[Profile] = field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    total_pages: int = 1


def search_text(profile: Profile) -> str:
    """Lower-cased text a free-text search is matched against."""
    return " ".join(
        [
            profile.name,
            profile.bio,
            " ".join(profile.interests),
            profile.native,
            profile.practice,
        ]
    ).lower()


def matches(profile: Profile, query: ProfileQuery) -> bool:
    if query.q and query.q.lower() not in search_text(profile):
        return False
    if query.native and profile.native != query.native:
        return False
    if query.practice and profile.practice != query.practice:
        return False
    return True


def filter_profiles(profiles: Sequence[Profile], query: ProfileQuery) -> list[Profile]:
    """Keep profiles matching every filter that is set."""
    return [p for p in profiles if matches(p, query)]


def _collate(value: str) -> tuple[str, str]:
    # case-insensitive first, exact second, so the order is total
    return (value.casefold(), value)


def sort_profiles(profiles: Sequence[Profile], sort_by: SortKey | str) -> list[Profile]:
    """Return a sorted copy; Python's sort is stable so ties keep input order."""
    if sort_by == SortKey.NAME:
        return sorted(profiles, key=lambda p: _collate(p.name))
    if sort_by == SortKey.NATIVE:
        return sorted(profiles, key=lambda p: (_collate(p.native), _collate(p.name)))
    if sort_by == SortKey.PRACTICE:
        return sorted(profiles, key=lambda p: (_collate(p.practice), _collate(p.name)))
    return sorted(profiles, key=lambda p: p.updated_at, reverse=True)


def total_pages(count: int, page_size: int) -> int:
    """Number of pages, never less than one."""
    return max(1, math.ceil(count / page_size))


def paginate(profiles: Sequence[Profile], page: int, page_size: int) -> Page:
    """Slice out one page, clamping out-of-range requests to the nearest valid page."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    pages = total_pages(len(profiles), page_size)
    current = min(max(page, 1), pages)
    start = (current - 1) * page_size
    return Page(
        items=list(profiles[start : start + page_size]),
        page=current,
        page_size=page_size,
        total=len(profiles),
        total_pages=pages,
    )


def query(profiles: Sequence[Profile], criteria: ProfileQuery) -> Page:
    """Filter, sort and paginate without touching the input sequence."""
    rows = sort_profiles(filter_profiles(profiles, criteria), criteria.sort_by)
    return paginate(rows, criteria.page, criteria.page_size)
