"""Content filters: blocked users and communities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .models import Post, Profile


logger = logging.getLogger(__name__)

# Prefix that marks a filter entry as a user rather than a community
USER_PREFIX = 'u_'

# Separator used when filters are stored in a single cookie value
COOKIE_SEPARATOR = '+'


class FilterSet:
    """
    Immutable set of blocked identifiers.

    Users are stored in their prefixed form (``u_spez``); communities are
    bare subreddit names (``pics``). Entries are opaque and compared
    exactly, without case folding.

    Parameters
    ----------
    entries : Iterable[str], optional
        Identifiers to block. Empty strings are ignored.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = frozenset(e for e in entries if e)

    @classmethod
    def from_cookie(cls, value: str | None) -> FilterSet:
        """Parse the ``+``-joined value of the ``filters`` cookie."""
        if not value:
            return cls()
        return cls(value.split(COOKIE_SEPARATOR))

    def to_cookie(self) -> str:
        """Serialize to the ``filters`` cookie format (sorted for stability)."""
        return COOKIE_SEPARATOR.join(sorted(self._entries))

    def union(self, other: Iterable[str]) -> FilterSet:
        """Return a new set containing the entries of both."""
        return FilterSet([*self._entries, *other])

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f'FilterSet({sorted(self._entries)!r})'


def user_filter_id(name: str) -> str:
    """Return the filter identifier for a username."""
    return USER_PREFIX + name


def is_profile_filtered(profile: Profile | str, filters: FilterSet) -> bool:
    """
    Check whether a user is blocked.

    Parameters
    ----------
    profile : Profile or str
        The profile, or a bare username.
    filters : FilterSet
        The active filters.

    Returns
    -------
    bool
        True if ``u_<name>`` is in ``filters``.
    """
    name = profile if isinstance(profile, str) else profile.name
    return user_filter_id(name) in filters


def is_post_filtered(post: Post, filters: FilterSet) -> bool:
    """Return True if the post's community or author is blocked."""
    return post.community in filters or user_filter_id(post.author) in filters


def filter_posts(posts: list[Post], filters: FilterSet) -> tuple[list[Post], bool]:
    """
    Remove posts from blocked users and communities.

    The relative order of the kept posts is preserved, and filtering an
    already filtered list with the same set changes nothing.

    Parameters
    ----------
    posts : list[Post]
        Posts in upstream order.
    filters : FilterSet
        The active filters.

    Returns
    -------
    tuple[list[Post], bool]
        (kept, all_filtered) where all_filtered is True only when ``posts``
        was non-empty and every post was removed.
    """
    if not posts:
        return [], False

    kept = [post for post in posts if not is_post_filtered(post, filters)]
    if len(kept) != len(posts):
        logger.debug('Filtered %d of %d posts', len(posts) - len(kept), len(posts))
    return kept, not kept


def load_filter_list(path: Path | None) -> FilterSet:
    """
    Load filters from a file.

    Parameters
    ----------
    path : Path or None
        Path to the filter file. One identifier per line, # for comments.

    Returns
    -------
    FilterSet
        The filters in the file; empty if the file does not exist.
    """
    if not path or not path.exists():
        return FilterSet()

    entries: list[str] = []
    for line_num, line in enumerate(path.read_text().splitlines(), start=1):
        line = line.split('#')[0].strip()
        if not line:
            continue
        if ' ' in line:
            logger.warning('Invalid filter at %s:%d, skipping: %r', path, line_num, line)
            continue
        entries.append(line)

    return FilterSet(entries)
