"""
Shared test fixtures for Reddit Mirror.

Fixtures include sample API payloads, a fake upstream client that records
the paths it was asked for, and factories for Post objects.
"""

from __future__ import annotations

from typing import Any

import pytest

from reddit_mirror.client import FetchError, FetchErrorKind
from reddit_mirror.models import Post


# =============================================================================
# Payload builders
# =============================================================================


def make_about(name: str = 'reddit', **overrides: Any) -> dict[str, Any]:
    """Build a ``/user/{name}/about.json`` response."""
    data: dict[str, Any] = {
        'name': name,
        'total_karma': 12345,
        'created': 1704412800.4,  # 2024-01-05 00:00:00 UTC
        'subreddit': {
            'title': 'Reddit <Official>',
            'icon_img': 'https://styles.redditmedia.com/t5_1/styles/icon.png?width=256&s=abc',
            'banner_img': 'https://styles.redditmedia.com/t5_1/styles/banner.png',
            'public_description': 'Tom & Jerry',
        },
    }
    data.update(overrides)
    return {'kind': 't2', 'data': data}


def make_child(
    id: str,
    author: str = 'someone',
    subreddit: str = 'pics',
    kind: str = 't3',
    **overrides: Any,
) -> dict[str, Any]:
    """Build one listing child."""
    data: dict[str, Any] = {
        'id': id,
        'author': author,
        'subreddit': subreddit,
        'title': f'Post {id}',
        'selftext_html': '<p>Hello</p>',
        'score': 10,
        'created_utc': 1704412800.0,
        'permalink': f'/r/{subreddit}/comments/{id}/post/',
        'num_comments': 3,
    }
    data.update(overrides)
    return {'kind': kind, 'data': data}


def make_listing(children: list[dict[str, Any]], after: str | None = None) -> dict[str, Any]:
    """Build a ``/user/{name}.json`` listing response."""
    return {'kind': 'Listing', 'data': {'after': after, 'children': children}}


def make_post(id: str = 'a', author: str = 'someone', community: str = 'pics') -> Post:
    """Build a Post directly."""
    return Post(
        id=id,
        title=f'Post {id}',
        community=community,
        author=author,
        body='',
        score=1,
        created="Jan 05 '24",
        created_ts=1704412800,
    )


# =============================================================================
# Fake upstream client
# =============================================================================


class FakeClient:
    """
    Stand-in for RedditClient.

    ``about`` and ``listing`` are returned for profile and listing paths; pass
    a FetchError instead to make that call fail. Every requested path is
    recorded in ``calls``.
    """

    def __init__(
        self,
        about: dict[str, Any] | FetchError | None = None,
        listing: dict[str, Any] | FetchError | None = None,
    ) -> None:
        self.about = about if about is not None else make_about()
        self.listing = listing if listing is not None else make_listing([])
        self.calls: list[str] = []

    def fetch_json(self, path: str) -> dict[str, Any]:
        self.calls.append(path)
        result = self.about if '/about.json' in path else self.listing
        if isinstance(result, FetchError):
            raise result
        return result

    @property
    def listing_calls(self) -> list[str]:
        return [p for p in self.calls if '/about.json' not in p]


@pytest.fixture
def network_error() -> FetchError:
    return FetchError(FetchErrorKind.UPSTREAM_UNAVAILABLE, "Couldn't reach Reddit")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
