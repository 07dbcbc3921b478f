"""Profile page retrieval: fetch, normalize, filter and paginate."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import quote, urlencode

from .client import FetchError, FetchErrorKind
from .filters import FilterSet, filter_posts, is_profile_filtered
from .models import Post, Profile
from .normalize import to_post_list, to_profile
from .pagination import PageCursors, paginate
from .preferences import Preferences
from .utils import param


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)

# Profile shown when a request names no user
DEFAULT_USER = 'reddit'


class JSONFetcher(Protocol):
    """Anything that can fetch an upstream path as JSON (e.g. RedditClient)."""

    def fetch_json(self, path: str) -> dict[str, Any]: ...


@dataclass(frozen=True)
class ProfileRequest:
    """
    An inbound request for a user's profile page.

    Attributes
    ----------
    name : str or None
        The requested username; ``DEFAULT_USER`` when None.
    query : str
        The raw inbound query string (``sort``, ``t``, ``after``, ...).
    url : str
        The path and query of the inbound request, for building links.
    """

    name: str | None = None
    query: str = ''
    url: str = ''

    @classmethod
    def from_params(
        cls, name: str, sort: str = '', t: str = '', after: str = ''
    ) -> ProfileRequest:
        """Build a request from individual listing parameters."""
        params = {k: v for k, v in (('sort', sort), ('t', t), ('after', after)) if v}
        query = urlencode(params)
        url = f'/user/{name}' + (f'?{query}' if query else '')
        return cls(name=name, query=query, url=url)

    @property
    def username(self) -> str:
        return self.name or DEFAULT_USER

    def about_path(self) -> str:
        """Return the upstream path of the user's profile metadata."""
        return f'/user/{quote(self.username, safe="")}/about.json?raw_json=1'

    def posts_path(self) -> str:
        """Return the upstream path of the user's listing, carrying the query."""
        name = quote(self.username, safe='')
        if self.query:
            return f'/user/{name}.json?{self.query}&raw_json=1'
        return f'/user/{name}.json?raw_json=1'


@dataclass(frozen=True)
class ProfileView:
    """
    Everything a template needs to render a profile page.

    Attributes
    ----------
    profile : Profile
        The user; empty when their metadata could not be fetched.
    posts : list[Post]
        Kept posts, in upstream order.
    sort : tuple[str, str]
        The (sort, t) listing parameters.
    ends : PageCursors
        Previous / next page cursors.
    prefs : Preferences
        Display preferences of the viewer.
    url : str
        The inbound request URL.
    is_filtered : bool
        The user themself is blocked; posts were not fetched.
    all_posts_filtered : bool
        Posts were fetched but every one of them was blocked.
    profile_error : FetchErrorKind or None
        Why the profile degraded to an empty one, if it did.
    """

    profile: Profile
    posts: list[Post] = field(default_factory=list)
    sort: tuple[str, str] = ('', '')
    ends: PageCursors = field(default_factory=PageCursors)
    prefs: Preferences = field(default_factory=Preferences)
    url: str = ''
    is_filtered: bool = False
    all_posts_filtered: bool = False
    profile_error: FetchErrorKind | None = None


def fetch_profile(
    client: JSONFetcher, request: ProfileRequest
) -> tuple[Profile, FetchErrorKind | None]:
    """
    Fetch a user's profile metadata, degrading to an empty Profile.

    Returns
    -------
    tuple[Profile, FetchErrorKind | None]
        The profile and, if fetching it failed, the kind of failure.
    """
    try:
        about = client.fetch_json(request.about_path())
    except FetchError as e:
        logger.warning('Profile of %r unavailable: %s', request.username, e.message)
        return Profile(), e.kind
    return to_profile(about, request.username), None


def fetch_profile_page(
    client: JSONFetcher,
    request: ProfileRequest,
    filters: FilterSet,
    prefs: Preferences | None = None,
) -> ProfileView:
    """
    Assemble the view of one page of a user's profile.

    The profile is fetched first; if the user is blocked, the listing is
    never requested. A failure to fetch the profile is not fatal, but a
    failure to fetch the listing is.

    Parameters
    ----------
    client : JSONFetcher
        Upstream API client.
    request : ProfileRequest
        The requested user and listing parameters.
    filters : FilterSet
        Blocked users and communities for this request.
    prefs : Preferences or None, optional
        Viewer preferences passed through to the view.

    Returns
    -------
    ProfileView
        The assembled view.

    Raises
    ------
    FetchError
        If the listing cannot be fetched.
    """
    if prefs is None:
        prefs = Preferences()

    path = request.posts_path()
    sort = (param(path, 'sort') or '', param(path, 't') or '')
    after_in = param(path, 'after') or ''

    profile, profile_error = fetch_profile(client, request)

    if is_profile_filtered(request.username, filters):
        logger.debug('Profile %r is filtered, skipping listing', request.username)
        return ProfileView(
            profile=profile,
            sort=sort,
            ends=paginate(after_in, ''),
            prefs=prefs,
            url=request.url,
            is_filtered=True,
            profile_error=profile_error,
        )

    posts, after_out = to_post_list(client.fetch_json(path))
    kept, all_posts_filtered = filter_posts(posts, filters)

    return ProfileView(
        profile=profile,
        posts=kept,
        sort=sort,
        ends=paginate(after_in, after_out),
        prefs=prefs,
        url=request.url,
        all_posts_filtered=all_posts_filtered,
        profile_error=profile_error,
    )


def render_profile(
    client: JSONFetcher,
    request: ProfileRequest,
    filters: FilterSet,
    prefs: Preferences | None,
    render: Callable[[ProfileView], str],
    render_error: Callable[[ProfileRequest, str], str],
) -> str:
    """
    Render a profile page, or an error page if the listing is unavailable.

    Errors raised by ``render`` itself are propagated.
    """
    try:
        view = fetch_profile_page(client, request, filters, prefs)
    except FetchError as e:
        logger.error('Listing of %r unavailable: %s', request.username, e.message)
        return render_error(request, e.message)
    return render(view)
