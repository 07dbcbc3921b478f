"""User display preferences, read from request cookies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .filters import COOKIE_SEPARATOR, FilterSet


THEMES = ('system', 'light', 'dark', 'black', 'dracula', 'nord')
LAYOUTS = ('card', 'clean', 'compact')
COMMENT_SORTS = ('confidence', 'top', 'new', 'controversial', 'old')
POST_SORTS = ('hot', 'new', 'top', 'rising', 'controversial')


def _choice(value: str | None, choices: tuple[str, ...]) -> str:
    """Return ``value`` if it is one of ``choices``, else the first choice."""
    return value if value in choices else choices[0]


def _flag(value: str | None) -> bool:
    return value == 'on'


@dataclass(frozen=True)
class Preferences:
    """
    Display preferences of the person viewing a page.

    Attributes
    ----------
    theme, layout : str
        Visual theme and post layout.
    wide : bool
        Use the full page width.
    show_nsfw, blur_nsfw : bool
        Whether NSFW posts are shown, and if so whether their media is blurred.
    hide_hls_notification, use_hls, autoplay_videos : bool
        Video playback options.
    comment_sort, post_sort : str
        Default sort orders.
    subscriptions : tuple[str, ...]
        Subscribed communities.
    filters : FilterSet
        Blocked users and communities.
    """

    theme: str = THEMES[0]
    layout: str = LAYOUTS[0]
    wide: bool = False
    show_nsfw: bool = False
    blur_nsfw: bool = False
    hide_hls_notification: bool = False
    use_hls: bool = False
    autoplay_videos: bool = False
    comment_sort: str = COMMENT_SORTS[0]
    post_sort: str = POST_SORTS[0]
    subscriptions: tuple[str, ...] = ()
    filters: FilterSet = field(default_factory=FilterSet)

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> Preferences:
        """Build preferences from cookie values; unknown values use defaults."""
        subscriptions = cookies.get('subscriptions') or ''
        return cls(
            theme=_choice(cookies.get('theme'), THEMES),
            layout=_choice(cookies.get('layout'), LAYOUTS),
            wide=_flag(cookies.get('wide')),
            show_nsfw=_flag(cookies.get('show_nsfw')),
            blur_nsfw=_flag(cookies.get('blur_nsfw')),
            hide_hls_notification=_flag(cookies.get('hide_hls_notification')),
            use_hls=_flag(cookies.get('use_hls')),
            autoplay_videos=_flag(cookies.get('autoplay_videos')),
            comment_sort=_choice(cookies.get('comment_sort'), COMMENT_SORTS),
            post_sort=_choice(cookies.get('post_sort'), POST_SORTS),
            subscriptions=tuple(s for s in subscriptions.split(COOKIE_SEPARATOR) if s),
            filters=FilterSet.from_cookie(cookies.get('filters')),
        )

    def filter_set(self) -> FilterSet:
        """Return the filters active for this request."""
        return self.filters
