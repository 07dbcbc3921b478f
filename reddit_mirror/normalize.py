"""Map raw Reddit JSON into Profile and Post objects."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from .models import DATE_FORMAT, Media, Post, Profile
from .utils import escape, format_url, get_path, rel_time, rewrite_urls


# Range of timestamps datetime can represent (years 1 to 9999)
MIN_TIMESTAMP = -62_135_596_800
MAX_TIMESTAMP = 253_402_300_799


def to_epoch(created: float) -> int:
    """Round a JSON timestamp to whole seconds; unusable values become 0."""
    if not math.isfinite(created) or not MIN_TIMESTAMP <= created <= MAX_TIMESTAMP:
        return 0
    return round(created)


def format_created(created: float) -> str:
    """
    Format a Unix timestamp as a creation date.

    Parameters
    ----------
    created : float
        Epoch seconds; rounded to the nearest second.

    Returns
    -------
    str
        The date in ``DATE_FORMAT`` (UTC), e.g. ``"Jan 05 '24"``.
    """
    try:
        moment = datetime.fromtimestamp(to_epoch(created), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        # Platform limits can be narrower than datetime's own range
        moment = datetime.fromtimestamp(0, tz=timezone.utc)
    return moment.strftime(DATE_FORMAT)


def to_profile(json: Any, name: str = '') -> Profile:
    """
    Build a Profile from a ``/user/{name}/about.json`` response.

    Never raises: missing or wrong-typed fields fall back to empty values,
    and a missing creation time becomes the Unix epoch.

    Parameters
    ----------
    json : Any
        The decoded response.
    name : str, optional
        The requested username, used when the response carries none.

    Returns
    -------
    Profile
        The normalized profile.
    """

    def about(field: str) -> str:
        return get_path(json, f'data.subreddit.{field}', '')

    return Profile(
        name=get_path(json, 'data.name', '') or name,
        title=escape(about('title')),
        icon=format_url(about('icon_img')),
        karma=get_path(json, 'data.total_karma', 0),
        created=format_created(get_path(json, 'data.created', 0.0)),
        banner=escape(format_url(about('banner_img'))),
        description=escape(about('public_description')),
    )


def _to_media(data: Any) -> Media | None:
    """Extract the first preview image, falling back to the thumbnail."""
    source = get_path(data, 'preview.images.0.source', {})
    url = format_url(get_path(source, 'url', ''))
    if url:
        return Media(
            url=url,
            width=get_path(source, 'width', 0),
            height=get_path(source, 'height', 0),
        )

    thumbnail = format_url(get_path(data, 'thumbnail', ''))
    if thumbnail:
        return Media(
            url=thumbnail,
            width=get_path(data, 'thumbnail_width', 0),
            height=get_path(data, 'thumbnail_height', 0),
        )
    return None


def to_post(child: Any) -> Post:
    """
    Build a Post from one listing child (``{'kind': ..., 'data': {...}}``).

    ``t1`` children are comments: their title is the title of the post
    they were left on and their body comes from ``body_html``.
    """
    data = get_path(child, 'data', {})
    is_comment = get_path(child, 'kind', '') == 't1'
    created_ts = to_epoch(get_path(data, 'created_utc', 0.0))

    if is_comment:
        title = get_path(data, 'link_title', '')
        body = get_path(data, 'body_html', '')
        media = None
    else:
        title = get_path(data, 'title', '')
        body = get_path(data, 'selftext_html', '')
        media = _to_media(data)

    return Post(
        id=get_path(data, 'id', ''),
        title=escape(title),
        community=get_path(data, 'subreddit', ''),
        author=get_path(data, 'author', ''),
        body=rewrite_urls(body),
        score=get_path(data, 'score', 0),
        created=format_created(created_ts),
        created_ts=created_ts,
        rel_time=rel_time(created_ts),
        permalink=rewrite_urls(get_path(data, 'permalink', '')),
        num_comments=get_path(data, 'num_comments', 0),
        nsfw=get_path(data, 'over_18', False),
        stickied=get_path(data, 'stickied', False),
        is_comment=is_comment,
        flair=escape(get_path(data, 'link_flair_text', '')),
        domain=get_path(data, 'domain', ''),
        media=media,
    )


def to_post_list(json: Any) -> tuple[list[Post], str]:
    """
    Build the posts of a listing response, in upstream order.

    Parameters
    ----------
    json : Any
        The decoded ``/user/{name}.json`` response.

    Returns
    -------
    tuple[list[Post], str]
        The posts and the ``after`` cursor (``''`` when the listing ends).
    """
    children: list[Any] = get_path(json, 'data.children', [])
    posts = [to_post(child) for child in children]
    after = get_path(json, 'data.after', '')
    return posts, after
