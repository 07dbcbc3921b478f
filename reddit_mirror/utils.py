"""Utility functions for Reddit Mirror."""

from __future__ import annotations

import csv
import json
import re
import time
from html import unescape
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import parse_qs, urlparse


if TYPE_CHECKING:
    from .models import Post
    from .profile import ProfileView


T = TypeVar('T')

# Media hosts served through the local proxy, mapped to their route prefix
MEDIA_HOSTS = {
    'i.redd.it': '/img',
    'a.thumbs.redditmedia.com': '/thumb/a',
    'b.thumbs.redditmedia.com': '/thumb/b',
    'emoji.redditmedia.com': '/emoji',
    'preview.redd.it': '/preview/pre',
    'external-preview.redd.it': '/preview/external-pre',
    'styles.redditmedia.com': '/style',
    'www.redditstatic.com': '/static',
    'v.redd.it': '/vid',
}

# Placeholder values Reddit puts in thumbnail / icon fields
URL_SENTINELS = frozenset({'', 'self', 'default', 'nsfw', 'spoiler', 'image'})

REDDIT_LINK_RE = re.compile(
    r'https?://(?:www\.|old\.|np\.|new\.|amp\.)?reddit\.com(?=/)'
)


def get_path(data: Any, key_path: str, default: T) -> T:
    """
    Read a nested JSON value without ever raising.

    Parameters
    ----------
    data : Any
        Decoded JSON (usually a dict).
    key_path : str
        Dot-separated keys, e.g. ``'data.subreddit.title'``. Integer segments
        index into lists.
    default : T
        Returned when any segment is missing or the leaf has the wrong type.

    Returns
    -------
    T
        The value at ``key_path``, or ``default``.
    """
    node = data
    for key in key_path.split('.'):
        if isinstance(node, dict):
            if key not in node:
                return default
            node = node[key]
        elif isinstance(node, list) and key.isdigit():
            index = int(key)
            if index >= len(node):
                return default
            node = node[index]
        else:
            return default

    if node is None:
        return default
    if default is None:
        return node  # type: ignore[no-any-return]

    # bool is an int subclass, but never a valid number here
    if isinstance(node, bool) or isinstance(default, bool):
        both = isinstance(node, bool) and isinstance(default, bool)
        return node if both else default  # type: ignore[return-value]
    if isinstance(default, float) and isinstance(node, int):
        try:
            return float(node)  # type: ignore[return-value]
        except OverflowError:
            return default
    if isinstance(node, type(default)):
        return node
    return default


def param(path: str, key: str) -> str | None:
    """
    Return the value of query parameter ``key`` in ``path``, if any.

    When the key is repeated, the last occurrence wins.
    """
    query = urlparse(path).query
    values = parse_qs(query, keep_blank_values=True).get(key)
    if not values:
        return None
    return values[-1]


def escape(text: str) -> str:
    """HTML-escape ``&``, ``<`` and ``>`` (quotes are left alone)."""
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def format_url(url: str) -> str:
    """
    Turn an upstream media URL into a display URL served by the mirror.

    Known Reddit media hosts are rewritten to local proxy routes so the
    browser never contacts Reddit directly. Placeholder values such as
    ``self`` or ``default`` become an empty string; any other URL is
    returned as-is.

    Parameters
    ----------
    url : str
        The raw URL from the API.

    Returns
    -------
    str
        The rewritten URL, or ``''`` when there is nothing to show.
    """
    if url in URL_SENTINELS:
        return ''

    parsed = urlparse(url)
    prefix = MEDIA_HOSTS.get(parsed.netloc)
    if prefix is None:
        return url

    result = prefix + parsed.path
    if parsed.query:
        result += '?' + parsed.query
    return result


def rewrite_urls(html: str) -> str:
    """Make absolute links to reddit.com relative so they stay on the mirror."""
    return REDDIT_LINK_RE.sub('', html)


def format_num(num: int) -> str:
    """Format a score or count compactly (``1.2k``, ``3.4m``)."""
    if abs(num) >= 1_000_000:
        return f'{num / 1_000_000:.1f}m'
    if abs(num) >= 1_000:
        return f'{num / 1_000:.1f}k'
    return str(num)


def rel_time(timestamp: int, now: float | None = None) -> str:
    """
    Describe how long ago ``timestamp`` was.

    Parameters
    ----------
    timestamp : int
        Unix epoch seconds.
    now : float or None, optional
        Reference time. Defaults to the current time.

    Returns
    -------
    str
        Strings like ``'5m ago'``, ``'3h ago'``, ``'12d ago'``; dates older
        than a month are counted in months or years.
    """
    if now is None:
        now = time.time()
    seconds = max(0, int(now) - timestamp)

    if seconds < 60:
        return 'just now'
    if seconds < 3600:
        return f'{seconds // 60}m ago'
    if seconds < 86400:
        return f'{seconds // 3600}h ago'
    if seconds < 30 * 86400:
        return f'{seconds // 86400}d ago'
    if seconds < 365 * 86400:
        return f'{seconds // (30 * 86400)}mo ago'
    return f'{seconds // (365 * 86400)}y ago'


def print_profile_page(view: ProfileView) -> None:
    """
    Print one page of a profile to stdout.

    Display fields are stored HTML-escaped for templates; they are
    unescaped here since a terminal shows them literally.

    Parameters
    ----------
    view : ProfileView
        The assembled page.
    """
    profile = view.profile
    print('\n' + '=' * 60)
    print(f'u/{profile.name or "?"}  {unescape(profile.title)}')
    print(f'Karma {format_num(profile.karma)} | Cake day {profile.created}')
    if profile.description:
        print(unescape(profile.description))
    print('=' * 60)

    if view.is_filtered:
        print('\nThis user is filtered. Their posts are hidden.')
        return
    if view.all_posts_filtered:
        print('\nAll posts on this page are from filtered users or communities.')
        return
    if not view.posts:
        print('\nNo posts.')
        return

    for post in view.posts:
        kind = 'comment in' if post.is_comment else 'post in'
        print(f'[{format_num(post.score)}] {unescape(post.title)}')
        print(f'  └─ {kind} r/{post.community} by u/{post.author}, {post.rel_time}')


def _post_to_dict(post: Post) -> dict[str, object]:
    """Convert a Post to a dictionary for serialization, with plain-text titles."""
    return {
        'id': post.id,
        'title': unescape(post.title),
        'community': post.community,
        'author': post.author,
        'score': post.score,
        'created': post.created,
        'created_ts': post.created_ts,
        'permalink': post.permalink,
        'num_comments': post.num_comments,
        'is_comment': post.is_comment,
        'nsfw': post.nsfw,
        'media': post.media.url if post.media else None,
    }


def output_posts_to_file(posts: list[Post], path: Path) -> None:
    """
    Output posts to a file.

    Parameters
    ----------
    posts : list[Post]
        The posts to output.
    path : Path
        Output file path. Format determined by extension (.txt, .json, .csv).
    """
    suffix = path.suffix.lower()

    if suffix == '.json':
        data = [_post_to_dict(p) for p in posts]
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')
    elif suffix == '.csv':
        fields = ['id', 'title', 'community', 'author', 'score', 'created', 'permalink']
        with path.open('w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(fields)
            for p in posts:
                row = _post_to_dict(p)
                writer.writerow([row[name] for name in fields])
    else:
        # Default to plain text
        lines = [
            f'{p.score}\tr/{p.community}\tu/{p.author}\t{unescape(p.title)}'
            for p in posts
        ]
        path.write_text('\n'.join(lines), encoding='utf-8')

    print(f'Results saved to: {path}')
