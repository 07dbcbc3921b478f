"""Data models for Reddit Mirror."""

from __future__ import annotations

from dataclasses import dataclass


# Format used for account and post creation dates, e.g. "Jan 05 '24"
DATE_FORMAT = "%b %d '%y"


@dataclass(frozen=True)
class Profile:
    """
    Represents a Reddit user profile.

    Text fields are already HTML-escaped and URLs already rewritten for
    display, so templates can output them as-is.

    Attributes
    ----------
    name : str
        The username as reported by Reddit.
    title : str
        Display title of the user's profile subreddit.
    icon : str
        Avatar URL.
    karma : int
        Total karma; may be zero or negative.
    created : str
        Account creation date, formatted with ``DATE_FORMAT``.
    banner : str
        Banner image URL.
    description : str
        Public profile description.
    """

    name: str = ''
    title: str = ''
    icon: str = ''
    karma: int = 0
    created: str = ''
    banner: str = ''
    description: str = ''


@dataclass(frozen=True)
class Media:
    """A preview image attached to a post."""

    url: str
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Post:
    """
    One item of a user's listing: a submission or a comment.

    ``author`` and ``community`` are kept exactly as Reddit sent them since
    they are what filters are matched against.
    """

    id: str
    title: str
    community: str
    author: str
    body: str
    score: int
    created: str
    created_ts: int
    rel_time: str = ''
    permalink: str = ''
    num_comments: int = 0
    nsfw: bool = False
    stickied: bool = False
    is_comment: bool = False
    flair: str = ''
    domain: str = ''
    media: Media | None = None
