"""
Reddit Mirror.

Fetches Reddit user profiles and their posts through Reddit's JSON API and
prepares them for display, so that the person reading never talks to
Reddit directly:
1. Profile metadata is normalized into escaped, display-ready fields
2. Posts from blocked users and communities are filtered out
"""

from importlib.metadata import version

from .cli import main
from .client import FetchError, FetchErrorKind, RedditClient
from .filters import FilterSet
from .models import Post, Profile
from .profile import ProfileRequest, ProfileView, fetch_profile_page


__version__ = version('reddit-mirror')
__all__ = [
    'FetchError',
    'FetchErrorKind',
    'FilterSet',
    'Post',
    'Profile',
    'ProfileRequest',
    'ProfileView',
    'RedditClient',
    'fetch_profile_page',
    'main',
    '__version__',
]
