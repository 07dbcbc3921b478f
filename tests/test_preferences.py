"""Tests for cookie-based display preferences."""

from __future__ import annotations

from reddit_mirror.filters import FilterSet
from reddit_mirror.preferences import Preferences


def test_defaults_without_cookies():
    prefs = Preferences.from_cookies({})
    assert prefs == Preferences()
    assert prefs.theme == 'system'
    assert prefs.layout == 'card'
    assert prefs.show_nsfw is False
    assert len(prefs.filter_set()) == 0


def test_reads_cookies():
    prefs = Preferences.from_cookies(
        {
            'theme': 'dark',
            'layout': 'compact',
            'wide': 'on',
            'show_nsfw': 'on',
            'blur_nsfw': 'off',
            'post_sort': 'new',
            'subscriptions': 'rust+python',
            'filters': 'u_spez+pics',
        }
    )
    assert prefs.theme == 'dark'
    assert prefs.layout == 'compact'
    assert prefs.wide is True
    assert prefs.show_nsfw is True
    assert prefs.blur_nsfw is False
    assert prefs.post_sort == 'new'
    assert prefs.subscriptions == ('rust', 'python')
    assert prefs.filter_set() == FilterSet(['u_spez', 'pics'])


def test_unknown_values_fall_back():
    prefs = Preferences.from_cookies({'theme': 'neon', 'comment_sort': 'random'})
    assert prefs.theme == 'system'
    assert prefs.comment_sort == 'confidence'
