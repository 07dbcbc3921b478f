"""Tests for environment-based settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from reddit_mirror.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from reddit_mirror.config import Settings, default_filter_file


@pytest.fixture
def clean_env(monkeypatch):
    for name in ('REDDIT_BASE_URL', 'REQUEST_TIMEOUT', 'USER_AGENT', 'FILTERS', 'FILTER_FILE'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env(load_dotenv_file=False)
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.user_agent is None
    assert settings.filters == []
    assert settings.filter_file == default_filter_file()


def test_reads_environment(clean_env):
    clean_env.setenv('REDDIT_BASE_URL', 'https://old.reddit.com')
    clean_env.setenv('REQUEST_TIMEOUT', '2.5')
    clean_env.setenv('USER_AGENT', 'mirror/1.0')
    clean_env.setenv('FILTERS', 'u_spez, pics ,,')
    clean_env.setenv('FILTER_FILE', '/tmp/filters.txt')

    settings = Settings.from_env(load_dotenv_file=False)

    assert settings.base_url == 'https://old.reddit.com'
    assert settings.timeout == 2.5
    assert settings.user_agent == 'mirror/1.0'
    assert settings.filters == ['u_spez', 'pics']
    assert settings.filter_file == Path('/tmp/filters.txt')


@pytest.mark.parametrize(
    ('name', 'value'),
    [
        ('REQUEST_TIMEOUT', 'soon'),
        ('REQUEST_TIMEOUT', '-1'),
        ('REDDIT_BASE_URL', 'reddit.com'),
    ],
)
def test_invalid_values_exit(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(SystemExit):
        Settings.from_env(load_dotenv_file=False)


def test_default_filter_file_name():
    assert default_filter_file().name == 'filters.txt'
