"""Settings loaded from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

import platformdirs
from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


T = TypeVar('T')

# App name for platformdirs
APP_NAME = 'reddit-mirror'

FILTER_FILE_NAME = 'filters.txt'


def _env_parse(name: str, default: T, parser: Callable[[str], T], type_name: str) -> T:
    """
    Parse an environment variable with a type converter.

    Parameters
    ----------
    name : str
        The environment variable name.
    default : T
        The default value if the variable is not set or empty.
    parser : Callable[[str], T]
        Function to convert string to the desired type.
    type_name : str
        Human-readable type name for error messages.

    Returns
    -------
    T
        The parsed value.

    Raises
    ------
    SystemExit
        If the value is set but cannot be parsed.
    """
    val = os.environ.get(name)
    if not val:
        return default
    try:
        return parser(val)
    except ValueError:
        msg = f'Error: {name} must be a valid {type_name}, got {val!r}'
        raise SystemExit(msg) from None


def _env_float(name: str, default: float) -> float:
    """Get a float from an environment variable with a default."""
    return _env_parse(name, default, float, 'number')


def _env_list(name: str) -> list[str]:
    """Get a comma-separated list from an environment variable."""
    val = os.environ.get(name)
    if not val:
        return []
    return [v.strip() for v in val.split(',') if v.strip()]


def get_config_dir() -> Path:
    """
    Get the configuration directory path.

    - Linux: ~/.config/reddit-mirror/
    - macOS: ~/Library/Application Support/reddit-mirror/
    - Windows: C:/Users/<user>/AppData/Local/reddit-mirror/
    """
    return Path(platformdirs.user_config_dir(APP_NAME))


def default_filter_file() -> Path:
    """Return the filter list read when no other file is configured."""
    return get_config_dir() / FILTER_FILE_NAME


@dataclass
class Settings:
    """
    Runtime settings.

    Attributes
    ----------
    base_url : str
        Upstream origin. Env: REDDIT_BASE_URL
    timeout : float
        Per-request timeout in seconds. Env: REQUEST_TIMEOUT
    user_agent : str or None
        User-Agent override. Env: USER_AGENT
    filters : list[str]
        Extra blocked identifiers. Env: FILTERS (comma-separated)
    filter_file : Path
        Filter list file. Env: FILTER_FILE
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str | None = None
    filters: list[str] | None = None
    filter_file: Path | None = None

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> Settings:
        """Read settings from the environment, loading ``.env`` first."""
        if load_dotenv_file:
            load_dotenv()

        base_url = os.environ.get('REDDIT_BASE_URL') or DEFAULT_BASE_URL
        if not base_url.startswith(('http://', 'https://')):
            raise SystemExit(f'Error: REDDIT_BASE_URL must be an http(s) URL, got {base_url!r}')

        timeout = _env_float('REQUEST_TIMEOUT', DEFAULT_TIMEOUT)
        if timeout <= 0:
            raise SystemExit(f'Error: REQUEST_TIMEOUT must be positive, got {timeout}')

        filter_file = os.environ.get('FILTER_FILE')
        return cls(
            base_url=base_url,
            timeout=timeout,
            user_agent=os.environ.get('USER_AGENT') or None,
            filters=_env_list('FILTERS'),
            filter_file=Path(filter_file) if filter_file else default_filter_file(),
        )
