"""Reddit JSON API client."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://www.reddit.com'
DEFAULT_TIMEOUT = 10.0


class FetchErrorKind(Enum):
    """Why an upstream request failed."""

    UPSTREAM_UNAVAILABLE = 'upstream_unavailable'
    NOT_FOUND = 'not_found'
    FORBIDDEN = 'forbidden'
    RATE_LIMITED = 'rate_limited'
    BAD_STATUS = 'bad_status'
    MALFORMED_RESPONSE = 'malformed_response'


# HTTP status codes with a dedicated error kind
STATUS_KINDS = {
    403: FetchErrorKind.FORBIDDEN,
    404: FetchErrorKind.NOT_FOUND,
    429: FetchErrorKind.RATE_LIMITED,
}


class FetchError(Exception):
    """
    Exception raised when an upstream request cannot produce usable JSON.

    Parameters
    ----------
    kind : FetchErrorKind
        Category of the failure, for callers that need to branch on it.
    message : str
        Human-readable description, suitable for an error page.
    status : int or None, optional
        HTTP status code, when the failure came from a response.
    """

    def __init__(
        self, kind: FetchErrorKind, message: str, status: int | None = None
    ) -> None:
        self.kind = kind
        self.message = message
        self.status = status
        super().__init__(message)


class RedditClient:
    """
    Read-only client for Reddit's public JSON API.

    Each call to :meth:`fetch_json` is a single round trip with no retries.
    Requests carry a fixed generic User-Agent and no cookies, so nothing
    about the person using the mirror reaches Reddit.

    Can be used as a context manager for automatic resource cleanup.

    Parameters
    ----------
    base_url : str, optional
        Upstream origin. Default is ``https://www.reddit.com``.
    timeout : float, optional
        Per-request timeout in seconds. Default is 10.
    user_agent : str or None, optional
        Overrides the default User-Agent header.

    Examples
    --------
    >>> with RedditClient() as client:
    ...     about = client.fetch_json('/user/reddit/about.json?raw_json=1')
    """

    BASE_HEADERS = {
        'User-Agent': (
            'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:128.0) '
            'Gecko/20100101 Firefox/128.0'
        ),
        'Accept': 'application/json',
    }

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(self.BASE_HEADERS)
        if user_agent:
            self.session.headers['User-Agent'] = user_agent

    def __enter__(self) -> RedditClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def fetch_json(self, path: str) -> dict[str, Any]:
        """
        Fetch an API path and decode its JSON body.

        Parameters
        ----------
        path : str
            Resource path including the query string, e.g.
            ``'/user/reddit.json?sort=new&raw_json=1'``.

        Returns
        -------
        dict[str, Any]
            The decoded JSON object.

        Raises
        ------
        FetchError
            On network errors, non-2xx responses, or a body that is not a
            JSON object.
        """
        url = self.base_url + path
        logger.debug('GET %s', url)

        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=False)
        except requests.Timeout:
            raise FetchError(
                FetchErrorKind.UPSTREAM_UNAVAILABLE,
                f'Reddit did not respond within {self.timeout:g}s',
            ) from None
        except requests.RequestException as e:
            raise FetchError(
                FetchErrorKind.UPSTREAM_UNAVAILABLE, f"Couldn't reach Reddit: {e}"
            ) from e

        if not 200 <= resp.status_code < 300:
            kind = STATUS_KINDS.get(resp.status_code, FetchErrorKind.BAD_STATUS)
            reason = resp.reason or 'Unknown error'
            raise FetchError(
                kind,
                f'Reddit returned {resp.status_code}: {reason}',
                status=resp.status_code,
            )

        try:
            result = resp.json()
        except ValueError:
            raise FetchError(
                FetchErrorKind.MALFORMED_RESPONSE,
                'Failed to parse page JSON data',
                status=resp.status_code,
            ) from None

        if not isinstance(result, dict):
            raise FetchError(
                FetchErrorKind.MALFORMED_RESPONSE,
                'Unexpected JSON structure from Reddit',
                status=resp.status_code,
            )

        # Reddit occasionally reports errors inside a 200 response
        if 'error' in result:
            reason = result.get('reason') or result.get('message') or result['error']
            raise FetchError(
                FetchErrorKind.MALFORMED_RESPONSE,
                f'Reddit error: {reason}',
                status=resp.status_code,
            )

        return result
