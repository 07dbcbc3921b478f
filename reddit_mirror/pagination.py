"""Cursor pairs for previous / next page links."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageCursors:
    """
    The cursors around one page of a listing.

    Tokens are opaque: they are echoed back to Reddit exactly as received.

    Attributes
    ----------
    before : str
        The ``after`` cursor the current page was requested with, or ``''``.
    after : str
        The cursor Reddit returned for the next page, or ``''`` at the end.
    """

    before: str = ''
    after: str = ''

    @property
    def has_previous(self) -> bool:
        return bool(self.before)

    @property
    def has_next(self) -> bool:
        return bool(self.after)

    def as_tuple(self) -> tuple[str, str]:
        return self.before, self.after


def paginate(after_in: str | None, after_out: str | None) -> PageCursors:
    """Pair the inbound cursor with the one Reddit returned, unchanged."""
    return PageCursors(before=after_in or '', after=after_out or '')
