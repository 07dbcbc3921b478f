"""Command-line interface for Reddit Mirror."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tqdm import tqdm

from .client import FetchError, RedditClient
from .config import Settings
from .filters import FilterSet, load_filter_list
from .models import Post
from .profile import ProfileRequest, ProfileView, fetch_profile_page
from .utils import output_posts_to_file, print_profile_page


SORTS = ['hot', 'new', 'top', 'controversial']
TIMES = ['hour', 'day', 'week', 'month', 'year', 'all']


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description='Read a Reddit user profile without exposing yourself to Reddit',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='Filters are u_<name> for users and bare names for communities.',
    )

    parser.add_argument('name', help='The username whose profile to show')
    parser.add_argument('--sort', choices=SORTS, help='Listing sort order')
    parser.add_argument('--t', choices=TIMES, help='Time range for top / controversial')
    parser.add_argument(
        '--after',
        default='',
        metavar='CURSOR',
        help='Start from this page cursor (as printed by a previous run)',
    )
    parser.add_argument(
        '--pages',
        type=int,
        default=1,
        help='Number of pages to fetch, following next-page cursors (default: 1)',
    )
    parser.add_argument(
        '-o',
        '--output',
        type=Path,
        metavar='FILE',
        help='Output kept posts to a file (supports .txt, .json, .csv)',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='Log upstream requests'
    )

    filter_group = parser.add_argument_group(
        'filter options',
        'Hide posts from users and communities. Env: FILTERS, FILTER_FILE',
    )
    filter_group.add_argument(
        '-f',
        '--filter',
        action='append',
        dest='filters',
        metavar='FILTER',
        help='Block a user (u_NAME) or community (NAME). Repeatable.',
    )
    filter_group.add_argument(
        '--filter-file',
        type=Path,
        metavar='FILE',
        help='Filter list file (one entry per line, # for comments)',
    )

    args = parser.parse_args(argv)
    if args.pages < 1:
        parser.error('--pages must be at least 1')
    return args


def collect_filters(args: argparse.Namespace, settings: Settings) -> FilterSet:
    """Merge filters from arguments, environment and the filter file."""
    filter_file = args.filter_file or settings.filter_file
    filters = load_filter_list(filter_file)
    filters = filters.union(settings.filters or [])
    return filters.union(args.filters or [])


def fetch_pages(
    client: RedditClient,
    args: argparse.Namespace,
    filters: FilterSet,
) -> list[ProfileView]:
    """
    Fetch up to ``args.pages`` consecutive pages of a profile.

    Each page is a fresh request seeded with the previous page's cursor.
    Stops early at the end of the listing or when the user is filtered.
    """
    views: list[ProfileView] = []
    after = args.after

    for _ in tqdm(range(args.pages), desc='Pages', unit='page', disable=args.pages == 1):
        request = ProfileRequest.from_params(
            args.name, sort=args.sort or '', t=args.t or '', after=after
        )
        view = fetch_profile_page(client, request, filters)
        views.append(view)

        if view.is_filtered or not view.ends.has_next:
            break
        after = view.ends.after

    return views


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the CLI.

    Loads settings, parses arguments, fetches the requested pages and
    prints them.
    """
    settings = Settings.from_env()
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format='[%(levelname)s] %(name)s: %(message)s'
        )

    filters = collect_filters(args, settings)
    if filters:
        print(f'Loaded {len(filters)} filter(s)')

    with RedditClient(
        base_url=settings.base_url,
        timeout=settings.timeout,
        user_agent=settings.user_agent,
    ) as client:
        try:
            views = fetch_pages(client, args, filters)
        except FetchError as e:
            raise SystemExit(f'Error: {e.message}') from None

    posts: list[Post] = []
    for view in views:
        print_profile_page(view)
        posts.extend(view.posts)

    last = views[-1]
    if last.profile_error is not None:
        print(f'\nNote: profile details unavailable ({last.profile_error.value})')
    if last.ends.has_next:
        print(f'\nNext page: --after {last.ends.after}')

    if args.output:
        output_posts_to_file(posts, args.output)
