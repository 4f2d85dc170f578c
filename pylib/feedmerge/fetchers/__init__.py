'''Feed fetchers: HTTP, feed parsing, auto-discovery.'''

from feedmerge.fetchers.discovery import find_feed_link
from feedmerge.fetchers.feed import FetchedFeed, fetch_feed
from feedmerge.fetchers.http import fetch_http, make_client
from feedmerge.fetchers.rss import FeedItem, ParsedFeed, parse_feed

__all__ = [
    'FeedItem',
    'FetchedFeed',
    'ParsedFeed',
    'fetch_feed',
    'fetch_http',
    'find_feed_link',
    'make_client',
    'parse_feed',
]
