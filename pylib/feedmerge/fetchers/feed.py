'''Fetch one feed target, falling back to auto-discovery once.'''

import asyncio
from dataclasses import dataclass

import httpx
import structlog

from feedmerge.errors import FeedTypeUnrecognized
from feedmerge.fetchers.discovery import find_feed_link
from feedmerge.fetchers.http import fetch_http
from feedmerge.fetchers.rss import ParsedFeed, parse_feed
from feedmerge.models import MAX_DISCOVERY_DEPTH, FeedTarget


@dataclass
class FetchedFeed:
    '''A parsed feed and the URL it actually came from.'''

    url: str
    feed: ParsedFeed


async def fetch_feed(client: httpx.AsyncClient, target: FeedTarget) -> FetchedFeed:
    '''
    Fetch and parse target. If the body is not a feed, look for a feed
    <link> in it and fetch that instead; a discovered URL is never itself
    searched for further links.
    '''
    body = await fetch_http(client, target.url)
    try:
        # feedparser is sync; run in a thread so the run's deadline can still fire
        feed = await asyncio.to_thread(parse_feed, body, target.url)
        return FetchedFeed(url=target.url, feed=feed)
    except FeedTypeUnrecognized:
        if target.depth >= MAX_DISCOVERY_DEPTH:
            raise
        discovered = find_feed_link(body, target.url)
        if discovered is None:
            raise FeedTypeUnrecognized(target.url, 'not a feed and no feed link found in page') from None

    structlog.get_logger().info('discovered feed', page=target.url, url=discovered)
    return await fetch_feed(client, target.discovered(discovered))
