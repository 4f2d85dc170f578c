'''Feed parser adapter using feedparser.'''

from dataclasses import dataclass, field
from datetime import datetime, timezone
from time import struct_time

import feedparser
import structlog
from feedparser.exceptions import CharacterEncodingOverride, NonXMLContentType

from feedmerge.errors import FeedTypeUnrecognized, MalformedFeed

# feedparser flags these as bozo even though the feed itself is fine
BENIGN_PARSE_ERRORS = (CharacterEncodingOverride, NonXMLContentType)


@dataclass
class FeedItem:
    '''One entry as the parser saw it.'''

    title: str
    link: str
    published: datetime | None = None
    updated: datetime | None = None


@dataclass
class ParsedFeed:
    '''Feed-level title plus entries in document order.'''

    title: str
    version: str
    items: list[FeedItem] = field(default_factory=list)


def _to_datetime(value: struct_time | None) -> datetime | None:
    # feedparser normalizes *_parsed to UTC
    if not value:
        return None
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (ValueError, TypeError):
        return None


def parse_feed(data: bytes, url: str) -> ParsedFeed:
    '''
    Parse RSS, Atom or JSON Feed content fetched from url.

    Raises FeedTypeUnrecognized when the content is not a feed at all (e.g.
    an HTML page) and MalformedFeed when it is a feed that could not be read.
    '''
    parsed = feedparser.parse(data, response_headers={'content-location': url})
    version = parsed.get('version') or ''
    error = parsed.get('bozo_exception')
    if not version and not parsed.entries:
        raise FeedTypeUnrecognized(url)
    if parsed.bozo and not isinstance(error, BENIGN_PARSE_ERRORS):
        if not parsed.entries:
            raise MalformedFeed(url, error)
        structlog.get_logger().warning('feed parsed with errors', url=url, error=str(error))

    items = [
        FeedItem(
            title=entry.get('title', ''),
            link=entry.get('link', ''),
            published=_to_datetime(entry.get('published_parsed')),
            # membership test sidesteps feedparser's updated -> published fallback
            updated=_to_datetime(entry['updated_parsed'] if 'updated_parsed' in entry else None),
        )
        for entry in parsed.entries
    ]
    return ParsedFeed(title=parsed.feed.get('title', ''), version=version, items=items)
