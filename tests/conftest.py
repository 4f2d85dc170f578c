from datetime import datetime, timezone

import httpx
import pytest
import structlog

from feedmerge.models import Post

RSS_FEED = b'''<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0">
<channel>
<title>Example Blog</title>
<link>http://a.example/</link>
<item>
  <title>First</title>
  <link>http://a.example/first</link>
  <pubDate>Mon, 01 May 2023 10:00:00 GMT</pubDate>
</item>
<item>
  <title>Second</title>
  <link>http://a.example/second</link>
  <pubDate>Sat, 15 Apr 2023 08:30:00 GMT</pubDate>
</item>
<item>
  <title>Undated</title>
  <link>http://a.example/undated</link>
</item>
</channel>
</rss>
'''

ATOM_FEED = b'''<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
<title>Other Journal</title>
<id>urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6</id>
<updated>2023-05-01T00:00:00Z</updated>
<entry>
  <title>Only updated</title>
  <link href="http://b.example/only-updated"/>
  <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a</id>
  <updated>2023-05-01T00:00:00Z</updated>
</entry>
<entry>
  <title>Published in March</title>
  <link href="http://b.example/march"/>
  <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6b</id>
  <published>2023-03-20T12:00:00Z</published>
  <updated>2023-05-02T00:00:00Z</updated>
</entry>
</feed>
'''

HTML_PAGE = b'''<!DOCTYPE html>
<html>
<head>
<title>A blog</title>
<link rel="stylesheet" href="/style.css">
<link rel="alternate" type="application/rss+xml" title="RSS" href="/feed.xml">
</head>
<body><p>Hello</p></body>
</html>
'''

PLAIN_HTML_PAGE = b'''<!DOCTYPE html>
<html><head><title>Nothing here</title></head><body><p>No feeds.</p></body></html>
'''


def make_transport(routes: dict, calls: list | None = None) -> httpx.MockTransport:
    '''
    MockTransport answering from routes: URL -> bytes body, int status or
    callable(request). Unknown URLs get a 404.
    '''
    def handler(request: httpx.Request):
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        route = routes.get(url)
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        if isinstance(route, int):
            return httpx.Response(route)
        return httpx.Response(200, content=route)

    return httpx.MockTransport(handler)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def post(title: str, link: str, ts: datetime, feed_link: str = 'http://a.example/feed.xml') -> Post:
    return Post(title=title, link=link, timestamp=ts, feed_link=feed_link, feed_title='Example')


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def rss_feed() -> bytes:
    return RSS_FEED


@pytest.fixture
def atom_feed() -> bytes:
    return ATOM_FEED
