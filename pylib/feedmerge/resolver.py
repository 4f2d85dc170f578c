'''
Turn command line sources into feed targets.

A source is either a URL or the path of a file listing one URL per line.
No network access happens here.
'''

from collections.abc import Iterable
from pathlib import Path

import httpx
import structlog

from feedmerge.errors import InvalidURL
from feedmerge.models import FeedTarget


def parse_url(value: str) -> str:
    '''
    Validate an absolute http(s) URL and return it in normalized form.
    Raises InvalidURL otherwise.
    '''
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidURL(value, str(e)) from e
    if url.scheme not in ('http', 'https'):
        raise InvalidURL(value, 'URL must start with http:// or https://')
    if not url.host:
        raise InvalidURL(value, 'URL has no host')
    return str(url)


def read_url_file(path: Path) -> list[str]:
    '''
    Read newline-separated URLs from path, in file order. Blank lines are skipped.
    '''
    urls: list[str] = []
    for lineno, line in enumerate(path.read_text(encoding='utf-8').split('\n'), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            urls.append(parse_url(line))
        except InvalidURL as e:
            raise InvalidURL(line, f'{path}, line {lineno}: {e.reason}') from e
    return urls


def resolve_source(source: str) -> list[FeedTarget]:
    '''
    Resolve one source. An existing regular file is read as a URL list;
    anything else must itself be a URL.
    '''
    path = Path(source)
    if path.is_file():
        urls = read_url_file(path)
        structlog.get_logger().debug('read feed list', path=str(path), feeds=len(urls))
    else:
        urls = [parse_url(source)]
    return [FeedTarget(url=u) for u in urls]


def resolve_sources(sources: Iterable[str]) -> list[FeedTarget]:
    '''
    Resolve every source, keeping argument order. An empty result is an
    error: there would be nothing to fetch.
    '''
    sources = list(sources)
    targets: list[FeedTarget] = []
    for source in sources:
        targets.extend(resolve_source(source))
    if not targets:
        raise InvalidURL(', '.join(sources), 'no feed URLs found')
    return targets
