'''
Feed auto-discovery for pages that are not feeds themselves.

This is a pattern search over raw markup for the two usual forms,
<link type="application/rss+xml" href=...> and the atom+xml variant. It is
intentionally limited and is not an HTML parser: no <base> handling, no
script or comment awareness.
'''

import html
import re

import httpx

FEED_LINK_TYPES = ('application/rss+xml', 'application/atom+xml')

LINK_TAG_PATTERN = re.compile(r'<link\b[^>]*>', re.IGNORECASE)
ATTR_PATTERN = re.compile(
    r'''([a-zA-Z][\w:-]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))''',
)


def _attributes(tag: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in ATTR_PATTERN.finditer(tag):
        name = m.group(1).lower()
        value = next(g for g in m.groups()[1:] if g is not None)
        attrs.setdefault(name, html.unescape(value).strip())
    return attrs


def resolve_href(href: str, base_url: str) -> str:
    '''
    Resolve a discovered href against the page URL. Absolute URLs are kept,
    "/path" lands on the page's host, anything else is joined best-effort.
    '''
    return str(httpx.URL(base_url).join(href))


def find_feed_link(body: bytes | str, base_url: str) -> str | None:
    '''
    Return the absolute URL of the first RSS/Atom <link> in body, or None.
    '''
    text = body.decode('utf-8', errors='replace') if isinstance(body, bytes) else body
    for m in LINK_TAG_PATTERN.finditer(text):
        attrs = _attributes(m.group(0))
        if attrs.get('type', '').lower() not in FEED_LINK_TYPES:
            continue
        href = attrs.get('href')
        if href:
            try:
                return resolve_href(href, base_url)
            except httpx.InvalidURL:
                continue
    return None
