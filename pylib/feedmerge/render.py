'''Plain text and HTML listings of grouped posts, plus browser display.'''

import html
import tempfile
import webbrowser
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import httpx

from feedmerge.grouping import PostGroup
from feedmerge.models import Post

TITLE_WIDTH = 70
INDENT = '    '

HTML_HEAD = '''<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>feedmerge</title>
<style>
body {
\tmargin: 0 auto;
\tmax-width: 800px;
\tcolor: #888;
\tfont-family: -apple-system,system-ui,BlinkMacSystemFont,"Segoe UI",Roboto,"Helvetica Neue",Arial,sans-serif;
\tfont-size: 14px;
\tline-height: 1.4em;
}
h4 {color: #000;}
a {color: #000;}
a:visited {color: #888;}
</style>
</head>
<body>
'''

HTML_TAIL = '''</body>
</html>
'''


def format_post(post: Post) -> str:
    '''
    One listing entry. Titles wider than TITLE_WIDTH get their own line with
    the link beneath, lined up with the short-title column.
    '''
    if len(post.title) > TITLE_WIDTH:
        return f'{INDENT}{post.title}\n{INDENT}{"":{TITLE_WIDTH}} {post.link}\n'
    return f'{INDENT}{post.title:<{TITLE_WIDTH}} {post.link}\n'


def render_text(groups: Sequence[PostGroup], out: TextIO) -> None:
    for group in groups:
        out.write(f'{group.label}\n')
        for post in group.posts:
            out.write(format_post(post))


def feed_host(post: Post) -> str:
    '''Host part of the post's feed URL, or '' if it cannot be parsed.'''
    try:
        return httpx.URL(post.feed_link).host
    except httpx.InvalidURL:
        return ''


def render_html(groups: Sequence[PostGroup]) -> str:
    parts = [HTML_HEAD]
    for group in groups:
        parts.append(f'<h4>{html.escape(group.label)}</h4>\n')
        for post in group.posts:
            title = html.escape(post.title) or html.escape(post.link)
            parts.append(
                f'<div><a href="{html.escape(post.link, quote=True)}">{title}</a>'
                f' ({html.escape(feed_host(post))})</div>\n'
            )
    parts.append(HTML_TAIL)
    return ''.join(parts)


def open_in_browser(document: str) -> Path:
    '''
    Write document to a temporary .html file and ask the system browser to
    open it. Returns the file path; raises OSError if no browser accepted it.
    '''
    with tempfile.NamedTemporaryFile(
        'w', encoding='utf-8', prefix='feedmerge-', suffix='.html', delete=False,
    ) as f:
        f.write(document)
        path = Path(f.name)
    if not webbrowser.open(path.as_uri()):
        raise OSError(f'could not open a browser for {path}')
    return path
