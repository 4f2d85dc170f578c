'''CLI for feedmerge: fetch feeds concurrently and list their posts by period.'''

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

import fire
import httpx
import structlog
from rich.console import Console
from rich.markup import escape

from feedmerge import __version__
from feedmerge.aggregator import collect_posts
from feedmerge.config import DEFAULT_MAX_CONCURRENCY, DEFAULT_TIMEOUT, RunConfig
from feedmerge.errors import InvalidURL
from feedmerge.grouping import dedupe_posts, group_posts
from feedmerge.render import open_in_browser, render_html, render_text
from feedmerge.resolver import resolve_sources

USAGE = '''usage: feedmerge SOURCE [SOURCE ...] [--web] [--html] [--period=month]
                 [--timeout=30] [--concurrency=32] [--verbose]
       feedmerge version

SOURCE is a feed URL or a file with one feed URL per line.
  --web          open the listing as HTML in the default browser
  --html         write HTML to standard output instead of plain text
  --period       group posts by day, month or year (default: month)
  --timeout      seconds allowed for fetching all feeds (default: 30)
  --concurrency  most feeds fetched at the same time (default: 32)
  --verbose      debug logging on standard error'''


def _configure_logging(verbose: bool = False) -> None:
    '''Plain tracebacks, everything on stderr so stdout only carries the listing.'''
    from structlog.contextvars import merge_contextvars
    from structlog.dev import ConsoleRenderer, plain_traceback, set_exc_info
    from structlog.processors import StackInfoRenderer, TimeStamper, add_log_level

    structlog.configure(
        processors=[
            merge_contextvars,
            add_log_level,
            StackInfoRenderer(),
            set_exc_info,
            TimeStamper(fmt='%Y-%m-%d %H:%M:%S', utc=False),
            ConsoleRenderer(exception_formatter=plain_traceback),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _usage_error(console: Console, message: str) -> int:
    console.print(f'[bold red]error:[/bold red] {escape(message)}')
    console.print(USAGE, markup=False, highlight=False)
    return 2


def run(
    sources: Sequence[str],
    *,
    web: bool = False,
    html: bool = False,
    period: str = 'month',
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: int = DEFAULT_MAX_CONCURRENCY,
    out: TextIO | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    '''
    Resolve sources, fetch every feed, render the merged listing.
    Returns the process exit code.
    '''
    console = Console(stderr=True)
    out = out or sys.stdout
    sources = [str(s) for s in sources]

    if sources == ['version']:
        out.write(f'feedmerge {__version__}\n')
        return 0
    if not sources:
        return _usage_error(console, 'no feed given')

    try:
        config = RunConfig.from_options(
            web=web, html=html, period=period, timeout=timeout, concurrency=concurrency,
        )
        targets = resolve_sources(sources)
    except (InvalidURL, ValueError) as e:
        return _usage_error(console, str(e))
    except OSError as e:
        return _usage_error(console, f'cannot read feed list: {e}')

    log = structlog.get_logger()
    posts = collect_posts(targets, config, transport=transport)
    groups = group_posts(dedupe_posts(posts), config.period)
    log.debug('merged posts', feeds=len(targets), posts=len(posts), groups=len(groups))

    try:
        if config.output == 'web':
            path = open_in_browser(render_html(groups))
            log.info('opened listing in browser', path=str(path))
        elif config.output == 'html':
            out.write(render_html(groups))
        else:
            render_text(groups, out)
    except OSError as e:
        log.error('rendering failed', output=config.output, error=str(e))
    return 0


def _bool_flag(value, sources: list[str]) -> bool:
    '''
    fire reads `--web URL` as web=URL. Put such a value back with the
    sources and treat the flag as set.
    '''
    if isinstance(value, bool):
        return value
    sources.insert(0, str(value))
    return True


def feeds(
    *sources: str,
    web: bool = False,
    html: bool = False,
    period: str = 'month',
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: int = DEFAULT_MAX_CONCURRENCY,
    verbose: bool = False,
) -> None:
    '''
    List posts from the given feeds, newest first, grouped by period.
    sources: feed URLs and/or files of newline-separated feed URLs
    web: render HTML to a temporary file and open it in the browser
    html: write HTML to standard output
    period: day | month | year
    timeout: seconds allowed for the whole fetch phase
    concurrency: most feeds fetched at once
    verbose: debug logging on standard error
    '''
    positional = list(sources)
    html = _bool_flag(html, positional)
    web = _bool_flag(web, positional)
    verbose = _bool_flag(verbose, positional)
    _configure_logging(verbose)
    try:
        code = run(
            positional, web=web, html=html, period=period, timeout=timeout, concurrency=concurrency,
        )
    except KeyboardInterrupt:
        Console(stderr=True).print('Interrupted')
        code = 130
    if code:
        raise SystemExit(code)


def main() -> None:
    '''feedmerge: concurrent feed fetcher and merged listing.'''
    fire.Fire(feeds)


if __name__ == '__main__':
    main()
