'''
Aggregator: fetch, parse and normalize every feed concurrently under one
shared deadline. Individual feed failures only shrink the result.
'''

import asyncio
from collections.abc import Sequence

import httpx
import structlog

from feedmerge.config import RunConfig
from feedmerge.errors import FeedFailure
from feedmerge.fetchers import fetch_feed, make_client
from feedmerge.models import FeedTarget, Post
from feedmerge.normalize import normalize_posts


async def collect_feed(
    target: FeedTarget,
    config: RunConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Post]:
    '''Posts from a single feed. Raises FeedFailure subclasses.'''
    async with make_client(config, transport) as client:
        fetched = await fetch_feed(client, target)
    posts = normalize_posts(fetched.url, fetched.feed)
    structlog.get_logger().info(
        'fetched feed', url=fetched.url, items=len(fetched.feed.items), posts=len(posts),
    )
    return posts


async def aggregate(
    targets: Sequence[FeedTarget],
    config: RunConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Post]:
    '''
    Union of the posts of all targets, in no particular order.

    One task per target, at most config.max_concurrency in flight. Tasks
    still running when config.timeout elapses are cancelled and whatever
    they would have produced is dropped.
    '''
    log = structlog.get_logger()
    if not targets:
        return []

    results: asyncio.Queue[list[Post]] = asyncio.Queue()
    slots = asyncio.Semaphore(config.max_concurrency)

    async def _run(target: FeedTarget) -> None:
        async with slots:
            try:
                posts = await collect_feed(target, config, transport=transport)
            except FeedFailure as e:
                log.error('feed failed', url=target.url, error=str(e))
                return
            except Exception:
                log.exception('feed failed unexpectedly', url=target.url)
                return
        if not posts:
            log.warning('feed contributed no posts', url=target.url)
        # Single non-suspending step: a cancelled task never leaves partial results
        results.put_nowait(posts)

    tasks = [asyncio.create_task(_run(t), name=t.url) for t in targets]
    log.debug('fetching feeds', feeds=len(tasks), timeout=config.timeout, concurrency=config.max_concurrency)
    _, pending = await asyncio.wait(tasks, timeout=config.timeout)
    for task in pending:
        task.cancel()
        log.error('feed abandoned at deadline', url=task.get_name(), timeout=config.timeout)
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)

    posts: list[Post] = []
    while not results.empty():
        posts.extend(results.get_nowait())
    return posts


def collect_posts(
    targets: Sequence[FeedTarget],
    config: RunConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Post]:
    '''Blocking wrapper around aggregate().'''
    return asyncio.run(aggregate(targets, config, transport=transport))
