'''Order posts newest first and bucket them by calendar period.'''

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from feedmerge.models import Post

LABEL_FORMATS = {
    'day': '%d %b %Y',
    'month': '%b %Y',
    'year': '%Y',
}


@dataclass(frozen=True)
class PostGroup:
    '''Consecutive posts from the same period, newest first.'''

    label: str
    period: datetime  # start of the period, UTC
    posts: tuple[Post, ...]


def period_start(ts: datetime, period: str = 'month') -> datetime:
    '''Truncate ts (converted to UTC) to the start of its day, month or year.'''
    if period not in LABEL_FORMATS:
        raise ValueError(f'Unknown period: {period}. Use one of {", ".join(LABEL_FORMATS)}.')
    ts = ts.astimezone(timezone.utc) if ts.tzinfo else ts.replace(tzinfo=timezone.utc)
    if period == 'year':
        return datetime(ts.year, 1, 1, tzinfo=timezone.utc)
    if period == 'month':
        return datetime(ts.year, ts.month, 1, tzinfo=timezone.utc)
    return datetime(ts.year, ts.month, ts.day, tzinfo=timezone.utc)


def period_label(ts: datetime, period: str = 'month') -> str:
    return period_start(ts, period).strftime(LABEL_FORMATS[period])


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    '''Newest first. Order among equal timestamps is unspecified.'''
    return sorted(posts, key=lambda p: p.timestamp, reverse=True)


def dedupe_posts(posts: Iterable[Post]) -> list[Post]:
    '''
    Drop posts repeating an earlier (timestamp, link) pair, e.g. the same
    entry syndicated by two of the fetched feeds. First one wins.
    '''
    seen: set[tuple[datetime, str]] = set()
    unique: list[Post] = []
    for post in posts:
        key = (post.timestamp, post.link)
        if key in seen:
            continue
        seen.add(key)
        unique.append(post)
    return unique


def group_posts(posts: Iterable[Post], period: str = 'month') -> list[PostGroup]:
    '''
    Sort posts and split them into runs sharing a period. Groups come out
    newest period first; no group is empty.
    '''
    groups: list[PostGroup] = []
    current: list[Post] = []
    current_start: datetime | None = None
    for post in sort_posts(posts):
        start = period_start(post.timestamp, period)
        if current and start != current_start:
            groups.append(PostGroup(period_label(current_start, period), current_start, tuple(current)))
            current = []
        current_start = start
        current.append(post)
    if current:
        groups.append(PostGroup(period_label(current_start, period), current_start, tuple(current)))
    return groups
