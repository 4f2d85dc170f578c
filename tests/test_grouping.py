from datetime import datetime, timedelta, timezone

import pytest

from conftest import post, utc
from feedmerge.grouping import dedupe_posts, group_posts, period_label, period_start, sort_posts


@pytest.fixture
def posts():
    return [
        post('Old', 'http://a.example/old', utc(2022, 12, 31, 23, 59)),
        post('May late', 'http://a.example/may2', utc(2023, 5, 20)),
        post('April', 'http://a.example/apr', utc(2023, 4, 2)),
        post('May early', 'http://a.example/may1', utc(2023, 5, 1)),
        post('Jan', 'http://a.example/jan', utc(2023, 1, 15)),
    ]


def test_sort_newest_first(posts):
    assert [p.title for p in sort_posts(posts)] == ['May late', 'May early', 'April', 'Jan', 'Old']


def test_group_by_month(posts):
    groups = group_posts(posts, 'month')

    assert [g.label for g in groups] == ['May 2023', 'Apr 2023', 'Jan 2023', 'Dec 2022']
    assert [[p.title for p in g.posts] for g in groups] == [
        ['May late', 'May early'], ['April'], ['Jan'], ['Old'],
    ]


def test_groups_strictly_decreasing_and_members_in_period(posts):
    for period in ('day', 'month', 'year'):
        groups = group_posts(posts, period)
        starts = [g.period for g in groups]
        assert starts == sorted(starts, reverse=True)
        assert len(set(starts)) == len(starts)
        for g in groups:
            assert g.posts
            assert all(period_start(p.timestamp, period) == g.period for p in g.posts)
            assert all(period_label(p.timestamp, period) == g.label for p in g.posts)


def test_group_by_year(posts):
    groups = group_posts(posts, 'year')
    assert [(g.label, len(g.posts)) for g in groups] == [('2023', 4), ('2022', 1)]


def test_group_by_day_label():
    [group] = group_posts([post('x', 'http://a.example/x', utc(2023, 5, 1, 8))], 'day')
    assert group.label == '01 May 2023'


def test_grouping_is_idempotent(posts):
    first = group_posts(posts)
    second = group_posts([p for g in first for p in g.posts])
    assert [(g.label, g.posts) for g in first] == [(g.label, g.posts) for g in second]


def test_empty_input():
    assert group_posts([]) == []


def test_equal_timestamps_kept_together():
    ts = utc(2023, 5, 1)
    a = post('A', 'http://a.example/a', ts)
    b = post('B', 'http://a.example/b', ts)

    [group] = group_posts([a, b])

    assert set(group.posts) == {a, b}


def test_non_utc_timestamps_grouped_in_utc():
    plus_two = timezone(timedelta(hours=2))
    early = post('x', 'http://a.example/x', datetime(2023, 6, 1, 1, 0, tzinfo=plus_two))
    [group] = group_posts([early])
    assert group.label == 'May 2023'


def test_unknown_period():
    with pytest.raises(ValueError):
        group_posts([post('x', 'http://a.example/x', utc(2023, 1, 1))], 'week')


def test_dedupe_same_link_and_time():
    ts = utc(2023, 5, 1)
    first = post('A', 'http://a.example/a', ts, feed_link='http://a.example/feed')
    again = post('A (syndicated)', 'http://a.example/a', ts, feed_link='http://planet.example/feed')
    other = post('B', 'http://a.example/b', ts)
    later = post('A', 'http://a.example/a', utc(2023, 5, 2))

    assert dedupe_posts([first, again, other, later]) == [first, other, later]
