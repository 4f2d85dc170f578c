'''Map parsed feed items onto Post values.'''

import structlog

from feedmerge.fetchers.rss import ParsedFeed
from feedmerge.models import Post


def normalize_posts(feed_url: str, feed: ParsedFeed) -> list[Post]:
    '''
    One Post per item that has a timestamp (published, else updated) and a
    link. Other items are skipped and logged; that is never an error.
    feed_url should be the URL actually fetched.
    '''
    log = structlog.get_logger()
    posts: list[Post] = []
    for item in feed.items:
        timestamp = item.published or item.updated
        if timestamp is None:
            log.info('skipping item without timestamp', feed=feed_url, title=item.title, link=item.link)
            continue
        if not item.link:
            log.info('skipping item without link', feed=feed_url, title=item.title)
            continue
        posts.append(Post(
            title=item.title,
            link=item.link,
            timestamp=timestamp,
            feed_link=feed_url,
            feed_title=feed.title,
        ))
    return posts
