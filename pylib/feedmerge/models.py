'''Value types shared across the pipeline.'''

from dataclasses import dataclass
from datetime import datetime

MAX_DISCOVERY_DEPTH = 1


@dataclass(frozen=True)
class FeedTarget:
    '''A feed URL to fetch. depth 1 means it was discovered from an HTML page.'''

    url: str
    depth: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.depth <= MAX_DISCOVERY_DEPTH:
            raise ValueError(f'discovery depth must be 0..{MAX_DISCOVERY_DEPTH}, got {self.depth}')

    def discovered(self, url: str) -> 'FeedTarget':
        return FeedTarget(url=url, depth=self.depth + 1)


@dataclass(frozen=True)
class Post:
    '''One feed entry, normalized. Never built without a timestamp.'''

    title: str
    link: str
    timestamp: datetime
    feed_link: str  # URL actually fetched, i.e. the discovered one if discovery happened
    feed_title: str = ''
