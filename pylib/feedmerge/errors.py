'''
Error taxonomy.

InvalidURL is fatal to a whole run. FeedFailure and its subclasses are per
feed: the aggregator logs them and carries on without that feed's posts.
'''


class FeedMergeError(RuntimeError):
    '''Base class for feedmerge errors.'''


class InvalidURL(FeedMergeError):
    '''Raised when a command line source cannot be turned into feed URLs.'''

    def __init__(self, value: str, reason: str = 'not a valid http(s) URL'):
        self.value = value
        self.reason = reason
        super().__init__(f'{value!r}: {reason}')


class FeedFailure(FeedMergeError):
    '''A single feed could not be fetched or parsed.'''

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f'{url}: {message}')


class FetchError(FeedFailure):
    '''HTTP status or transport failure while fetching a feed.'''

    def __init__(self, url: str, *, status: int | None = None, cause: BaseException | None = None):
        self.status = status
        self.cause = cause
        if status is not None:
            message = f'HTTP status {status}'
        else:
            message = f'{type(cause).__name__}: {cause}' if cause else 'request failed'
        super().__init__(url, message)


class FeedTypeUnrecognized(FeedFailure):
    '''Content is not a feed and no feed link could be discovered in it.'''

    def __init__(self, url: str, reason: str = 'not a recognized feed type'):
        self.reason = reason
        super().__init__(url, reason)


class MalformedFeed(FeedFailure):
    '''Content looks like a known feed type but could not be parsed.'''

    def __init__(self, url: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(url, f'malformed feed ({cause})' if cause else 'malformed feed')
