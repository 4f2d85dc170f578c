'''HTTP fetcher using httpx.'''

import httpx

from feedmerge.config import RunConfig
from feedmerge.errors import FetchError


def make_client(config: RunConfig, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    '''
    Client for one feed task. No client-side timeout: the run's shared
    deadline cancels the task instead.
    '''
    return httpx.AsyncClient(
        timeout=None,
        follow_redirects=True,
        headers={'User-Agent': config.user_agent},
        transport=transport,
    )


async def fetch_http(client: httpx.AsyncClient, url: str) -> bytes:
    '''
    GET url and return the body bytes. Raises FetchError on a non-2xx status
    or a transport failure, including a URL httpx refuses to request.
    '''
    try:
        resp = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, cause=e) from e
    if not resp.is_success:
        raise FetchError(url, status=resp.status_code)
    return resp.content
