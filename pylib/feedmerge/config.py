'''Run configuration, built once by the CLI and passed down explicitly.'''

from __future__ import annotations

from dataclasses import dataclass

from feedmerge import __version__

DEFAULT_USER_AGENT = f'feedmerge/{__version__} (+https://github.com/feedmerge/feedmerge)'
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_CONCURRENCY = 32

PERIODS = ('day', 'month', 'year')
OUTPUTS = ('text', 'html', 'web')


@dataclass(frozen=True)
class RunConfig:
    '''Settings for one invocation.'''

    timeout: float = DEFAULT_TIMEOUT  # seconds, shared by every fetch in the run
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    user_agent: str = DEFAULT_USER_AGENT
    period: str = 'month'  # day | month | year
    output: str = 'text'  # text | html | web

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f'timeout must be positive, got {self.timeout}')
        if self.max_concurrency < 1:
            raise ValueError(f'concurrency must be at least 1, got {self.max_concurrency}')
        if self.period not in PERIODS:
            raise ValueError(f'Unknown period: {self.period}. Use one of {", ".join(PERIODS)}.')
        if self.output not in OUTPUTS:
            raise ValueError(f'Unknown output: {self.output}. Use one of {", ".join(OUTPUTS)}.')

    @classmethod
    def from_options(
        cls,
        *,
        web: bool = False,
        html: bool = False,
        period: str = 'month',
        timeout: float = DEFAULT_TIMEOUT,
        concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> RunConfig:
        '''Build config from command line flags. --web wins over --html.'''
        output = 'web' if web else 'html' if html else 'text'
        return cls(
            timeout=float(timeout),
            max_concurrency=int(concurrency),
            period=str(period).lower(),
            output=output,
        )
