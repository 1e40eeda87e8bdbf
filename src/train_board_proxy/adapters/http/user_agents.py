"""Browser user-agent rotation for outbound requests."""

import random

USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.2 Safari/605.1.15",
)


class UserAgentRotator:
    """Picks a user agent uniformly at random for each request."""

    def __init__(
        self, pool: tuple[str, ...] = USER_AGENTS, rng: random.Random | None = None
    ) -> None:
        if not pool:
            raise ValueError("user agent pool must not be empty")
        self._pool = pool
        self._rng = rng or random.Random()

    @property
    def pool(self) -> tuple[str, ...]:
        return self._pool

    def next(self) -> str:
        return self._rng.choice(self._pool)
