"""Exponential backoff with jitter between fetch attempts."""

import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class BackoffPolicy:
    """Delay before a given attempt, in seconds.

    Attempt 1 runs immediately. Attempt ``n > 1`` waits
    ``min(base_delay * 2 ** (n - 2), max_delay)`` plus a uniform jitter in
    ``[0, jitter]``.
    """

    base_delay: float = 1.0
    max_delay: float = 5.0
    jitter: float = 1.0
    rng: random.Random = field(default_factory=random.Random, compare=False, repr=False)

    def base_for(self, attempt: int) -> float:
        """Delay before ``attempt`` without jitter."""
        if attempt <= 1:
            return 0.0
        return min(self.base_delay * (2 ** (attempt - 2)), self.max_delay)

    def delay_for(self, attempt: int) -> float:
        """Delay before ``attempt`` including jitter."""
        if attempt <= 1:
            return 0.0
        extra = self.rng.uniform(0.0, self.jitter) if self.jitter > 0 else 0.0
        return self.base_for(attempt) + extra

    def with_base_delay(self, base_delay: float) -> "BackoffPolicy":
        return BackoffPolicy(base_delay, self.max_delay, self.jitter, self.rng)
