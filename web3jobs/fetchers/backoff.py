"""
Retry decisions and exponential backoff with jitter.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional

from web3jobs.errors import ClassifiedError, TRANSIENT_KINDS


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Pure retry policy: decisions depend only on (attempt, error kind).

    Attempts are zero-indexed, so max_retries=3 allows 4 attempts in total.
    """

    initial_delay_ms: int = 1000
    max_delay_ms: int = 10000
    max_retries: int = 3
    jitter: float = 0.2

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def is_retryable(self, error: ClassifiedError, attempt: Optional[int] = None) -> bool:
        """
        Whether a failed attempt should be retried.

        Args:
            error: Classified failure of the attempt
            attempt: Zero-indexed attempt that failed; None skips the budget check
        """
        if attempt is not None and attempt >= self.max_retries:
            return False
        return error.kind in TRANSIENT_KINDS

    def next_delay(self, attempt: int, rng: Optional[random.Random] = None) -> int:
        """Delay in milliseconds before retrying after a failed attempt."""
        base = min(self.initial_delay_ms * (2 ** attempt), self.max_delay_ms)
        uniform = (rng or random).uniform(-1.0, 1.0)
        return max(0, math.floor(base + base * self.jitter * uniform))
