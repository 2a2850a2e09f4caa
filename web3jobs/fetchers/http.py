"""
HTTP fetcher with retries and backoff.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import aiohttp

from web3jobs.errors import ClassifiedError, ErrorKind, HttpStatusError, classify
from web3jobs.fetchers.backoff import BackoffPolicy

logger = logging.getLogger(__name__)

Params = Mapping[str, Union[str, int]]


@dataclass
class FetchResult:
    """Decoded body of a successful fetch."""
    url: str
    json_data: Any = None
    attempts: int = 1


class HttpFetcher:
    """
    Async JSON fetcher that retries transient failures.

    Every failure is classified; non-transient ones and the final attempt's
    failure are raised as ClassifiedError.
    """

    USER_AGENT = "web3jobs/1.0 (+https://web3.career/web3-jobs-api)"

    def __init__(
        self,
        timeout_s: int = 20,
        backoff: Optional[BackoffPolicy] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.timeout_s = timeout_s
        self.backoff = backoff or BackoffPolicy()
        self._sleep = sleep
        self._rng = rng
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "HttpFetcher":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def start(self) -> None:
        """Initialize the HTTP session."""
        if self._session is None or self._session.closed:
            headers = {
                "User-Agent": self.USER_AGENT,
                "Accept": "application/json",
            }
            self._session = aiohttp.ClientSession(headers=headers)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def get_json(self, url: str, params: Optional[Params] = None) -> FetchResult:
        """
        GET a URL and decode its JSON body, retrying per the backoff policy.

        Raises:
            ClassifiedError: when the failure is not transient or attempts run out
        """
        max_attempts = self.backoff.max_attempts

        for attempt in range(max_attempts):
            try:
                data = await self._get_once(url, params)
            except Exception as e:
                error = classify(e)
                if not self.backoff.is_retryable(error, attempt):
                    if error is e:
                        raise
                    raise error from e

                delay = self.backoff.next_delay(attempt, self._rng)
                logger.warning(
                    "API request failed, retrying",
                    extra={"data": {
                        "attempt": attempt + 1,
                        "maxRetries": max_attempts,
                        "delayMs": delay,
                        "error": {"kind": error.kind.value, "status": error.status, "message": error.message},
                    }},
                )
                await self._sleep(delay / 1000)
                continue

            return FetchResult(
                url=url,
                json_data=data,
                attempts=attempt + 1,
            )

        # is_retryable refuses the last attempt, so the loop always returns or raises
        raise ClassifiedError(ErrorKind.UNKNOWN, "Max retries exceeded")

    async def _get_once(self, url: str, params: Optional[Params]) -> Any:
        """Single GET; raises HttpStatusError for status >= 400."""
        if self._session is None:
            await self.start()

        timeout = aiohttp.ClientTimeout(total=self.timeout_s)
        async with self._session.get(url, params=params, timeout=timeout) as resp:
            if resp.status >= 400:
                raise HttpStatusError(resp.status, resp.reason or "")
            # Upstream does not always label its JSON correctly
            return await resp.json(content_type=None)
