"""
web3.career job listing client.

Cache lookup, then a retried GET, then normalization, then cache store.
Failures are raised as ClassifiedError and never cached.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from web3jobs.cache import TTLCache, DEFAULT_TTL_S
from web3jobs.config import DEFAULT_BASE_URL, Settings
from web3jobs.errors import ClassifiedError, classify
from web3jobs.fetchers.backoff import BackoffPolicy
from web3jobs.fetchers.http import HttpFetcher
from web3jobs.models import Job, JobFilters
from web3jobs.normalize import normalize_payload

logger = logging.getLogger(__name__)

Normalizer = Callable[[Any], List[Job]]

# Cached as a tuple; callers get a fresh list each time
CachedJobs = Tuple[Job, ...]


class Web3CareerClient:
    """Fetches normalized job listings for a set of filters."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        fetcher: Optional[HttpFetcher] = None,
        cache: Optional[TTLCache[CachedJobs]] = None,
        normalizer: Normalizer = normalize_payload,
    ):
        self.token = token
        self.base_url = base_url
        self.fetcher = fetcher or HttpFetcher()
        self.cache: TTLCache[CachedJobs] = cache if cache is not None else TTLCache(DEFAULT_TTL_S)
        self.normalizer = normalizer

    @classmethod
    def from_settings(cls, settings: Settings) -> "Web3CareerClient":
        """Build a client from Settings."""
        backoff = BackoffPolicy(
            initial_delay_ms=settings.initial_retry_delay_ms,
            max_delay_ms=settings.max_retry_delay_ms,
            max_retries=settings.max_retries,
        )
        return cls(
            token=settings.token,
            base_url=settings.base_url,
            fetcher=HttpFetcher(timeout_s=settings.request_timeout_s, backoff=backoff),
            cache=TTLCache(settings.cache_ttl_s),
        )

    async def __aenter__(self) -> "Web3CareerClient":
        await self.fetcher.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.close()

    def clear_cache(self) -> None:
        self.cache.clear()

    async def get_jobs(self, filters: JobFilters) -> List[Job]:
        """
        Get jobs matching filters, from cache when fresh.

        Raises:
            ClassifiedError: on any failure after retries are exhausted
        """
        cache_key = filters.cache_key()
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Returning cached jobs", extra={"data": {"count": len(cached)}})
            return list(cached)

        params = filters.to_params(self.token)

        try:
            result = await self.fetcher.get_json(self.base_url, params)
            jobs = self.normalizer(result.json_data)
        except ClassifiedError as e:
            self._log_failure(e)
            raise
        except Exception as e:
            error = classify(e)
            self._log_failure(error)
            raise error from e

        self.cache.set(cache_key, tuple(jobs))
        logger.info(
            "Jobs fetched and cached",
            extra={"data": {"count": len(jobs), "attempts": result.attempts}},
        )
        return jobs

    def _log_failure(self, error: ClassifiedError) -> None:
        logger.error(
            "Error fetching jobs",
            extra={"data": {"error": {
                "kind": error.kind.value,
                "status": error.status,
                "message": error.message,
            }}},
        )
