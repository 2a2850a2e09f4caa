"""
Fetcher layer for web3jobs.

Provides HTTP fetching with:
- Retries with exponential backoff and jitter
- Classification of every failure into a closed error taxonomy
"""

from web3jobs.fetchers.backoff import BackoffPolicy
from web3jobs.fetchers.http import HttpFetcher, FetchResult

__all__ = ["BackoffPolicy", "HttpFetcher", "FetchResult"]
