"""
web3jobs: resilient client for the web3.career job listing API.

Fetches listings with retries and backoff, normalizes the loosely-shaped
upstream payload, caches results briefly, and classifies every failure.
"""

__version__ = "1.0.0"

from web3jobs.client import Web3CareerClient
from web3jobs.errors import ClassifiedError, ErrorKind
from web3jobs.models import Job, JobFilters

__all__ = [
    "Web3CareerClient",
    "ClassifiedError",
    "ErrorKind",
    "Job",
    "JobFilters",
]
