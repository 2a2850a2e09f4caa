"""Pytest configuration: make the project root importable and provide fetcher doubles.

Network I/O never happens in tests. ``ScriptedFetcher`` replaces the single
GET with a scripted sequence of payloads and exceptions, and records sleeps
instead of sleeping.
"""

import logging
import os
import sys
from typing import Any, List

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from web3jobs.fetchers.http import HttpFetcher  # noqa: E402


class ScriptedFetcher(HttpFetcher):
    """HttpFetcher whose every GET pops the next scripted step."""

    def __init__(self, script: List[Any], **kwargs):
        super().__init__(sleep=self._record_sleep, **kwargs)
        self.script = list(script)
        self.calls: List[tuple] = []
        self.sleeps: List[float] = []

    async def _record_sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)

    async def _get_once(self, url, params):
        self.calls.append((url, dict(params or {})))
        step = self.script.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step


@pytest.fixture
def scripted_fetcher():
    """Factory: scripted_fetcher([payload_or_exception, ...], backoff=...)."""
    return ScriptedFetcher


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging so streams don't leak between tests."""
    yield
    logger = logging.getLogger("web3jobs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
