"""
Core data models for web3jobs.

Provides:
- JobFilters: immutable query filters, also used as the cache key
- Job: normalized job record with an open bag for unrecognized upstream fields
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union


# ----------------------------- Utilities -----------------------------

def normalize_text(s: str) -> str:
    """Collapse whitespace and strip."""
    return re.sub(r"\s+", " ", (s or "")).strip()


# ----------------------------- JobFilters -----------------------------

@dataclass(frozen=True)
class JobFilters:
    """Filters for a single job listing request."""

    remote: Optional[bool] = None
    limit: Optional[int] = 20  # 1..100, enforced by the tool layer
    country: Optional[str] = None  # country slug, e.g. "united-states"
    tag: Optional[str] = None
    show_description: bool = True

    def cache_key(self) -> str:
        """
        Canonical serialization of the filters.

        Keys are sorted so field order never affects the result.
        """
        return json.dumps(asdict(self), sort_keys=True, separators=(",", ":"))

    def to_params(self, token: str) -> Dict[str, Union[str, int]]:
        """Build upstream query parameters, omitting anything left at its upstream default."""
        params: Dict[str, Union[str, int]] = {"token": token}
        if self.remote:
            params["remote"] = "true"
        if self.limit:
            params["limit"] = self.limit
        if self.country:
            params["country"] = self.country
        if self.tag:
            params["tag"] = self.tag
        if self.show_description is False:
            params["show_description"] = "false"
        return params


# ----------------------------- Job -----------------------------

@dataclass(frozen=True)
class Job:
    """
    Normalized job record.

    Known fields are only set when the upstream value had the expected type.
    Anything the upstream sends beyond the known fields lands in ``extra``.
    """

    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    remote: Optional[bool] = None
    description: Optional[str] = None  # plain text, at most 500 chars + "..."
    tags: Optional[List[str]] = None
    url: Optional[str] = None
    salary: Optional[str] = None
    posted_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the upstream-shaped dictionary, dropping absent fields."""
        d: Dict[str, Any] = {}
        for name, wire_name in WIRE_NAMES.items():
            value = getattr(self, name)
            if value is not None:
                d[wire_name] = value
        for key, value in self.extra.items():
            d.setdefault(key, value)
        return d


# Python attribute -> upstream key
WIRE_NAMES: Dict[str, str] = {
    "id": "id",
    "title": "title",
    "company": "company",
    "location": "location",
    "remote": "remote",
    "description": "description",
    "tags": "tags",
    "url": "url",
    "salary": "salary",
    "posted_at": "postedAt",
}
