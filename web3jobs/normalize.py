"""
Response normalization for the web3.career listing endpoint.

The endpoint's top-level shape is not documented. Observed responses are
either ``[str, str, [job, ...]]`` or a bare ``[job, ...]``; locate_jobs holds
that heuristic so it can change without touching the client.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from web3jobs.errors import ClassifiedError, ErrorKind
from web3jobs.models import Job, WIRE_NAMES, normalize_text

MAX_DESCRIPTION_LEN = 500
ELLIPSIS = "..."
PREVIEW_LEN = 200

_TAG_RE = re.compile(r"<[^>]+>")


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_id(value: Any) -> bool:
    # bool is an int subclass but never an identifier
    return isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))


# Upstream key -> type check for scalar known fields
_SCALAR_FIELDS: Dict[str, Callable[[Any], bool]] = {
    "id": _is_id,
    "title": _is_str,
    "company": _is_str,
    "location": _is_str,
    "remote": _is_bool,
    "url": _is_str,
    "salary": _is_str,
    "postedAt": _is_str,
}

_ATTR_NAMES = {wire: attr for attr, wire in WIRE_NAMES.items()}


def clean_description(text: str) -> str:
    """Strip markup, collapse whitespace and cap the length."""
    text = normalize_text(_TAG_RE.sub(" ", text))
    if len(text) > MAX_DESCRIPTION_LEN:
        text = text[:MAX_DESCRIPTION_LEN] + ELLIPSIS
    return text


def _preview(payload: Any) -> str:
    try:
        text = json.dumps(payload, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(payload)
    if len(text) > PREVIEW_LEN:
        text = text[:PREVIEW_LEN] + ELLIPSIS
    return text


def locate_jobs(payload: Any) -> Optional[List[Any]]:
    """
    Find the job list inside a raw payload.

    Returns the first element that is itself a list; failing that, the payload
    itself when its first element is an object; otherwise None.
    """
    if not isinstance(payload, list):
        return None

    for item in payload:
        if isinstance(item, list):
            return item

    if payload and isinstance(payload[0], Mapping):
        return payload

    return None


def normalize_job(raw: Any) -> Job:
    """Convert one raw element into a Job; non-objects become an empty Job."""
    if not isinstance(raw, Mapping):
        return Job()

    fields: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}

    for key, value in raw.items():
        if key in _SCALAR_FIELDS:
            if _SCALAR_FIELDS[key](value):
                fields[_ATTR_NAMES[key]] = value
        elif key == "tags":
            if isinstance(value, list):
                fields["tags"] = [t for t in value if isinstance(t, str)]
        elif key == "description":
            if isinstance(value, str):
                fields["description"] = clean_description(value)
        else:
            extra[key] = value

    return Job(extra=extra, **fields)


def normalize_payload(payload: Any) -> List[Job]:
    """
    Extract and sanitize the job list from a raw response payload.

    Raises:
        ClassifiedError: MALFORMED_RESPONSE if no job list can be located
    """
    if not isinstance(payload, list):
        raise ClassifiedError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Unexpected API response format. Response is not an array: {_preview(payload)}",
        )

    jobs = locate_jobs(payload)
    if jobs is None:
        raise ClassifiedError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Unexpected API response format. Could not find jobs array: {_preview(payload)}",
        )

    return [normalize_job(j) for j in jobs]
