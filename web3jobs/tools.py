"""
Tool handlers exposed to callers (e.g. an MCP server or the CLI).

Handlers validate their arguments, call into the client, and always return a
ToolResult: failures are rendered as text with ``is_error`` set instead of
being raised.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from web3jobs.client import Web3CareerClient
from web3jobs.errors import ClassifiedError, ErrorKind
from web3jobs.models import JobFilters

logger = logging.getLogger(__name__)

TOKEN_URL = "https://web3.career/web3-jobs-api"

AVAILABLE_TAGS: List[str] = [
    "ai", "analyst", "android", "backend", "bitcoin", "blockchain", "community-manager",
    "crypto", "customer-support", "dao", "data-science", "defi", "design", "devops",
    "entry-level", "ethereum", "finance", "frontend", "full-stack", "game-dev", "golang",
    "intern", "java", "javascript", "layer-2", "marketing", "mobile", "nft", "node",
    "non-tech", "product-manager", "python", "react", "research", "rust", "sales",
    "security", "smart-contract", "solana", "solidity", "typescript", "web3", "zero-knowledge",
]


class GetJobsArgs(BaseModel):
    """Arguments of the get_web3_jobs tool."""

    model_config = ConfigDict(extra="forbid")

    remote: Optional[bool] = Field(default=None, description="Show only remote jobs")
    limit: int = Field(default=20, ge=1, le=100, description="Number of jobs to return (default 20, max 100)")
    country: Optional[str] = Field(
        default=None,
        description="Filter by country slug (e.g., 'united-states'). Use slugs, not full names.",
    )
    tag: Optional[str] = Field(
        default=None,
        description="Filter by a SINGLE tag, skill, or category (e.g., 'marketing', 'react'). "
                    "Use 'get_available_tags' to see all options.",
    )
    show_description: bool = Field(default=True, description="Show job description (default true)")

    def to_filters(self) -> JobFilters:
        return JobFilters(
            remote=self.remote,
            limit=self.limit,
            country=self.country,
            tag=self.tag,
            show_description=self.show_description,
        )


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Tool output in the shape MCP clients expect."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""


def render_error(error: ClassifiedError) -> str:
    """Actionable message for a classified failure."""
    kind = error.kind
    if kind == ErrorKind.UNAUTHORIZED:
        return (
            "Authentication failed (401 Unauthorized).\n\n"
            "The API token is invalid or missing. Please check:\n"
            "1. Ensure WEB3_CAREER_TOKEN environment variable is set\n"
            "2. Verify the token is correct\n"
            f"3. Get a new token from {TOKEN_URL}"
        )
    if kind == ErrorKind.FORBIDDEN:
        return "Access forbidden (403 Forbidden).\n\nCheck token permissions."
    if kind == ErrorKind.RATE_LIMITED:
        return "Rate limit exceeded (429 Too Many Requests).\n\nPlease wait before trying again."
    if kind == ErrorKind.UPSTREAM_SERVER_ERROR:
        return f"Server error ({error.message}).\n\nThe web3.career API is experiencing issues."
    if kind == ErrorKind.UPSTREAM_CLIENT_ERROR:
        return f"Client error ({error.message}).\n\nCheck your filter parameters."
    if kind == ErrorKind.NETWORK_UNREACHABLE:
        return "Network error: Unable to reach the web3.career API."
    if kind == ErrorKind.MALFORMED_RESPONSE:
        return f"Unexpected response from the web3.career API.\n\n{error.message}"
    return f"Unexpected error while fetching jobs: {error.message}"


def _render_validation_error(e: ValidationError) -> str:
    lines = ["Invalid arguments:"]
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        lines.append(f"- {loc}: {err.get('msg', 'invalid value')}")
    return "\n".join(lines)


async def get_web3_jobs(client: Web3CareerClient, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
    """Get the latest web3 jobs with optional filters."""
    try:
        args = GetJobsArgs.model_validate(dict(arguments or {}))
    except ValidationError as e:
        return ToolResult.text(_render_validation_error(e), is_error=True)

    logger.info("get_web3_jobs tool invoked", extra={"data": {"filters": args.model_dump()}})

    try:
        jobs = await client.get_jobs(args.to_filters())
    except ClassifiedError as e:
        return ToolResult.text(render_error(e), is_error=True)

    return ToolResult.text(json.dumps([j.to_dict() for j in jobs], indent=2, ensure_ascii=False))


def get_available_tags() -> ToolResult:
    """Static list of tags accepted by get_web3_jobs."""
    return ToolResult.text(json.dumps(AVAILABLE_TAGS, indent=2))


TOOLS: Dict[str, Dict[str, Any]] = {
    "get_available_tags": {
        "description": (
            "Get the list of valid tags/skills for filtering jobs. READ-ONLY and IDEMPOTENT. "
            "Returns an array of tag strings usable with 'get_web3_jobs'."
        ),
        "inputSchema": {"type": "object", "properties": {}},
    },
    "get_web3_jobs": {
        "description": (
            "Get the latest web3 jobs from web3.career with optional filters. READ-ONLY and IDEMPOTENT. "
            "Returns an array of job objects with fields like title, company, location, "
            "description, tags, and url."
        ),
        "inputSchema": GetJobsArgs.model_json_schema(),
    },
}


def list_tools() -> ToolResult:
    """Tool descriptors in the shape of an MCP tools/list response."""
    tools = [{"name": name, **spec} for name, spec in TOOLS.items()]
    return ToolResult.text(json.dumps(tools, indent=2))
