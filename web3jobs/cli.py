"""
Command-line interface for web3jobs.

Usage:
    web3jobs jobs --remote --limit 10 --tag solidity
    web3jobs tags
    web3jobs tools
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from web3jobs.client import Web3CareerClient
from web3jobs.config import get_settings
from web3jobs.log import configure_logging
from web3jobs.tools import ToolResult, get_available_tags, get_web3_jobs, list_tools


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="web3jobs",
        description="Fetch web3 job listings from web3.career",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10 remote jobs
  web3jobs jobs --remote --limit 10

  # Solidity jobs in the United States
  web3jobs jobs --tag solidity --country united-states

  # React jobs without descriptions
  web3jobs jobs --tag react --no-description

  # Valid tags
  web3jobs tags

  # Tool descriptors with input schemas
  web3jobs tools

The API token is read from WEB3_CAREER_TOKEN.
""",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging on stderr",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    jobs = sub.add_parser("jobs", help="List jobs")
    jobs.add_argument(
        "--remote", "-r",
        action="store_true",
        default=None,
        help="Only include remote jobs",
    )
    jobs.add_argument(
        "--limit", "-n",
        type=int,
        default=20,
        help="Number of jobs to return, 1-100 (default: 20)",
    )
    jobs.add_argument(
        "--country", "-c",
        default=None,
        help="Country slug (e.g., 'united-states')",
    )
    jobs.add_argument(
        "--tag", "-t",
        default=None,
        help="Single tag/skill (see 'web3jobs tags')",
    )
    jobs.add_argument(
        "--no-description",
        action="store_false",
        dest="show_description",
        help="Omit job descriptions",
    )

    sub.add_parser("tags", help="List valid tags")
    sub.add_parser("tools", help="Describe the available tools and their input schemas")

    return parser.parse_args(argv)


def build_arguments(args: argparse.Namespace) -> Dict[str, Any]:
    """Tool arguments from parsed CLI arguments, leaving unset filters out."""
    arguments: Dict[str, Any] = {
        "limit": args.limit,
        "show_description": args.show_description,
    }
    if args.remote:
        arguments["remote"] = True
    if args.country:
        arguments["country"] = args.country
    if args.tag:
        arguments["tag"] = args.tag
    return arguments


async def async_main(args: argparse.Namespace) -> ToolResult:
    """Async entry point."""
    if args.command == "tags":
        return get_available_tags()
    if args.command == "tools":
        return list_tools()

    settings = get_settings()
    async with Web3CareerClient.from_settings(settings) as client:
        return await get_web3_jobs(client, build_arguments(args))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level, json_output=settings.log_json)

    try:
        result = asyncio.run(async_main(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    stream = sys.stderr if result.is_error else sys.stdout
    print(result.first_text, file=stream)
    return 1 if result.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
