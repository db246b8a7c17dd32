"""Command line access to the reachability computation."""

import asyncio
import json
import sys

import aiohttp

from reachable_from.adapters.config import AppConfig
from reachable_from.composition import build_reachability_service
from reachable_from.domain.models import ReachabilityRecord
from reachable_from.domain.station_codes import is_uic_location_code


def format_duration(minutes: float) -> str:
    """Format minutes as h:mm."""
    total = round(minutes)
    return f"{total // 60}:{total % 60:02d}"


def format_table(records: list[ReachabilityRecord]) -> str:
    """Render records as a plain text table."""
    if not records:
        return "No destinations reachable directly."
    width = max(len(r.name) for r in records)
    lines = [f"{'Destination':<{width}}  {'Duration':>8}  {'Freq':>4}  ID"]
    for record in records:
        lines.append(
            f"{record.name:<{width}}  {format_duration(record.duration):>8}  "
            f"{record.frequency or 0:>4}  {record.id}"
        )
    return "\n".join(lines)


async def fetch_reachable(
    station_id: str, local_trains_only: bool, config: AppConfig
) -> list[ReachabilityRecord]:
    async with aiohttp.ClientSession() as session:
        service = build_reachability_service(config, session=session)
        return await service.reachable_from(station_id, local_trains_only)


async def main() -> None:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="List destinations reachable by a single direct train",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Everything reachable from Frankfurt (Main) Hbf
  reachable-from 8000105

  # Regional trains only, as JSON
  reachable-from 8000105 --local-trains-only --json
        """,
    )
    parser.add_argument("station_id", help="UIC station code (e.g., 8000105)")
    parser.add_argument(
        "--local-trains-only",
        action="store_true",
        help="Only regional and suburban trains",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--limit", type=int, default=None, help="Show at most N destinations")

    args = parser.parse_args()

    if not is_uic_location_code(args.station_id):
        print("Error: id must be a uic station code", file=sys.stderr)
        sys.exit(1)

    try:
        records = await fetch_reachable(args.station_id, args.local_trains_only, AppConfig())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.limit is not None:
        records = records[: args.limit]

    if args.json:
        print(json.dumps([r.to_json() for r in records], indent=2, ensure_ascii=False))
    else:
        print(format_table(records))


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
