"""CLI helpers for exploring the station directory and rendering boards."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from train_board_proxy.adapters.config import AppConfig, StationDirectoryLoader
from train_board_proxy.adapters.formatters import build_formatter_registry
from train_board_proxy.adapters.http import BackoffPolicy, ResilientFetcher
from train_board_proxy.domain.errors import BoardProxyError
from train_board_proxy.domain.models import Station, StationDirectory


def print_stations(stations: list[Station], format_json: bool = False) -> None:
    """Print stations as a readable list or as JSON."""
    if format_json:
        print(json.dumps([s.summary() for s in stations], indent=2, ensure_ascii=False))
        return
    for station in stations:
        english = f" / {station.name_en}" if station.name_en else ""
        print(f"  {station.name}{english} ({station.city}, {station.country})")
        print(f"    Slug: {station.slug}  Code: {station.code}  Provider: {station.provider}")


async def render_board(station: Station, config: AppConfig) -> str:
    """Fetch and format one board without going through the web server."""
    formatters = build_formatter_registry(
        config.db_fallback_url_template, refresh_seconds=config.auto_refresh_seconds
    )
    async with ResilientFetcher.create_session() as session:
        fetcher = ResilientFetcher(
            session,
            backoff=BackoffPolicy(
                base_delay=config.fetch_base_delay_ms / 1000,
                max_delay=config.fetch_max_delay_ms / 1000,
                jitter=config.fetch_jitter_ms / 1000,
            ),
            timeout_seconds=config.fetch_timeout_seconds,
            max_retries=config.fetch_max_retries,
        )
        return await formatters[station.provider].render(station, fetcher)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train Board Proxy Helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stations
  train-board search "milano"

  # List the stations of one country
  train-board list --country IT

  # Render a board to a file
  train-board board zurich-hb --output zurich.html
        """,
    )
    parser.add_argument(
        "--stations",
        help="Path to the station directory JSON (default: STATIONS_FILE or stations.json)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search for stations")
    search_parser.add_argument("query", help="Name, city, slug or code to search for")
    search_parser.add_argument("--limit", type=int, default=10, help="Maximum results")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    list_parser = subparsers.add_parser("list", help="List stations")
    list_parser.add_argument("--country", help="Country code filter (e.g., CH)")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    board_parser = subparsers.add_parser("board", help="Fetch and render a departure board")
    board_parser.add_argument("station", help="Station slug or code")
    board_parser.add_argument("--output", help="Write the HTML to this file instead of stdout")

    return parser


def load_directory(path: str | None, config: AppConfig) -> StationDirectory:
    return StationDirectoryLoader.load(path or config.stations_file)


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = AppConfig()

    try:
        directory = load_directory(args.stations, config)

        if args.command == "search":
            results = directory.search(args.query, limit=args.limit)
            if not results and not args.json:
                print(f"No stations found for '{args.query}'", file=sys.stderr)
                sys.exit(1)
            if not args.json:
                print(f"\nFound {len(results)} station(s):\n")
            print_stations(results, format_json=args.json)

        elif args.command == "list":
            stations = directory.list(args.country)
            if not args.json:
                print(f"\n{len(stations)} station(s):\n")
            print_stations(stations, format_json=args.json)

        elif args.command == "board":
            station = directory.find_by_slug_or_code(args.station)
            if station is None:
                print(f"Station {args.station} not found.", file=sys.stderr)
                suggestions = directory.search(args.station, limit=config.suggestion_limit)
                if suggestions:
                    print("Did you mean:", file=sys.stderr)
                    for suggestion in suggestions:
                        print(f"  {suggestion.slug} ({suggestion.name})", file=sys.stderr)
                sys.exit(1)
            html = await render_board(station, config)
            if args.output:
                Path(args.output).write_text(html, encoding="utf-8")
                print(f"Wrote board for {station.name} to {args.output}")
            else:
                print(html)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except BoardProxyError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
