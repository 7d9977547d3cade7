from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import asdict

from .config import AppConfig, config_path, load_config
from .models import SearchRequest
from .notify import NotifyRequest, notify
from .pipeline import SearchResult, search_opportunities


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="power-team-radar", description="Health and wellness opportunity radar"
    )
    parser.add_argument("--config", help="Path to config.toml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Run a search and print opportunities as JSON")
    search.add_argument("--industry", action="append", default=[], help="Industry (repeatable)")
    search.add_argument("--location", action="append", default=[], help="Location (repeatable)")
    search.add_argument("--days", type=int, default=None, help="Time range in days")
    search.add_argument("--limit", type=int, default=None, help="Maximum results")
    search.add_argument("--language", choices=["en", "zh", "ms"], default="en")
    search.add_argument("--show-sources", action="store_true", help="Print per-source report")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    notify_test = subparsers.add_parser("notify-test", help="Send a mock notification")
    notify_test.add_argument("recipient", help="Recipient phone number or handle")
    notify_test.add_argument("items", nargs="*", default=["opp_test"], help="Opportunity ids")

    args = parser.parse_args()
    config = load_config(config_path(args.config))
    logging.basicConfig(level=config.log_level, stream=sys.stderr)

    if args.command == "serve":
        if args.config:
            os.environ["POWER_TEAM_RADAR_CONFIG"] = args.config
        _serve(config, args.host, args.port)
        return

    if args.command == "notify-test":
        result = notify(NotifyRequest(items=args.items, recipient=args.recipient), config)
        print(json.dumps(asdict(result), indent=2))
        return

    request = SearchRequest(
        industries=args.industry,
        locations=args.location,
        time_range_days=args.days if args.days is not None else config.search.time_range_days,
        limit=args.limit if args.limit is not None else config.search.limit,
        language=args.language,
    )
    result = run(request, config)
    print(json.dumps({"items": [item.to_dict() for item in result.items]}, indent=2, ensure_ascii=False))
    if args.show_sources:
        _print_summary(result)


def run(request: SearchRequest, config: AppConfig) -> SearchResult:
    return asyncio.run(search_opportunities(request, config))


def _print_summary(result: SearchResult) -> None:
    if result.errors:
        print("Warnings:", file=sys.stderr)
        for error in result.errors:
            print(f"- {error}", file=sys.stderr)
    sources = ",".join(f"{report.label}:{report.count}" for report in result.reports)
    print(
        "Radar search complete: "
        f"items={len(result.items)} "
        f"fallback={result.used_fallback} "
        f"sources={sources}",
        file=sys.stderr,
    )


def _serve(config: AppConfig, host: str | None, port: int | None) -> None:
    import uvicorn

    uvicorn.run(
        "power_team_radar.api:create_app",
        factory=True,
        host=host or config.server.host,
        port=port or config.server.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
