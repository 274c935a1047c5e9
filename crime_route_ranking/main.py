#!/usr/bin/env python3
"""
Crime-Aware Route Ranking - Command Line Interface

Ranks the routes of a saved routing-source response against an incident feed.
"""

import argparse
import logging
import sys

from .algorithms.scoring.scorer_factory import ScorerFactory
from .config import RankingConfig
from .data import IncidentCategory, load_incident_data, load_route_candidates, parse_timestamp
from .exceptions import DataUnavailableError
from .session import RankingSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank alternative routes by incident danger")
    parser.add_argument("--incidents", required=True, help="Incident feed (JSON or GeoJSON)")
    parser.add_argument("--routes", required=True, help="Routing-source response (OSRM JSON)")
    parser.add_argument("--start", help="Date window start (inclusive)")
    parser.add_argument("--end", help="Date window end (inclusive)")
    parser.add_argument("--category", action="append",
                        choices=[c.value for c in IncidentCategory],
                        help="Enable only these categories (repeatable)")
    parser.add_argument("--method", default="linear",
                        choices=list(ScorerFactory.get_available_methods().keys()),
                        help="Danger scoring method")
    parser.add_argument("--log-level", default="warning",
                        choices=["debug", "info", "warning", "error"], help="Log level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("🚦 Crime-Aware Route Ranking")
    print("=" * 50)

    config = RankingConfig(scoring_method=args.method)

    print("\n📊 Loading data...")
    try:
        incidents = load_incident_data(args.incidents)
        candidates = load_route_candidates(args.routes, config.max_routes)
    except (FileNotFoundError, ValueError, DataUnavailableError) as e:
        print(f"❌ {e}")
        return 1
    print(f"✓ Loaded {len(incidents)} incidents and {len(candidates)} routes")

    session = RankingSession(incidents, config)

    if args.category:
        session.set_categories(args.category)

    if args.start or args.end:
        window = session.available_window
        start = parse_timestamp(args.start) if args.start else (window.start if window else None)
        end = parse_timestamp(args.end) if args.end else (window.end if window else None)
        if start is None or end is None:
            print("❌ Could not parse the date window")
            return 1
        try:
            session.apply_date_window(start, end)
        except ValueError as e:
            print(f"❌ {e}")
            return 1
        print(f"📅 Date window: {start.date()} to {end.date()} "
              f"({len(session.active_incidents)} incidents)")

    outcome = session.rank_routes(candidates)
    if not outcome.has_result:
        print(f"❌ {outcome.message}")
        return 1

    print("\n🗺️ Ranked routes:")
    for route in outcome.ranked:
        summary = route.get_summary()
        badge = "SAFEST" if route.is_safest else "ALT"
        print(f"   Route {route.rank + 1} [{badge}] (source #{route.source_index}): "
              f"{summary['distance_km']}km ({summary['distance_miles']}mi), "
              f"{summary['duration_min']}min, score {summary['score']} - {route.severity}")

    recommendation = outcome.analysis.get('recommendation', {})
    print(f"\n🎯 Recommendation: source route #{recommendation.get('recommended_route')}")
    print(f"   Reason: {recommendation.get('reason')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
