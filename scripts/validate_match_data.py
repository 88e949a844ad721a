#!/usr/bin/env python3
"""
Validate ball-by-ball match files before serving them.
Normalizes every match under the data directory and reports anything the
game would have to paper over: unreadable files, placeholder team names,
out-of-order deliveries, missing over/ball numbers and total_runs that do
not add up.

Usage:
    python scripts/validate_match_data.py [DATA_DIR]
"""
import sys
from collections import Counter

from nextball.catalog import FileCatalog
from nextball.config import settings
from nextball.engine.normalizer import normalize_match, placeholder_team
from nextball.engine.outcomes import classify_delivery
from nextball.exceptions import CatalogError, InvalidPayload


def check_match(catalog: FileCatalog, season: str, match_id: str) -> list:
    """Return a list of problems for one match file."""
    problems = []
    try:
        payload = catalog.get_match_data(season, match_id)
        match = normalize_match(payload, match_id=match_id)
    except (CatalogError, InvalidPayload) as e:
        return [f"unreadable: {e}"]

    if match.is_empty:
        problems.append("no deliveries")

    for innings in match.innings:
        if not innings.deliveries:
            problems.append(f"inning {innings.inning_number}: no deliveries")
        if innings.batting_team == placeholder_team(innings.inning_number):
            problems.append(f"inning {innings.inning_number}: no batting team")
        missing = sum(1 for d in innings.deliveries if d.over is None or d.ball is None)
        if missing:
            problems.append(f"inning {innings.inning_number}: {missing} deliveries without over/ball")
        bad_totals = sum(
            1 for d in innings.deliveries if d.total_runs != d.batsman_runs + d.extra_runs
        )
        if bad_totals:
            problems.append(f"inning {innings.inning_number}: {bad_totals} deliveries with inconsistent total_runs")
    return problems


def validate_data_dir(data_dir: str) -> int:
    """Walk every season and match; returns the number of files with problems."""
    catalog = FileCatalog(data_dir)
    seasons = catalog.list_seasons()
    print(f"Validating match data in {data_dir} ({len(seasons)} seasons)\n")

    outcome_counts = Counter()
    bad_files = 0
    total_files = 0

    for season in seasons:
        print("=" * 50)
        print(f"SEASON {season}")
        print("=" * 50)
        for summary in catalog.list_matches(season):
            total_files += 1
            match_id = summary["match_id"]
            problems = check_match(catalog, season, match_id)
            status = "OK" if not problems else "WARN"
            print(f"{match_id:<12} {status:<6} {summary['match']}")
            for problem in problems:
                print(f"    - {problem}")
            if problems:
                bad_files += 1
                continue

            match = normalize_match(catalog.get_match_data(season, match_id), match_id=match_id)
            for delivery in match.deliveries:
                outcome_counts[classify_delivery(delivery).kind.value] += 1
        print()

    total_balls = sum(outcome_counts.values())
    print("=" * 50)
    print("OUTCOME DISTRIBUTION")
    print("=" * 50)
    print(f"{'Outcome':<10} {'Count':>8} {'Share':>8}")
    print("-" * 30)
    for kind, count in outcome_counts.most_common():
        share = (count / total_balls * 100) if total_balls else 0
        print(f"{kind:<10} {count:>8} {share:>7.1f}%")

    print(f"\n{total_files - bad_files}/{total_files} match files clean")
    return bad_files


if __name__ == "__main__":
    data_dir = sys.argv[1] if len(sys.argv) > 1 else settings.DATA_DIR
    sys.exit(1 if validate_data_dir(data_dir) else 0)
