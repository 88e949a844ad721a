"""
Shared fixtures and record builders for the test suite
"""
import pytest

from nextball.catalog import FixtureCatalog


def make_ball(inning=1, over=0, ball=1, batsman_runs=0, extra_runs=0, extras_type="NA",
              is_wicket=0, **extra):
    """Build a raw delivery record shaped like the IPL ball-by-ball files."""
    record = {
        "match_id": 1001,
        "inning": inning,
        "batting_team": "Mumbai Indians" if inning == 1 else "Chennai Super Kings",
        "bowling_team": "Chennai Super Kings" if inning == 1 else "Mumbai Indians",
        "over": over,
        "ball": ball,
        "batter": "RG Sharma",
        "bowler": "DL Chahar",
        "non_striker": "Ishan Kishan",
        "batsman_runs": batsman_runs,
        "extra_runs": extra_runs,
        "total_runs": batsman_runs + extra_runs,
        "extras_type": extras_type,
        "is_wicket": is_wicket,
        "player_dismissed": "NA",
        "dismissal_kind": "NA",
        "fielder": "NA",
    }
    record.update(extra)
    return record


def two_innings_payload():
    """Flat delivery list: three balls in inning 1, two in inning 2."""
    return [
        make_ball(1, 0, 1, batsman_runs=4),
        make_ball(1, 0, 2, is_wicket=1, player_dismissed="RG Sharma", dismissal_kind="bowled"),
        make_ball(1, 0, 3, batsman_runs=1),
        make_ball(2, 0, 1, batsman_runs=6, batter="RD Gaikwad", bowler="JJ Bumrah"),
        make_ball(2, 0, 2, extra_runs=1, extras_type="wides", batter="RD Gaikwad", bowler="JJ Bumrah"),
    ]


@pytest.fixture
def sample_catalog():
    return FixtureCatalog()


@pytest.fixture
def match_payload():
    return two_innings_payload()
