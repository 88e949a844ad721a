"""
In-memory catalog backed by a static dataset, for offline play and tests
"""
import copy
import logging
from typing import Any, Dict, List, Optional

from nextball.catalog.base import Catalog, fallback_description, match_label, sort_seasons
from nextball.exceptions import MatchNotFound, SeasonNotFound

logger = logging.getLogger(__name__)


def _ball(ball_id, season, match_id, inning, over, ball, batter, bowler, non_striker,
          batsman_runs=0, extra_runs=0, extras_type="NA", **extra):
    record = {
        "ID": ball_id,
        "season": season,
        "match_id": match_id,
        "inning": inning,
        "over": over,
        "ball": ball,
        "batter": batter,
        "bowler": bowler,
        "non_striker": non_striker,
        "batsman_runs": batsman_runs,
        "extra_runs": extra_runs,
        "total_runs": batsman_runs + extra_runs,
        "extras_type": extras_type,
        "is_wicket": 0,
        "player_dismissed": "NA",
        "dismissal_kind": "NA",
        "fielder": "NA",
    }
    record.update(extra)
    return record


SAMPLE_DATASET: Dict[str, List[Dict[str, Any]]] = {
    "2008": [
        {
            "match_id": 335982,
            "description": "RCB vs KKR - 2008 Match 1",
            "innings": [
                {
                    "inning": 1,
                    "batting_team": "Kolkata Knight Riders",
                    "bowling_team": "Royal Challengers Bangalore",
                    "deliveries": [
                        _ball(61, 2008, 335982, 1, 0, 1, "SC Ganguly", "P Kumar", "BB McCullum",
                              extra_runs=1, extras_type="legbyes"),
                        _ball(62, 2008, 335982, 1, 0, 2, "BB McCullum", "P Kumar", "SC Ganguly"),
                    ],
                },
            ],
        },
    ],
    "2023": [
        {
            "match_id": 1370353,
            "description": "GT vs CSK - 2023 Final",
            "innings": [
                {
                    "inning": 1,
                    "batting_team": "Gujarat Titans",
                    "bowling_team": "Chennai Super Kings",
                    "deliveries": [
                        _ball(1, 2023, 1370353, 1, 0, 1, "WP Saha", "DL Chahar", "Shubman Gill",
                              batting_team="Gujarat Titans", bowling_team="Chennai Super Kings"),
                    ],
                },
            ],
        },
    ],
}


class FixtureCatalog(Catalog):
    """
    Serves matches from a dict of season -> list of match payloads.
    Defaults to the bundled sample matches.
    """

    def __init__(self, dataset: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.dataset = SAMPLE_DATASET if dataset is None else dataset

    def list_seasons(self) -> List[str]:
        return sort_seasons([str(season) for season in self.dataset])

    def _matches(self, season: str) -> List[Dict[str, Any]]:
        season = str(season)
        if season not in self.dataset:
            raise SeasonNotFound(season)
        return self.dataset[season]

    def list_matches(self, season: str) -> List[Dict[str, Any]]:
        summaries = []
        for entry in self._matches(season):
            match_id = str(entry.get("match_id"))
            description = entry.get("description") or fallback_description(match_id, season)
            summaries.append({
                "match_id": match_id,
                "description": description,
                "match": match_label(entry, match_id) or description,
            })
        return summaries

    def get_match_data(self, season: str, match_id: str) -> Any:
        for entry in self._matches(season):
            if str(entry.get("match_id")) == str(match_id):
                return copy.deepcopy(entry)
        logger.error("Sample match not found: season %s, match %s", season, match_id)
        raise MatchNotFound(str(season), str(match_id))
