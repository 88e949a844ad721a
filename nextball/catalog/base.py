"""
Match/Season catalog interface and helpers shared by its implementations
"""
import re
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Dict, List, Optional

# Season and match ids end up in file paths
SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_\-. ]+$")


def is_safe_segment(value: str) -> bool:
    return bool(SAFE_SEGMENT.match(value)) and value not in {".", ".."} and ".." not in value


def sort_seasons(seasons: List[str]) -> List[str]:
    """Newest season first; numeric seasons sort numerically"""
    def key(season: str):
        return (0, int(season), "") if season.isdigit() else (1, 0, season)
    return sorted(seasons, key=key, reverse=True)


def fallback_description(match_id: Any, season: str) -> str:
    return f"Match {match_id} (Season {season})"


def _teams_from_deliveries(deliveries: List[Any]) -> Optional[str]:
    for delivery in deliveries:
        if isinstance(delivery, dict) and delivery.get("batting_team") and delivery.get("bowling_team"):
            return f"{delivery['batting_team']} vs {delivery['bowling_team']}"
    return None


def match_label(data: Any, match_id: Any) -> Optional[str]:
    """
    Dropdown label for a match file: an explicit "match" field, else the
    teams of the first delivery that names both, else the first innings'
    teams, else cricsheet info.teams.
    """
    label = None
    if isinstance(data, dict) and data.get("match"):
        label = f"{data['match']} ({match_id})"
    elif isinstance(data, dict) and isinstance(data.get("deliveries"), list):
        teams = _teams_from_deliveries(data["deliveries"])
        label = f"{teams} ({match_id})" if teams else None
    elif isinstance(data, list):
        teams = _teams_from_deliveries(data)
        label = f"{teams} ({match_id})" if teams else None

    if label is None and isinstance(data, dict) and isinstance(data.get("innings"), list) and data["innings"]:
        first = data["innings"][0]
        if isinstance(first, dict) and first.get("batting_team") and first.get("bowling_team"):
            label = f"{first['batting_team']} vs {first['bowling_team']} ({match_id})"

    if label is None and isinstance(data, dict):
        info = data.get("info")
        teams = info.get("teams") if isinstance(info, dict) else None
        if isinstance(teams, list) and len(teams) >= 2:
            label = f"{teams[0]} vs {teams[1]} ({match_id})"
    return label


def summarize_matches(data: Any, season: str = "") -> List[Dict[str, Any]]:
    """
    Turn a match listing of any shape into descriptors with match_id,
    description and match keys. Listings arrive as descriptor objects, as a
    flat array of deliveries (grouped here by match_id) or as an array of
    per-match delivery arrays.
    """
    if not isinstance(data, list) or not data:
        return []

    if all(isinstance(item, list) for item in data):
        groups = [group for group in data if group]
    elif isinstance(data[0], dict) and "match_id" in data[0] and ("inning" in data[0] or "over" in data[0]):
        by_match: "OrderedDict[str, list]" = OrderedDict()
        for ball in data:
            if isinstance(ball, dict):
                by_match.setdefault(str(ball.get("match_id")), []).append(ball)
        groups = list(by_match.values())
    else:
        summaries = []
        for item in data:
            if not isinstance(item, dict) or item.get("match_id") is None:
                continue
            match_id = str(item["match_id"])
            description = item.get("description") or fallback_description(match_id, season)
            summaries.append({
                "match_id": match_id,
                "description": description,
                "match": item.get("match") or match_label(item, match_id) or description,
            })
        return summaries

    summaries = []
    for group in groups:
        first = next((b for b in group if isinstance(b, dict)), None)
        if first is None or first.get("match_id") is None:
            continue
        match_id = str(first["match_id"])
        description = fallback_description(match_id, season)
        summaries.append({
            "match_id": match_id,
            "description": description,
            "match": match_label(group, match_id) or description,
        })
    return summaries


class Catalog(ABC):
    """Source of seasons, match listings and raw match payloads"""

    @abstractmethod
    def list_seasons(self) -> List[str]:
        ...

    @abstractmethod
    def list_matches(self, season: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def get_match_data(self, season: str, match_id: str) -> Any:
        ...
