"""
File-backed catalog over a data/<season>/<match_id>.json tree
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from nextball.catalog.base import (
    Catalog, fallback_description, is_safe_segment, match_label, sort_seasons,
)
from nextball.exceptions import CatalogError, MatchDataUnreadable, MatchNotFound, SeasonNotFound

logger = logging.getLogger(__name__)


class FileCatalog(Catalog):
    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def _season_dir(self, season: str) -> Path:
        season = str(season)
        season_dir = self.data_dir / season
        if not is_safe_segment(season) or not season_dir.is_dir():
            logger.error("Season directory not found: %s", season)
            raise SeasonNotFound(season)
        return season_dir

    def list_seasons(self) -> List[str]:
        try:
            seasons = [entry.name for entry in self.data_dir.iterdir() if entry.is_dir()]
        except OSError as e:
            logger.error("Error reading seasons directory %s: %s", self.data_dir, e)
            raise CatalogError("Failed to read seasons", status_code=500) from e
        logger.info("Found %d seasons", len(seasons))
        return sort_seasons(seasons)

    def list_matches(self, season: str) -> List[Dict[str, Any]]:
        season_dir = self._season_dir(season)
        try:
            files = sorted(season_dir.glob("*.json"))
        except OSError as e:
            logger.error("Error reading season directory %s: %s", season, e)
            raise CatalogError("Failed to read matches", status_code=500) from e

        matches = []
        for path in files:
            match_id = path.stem
            description = fallback_description(match_id, season)
            summary = {"match_id": match_id, "description": description, "match": description}
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.error("Error parsing match %s: %s", match_id, e)
            else:
                summary["match"] = match_label(data, match_id) or description
            matches.append(summary)

        logger.info("Found %d matches for season %s", len(matches), season)
        return matches

    def get_match_data(self, season: str, match_id: str) -> Any:
        season, match_id = str(season), str(match_id)
        path = self.data_dir / season / f"{match_id}.json"
        if not (is_safe_segment(season) and is_safe_segment(match_id)) or not path.is_file():
            logger.error("Match file not found: season %s, match %s", season, match_id)
            raise MatchNotFound(season, match_id)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Error reading match file: season %s, match %s: %s", season, match_id, e)
            raise CatalogError("Failed to read match data", status_code=500) from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error("Error parsing JSON for match %s: %s", match_id, e)
            raise MatchDataUnreadable(season, match_id) from e

        logger.info("Served data for match %s from season %s", match_id, season)
        return data
