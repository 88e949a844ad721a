"""
Client for a remote catalog service exposing the /api/seasons,
/api/matches/{season} and /api/data/{season}/{match_id} endpoints
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from nextball.catalog.base import Catalog, summarize_matches
from nextball.config import settings
from nextball.exceptions import FetchFailed

logger = logging.getLogger(__name__)


class HttpCatalog(Catalog):
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.CATALOG_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self.session = session or requests.Session()

    def get_json(self, path: str) -> Any:
        """GET a path and return parsed JSON, raising FetchFailed on any failure"""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Network error fetching %s: %s", url, e)
            raise FetchFailed(None, f"Network error: {e}") from e

        if not 200 <= resp.status_code < 300:
            message = f"HTTP {resp.status_code}"
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            logger.error("Fetching %s failed: %s", url, message)
            raise FetchFailed(resp.status_code, message)

        try:
            return resp.json()
        except ValueError as e:
            raise FetchFailed(resp.status_code, f"Invalid JSON response: {e}") from e

    def list_seasons(self) -> List[str]:
        data = self.get_json("/api/seasons")
        if not isinstance(data, list):
            raise FetchFailed(None, "Season listing is not a list")
        return [str(season) for season in data]

    def list_matches(self, season: str) -> List[Dict[str, Any]]:
        data = self.get_json(f"/api/matches/{quote(str(season))}")
        matches = summarize_matches(data, str(season))
        logger.debug("Fetched %d matches for season %s", len(matches), season)
        return matches

    def get_match_data(self, season: str, match_id: str) -> Any:
        return self.get_json(f"/api/data/{quote(str(season))}/{quote(str(match_id))}")
