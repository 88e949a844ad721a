"""
Error taxonomy for the prediction game and its match catalog
"""
from typing import Optional


class NextBallError(Exception):
    """Base class for all application errors"""


class InvalidPayload(NextBallError):
    """Raised when a raw match payload cannot be interpreted at all"""


class FetchFailed(NextBallError):
    """Raised when the remote catalog cannot be reached or answers non-2xx"""

    def __init__(self, status: Optional[int], message: str = ""):
        self.status = status
        self.message = message or (f"HTTP {status}" if status else "Network error")
        super().__init__(self.message)


class CatalogError(NextBallError):
    """Raised by file-backed catalogs; carries the HTTP status to report"""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class SeasonNotFound(CatalogError):
    status_code = 404

    def __init__(self, season: str):
        self.season = season
        super().__init__("Season not found")


class MatchNotFound(CatalogError):
    status_code = 404

    def __init__(self, season: str, match_id: str):
        self.season = season
        self.match_id = match_id
        super().__init__("Match data not found")


class MatchDataUnreadable(CatalogError):
    status_code = 500

    def __init__(self, season: str, match_id: str):
        self.season = season
        self.match_id = match_id
        super().__init__("Invalid match data format")


class GameError(NextBallError):
    """Raised when a user action is not allowed in the current game state"""


class GameNotStarted(GameError):
    def __init__(self):
        super().__init__("No match in play. Select a season and match to start!")


class InvalidPrediction(GameError):
    def __init__(self, choice):
        self.choice = choice
        super().__init__(f"Invalid prediction {choice!r}; choose '4', '6' or 'wicket'")


class PredictionClosed(GameError):
    def __init__(self):
        super().__init__("The game is over, no more predictions can be made")
