"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel
from typing import Optional


# Catalog Schemas
class MatchSummary(BaseModel):
    match_id: str
    description: str
    match: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


# Game Schemas
class StartGameRequest(BaseModel):
    season: str
    match_id: str


class PredictionRequest(BaseModel):
    choice: Optional[str] = None  # "4", "6", "wicket" or null to clear


class GameStateResponse(BaseModel):
    game_id: str
    state: str  # awaiting_start, in_play, match_over
    season: Optional[str] = None
    match_id: Optional[str] = None
    match_label: Optional[str] = None

    innings: int
    batting_team: str = ""
    bowling_team: str = ""
    runs: int
    wickets: int
    overs: str

    current_batter: Optional[str] = None
    current_bowler: Optional[str] = None
    non_striker: Optional[str] = None

    points: int
    prediction: Optional[str] = None
    message: str
    is_game_over: bool

    # Innings change indicator
    innings_just_changed: bool = False


class BallResultResponse(BaseModel):
    outcome: str  # wicket, extra, six, four, runs, dot
    projection: str  # wicket, 4, 6, none
    short_code: str
    runs: int
    commentary: str
    prediction: Optional[str] = None
    correct: Optional[bool] = None
    points_delta: int
    message: str
    game_state: GameStateResponse
