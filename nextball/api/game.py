"""
Interactive prediction game routes
"""
import logging
import uuid
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from nextball.api.catalog import catalog_http_error
from nextball.api.deps import get_catalog
from nextball.api.schemas import (
    BallResultResponse, ErrorResponse, GameStateResponse, PredictionRequest, StartGameRequest,
)
from nextball.catalog import Catalog
from nextball.config import settings
from nextball.engine.game_engine import GameSession
from nextball.exceptions import (
    CatalogError, FetchFailed, GameError, InvalidPayload,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/game",
    tags=["Prediction Game"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

# In-memory store for active games, lost on restart
active_games: Dict[str, GameSession] = {}


def _get_game(game_id: str) -> GameSession:
    game = active_games.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


def _store_game(game: GameSession) -> str:
    """
    Keep a new game, making room when the store is full. Finished games go
    first, then the oldest ones.
    """
    while active_games and len(active_games) >= settings.MAX_ACTIVE_GAMES:
        finished = next((gid for gid, g in active_games.items() if g.is_game_over), None)
        evicted = finished or next(iter(active_games))
        del active_games[evicted]
        logger.info("Evicted game %s, %d games active", evicted, len(active_games))

    game_id = uuid.uuid4().hex
    active_games[game_id] = game
    return game_id


def _game_state_response(game_id: str, game: GameSession) -> GameStateResponse:
    snap = game.snapshot()
    return GameStateResponse(
        game_id=game_id,
        state=snap.state,
        season=game.season,
        match_id=snap.match_id,
        match_label=snap.match_label,
        innings=snap.inning_number,
        batting_team=snap.batting_team,
        bowling_team=snap.bowling_team,
        runs=snap.runs,
        wickets=snap.wickets,
        overs=snap.overs,
        current_batter=snap.current_batter,
        current_bowler=snap.current_bowler,
        non_striker=snap.non_striker,
        points=snap.points,
        prediction=snap.prediction,
        message=snap.message,
        is_game_over=snap.is_game_over,
        innings_just_changed=snap.innings_just_changed,
    )


@router.post(
    "/start",
    response_model=GameStateResponse,
    responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def start_game(request: StartGameRequest, catalog: Catalog = Depends(get_catalog)):
    """Load a match from the catalog and start a fresh game on it"""
    game = GameSession(starting_points=settings.STARTING_POINTS)
    token = game.select(request.season, request.match_id)

    try:
        payload = catalog.get_match_data(request.season, request.match_id)
    except (CatalogError, FetchFailed) as e:
        raise catalog_http_error(e)

    try:
        game.start(payload, token=token)
    except InvalidPayload as e:
        logger.warning("Could not load match %s/%s: %s", request.season, request.match_id, e)
        raise HTTPException(status_code=422, detail="Could not load match data")

    game_id = _store_game(game)
    return _game_state_response(game_id, game)


@router.get("/{game_id}", response_model=GameStateResponse)
def get_game_state(game_id: str):
    return _game_state_response(game_id, _get_game(game_id))


@router.post("/{game_id}/prediction", response_model=GameStateResponse)
def set_prediction(game_id: str, request: PredictionRequest):
    """Predict the next ball ("4", "6", "wicket"), or clear the prediction with null"""
    game = _get_game(game_id)
    try:
        game.predict(request.choice)
    except GameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _game_state_response(game_id, game)


@router.post("/{game_id}/ball", response_model=BallResultResponse)
def bowl_next_ball(game_id: str):
    game = _get_game(game_id)
    result = game.bowl_next_ball()
    if result is None:
        raise HTTPException(status_code=400, detail="Game is over, no more balls to bowl")

    outcome = result.outcome
    return BallResultResponse(
        outcome=outcome.kind.value,
        projection=outcome.projection,
        short_code=outcome.short_code,
        runs=outcome.runs,
        commentary=outcome.commentary,
        prediction=result.resolution.prediction,
        correct=result.resolution.correct,
        points_delta=result.resolution.points_delta,
        message=result.message,
        game_state=_game_state_response(game_id, game),
    )


@router.post("/{game_id}/reset", response_model=GameStateResponse)
def reset_game(game_id: str):
    game = _get_game(game_id)
    game.reset()
    return _game_state_response(game_id, game)


@router.delete("/{game_id}")
def end_game(game_id: str):
    _get_game(game_id)
    del active_games[game_id]
    return {"status": "deleted", "game_id": game_id}
