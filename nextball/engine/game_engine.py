"""
Game session - one user replaying one match and predicting each ball
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from nextball.engine.deliveries import Delivery, Match
from nextball.engine.normalizer import normalize_match
from nextball.engine.outcomes import Outcome, classify_delivery
from nextball.engine.prediction import PredictionScorer, Resolution, STARTING_POINTS
from nextball.engine.replay_engine import ReplayEngine, ReplayState
from nextball.exceptions import GameNotStarted, PredictionClosed

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Select a season and match to start!"


@dataclass
class BallResult:
    """Everything that happened when one ball was bowled"""
    delivery: Delivery
    outcome: Outcome
    resolution: Resolution
    message: str
    innings_changed: bool = False
    game_over: bool = False


@dataclass
class GameSnapshot:
    state: str
    match_id: Optional[str]
    match_label: Optional[str]
    inning_number: int
    batting_team: str
    bowling_team: str
    runs: int
    wickets: int
    overs: str
    current_batter: Optional[str]
    current_bowler: Optional[str]
    non_striker: Optional[str]
    points: int
    prediction: Optional[str]
    message: str
    is_game_over: bool
    innings_just_changed: bool


class GameSession:
    """
    Wires the replay engine and the prediction scorer together the way the
    game screen drives them: load a match, predict, bowl, repeat.
    """

    def __init__(self, starting_points: int = STARTING_POINTS):
        self.replay = ReplayEngine()
        self.scorer = PredictionScorer(starting_points)
        self.message = WELCOME_MESSAGE
        self.season: Optional[str] = None
        self.selected_match_id: Optional[str] = None
        self._load_token = 0

    @property
    def match(self) -> Optional[Match]:
        return self.replay.match

    @property
    def is_game_over(self) -> bool:
        return self.scorer.is_game_over or self.replay.is_match_over

    def select(self, season: str, match_id: Any) -> int:
        """
        Record a season/match selection and return a token for the load it
        triggers. Only the newest token may start a game.
        """
        self._load_token += 1
        self.season = str(season)
        self.selected_match_id = str(match_id)
        return self._load_token

    def start(self, payload: Any, token: Optional[int] = None) -> bool:
        """
        Start a new game from a raw match payload. Returns False, leaving the
        session untouched, when token belongs to a superseded selection.
        Raises InvalidPayload if the payload cannot be read.
        """
        if token is not None and token != self._load_token:
            logger.info("Ignoring stale match data (token %s, latest %s)", token, self._load_token)
            return False

        if isinstance(payload, Match):
            match = payload
        else:
            match = normalize_match(payload, match_id=self.selected_match_id)

        self.replay.load(match)
        self.scorer.reset()
        self.message = (
            f"Game started: {match.label}. "
            "Make your prediction or press 'Bowl Next Ball' to continue."
        )
        if self.replay.is_match_over:
            self.message = f"{self.message} There are no deliveries to replay."
        logger.info("Game started for match %s (%d innings)", match.match_id, len(match.innings))
        return True

    def predict(self, choice: Optional[str]) -> None:
        if self.replay.state is ReplayState.AWAITING_START:
            raise GameNotStarted()
        if self.is_game_over:
            raise PredictionClosed()
        self.scorer.set_prediction(choice)

    def bowl_next_ball(self) -> Optional[BallResult]:
        """Resolve the current ball and move on. Returns None when there is nothing to bowl."""
        if self.is_game_over:
            return None
        ball = self.replay.current_ball
        if ball is None:
            return None

        outcome = classify_delivery(ball)
        resolution = self.scorer.resolve_ball(outcome.projection, outcome.commentary)
        message = resolution.message

        if resolution.game_over:
            self.message = message
            return BallResult(ball, outcome, resolution, message, game_over=True)

        transition = self.replay.advance()
        if transition:
            message = f"{message} {transition}"
        self.message = message

        return BallResult(
            delivery=ball,
            outcome=outcome,
            resolution=resolution,
            message=message,
            innings_changed=self.replay.innings_just_changed,
            game_over=self.is_game_over,
        )

    def reset(self) -> None:
        # Loads already in flight belong to the abandoned selection
        self._load_token += 1
        self.replay.reset()
        self.scorer.reset()
        self.season = None
        self.selected_match_id = None
        self.message = WELCOME_MESSAGE

    def snapshot(self) -> GameSnapshot:
        score = self.replay.score
        match = self.match
        return GameSnapshot(
            state=self.replay.state.value,
            match_id=match.match_id if match else None,
            match_label=match.label if match else None,
            inning_number=score.inning_number,
            batting_team=score.batting_team,
            bowling_team=score.bowling_team,
            runs=score.runs,
            wickets=score.wickets,
            overs=score.overs,
            current_batter=score.current_batter,
            current_bowler=score.current_bowler,
            non_striker=score.non_striker,
            points=self.scorer.points,
            prediction=self.scorer.pending_prediction,
            message=self.message,
            is_game_over=self.is_game_over,
            innings_just_changed=self.replay.innings_just_changed,
        )
