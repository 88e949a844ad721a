"""
Prediction Scorer - the user's points balance and pending prediction.

A correct prediction adds a fixed bonus by type with no stake taken first;
a wrong one costs a single point. The game ends as soon as the balance
reaches zero.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from nextball.engine.outcomes import PROJECTION_FOUR, PROJECTION_SIX, PROJECTION_WICKET
from nextball.exceptions import InvalidPrediction, PredictionClosed

logger = logging.getLogger(__name__)

STARTING_POINTS = 50
WRONG_PREDICTION_PENALTY = 1
PREDICTION_BONUS = {
    PROJECTION_FOUR: 2,
    PROJECTION_SIX: 5,
    PROJECTION_WICKET: 10,
}
VALID_PREDICTIONS = tuple(PREDICTION_BONUS)

OUT_OF_POINTS_MESSAGE = "Game Over! You've run out of points."


@dataclass
class Resolution:
    """Result of scoring one ball"""
    prediction: Optional[str]
    outcome: str
    points_before: int
    points: int
    message: str
    correct: Optional[bool] = None  # None when nothing was predicted
    game_over: bool = False

    @property
    def points_delta(self) -> int:
        return self.points - self.points_before


class PredictionScorer:
    def __init__(self, starting_points: int = STARTING_POINTS):
        self.starting_points = starting_points
        self.points = starting_points
        self.pending_prediction: Optional[str] = None
        self.is_game_over = False

    def reset(self) -> None:
        self.points = self.starting_points
        self.pending_prediction = None
        self.is_game_over = False

    def set_prediction(self, choice: Optional[str]) -> None:
        """Set or clear (None) the prediction for the next ball"""
        if self.is_game_over:
            raise PredictionClosed()
        if choice is not None:
            choice = str(choice).strip().lower()
            if choice not in VALID_PREDICTIONS:
                raise InvalidPrediction(choice)
        self.pending_prediction = choice

    def resolve_ball(self, outcome: str, commentary: str = "") -> Resolution:
        """
        Score the pending prediction against a ball's projected outcome
        ('wicket', '4', '6' or 'none') and clear it.
        """
        prediction = self.pending_prediction
        before = self.points
        self.pending_prediction = None

        if prediction is None:
            message = f"Result: {commentary}"
            resolution = Resolution(prediction, outcome, before, self.points, message)
        elif self.points <= 0:
            # Balance already spent, nothing left to stake
            self.is_game_over = True
            return Resolution(prediction, outcome, before, self.points,
                              OUT_OF_POINTS_MESSAGE, game_over=True)
        elif prediction == outcome:
            bonus = PREDICTION_BONUS[prediction]
            self.points += bonus
            message = f"Result: {commentary} Correct prediction! You earned {bonus} points!"
            resolution = Resolution(prediction, outcome, before, self.points, message, correct=True)
        else:
            self.points -= WRONG_PREDICTION_PENALTY
            message = f"Result: {commentary} Your prediction was incorrect. You lost 1 point."
            resolution = Resolution(prediction, outcome, before, self.points, message, correct=False)

        if self.points <= 0:
            self.is_game_over = True
            resolution.game_over = True
            resolution.message = f"{resolution.message} {OUT_OF_POINTS_MESSAGE}"
            logger.info("Out of points after predicting %r on a %r ball", prediction, outcome)

        return resolution
