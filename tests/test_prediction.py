"""
Tests for the prediction scoring rule
"""
import pytest

from nextball.engine.prediction import OUT_OF_POINTS_MESSAGE, PredictionScorer
from nextball.exceptions import InvalidPrediction, PredictionClosed


class TestScoringRule:
    """Correct predictions earn a fixed bonus, wrong ones cost a point"""

    def test_correct_wicket_prediction_from_fifty(self):
        scorer = PredictionScorer()
        scorer.set_prediction("wicket")
        resolution = scorer.resolve_ball("wicket", "WICKET!")
        assert scorer.points == 60
        assert resolution.correct is True
        assert resolution.points_delta == 10

    @pytest.mark.parametrize("choice,bonus", [("4", 2), ("6", 5), ("wicket", 10)])
    def test_bonus_by_prediction_type(self, choice, bonus):
        scorer = PredictionScorer()
        scorer.set_prediction(choice)
        scorer.resolve_ball(choice)
        assert scorer.points == 50 + bonus

    def test_wrong_four_on_dot_ball(self):
        scorer = PredictionScorer()
        scorer.set_prediction("4")
        resolution = scorer.resolve_ball("none", "Dot ball.")
        assert scorer.points == 49
        assert resolution.correct is False
        assert resolution.message == "Result: Dot ball. Your prediction was incorrect. You lost 1 point."

    def test_no_prediction_changes_nothing(self):
        scorer = PredictionScorer()
        resolution = scorer.resolve_ball("6", "SIX!")
        assert scorer.points == 50
        assert resolution.correct is None
        assert resolution.message == "Result: SIX!"

    def test_prediction_cleared_after_resolution(self):
        scorer = PredictionScorer()
        scorer.set_prediction("6")
        scorer.resolve_ball("none")
        assert scorer.pending_prediction is None

    def test_correct_message_names_bonus(self):
        scorer = PredictionScorer()
        scorer.set_prediction("6")
        resolution = scorer.resolve_ball("6", "SIX!")
        assert resolution.message == "Result: SIX! Correct prediction! You earned 5 points!"


class TestPredictionInput:
    def test_clearing_prediction(self):
        scorer = PredictionScorer()
        scorer.set_prediction("4")
        scorer.set_prediction(None)
        assert scorer.pending_prediction is None

    def test_choice_is_normalised(self):
        scorer = PredictionScorer()
        scorer.set_prediction(" Wicket ")
        assert scorer.pending_prediction == "wicket"

    @pytest.mark.parametrize("choice", ["none", "5", "dot", "W"])
    def test_unknown_choice_rejected(self, choice):
        with pytest.raises(InvalidPrediction):
            PredictionScorer().set_prediction(choice)


class TestGameOver:
    """The game ends on the resolution that empties the balance"""

    def test_reaching_exactly_zero_ends_game_on_same_ball(self):
        scorer = PredictionScorer(starting_points=1)
        scorer.set_prediction("6")
        resolution = scorer.resolve_ball("none", "Dot ball.")
        assert scorer.points == 0
        assert resolution.game_over
        assert scorer.is_game_over
        assert resolution.message.endswith(OUT_OF_POINTS_MESSAGE)

    def test_predictions_rejected_after_game_over(self):
        scorer = PredictionScorer(starting_points=1)
        scorer.set_prediction("4")
        scorer.resolve_ball("none")
        with pytest.raises(PredictionClosed):
            scorer.set_prediction("4")

    def test_guard_when_already_out_of_points(self):
        """A pending prediction with no balance left ends the game without scoring"""
        scorer = PredictionScorer(starting_points=0)
        scorer.set_prediction("wicket")
        resolution = scorer.resolve_ball("wicket", "WICKET!")
        assert scorer.points == 0
        assert resolution.game_over
        assert resolution.message == OUT_OF_POINTS_MESSAGE
        assert resolution.correct is None

    def test_reset_restores_balance(self):
        scorer = PredictionScorer(starting_points=1)
        scorer.set_prediction("4")
        scorer.resolve_ball("none")
        scorer.reset()
        assert scorer.points == 1
        assert not scorer.is_game_over
