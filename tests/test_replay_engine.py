"""
Tests for the replay engine state machine
"""
from conftest import make_ball, two_innings_payload
from nextball.engine.normalizer import normalize_match
from nextball.engine.replay_engine import MATCH_OVER_MESSAGE, ReplayEngine, ReplayState


def loaded(payload):
    engine = ReplayEngine()
    engine.load(normalize_match(payload))
    return engine


class TestLoading:
    """Loading resets the cursor and derives the opening score"""

    def test_starts_awaiting(self):
        engine = ReplayEngine()
        assert engine.state is ReplayState.AWAITING_START
        assert engine.current_ball is None

    def test_load_positions_at_first_ball(self):
        engine = loaded(two_innings_payload())
        assert engine.state is ReplayState.IN_PLAY
        assert (engine.inning_index, engine.delivery_index) == (0, 0)
        assert engine.score.scoreline == "0-0"
        assert engine.score.overs == "0.1"
        assert engine.score.batting_team == "Mumbai Indians"
        assert engine.current_ball.batter == "RG Sharma"

    def test_empty_match_is_over_immediately(self):
        engine = loaded([])
        assert engine.state is ReplayState.MATCH_OVER
        assert engine.current_ball is None
        assert engine.advance() is None

    def test_empty_first_innings_is_over_immediately(self):
        engine = loaded({"innings": [{"inning": 1, "batting_team": "A", "bowling_team": "B",
                                      "deliveries": []}]})
        assert engine.state is ReplayState.MATCH_OVER
        assert engine.current_ball is None

    def test_reload_resets_position(self):
        engine = loaded(two_innings_payload())
        engine.advance()
        engine.advance()
        engine.load(normalize_match(two_innings_payload()))
        assert (engine.inning_index, engine.delivery_index) == (0, 0)
        assert engine.score.runs == 0


class TestAdvancing:
    """Each advance moves one ball and recomputes the score from scratch"""

    def test_score_counts_only_bowled_deliveries(self):
        engine = loaded(two_innings_payload())
        engine.advance()
        assert engine.score.scoreline == "4-0"
        assert engine.score.overs == "0.2"
        engine.advance()
        assert engine.score.scoreline == "4-1"

    def test_full_innings_totals_match_source(self):
        balls = [make_ball(1, over, ball, batsman_runs=(over + ball) % 7,
                           is_wicket=1 if ball == 6 else 0)
                 for over in range(4) for ball in range(1, 7)]
        engine = loaded(balls)
        for _ in range(len(balls) - 1):
            engine.advance()
        engine.advance()

        assert engine.state is ReplayState.MATCH_OVER
        assert engine.score.runs == sum(b["total_runs"] for b in balls)
        assert engine.score.wickets == sum(b["is_wicket"] for b in balls)
        assert engine.score.overs == "3.6"

    def test_score_sums_total_runs_not_recomputed(self):
        engine = loaded([make_ball(1, 0, 1, batsman_runs=1, total_runs=3), make_ball(1, 0, 2)])
        engine.advance()
        assert engine.score.runs == 3


class TestInningsTransitions:
    """Innings breaks and the end of the match"""

    def test_innings_break_moves_to_next_innings(self):
        engine = loaded(two_innings_payload())
        for _ in range(2):
            assert engine.advance() is None

        message = engine.advance()

        assert message == "Innings break! Chennai Super Kings are batting."
        assert engine.state is ReplayState.IN_PLAY
        assert (engine.inning_index, engine.delivery_index) == (1, 0)
        assert engine.innings_just_changed
        assert engine.score.scoreline == "0-0"
        assert engine.score.batting_team == "Chennai Super Kings"
        assert engine.current_ball.batter == "RD Gaikwad"

    def test_match_over_after_last_innings(self):
        engine = loaded(two_innings_payload())
        messages = [engine.advance() for _ in range(5)]

        assert messages[-1] == MATCH_OVER_MESSAGE
        assert engine.is_match_over
        assert engine.current_ball is None
        # 6 + wide
        assert engine.score.scoreline == "7-0"

    def test_no_advance_after_match_over(self):
        engine = loaded([make_ball()])
        engine.advance()
        position = (engine.inning_index, engine.delivery_index)

        assert engine.advance() is None
        assert (engine.inning_index, engine.delivery_index) == position

    def test_empty_second_innings_ends_match(self):
        payload = {"innings": [
            {"inning": 1, "batting_team": "A", "bowling_team": "B", "deliveries": [make_ball(1)]},
            {"inning": 2, "batting_team": "B", "bowling_team": "A", "deliveries": []},
        ]}
        engine = loaded(payload)
        message = engine.advance()
        assert engine.is_match_over
        assert message.endswith(MATCH_OVER_MESSAGE)

    def test_reset_returns_to_awaiting_start(self):
        engine = loaded(two_innings_payload())
        engine.advance()
        engine.reset()
        assert engine.state is ReplayState.AWAITING_START
        assert engine.match is None
        assert engine.score.runs == 0
