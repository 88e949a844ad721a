from nextball.engine.deliveries import Delivery, Innings, Match
from nextball.engine.normalizer import PayloadShape, classify_payload, normalize_match
from nextball.engine.outcomes import Outcome, OutcomeKind, classify_delivery, project_outcome
from nextball.engine.replay_engine import ReplayEngine, ReplayState, ScoreState
from nextball.engine.prediction import PredictionScorer, Resolution
from nextball.engine.game_engine import GameSession, BallResult, GameSnapshot

__all__ = [
    "Delivery",
    "Innings",
    "Match",
    "PayloadShape",
    "classify_payload",
    "normalize_match",
    "Outcome",
    "OutcomeKind",
    "classify_delivery",
    "project_outcome",
    "ReplayEngine",
    "ReplayState",
    "ScoreState",
    "PredictionScorer",
    "Resolution",
    "GameSession",
    "BallResult",
    "GameSnapshot",
]
