"""
Replay Engine - walks a Match one delivery at a time.

The cursor is (inning_index, delivery_index). Score, wickets and overs for the
active innings are always recomputed from deliveries[0:delivery_index], never
kept as running counters.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from nextball.engine.deliveries import Delivery, Innings, Match

logger = logging.getLogger(__name__)

MATCH_OVER_MESSAGE = "Match Over! Thanks for playing."


class ReplayState(enum.Enum):
    AWAITING_START = "awaiting_start"
    IN_PLAY = "in_play"
    INNINGS_BREAK = "innings_break"
    MATCH_OVER = "match_over"


@dataclass
class ScoreState:
    """Live score for the active innings"""
    inning_number: int = 0
    batting_team: str = ""
    bowling_team: str = ""
    runs: int = 0
    wickets: int = 0
    overs: str = "0.0"
    current_batter: Optional[str] = None
    current_bowler: Optional[str] = None
    non_striker: Optional[str] = None

    @property
    def scoreline(self) -> str:
        return f"{self.runs}-{self.wickets}"


class ReplayEngine:
    """
    Replays a normalized match delivery by delivery.
    """

    def __init__(self):
        self.match: Optional[Match] = None
        self.inning_index = 0
        self.delivery_index = 0
        self.state = ReplayState.AWAITING_START
        self.score = ScoreState()
        self.innings_just_changed = False

    @property
    def current_innings(self) -> Optional[Innings]:
        if not self.match or self.inning_index >= len(self.match.innings):
            return None
        return self.match.innings[self.inning_index]

    @property
    def current_ball(self) -> Optional[Delivery]:
        """The delivery about to be bowled, None once nothing is left to bowl"""
        if self.state is not ReplayState.IN_PLAY:
            return None
        innings = self.current_innings
        if innings is None or self.delivery_index >= len(innings.deliveries):
            return None
        return innings.deliveries[self.delivery_index]

    @property
    def is_match_over(self) -> bool:
        return self.state is ReplayState.MATCH_OVER

    def load(self, match: Match) -> None:
        """Start replaying a match from its first ball"""
        self.match = match
        self.inning_index = 0
        self.delivery_index = 0
        self.innings_just_changed = False

        innings = self.current_innings
        if innings is None or not innings.deliveries:
            logger.info("Match %s has nothing to replay", match.match_id)
            self.state = ReplayState.MATCH_OVER
        else:
            self.state = ReplayState.IN_PLAY
        self._recompute()

    def reset(self) -> None:
        self.match = None
        self.inning_index = 0
        self.delivery_index = 0
        self.innings_just_changed = False
        self.state = ReplayState.AWAITING_START
        self.score = ScoreState()

    def advance(self) -> Optional[str]:
        """
        Move past the current ball. Returns the innings break or match over
        message when the move crosses one, None otherwise. Does nothing unless
        a ball is in play.
        """
        self.innings_just_changed = False
        if self.state is not ReplayState.IN_PLAY:
            return None

        self.delivery_index += 1
        message = None

        if self.delivery_index >= len(self.current_innings.deliveries):
            if self.inning_index + 1 < len(self.match.innings):
                self.state = ReplayState.INNINGS_BREAK
                self.inning_index += 1
                self.delivery_index = 0
                self.innings_just_changed = True
                next_innings = self.current_innings
                message = f"Innings break! {next_innings.batting_team} are batting."
                logger.info("Innings break, %s to bat", next_innings.batting_team)

                if next_innings.deliveries:
                    self.state = ReplayState.IN_PLAY
                else:
                    self.state = ReplayState.MATCH_OVER
                    message = f"{message} {MATCH_OVER_MESSAGE}"
            else:
                self.state = ReplayState.MATCH_OVER
                message = MATCH_OVER_MESSAGE

        self._recompute()
        return message

    def _recompute(self) -> None:
        innings = self.current_innings
        if innings is None:
            self.score = ScoreState()
            return

        bowled = innings.deliveries[:self.delivery_index]
        current = self.current_ball
        # With nothing left to bowl, show where the innings finished
        shown = current or (bowled[-1] if bowled else None)

        self.score = ScoreState(
            inning_number=innings.inning_number,
            batting_team=innings.batting_team,
            bowling_team=innings.bowling_team,
            runs=sum(d.total_runs for d in bowled),
            wickets=sum(1 for d in bowled if d.is_wicket),
            overs=shown.over_display if shown else "0.0",
            current_batter=current.batter if current else None,
            current_bowler=current.bowler if current else None,
            non_striker=current.non_striker if current else None,
        )
