"""
Outcome classification and commentary for a single delivery
"""
import enum
from dataclasses import dataclass

from nextball.engine.deliveries import Delivery


class OutcomeKind(enum.Enum):
    WICKET = "wicket"
    EXTRA = "extra"
    SIX = "six"
    FOUR = "four"
    RUNS = "runs"
    DOT = "dot"


# Coarse outcome space used for matching predictions
PROJECTION_WICKET = "wicket"
PROJECTION_FOUR = "4"
PROJECTION_SIX = "6"
PROJECTION_NONE = "none"

_PROJECTIONS = {
    OutcomeKind.WICKET: PROJECTION_WICKET,
    OutcomeKind.FOUR: PROJECTION_FOUR,
    OutcomeKind.SIX: PROJECTION_SIX,
}


@dataclass(frozen=True)
class Outcome:
    """Semantic result of one delivery"""
    kind: OutcomeKind
    runs: int = 0
    commentary: str = ""

    @property
    def projection(self) -> str:
        return _PROJECTIONS.get(self.kind, PROJECTION_NONE)

    @property
    def short_code(self) -> str:
        """Scorecard notation: W, Ex, 6, 4, digits or a dot"""
        if self.kind is OutcomeKind.WICKET:
            return "W"
        if self.kind is OutcomeKind.EXTRA:
            return "Ex"
        if self.kind is OutcomeKind.DOT:
            return "."
        return str(self.runs)


def classify_delivery(ball: Delivery) -> Outcome:
    """
    Classify a delivery. Checks run in a fixed order and the first match wins,
    so a wicket that also carries boundary runs or extras is reported only as
    a wicket.
    """
    if ball.is_wicket:
        return Outcome(
            OutcomeKind.WICKET,
            runs=ball.total_runs,
            commentary=(
                f"WICKET! {ball.player_dismissed or ball.batter} is out, "
                f"{ball.dismissal_kind or 'dismissed'}! A huge blow delivered by {ball.bowler}."
            ),
        )

    if ball.extras_type:
        return Outcome(
            OutcomeKind.EXTRA,
            runs=ball.extra_runs,
            commentary=f"{ball.extra_runs} {ball.extras_type}! An extra run for the batting side.",
        )

    if ball.batsman_runs == 6:
        return Outcome(
            OutcomeKind.SIX,
            runs=6,
            commentary=f"SIX! What a magnificent shot by {ball.batter}! It's sailed over the ropes.",
        )

    if ball.batsman_runs == 4:
        return Outcome(
            OutcomeKind.FOUR,
            runs=4,
            commentary=f"FOUR! A glorious boundary from {ball.batter}, pierced the field perfectly.",
        )

    if ball.batsman_runs > 0:
        runs = ball.batsman_runs
        return Outcome(
            OutcomeKind.RUNS,
            runs=runs,
            commentary=f"{ball.batter} takes a quick {runs} run{'s' if runs > 1 else ''}.",
        )

    return Outcome(
        OutcomeKind.DOT,
        commentary=f"Dot ball. {ball.bowler} to {ball.batter}, no run.",
    )


def project_outcome(outcome: Outcome) -> str:
    """Collapse an outcome to one of 'wicket', '4', '6' or 'none'"""
    return outcome.projection
