"""
Ball-by-ball data model.
A Match is built once from a raw payload and never mutated afterwards.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Source data marks "no extra" / "no dismissal" with the string NA
NA_VALUES = {"", "NA", "N/A", "None", "null", "no extra"}

EXTRAS_TYPES = ("wides", "legbyes", "byes", "noballs", "penalty")


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if text in NA_VALUES:
        return None
    return text


def _int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return default


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


@dataclass(frozen=True)
class Delivery:
    """One ball bowled"""
    inning: Optional[int]
    over: Optional[int]  # 0-based, None when missing from the source
    ball: Optional[int]  # 1-based within the over
    batter: str = ""
    bowler: str = ""
    non_striker: str = ""
    batsman_runs: int = 0
    extra_runs: int = 0
    total_runs: int = 0
    extras_type: Optional[str] = None
    is_wicket: bool = False
    player_dismissed: Optional[str] = None
    dismissal_kind: Optional[str] = None
    fielder: Optional[str] = None
    batting_team: Optional[str] = None
    bowling_team: Optional[str] = None
    match_id: Optional[str] = None
    # Source record, kept for diagnostics
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False, hash=False)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Delivery":
        batsman_runs = _int(_first(record, "batsman_runs", "batter_runs"))
        extra_runs = _int(record.get("extra_runs"))
        total = record.get("total_runs")
        match_id = _first(record, "match_id", "matchId")
        return cls(
            inning=_int(_first(record, "inning", "innings", "inningNumber"), default=None),
            over=_int(record.get("over"), default=None),
            ball=_int(record.get("ball"), default=None),
            batter=_text(_first(record, "batter", "batsman")) or "",
            bowler=_text(record.get("bowler")) or "",
            non_striker=_text(record.get("non_striker")) or "",
            batsman_runs=batsman_runs,
            extra_runs=extra_runs,
            total_runs=_int(total) if total is not None else batsman_runs + extra_runs,
            extras_type=_text(record.get("extras_type")),
            is_wicket=_flag(record.get("is_wicket")),
            player_dismissed=_text(record.get("player_dismissed")),
            dismissal_kind=_text(record.get("dismissal_kind")),
            fielder=_text(record.get("fielder")),
            batting_team=_text(_first(record, "batting_team", "battingTeam")),
            bowling_team=_text(_first(record, "bowling_team", "bowlingTeam")),
            match_id=str(match_id) if match_id is not None else None,
            raw=dict(record),
        )

    @property
    def sort_key(self) -> Tuple[int, int]:
        return (self.over or 0, self.ball or 0)

    @property
    def over_display(self) -> str:
        return f"{self.over or 0}.{self.ball or 0}"


@dataclass(frozen=True)
class Innings:
    """One team's batting turn, deliveries ordered by (over, ball)"""
    inning_number: int
    batting_team: str
    bowling_team: str
    deliveries: Tuple[Delivery, ...] = ()

    def __len__(self) -> int:
        return len(self.deliveries)

    @property
    def total_runs(self) -> int:
        return sum(d.total_runs for d in self.deliveries)

    @property
    def total_wickets(self) -> int:
        return sum(1 for d in self.deliveries if d.is_wicket)


@dataclass(frozen=True)
class Match:
    """A single game with the innings present in the source data"""
    match_id: Optional[str]
    label: str
    innings: Tuple[Innings, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.innings

    @property
    def deliveries(self) -> Tuple[Delivery, ...]:
        """All deliveries flattened back out, innings by innings"""
        return tuple(d for inn in self.innings for d in inn.deliveries)
