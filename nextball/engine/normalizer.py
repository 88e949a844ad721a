"""
Delivery Normalizer.

Turns whatever a catalog hands back for one match into a Match whose innings
are ordered by inning number and whose deliveries are ordered by (over, ball).

Accepted payload shapes:
    GROUPED  - {"innings": [{"inning", "batting_team", "bowling_team", "deliveries"}, ...]}
    WRAPPED  - {"deliveries": [...]} (flat delivery list inside an object)
    FLAT     - [delivery, delivery, ...], each tagged with its own inning
    NESTED   - [[delivery, ...], [delivery, ...]] grouped by match, not by innings
"""
import dataclasses
import enum
import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

from nextball.engine.deliveries import Delivery, Innings, Match
from nextball.exceptions import InvalidPayload

logger = logging.getLogger(__name__)


class PayloadShape(enum.Enum):
    GROUPED = "grouped"
    WRAPPED = "wrapped"
    FLAT = "flat"
    NESTED = "nested"
    UNKNOWN = "unknown"


def classify_payload(payload: Any) -> PayloadShape:
    """Decide which shape a raw payload has. Non-containers raise InvalidPayload."""
    if payload is None or isinstance(payload, (str, bytes, int, float, bool)):
        raise InvalidPayload(f"Match payload must be an object or a list, got {type(payload).__name__}")

    if isinstance(payload, dict):
        if isinstance(payload.get("innings"), list):
            return PayloadShape.GROUPED
        if isinstance(payload.get("deliveries"), list):
            return PayloadShape.WRAPPED
        return PayloadShape.UNKNOWN

    if isinstance(payload, (list, tuple)):
        if any(isinstance(item, (list, tuple)) for item in payload):
            return PayloadShape.NESTED
        return PayloadShape.FLAT

    raise InvalidPayload(f"Match payload must be an object or a list, got {type(payload).__name__}")


def placeholder_team(inning_number: int) -> str:
    return f"Batting Team (Inning {inning_number})"


def _records(items: Iterable[Any]) -> List[Dict[str, Any]]:
    records = []
    for item in items:
        if isinstance(item, dict):
            records.append(item)
        else:
            logger.warning("Skipping non-delivery item of type %s", type(item).__name__)
    return records


def _resolve_teams(deliveries: List[Delivery], inning_number: int,
                   batting_team: Optional[str] = None,
                   bowling_team: Optional[str] = None) -> tuple:
    """
    Innings metadata wins; otherwise take the first delivery that carries team
    names (earlier ones may lack them), then fall back to a placeholder.
    """
    if not batting_team:
        batting_team = next((d.batting_team for d in deliveries if d.batting_team), None)
    if not bowling_team:
        bowling_team = next((d.bowling_team for d in deliveries if d.bowling_team), None)

    if not batting_team:
        logger.warning("No batting team found for inning %s, using placeholder", inning_number)
        batting_team = placeholder_team(inning_number)
    if not bowling_team:
        bowling_team = f"Bowling Team (Inning {inning_number})"
    return batting_team, bowling_team


def _inherit_teams(deliveries: List[Delivery], batting_team: str, bowling_team: str) -> List[Delivery]:
    """Fill team names missing on individual deliveries from the innings"""
    return [
        d if d.batting_team and d.bowling_team else dataclasses.replace(
            d,
            batting_team=d.batting_team or batting_team,
            bowling_team=d.bowling_team or bowling_team,
        )
        for d in deliveries
    ]


def _sorted_deliveries(deliveries: List[Delivery], inning_number: int) -> tuple:
    keys = [d.sort_key for d in deliveries]
    if any(a > b for a, b in zip(keys, keys[1:])):
        logger.info("Deliveries for inning %s were out of order, re-sorting", inning_number)
    # sorted() is stable, so equal (over, ball) keys keep their source order
    return tuple(sorted(deliveries, key=lambda d: d.sort_key))


def _group_flat(records: List[Dict[str, Any]]) -> List[Innings]:
    grouped: "OrderedDict[int, List[Delivery]]" = OrderedDict()
    for record in records:
        delivery = Delivery.from_record(record)
        inning = delivery.inning if delivery.inning is not None else 1
        grouped.setdefault(inning, []).append(delivery)

    innings = []
    for inning_number in sorted(grouped):
        deliveries = grouped[inning_number]
        batting, bowling = _resolve_teams(deliveries, inning_number)
        innings.append(Innings(
            inning_number=inning_number,
            batting_team=batting,
            bowling_team=bowling,
            deliveries=_sorted_deliveries(_inherit_teams(deliveries, batting, bowling), inning_number),
        ))
    return innings


def _first_value(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def _build_grouped(raw_innings: List[Any]) -> List[Innings]:
    innings = []
    for position, raw in enumerate(raw_innings, start=1):
        if not isinstance(raw, dict):
            logger.warning("Skipping innings entry of type %s", type(raw).__name__)
            continue

        number = _first_value(raw, "inningNumber", "inning_number", "inning")
        try:
            inning_number = int(number) if number is not None else position
        except (TypeError, ValueError):
            inning_number = position

        raw_deliveries = raw.get("deliveries") or []
        deliveries = [Delivery.from_record(r) for r in _records(raw_deliveries)]
        batting, bowling = _resolve_teams(
            deliveries,
            inning_number,
            _first_value(raw, "battingTeam", "batting_team"),
            _first_value(raw, "bowlingTeam", "bowling_team"),
        )
        innings.append(Innings(
            inning_number=inning_number,
            batting_team=batting,
            bowling_team=bowling,
            deliveries=_sorted_deliveries(_inherit_teams(deliveries, batting, bowling), inning_number),
        ))

    # Trust the caller's innings order unless it is clearly wrong
    numbers = [i.inning_number for i in innings]
    if numbers != sorted(numbers):
        logger.info("Innings were out of order, re-sorting")
        innings.sort(key=lambda i: i.inning_number)
    return innings


def describe_match(match_id: Optional[str], innings: List[Innings],
                   payload: Any = None) -> str:
    """Human readable label for a match"""
    if isinstance(payload, dict):
        label = _first_value(payload, "match", "description")
        if label:
            return str(label)
    if innings:
        first = innings[0]
        return f"{first.batting_team} vs {first.bowling_team}"
    if match_id:
        return f"Match {match_id}"
    return "Unknown match"


def normalize_match(payload: Any, match_id: Optional[Any] = None) -> Match:
    """
    Build a Match from a raw payload of any accepted shape.

    Raises InvalidPayload for scalars, None and objects whose shape is not
    recognised. Everything else degrades gracefully: an empty list gives a
    Match with no innings.
    """
    shape = classify_payload(payload)
    logger.debug("Classified match payload as %s", shape.value)

    if shape is PayloadShape.UNKNOWN:
        keys = ", ".join(sorted(str(k) for k in payload)) or "none"
        raise InvalidPayload(f"Unrecognised match payload shape (keys: {keys})")

    if shape is PayloadShape.GROUPED:
        innings = _build_grouped(payload["innings"])
    elif shape is PayloadShape.WRAPPED:
        innings = _group_flat(_records(payload["deliveries"]))
    elif shape is PayloadShape.NESTED:
        records = []
        for item in payload:
            if isinstance(item, (list, tuple)):
                records.extend(_records(item))
            else:
                records.extend(_records([item]))
        innings = _group_flat(records)
    else:
        innings = _group_flat(_records(payload))

    if match_id is None:
        if isinstance(payload, dict):
            match_id = _first_value(payload, "match_id", "matchId")
        if match_id is None:
            match_id = next(
                (d.match_id for inn in innings for d in inn.deliveries if d.match_id),
                None,
            )

    match_id = str(match_id) if match_id is not None else None
    return Match(
        match_id=match_id,
        label=describe_match(match_id, innings, payload),
        innings=tuple(innings),
    )
