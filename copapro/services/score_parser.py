"""
Score parser for padel set scores.

Two directions:
  - MatchRecord set fields -> SetResult list / sets won per side
  - free-form score entry -> ParsedScore (and back to the six set fields)

Free-form formats:
  "6-3"            -> 1 set
  "6-3 4-6 7-5"    -> 3 sets
  "6-3, 4-6, 7-5"  -> comma-separated variant
  {"display": "6-3 6-4"}          -> extracts display string first
  {"sets": [{"a": 6, "b": 3}]}    -> structured sets

Returns None on parse failure (non-fatal); validation is match_rules' job.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from copapro.models.match import MatchRecord, SetFields

MAX_SETS = 3


@dataclass(frozen=True)
class SetResult:
    score_a: int
    score_b: int
    winner_side: Optional[str]  # "A" | "B" | None for a tied set


@dataclass
class ParsedScore:
    sets: List[Tuple[int, int]]  # (team_a_games, team_b_games) per set
    team_a_sets_won: int
    team_b_sets_won: int
    team_a_games: int
    team_b_games: int

    def as_set_fields(self) -> SetFields:
        """The six optional set scores in validator argument order."""
        padded: List[Optional[int]] = []
        for i in range(MAX_SETS):
            if i < len(self.sets):
                padded.extend(self.sets[i])
            else:
                padded.extend((None, None))
        return tuple(padded)  # type: ignore[return-value]


def _winner_side(a: int, b: int) -> Optional[str]:
    if a > b:
        return "A"
    if b > a:
        return "B"
    return None


def parse_sets(match: MatchRecord) -> List[SetResult]:
    """Sets with both scores present, in play order."""
    f = match.set_fields
    results: List[SetResult] = []
    for a, b in ((f[0], f[1]), (f[2], f[3]), (f[4], f[5])):
        if a is not None and b is not None:
            results.append(SetResult(score_a=a, score_b=b, winner_side=_winner_side(a, b)))
    return results


def count_sets_won(sets: List[SetResult]) -> Tuple[int, int]:
    """Return (sets_a, sets_b); tied sets count for nobody."""
    sets_a = sum(1 for s in sets if s.winner_side == "A")
    sets_b = sum(1 for s in sets if s.winner_side == "B")
    return sets_a, sets_b


def parse_score(score: Optional[Union[str, Dict[str, Any]]]) -> Optional[ParsedScore]:
    """Parse a score string or score_json blob into structured set/game counts.

    Returns None if the score cannot be parsed.
    """
    if not score:
        return None

    raw: Optional[str] = None
    if isinstance(score, str):
        raw = score
    elif isinstance(score, dict):
        if "sets" in score and isinstance(score["sets"], list):
            return _parse_structured_sets(score["sets"])
        raw = str(score.get("display") or score.get("score") or "")
    if not raw or not raw.strip():
        return None

    return _parse_score_string(raw.strip())


def _build(sets: List[Tuple[int, int]]) -> Optional[ParsedScore]:
    if not sets or len(sets) > MAX_SETS:
        return None
    if any(a < 0 or b < 0 for a, b in sets):
        return None
    return ParsedScore(
        sets=sets,
        team_a_sets_won=sum(1 for a, b in sets if a > b),
        team_b_sets_won=sum(1 for a, b in sets if b > a),
        team_a_games=sum(a for a, _ in sets),
        team_b_games=sum(b for _, b in sets),
    )


def _parse_structured_sets(sets_list: list) -> Optional[ParsedScore]:
    sets: List[Tuple[int, int]] = []
    for s in sets_list:
        if not isinstance(s, dict):
            return None
        try:
            sets.append((int(s.get("a", 0)), int(s.get("b", 0))))
        except (TypeError, ValueError):
            return None
    return _build(sets)


def _parse_score_string(raw: str) -> Optional[ParsedScore]:
    """Parse strings like '6-3', '6-3 4-6 7-5', '6-3, 4-6, 7-5'."""
    # Normalize: replace commas with spaces, collapse whitespace
    parts = raw.replace(",", " ").split()

    sets: List[Tuple[int, int]] = []
    for part in parts:
        pair = part.split("-")
        if len(pair) != 2:
            return None
        try:
            a = int(pair[0])
            b = int(pair[1])
        except ValueError:
            return None
        sets.append((a, b))

    return _build(sets)
