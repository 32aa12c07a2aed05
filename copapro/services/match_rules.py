"""
Match Rules: score validation and result determination per match format.

Formats (number_of_sets):
  1 = single set: only set 1, it decides the match
  2 = two sets: sets 1 and 2, never a 3rd; a 1-1 split is a draw
  3 = best of three: sets 1 and 2; set 3 only as a decider after a 1-1 split,
      otherwise a 1-1 split is a draw

Validation never raises on bad scores: it returns a ScoreRejection naming the
failed rule (or None when the scores are legal) so the message can be shown to
the person entering the result. Each format has its own rule function and both
validation and determination dispatch on SetsFormat.

Always validate before determining: determine_result() accepts anything and
degrades to UNDECIDED rather than rejecting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from pydantic import BaseModel

from copapro import settings
from copapro.models.match import ResultType
from copapro.models.tournament_format import SetsFormat

SetScore = Tuple[Optional[int], Optional[int]]


class RejectionCode(str, Enum):
    OUT_OF_RANGE = "OUT_OF_RANGE"
    MISSING_SET = "MISSING_SET"
    TIED_SET = "TIED_SET"
    EXTRA_SET = "EXTRA_SET"  # set not played in this format
    UNNECESSARY_SET = "UNNECESSARY_SET"  # 3rd set after a 2-0
    DRAW_NOT_ALLOWED = "DRAW_NOT_ALLOWED"


class ScoreRejection(BaseModel):
    code: RejectionCode
    message: str
    set_number: Optional[int] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MatchOutcome:
    result_type: ResultType
    sets_a: int
    sets_b: int


# ============================================================================
# Set helpers
# ============================================================================


def _is_present(s: SetScore) -> bool:
    return s[0] is not None and s[1] is not None


def _is_touched(s: SetScore) -> bool:
    return s[0] is not None or s[1] is not None


def _is_valid_score(value: Optional[int], max_score: int) -> bool:
    if value is None:
        return True
    # bool is an int subclass; True/False are not scores
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= max_score


def _set_winner(s: SetScore) -> Optional[str]:
    a, b = s
    if a is None or b is None or a == b:
        return None
    return "A" if a > b else "B"


def _require_set(s: SetScore, set_number: int) -> Optional[ScoreRejection]:
    if not _is_present(s):
        if _is_touched(s):
            message = f"Set {set_number} is incomplete: enter both scores."
        else:
            message = f"Set {set_number} is required."
        return ScoreRejection(code=RejectionCode.MISSING_SET, message=message, set_number=set_number)
    if s[0] == s[1]:
        return ScoreRejection(
            code=RejectionCode.TIED_SET,
            message=f"Set {set_number}: a set cannot end in a tie.",
            set_number=set_number,
        )
    return None


# ============================================================================
# Per-format rules (sets 1 already checked: present, in range, not tied)
# ============================================================================


def _rules_one_set(
    s1: SetScore, s2: SetScore, s3: SetScore, allow_draws: bool
) -> Optional[ScoreRejection]:
    for set_number, s in ((2, s2), (3, s3)):
        if _is_touched(s):
            return ScoreRejection(
                code=RejectionCode.EXTRA_SET,
                message="This tournament is played to 1 set. Leave sets 2 and 3 empty.",
                set_number=set_number,
            )
    return None


def _rules_two_sets(
    s1: SetScore, s2: SetScore, s3: SetScore, allow_draws: bool
) -> Optional[ScoreRejection]:
    rejection = _require_set(s2, 2)
    if rejection:
        return rejection
    if _is_touched(s3):
        return ScoreRejection(
            code=RejectionCode.EXTRA_SET,
            message="This tournament is played to 2 sets. Leave set 3 empty.",
            set_number=3,
        )
    if _set_winner(s1) != _set_winner(s2) and not allow_draws:
        return ScoreRejection(
            code=RejectionCode.DRAW_NOT_ALLOWED,
            message="Sets are tied 1-1. Enable draws in the season settings to record this result.",
        )
    return None


def _rules_best_of_three(
    s1: SetScore, s2: SetScore, s3: SetScore, allow_draws: bool
) -> Optional[ScoreRejection]:
    rejection = _require_set(s2, 2)
    if rejection:
        return rejection

    if _set_winner(s1) == _set_winner(s2):
        if _is_touched(s3):
            return ScoreRejection(
                code=RejectionCode.UNNECESSARY_SET,
                message="The match was decided in 2 sets. A 3rd set is not needed.",
                set_number=3,
            )
        return None

    # 1-1 split: set 3 decides, or the match is a draw
    if _is_touched(s3):
        return _require_set(s3, 3)
    if allow_draws:
        return None
    return ScoreRejection(
        code=RejectionCode.DRAW_NOT_ALLOWED,
        message="Sets are tied 1-1. Enter the 3rd set or enable draws in the season settings.",
    )


_FORMAT_RULES: Dict[SetsFormat, Callable[[SetScore, SetScore, SetScore, bool], Optional[ScoreRejection]]] = {
    SetsFormat.ONE_SET: _rules_one_set,
    SetsFormat.TWO_SETS: _rules_two_sets,
    SetsFormat.BEST_OF_THREE: _rules_best_of_three,
}


# ============================================================================
# Public API
# ============================================================================


def validate_match_scores(
    set1_a: Optional[int],
    set1_b: Optional[int],
    set2_a: Optional[int] = None,
    set2_b: Optional[int] = None,
    set3_a: Optional[int] = None,
    set3_b: Optional[int] = None,
    allow_draws: bool = False,
    number_of_sets: int = SetsFormat.BEST_OF_THREE,
    max_score: Optional[int] = None,
) -> Optional[ScoreRejection]:
    """
    Check a set of scores against the match format.

    Returns None if valid, or a ScoreRejection describing the first failed rule.
    Raises ValueError only for an unknown number_of_sets (a configuration bug).
    """
    fmt = SetsFormat(number_of_sets)
    bound = settings.MAX_SET_SCORE if max_score is None else max_score

    sets = ((set1_a, set1_b), (set2_a, set2_b), (set3_a, set3_b))
    for set_number, s in enumerate(sets, start=1):
        if not (_is_valid_score(s[0], bound) and _is_valid_score(s[1], bound)):
            return ScoreRejection(
                code=RejectionCode.OUT_OF_RANGE,
                message=f"Invalid score in set {set_number}. Allowed values: 0-{bound}.",
                set_number=set_number,
            )

    s1, s2, s3 = sets
    rejection = _require_set(s1, 1)
    if rejection:
        return rejection

    return _FORMAT_RULES[fmt](s1, s2, s3, allow_draws)


def determine_result(
    set1_a: Optional[int],
    set1_b: Optional[int],
    set2_a: Optional[int] = None,
    set2_b: Optional[int] = None,
    set3_a: Optional[int] = None,
    set3_b: Optional[int] = None,
    allow_draws: bool = False,
    number_of_sets: int = SetsFormat.BEST_OF_THREE,
) -> MatchOutcome:
    """
    Count sets won per side over the sets the format plays.

    Strict majority wins; equal counts give DRAW when draws are allowed and
    UNDECIDED otherwise. Missing or tied sets count for nobody.
    """
    fmt = SetsFormat(number_of_sets)
    sets = ((set1_a, set1_b), (set2_a, set2_b), (set3_a, set3_b))[: int(fmt)]

    winners = [_set_winner(s) for s in sets]
    sets_a = winners.count("A")
    sets_b = winners.count("B")

    if sets_a > sets_b:
        result = ResultType.WIN_A
    elif sets_b > sets_a:
        result = ResultType.WIN_B
    elif allow_draws:
        result = ResultType.DRAW
    else:
        result = ResultType.UNDECIDED
    return MatchOutcome(result_type=result, sets_a=sets_a, sets_b=sets_b)
