"""
Match scoring workflow.

Gate every score update through match_rules, then stamp the result on a copy
of the match. Nothing is partially applied: a rejected score leaves the match
untouched.
"""

import logging
from typing import Iterable, Optional, Tuple

from copapro.models.match import MatchRecord, MatchStatus, ResultType, SetFields
from copapro.models.tournament_format import SetsFormat
from copapro.services.match_rules import ScoreRejection, determine_result, validate_match_scores

logger = logging.getLogger(__name__)

_EMPTY_SETS = {
    "set1_a": None,
    "set1_b": None,
    "set2_a": None,
    "set2_b": None,
    "set3_a": None,
    "set3_b": None,
}


class InvalidScoreError(Exception):
    """Raised when a submitted score fails validation"""

    def __init__(self, rejection: ScoreRejection):
        super().__init__(rejection.message)
        self.rejection = rejection


class TournamentIncompleteError(Exception):
    """Raised when a tournament is closed with matches still to play"""

    pass


def record_match_score(
    match: MatchRecord,
    scores: SetFields,
    allow_draws: bool,
    number_of_sets: int = SetsFormat.BEST_OF_THREE,
    max_score: Optional[int] = None,
) -> MatchRecord:
    """
    Validate scores and return the match as FINISHED with its result.

    Args:
        match: Match being scored (not modified)
        scores: (set1_a, set1_b, set2_a, set2_b, set3_a, set3_b)
        allow_draws: Season draw policy
        number_of_sets: Match format (1, 2 or 3)

    Raises:
        InvalidScoreError: scores rejected; .rejection holds the reason
    """
    rejection = validate_match_scores(
        *scores, allow_draws=allow_draws, number_of_sets=number_of_sets, max_score=max_score
    )
    if rejection:
        raise InvalidScoreError(rejection)

    outcome = determine_result(*scores, allow_draws=allow_draws, number_of_sets=number_of_sets)
    if outcome.result_type == ResultType.WIN_A:
        winner_team_id = match.team_a.id
    elif outcome.result_type == ResultType.WIN_B:
        winner_team_id = match.team_b.id
    else:
        winner_team_id = None

    set1_a, set1_b, set2_a, set2_b, set3_a, set3_b = scores
    logger.info(
        "Match %s finished: %s (%d-%d in sets)",
        match.id,
        outcome.result_type.value,
        outcome.sets_a,
        outcome.sets_b,
    )
    return match.model_copy(
        update={
            "set1_a": set1_a,
            "set1_b": set1_b,
            "set2_a": set2_a,
            "set2_b": set2_b,
            "set3_a": set3_a,
            "set3_b": set3_b,
            "status": MatchStatus.FINISHED,
            "result_type": outcome.result_type,
            "winner_team_id": winner_team_id,
        }
    )


def reset_match(match: MatchRecord) -> MatchRecord:
    """Return the match back in SCHEDULED state with no scores."""
    return match.model_copy(
        update={
            **_EMPTY_SETS,
            "status": MatchStatus.SCHEDULED,
            "result_type": ResultType.UNDECIDED,
            "winner_team_id": None,
        }
    )


def tournament_progress(matches: Iterable[MatchRecord]) -> Tuple[int, int]:
    """Return (finished, total)."""
    statuses = [m.is_finished for m in matches]
    return sum(statuses), len(statuses)


def ensure_tournament_complete(matches: Iterable[MatchRecord]) -> None:
    """
    Raises:
        TournamentIncompleteError: at least one match is not FINISHED
    """
    finished, total = tournament_progress(matches)
    if finished < total:
        raise TournamentIncompleteError(
            f"{total - finished} of {total} match(es) still to play; finish them before closing the tournament"
        )
