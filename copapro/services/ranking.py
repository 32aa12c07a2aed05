"""
Season ranking.

POINT SYSTEM (per player, per finished match):
  1) Set points: +2 per set won by the player's team
  2) Match result: Win=+3, Draw=+1 (only when the season allows draws), Loss=+0
  3) Total = set points + match result points

TIE-BREAKERS (in order, all descending):
  points_total, wins, sets_diff, sets_won, draws
Entries still tied after all five keep their input order.

Everything here is a pure function over values: deltas are folded into new
RankingEntry objects and nothing is cached between calls.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from copapro.models.match import MatchRecord, ResultType
from copapro.models.ranking_entry import RankingEntry
from copapro.models.season import Season
from copapro.services.score_parser import count_sets_won, parse_sets

logger = logging.getLogger(__name__)

POINTS_PER_SET = 2
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0


@dataclass(frozen=True)
class PlayerDelta:
    player_id: str
    points: int
    wins: int
    draws: int
    losses: int
    sets_won: int
    sets_lost: int
    matches_played: int = 1


@dataclass(frozen=True)
class _SideResult:
    bonus: int
    wins: int = 0
    draws: int = 0
    losses: int = 0


_NO_RESULT = _SideResult(bonus=0)


def _side_results(result_type: ResultType, allow_draws: bool) -> Tuple[_SideResult, _SideResult]:
    if result_type == ResultType.WIN_A:
        return _SideResult(bonus=WIN_POINTS, wins=1), _SideResult(bonus=LOSS_POINTS, losses=1)
    if result_type == ResultType.WIN_B:
        return _SideResult(bonus=LOSS_POINTS, losses=1), _SideResult(bonus=WIN_POINTS, wins=1)
    if result_type == ResultType.DRAW and allow_draws:
        draw = _SideResult(bonus=DRAW_POINTS, draws=1)
        return draw, draw
    return _NO_RESULT, _NO_RESULT


def compute_match_contribution(match: MatchRecord, allow_draws: bool) -> List[PlayerDelta]:
    """
    Deltas for every player of a finished match; [] for any other status.

    Both players of a side get identical deltas. Vacated roster slots (None)
    get nothing, so a doubles match yields 4 deltas and a singles match 2.
    """
    if not match.is_finished:
        return []

    sets_a, sets_b = count_sets_won(parse_sets(match))
    side_a, side_b = _side_results(match.result_type, allow_draws)

    deltas: List[PlayerDelta] = []
    for team, side, won, lost in (
        (match.team_a, side_a, sets_a, sets_b),
        (match.team_b, side_b, sets_b, sets_a),
    ):
        for player_id in team.active_player_ids:
            deltas.append(
                PlayerDelta(
                    player_id=player_id,
                    points=won * POINTS_PER_SET + side.bonus,
                    wins=side.wins,
                    draws=side.draws,
                    losses=side.losses,
                    sets_won=won,
                    sets_lost=lost,
                )
            )
    return deltas


def fold_delta(entry: RankingEntry, delta: PlayerDelta) -> RankingEntry:
    """Return a new entry with delta added and sets_diff recomputed."""
    sets_won = entry.sets_won + delta.sets_won
    sets_lost = entry.sets_lost + delta.sets_lost
    return entry.model_copy(
        update={
            "points_total": entry.points_total + delta.points,
            "matches_played": entry.matches_played + delta.matches_played,
            "wins": entry.wins + delta.wins,
            "draws": entry.draws + delta.draws,
            "losses": entry.losses + delta.losses,
            "sets_won": sets_won,
            "sets_lost": sets_lost,
            "sets_diff": sets_won - sets_lost,
        }
    )


def aggregate_rankings(
    deltas: Iterable[PlayerDelta],
    member_ids: Sequence[str] = (),
    season_id: Optional[str] = None,
) -> List[RankingEntry]:
    """
    Fold deltas into one RankingEntry per player.

    member_ids pre-seeds zero entries so members without matches still rank.
    Output order: seeded members first (given order), then other players by
    first appearance. Field values do not depend on delta order.
    """
    entries: Dict[str, RankingEntry] = {}
    for player_id in member_ids:
        entries.setdefault(player_id, RankingEntry(player_id=player_id, season_id=season_id))

    for delta in deltas:
        current = entries.get(delta.player_id) or RankingEntry(player_id=delta.player_id, season_id=season_id)
        entries[delta.player_id] = fold_delta(current, delta)

    return list(entries.values())


def ranking_sort_key(entry: RankingEntry) -> Tuple[int, int, int, int, int]:
    """Sort key for standings. Lower = better."""
    return (-entry.points_total, -entry.wins, -entry.sets_diff, -entry.sets_won, -entry.draws)


def sort_rankings(entries: Iterable[RankingEntry]) -> List[RankingEntry]:
    """Return a new list in standings order (stable for full ties)."""
    return sorted(entries, key=ranking_sort_key)


def recompute_season_ranking(
    matches: Iterable[MatchRecord],
    season: Season,
    member_ids: Sequence[str] = (),
) -> List[RankingEntry]:
    """
    Full standings for a season from scratch.

    matches may contain unfinished matches; they contribute nothing.
    """
    finished = [m for m in matches if m.is_finished]
    deltas = [d for m in finished for d in compute_match_contribution(m, season.allow_draws)]
    standings = sort_rankings(aggregate_rankings(deltas, member_ids=member_ids, season_id=season.id))

    logger.info(
        "Recomputed ranking for season %s: %d finished match(es), %d player(s)",
        season.id,
        len(finished),
        len(standings),
    )
    return standings
