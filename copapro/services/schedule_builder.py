"""
Schedule Builder

Turns a team list and a tournament format into a court-bounded round-robin
schedule: circle-method pairings (round_robin) packed into physical rounds
(slot_allocator). Also guards regeneration of a schedule that already has
results.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from copapro.models.match import MatchRecord
from copapro.models.team import Team
from copapro.models.tournament_format import TournamentFormatConfig
from copapro.services.round_robin import build_logical_rounds
from copapro.services.slot_allocator import Round, ScheduledPairing, allocate_rounds, group_into_rounds

logger = logging.getLogger(__name__)


class ScheduleLockedError(Exception):
    """Raised when regenerating would discard recorded results without confirmation"""

    pass


@dataclass
class Schedule:
    pairings: List[ScheduledPairing] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.pairings)

    @property
    def round_count(self) -> int:
        return len({p.round_index for p in self.pairings})

    def rounds(self) -> List[Round]:
        return group_into_rounds(self.pairings)


def generate_round_robin_schedule(teams: Sequence[Team], config: TournamentFormatConfig) -> Schedule:
    """
    Build the full schedule for a tournament.

    Fewer than 2 teams gives an empty schedule (no error). Identical teams,
    format and seed always give the identical schedule.
    """
    logical_rounds = build_logical_rounds(teams, config.matches_per_pair, config.seed)
    schedule = Schedule(pairings=allocate_rounds(logical_rounds, config.courts_count))

    logger.info(
        "Generated schedule: %d team(s), %d logical round(s), %d round(s), %d match(es), seeded=%s",
        len(teams),
        len(logical_rounds),
        schedule.round_count,
        schedule.match_count,
        bool(config.seed),
    )
    return schedule


def ensure_schedule_can_regenerate(matches: Sequence[MatchRecord], force: bool = False) -> None:
    """
    Refuse to replace a schedule that already holds finished matches.

    With force=True the check is skipped; the caller is then responsible for
    recomputing the season ranking since those results are discarded.
    """
    finished = sum(1 for m in matches if m.is_finished)
    if not finished:
        return
    if not force:
        raise ScheduleLockedError(
            f"Schedule has {finished} finished match(es); confirm regeneration to discard them"
        )
    logger.warning("Forcing schedule regeneration; discarding %d finished match(es)", finished)


def matches_from_schedule(schedule: Schedule, tournament_id: Optional[str] = None) -> List[MatchRecord]:
    """Fresh SCHEDULED match records for every slot of the schedule."""
    return [
        MatchRecord(
            tournament_id=tournament_id,
            round_index=p.round_index,
            court_index=p.court_index,
            slot_index=p.slot_index,
            team_a=p.team_a,
            team_b=p.team_b,
        )
        for p in schedule.pairings
    ]
