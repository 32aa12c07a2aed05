"""
Slot Allocator: deterministic packing of logical rounds into court-bounded rounds

Each logical round is split into one or more physical rounds with a greedy
first-fit pass: walk the remaining pairings in their original order and take a
pairing while a court is free and neither team is already in the block.
Leftovers spill into the next physical round.

Non-goals:
- Maximum matching / optimal packing (the greedy order is part of the contract:
  changing it moves pairings to different rounds)
- Mixing pairings from different logical rounds in one physical round
- Time slots, venues or rest rules
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Tuple

from copapro.models.team import Team
from copapro.services.round_robin import Pairing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledPairing:
    team_a: Team
    team_b: Team
    round_index: int  # 1-based physical round, sequential across the tournament
    court_index: int  # 0-based
    slot_index: int  # 0-based position within the round (== court_index)
    logical_round: int


@dataclass
class Round:
    index: int
    pairings: List[ScheduledPairing] = field(default_factory=list)

    @property
    def team_ids(self) -> List[str]:
        return [tid for p in self.pairings for tid in (p.team_a.id, p.team_b.id)]


def _take_block(remaining: Sequence[Pairing], courts_count: int) -> Tuple[List[Pairing], List[Pairing]]:
    """Split remaining into (block, leftover) using one greedy pass."""
    block: List[Pairing] = []
    leftover: List[Pairing] = []
    busy: Set[str] = set()

    for pairing in remaining:
        a_id, b_id = pairing.team_a.id, pairing.team_b.id
        if len(block) < courts_count and a_id not in busy and b_id not in busy:
            block.append(pairing)
            busy.add(a_id)
            busy.add(b_id)
        else:
            leftover.append(pairing)

    return block, leftover


def allocate_rounds(
    logical_rounds: Sequence[Sequence[Pairing]],
    courts_count: int,
) -> List[ScheduledPairing]:
    """
    Assign pairings to (round_index, court_index) slots.

    Args:
        logical_rounds: Pairings grouped by logical round, in play order
        courts_count: Courts available per physical round

    Returns:
        Flat list ordered by round_index, then court_index. Empty when
        courts_count < 1 (nothing can be placed).
    """
    if courts_count < 1:
        logger.warning("Cannot allocate rounds with courts_count=%s", courts_count)
        return []

    result: List[ScheduledPairing] = []
    round_index = 1

    for logical in logical_rounds:
        remaining: List[Pairing] = list(logical)
        while remaining:
            block, remaining = _take_block(remaining, courts_count)
            for court, pairing in enumerate(block):
                result.append(
                    ScheduledPairing(
                        team_a=pairing.team_a,
                        team_b=pairing.team_b,
                        round_index=round_index,
                        court_index=court,
                        slot_index=court,
                        logical_round=pairing.logical_round,
                    )
                )
            logger.debug(
                "Round %d: %d pairing(s) placed, %d spill over", round_index, len(block), len(remaining)
            )
            round_index += 1

    return result


def group_into_rounds(scheduled: Sequence[ScheduledPairing]) -> List[Round]:
    """Group a flat allocation into Round values sorted by index."""
    by_index: Dict[int, List[ScheduledPairing]] = defaultdict(list)
    for pairing in scheduled:
        by_index[pairing.round_index].append(pairing)

    return [
        Round(index=idx, pairings=sorted(by_index[idx], key=lambda p: p.slot_index))
        for idx in sorted(by_index)
    ]
