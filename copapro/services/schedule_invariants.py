"""
Schedule Invariant Verifier
===========================
Read-only checks over an allocated round-robin schedule.

Invariants:
  A) No team appears twice in the same physical round
  B) No physical round holds more pairings than there are courts
  C) Every unordered pair of teams meets exactly matches_per_pair times,
     and in a double round robin once with each side as team_a
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set

from copapro.services.slot_allocator import ScheduledPairing

TEAM_TWICE_IN_ROUND = "TEAM_TWICE_IN_ROUND"
COURT_OVERFLOW = "COURT_OVERFLOW"
PAIR_COUNT = "PAIR_COUNT"


@dataclass
class ScheduleViolation:
    code: str
    message: str
    round_index: Optional[int] = None
    team_id: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)


def _check_rounds(scheduled: Sequence[ScheduledPairing], courts_count: int) -> List[ScheduleViolation]:
    violations: List[ScheduleViolation] = []
    by_round: Dict[int, List[ScheduledPairing]] = defaultdict(list)
    for p in scheduled:
        by_round[p.round_index].append(p)

    for round_index in sorted(by_round):
        pairings = by_round[round_index]
        if len(pairings) > courts_count:
            violations.append(
                ScheduleViolation(
                    code=COURT_OVERFLOW,
                    message=f"Round {round_index} has {len(pairings)} matches for {courts_count} court(s)",
                    round_index=round_index,
                    context={"matches": len(pairings), "courts": courts_count},
                )
            )
        seen = Counter(tid for p in pairings for tid in (p.team_a.id, p.team_b.id))
        for team_id in sorted(tid for tid, n in seen.items() if n > 1):
            violations.append(
                ScheduleViolation(
                    code=TEAM_TWICE_IN_ROUND,
                    message=f"Team {team_id} plays {seen[team_id]} times in round {round_index}",
                    round_index=round_index,
                    team_id=team_id,
                )
            )
    return violations


def _check_pairs(scheduled: Sequence[ScheduledPairing], matches_per_pair: int) -> List[ScheduleViolation]:
    violations: List[ScheduleViolation] = []
    team_ids: Set[str] = set()
    unordered: Counter = Counter()
    ordered: Counter = Counter()
    for p in scheduled:
        team_ids.update((p.team_a.id, p.team_b.id))
        unordered[frozenset((p.team_a.id, p.team_b.id))] += 1
        ordered[(p.team_a.id, p.team_b.id)] += 1

    ids = sorted(team_ids)
    for i, a in enumerate(ids):
        for b in ids[i + 1:]:
            key: FrozenSet[str] = frozenset((a, b))
            count = unordered.get(key, 0)
            reversed_ok = matches_per_pair != 2 or (ordered.get((a, b)) == 1 and ordered.get((b, a)) == 1)
            if count != matches_per_pair or not reversed_ok:
                violations.append(
                    ScheduleViolation(
                        code=PAIR_COUNT,
                        message=f"Pair {a} / {b} meets {count} time(s), expected {matches_per_pair}",
                        context={"pair": (a, b), "count": count},
                    )
                )
    return violations


def verify_schedule(
    scheduled: Sequence[ScheduledPairing],
    courts_count: int,
    matches_per_pair: Optional[int] = None,
) -> List[ScheduleViolation]:
    """
    Return every violated invariant; an empty list means the schedule is sound.

    Pair completeness (C) is only checked when matches_per_pair is given.
    """
    violations = _check_rounds(scheduled, courts_count)
    if matches_per_pair is not None:
        violations.extend(_check_pairs(scheduled, matches_per_pair))
    return violations
