"""
Round Robin Rules: circle-method pairing generation.

Logical rounds come from the classic circle (polygon) method:
- Odd team count: a BYE slot is appended so the working list is even.
- Slot 0 stays fixed; slot i meets slot M-1-i; pairings touching the BYE are skipped.
- After each round the last slot moves to position 1 and the rest shift right.

Every unordered pair meets exactly once per leg. A double round robin appends a
second leg with home/away swapped. A seed only reorders whole logical rounds.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from copapro.models.team import Team
from copapro.utils.shuffle import seeded_shuffle


@dataclass(frozen=True)
class Pairing:
    team_a: Team
    team_b: Team
    logical_round: int  # 1-based, after any seeded reordering


LogicalRound = List[Pairing]


def rr_matches_per_leg(team_count: int) -> int:
    """Return number of RR matches in one leg: C(n, 2) = n*(n-1)/2."""
    if team_count < 2:
        return 0
    return (team_count * (team_count - 1)) // 2


def rr_round_count(team_count: int) -> int:
    """
    Return number of logical rounds in one leg.
    Even n: n-1 rounds. Odd n: n rounds (with BYE).
    """
    if team_count < 2:
        return 0
    if team_count % 2 == 0:
        return team_count - 1
    return team_count


def circle_method_rounds(teams: Sequence[Team]) -> List[List[Pairing]]:
    """
    One leg of logical rounds for the given teams, in circle-method order.

    Returns [] for fewer than 2 teams.
    """
    if len(teams) < 2:
        return []

    slots: List[Optional[Team]] = list(teams)
    if len(slots) % 2 == 1:
        slots.append(None)  # BYE

    total = len(slots)
    half = total // 2
    rounds: List[List[Pairing]] = []

    for round_num in range(1, total):
        current: List[Pairing] = []
        for i in range(half):
            a, b = slots[i], slots[total - 1 - i]
            if a is None or b is None:
                continue
            current.append(Pairing(team_a=a, team_b=b, logical_round=round_num))
        rounds.append(current)
        # Rotate: keep 0, move last to second, shift others
        slots = [slots[0]] + [slots[-1]] + slots[1:-1]

    return rounds


def build_logical_rounds(
    teams: Sequence[Team],
    matches_per_pair: int = 1,
    seed: Optional[str] = None,
) -> List[LogicalRound]:
    """
    Logical rounds for a single or double round robin.

    - matches_per_pair == 2 appends a reversed second leg (team_a/team_b swapped).
    - A non-empty seed shuffles the order of the logical rounds (never the
      pairings inside a round); logical_round is renumbered to the final order.
    """
    first_leg = circle_method_rounds(teams)
    if not first_leg:
        return []

    rounds: List[List[Pairing]] = list(first_leg)
    if matches_per_pair == 2:
        rounds.extend(
            [Pairing(team_a=p.team_b, team_b=p.team_a, logical_round=0) for p in rnd]
            for rnd in first_leg
        )

    if seed:
        rounds = seeded_shuffle(rounds, seed)

    return [
        [Pairing(team_a=p.team_a, team_b=p.team_b, logical_round=idx) for p in rnd]
        for idx, rnd in enumerate(rounds, start=1)
    ]


def generate_pairings(
    teams: Sequence[Team],
    matches_per_pair: int = 1,
    seed: Optional[str] = None,
) -> List[Pairing]:
    """Flat pairing list; each Pairing still carries its logical_round."""
    return [p for rnd in build_logical_rounds(teams, matches_per_pair, seed) for p in rnd]
