"""
Tests for greedy court-bounded round allocation.
"""

from collections import Counter

from copapro.models.team import Team
from copapro.services.round_robin import Pairing, build_logical_rounds
from copapro.services.slot_allocator import allocate_rounds, group_into_rounds
from tests.conftest import build_teams


def _team(team_id: str) -> Team:
    return Team(id=team_id, player_ids=[f"{team_id}-1", f"{team_id}-2"])


def _slots(scheduled):
    return [(p.round_index, p.court_index, p.team_a.id, p.team_b.id) for p in scheduled]


def test_enough_courts_one_physical_round_per_logical_round():
    scheduled = allocate_rounds(build_logical_rounds(build_teams(4)), courts_count=2)
    assert _slots(scheduled) == [
        (1, 0, "team-1", "team-4"),
        (1, 1, "team-2", "team-3"),
        (2, 0, "team-1", "team-3"),
        (2, 1, "team-4", "team-2"),
        (3, 0, "team-1", "team-2"),
        (3, 1, "team-3", "team-4"),
    ]


def test_single_court_spills_in_original_order():
    scheduled = allocate_rounds(build_logical_rounds(build_teams(4)), courts_count=1)
    assert _slots(scheduled) == [
        (1, 0, "team-1", "team-4"),
        (2, 0, "team-2", "team-3"),
        (3, 0, "team-1", "team-3"),
        (4, 0, "team-4", "team-2"),
        (5, 0, "team-1", "team-2"),
        (6, 0, "team-3", "team-4"),
    ]


def test_greedy_skips_conflicting_pairing_and_spills_it():
    a, b, c, d, e = (_team(x) for x in "ABCDE")
    logical = [[Pairing(a, b, 1), Pairing(a, c, 1), Pairing(d, e, 1)]]
    scheduled = allocate_rounds(logical, courts_count=2)
    assert _slots(scheduled) == [
        (1, 0, "A", "B"),
        (1, 1, "D", "E"),
        (2, 0, "A", "C"),
    ]


def test_logical_rounds_never_share_a_physical_round():
    scheduled = allocate_rounds(build_logical_rounds(build_teams(6)), courts_count=2)
    by_round = {}
    for p in scheduled:
        by_round.setdefault(p.round_index, set()).add(p.logical_round)
    assert all(len(logicals) == 1 for logicals in by_round.values())
    # 5 logical rounds of 3 matches on 2 courts -> 2 physical rounds each
    assert len(by_round) == 10


def test_court_bound_and_no_repeat_in_round():
    for courts in (1, 2, 3, 5):
        scheduled = allocate_rounds(build_logical_rounds(build_teams(7), 2), courts_count=courts)
        per_round = Counter(p.round_index for p in scheduled)
        assert max(per_round.values()) <= courts
        for rnd in group_into_rounds(scheduled):
            assert len(rnd.team_ids) == len(set(rnd.team_ids))


def test_round_count_grows_as_courts_shrink():
    logical = build_logical_rounds(build_teams(8))
    counts = [len({p.round_index for p in allocate_rounds(logical, c)}) for c in (4, 3, 2, 1)]
    assert counts[0] == 7
    assert counts == sorted(counts)


def test_slot_index_matches_court_index():
    scheduled = allocate_rounds(build_logical_rounds(build_teams(6)), courts_count=3)
    assert all(p.slot_index == p.court_index for p in scheduled)


def test_no_courts_gives_empty_allocation():
    assert allocate_rounds(build_logical_rounds(build_teams(4)), courts_count=0) == []


def test_group_into_rounds_orders_by_index_and_slot():
    scheduled = allocate_rounds(build_logical_rounds(build_teams(4)), courts_count=2)
    rounds = group_into_rounds(list(reversed(scheduled)))
    assert [r.index for r in rounds] == [1, 2, 3]
    assert [p.slot_index for p in rounds[0].pairings] == [0, 1]
