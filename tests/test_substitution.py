"""
Tests for roster status assignment and waitlist substitution.
"""

import pytest

from copapro.models.inscription import Inscription, InscriptionStatus
from copapro.models.team import Team
from copapro.services.substitution import (
    InscriptionNotActiveError,
    InscriptionNotFoundError,
    SubstitutionError,
    active_inscriptions,
    assign_initial_statuses,
    max_titulars,
    next_substitute,
    waitlist,
    withdraw_player,
)

T = InscriptionStatus.TITULAR
S = InscriptionStatus.SUPLENTE


def _insc(n: int, status: InscriptionStatus) -> Inscription:
    return Inscription(id=f"i{n}", player_id=f"p{n}", order_index=n, status=status)


@pytest.fixture
def roster():
    # 4 starters, waitlist with order 7 registered before order 5 in the list
    return [_insc(1, T), _insc(2, T), _insc(3, T), _insc(4, T), _insc(7, S), _insc(5, S)]


@pytest.fixture
def teams():
    return [
        Team(id="team-1", index=0, player_ids=["p1", "p2"]),
        Team(id="team-2", index=1, player_ids=["p3", "p4"]),
    ]


def test_max_titulars():
    assert max_titulars(2, 2) == 8
    assert max_titulars(1, 1) == 2


def test_assign_initial_statuses():
    regs = [Inscription(id=f"i{n}", player_id=f"p{n}", order_index=n) for n in (6, 1, 3, 2, 5, 4)]
    regs.append(Inscription(id="i0", player_id="p0", order_index=0, status=InscriptionStatus.DESISTIU))
    assigned = assign_initial_statuses(regs, courts_count=1, team_size=2)
    assert [(i.player_id, i.status) for i in assigned] == [
        ("p0", InscriptionStatus.DESISTIU),
        ("p1", T),
        ("p2", T),
        ("p3", T),
        ("p4", T),
        ("p5", S),
        ("p6", S),
    ]


def test_waitlist_is_fifo(roster):
    assert [i.order_index for i in waitlist(roster)] == [5, 7]
    assert next_substitute(roster).order_index == 5
    assert [i.player_id for i in active_inscriptions(roster)] == ["p1", "p2", "p3", "p4"]


def test_withdrawal_promotes_lowest_order_index(roster, teams):
    outcome = withdraw_player(roster, teams, "p3")
    assert outcome.withdrawn.status == InscriptionStatus.DESISTIU
    assert outcome.promoted.player_id == "p5"
    assert outcome.promoted.status == InscriptionStatus.PROMOVIDO
    assert outcome.promoted.replaces_inscription_id == "i3"
    statuses = {i.player_id: i.status for i in outcome.inscriptions}
    assert statuses["p7"] == S


def test_substitute_takes_the_same_team_slot(roster, teams):
    outcome = withdraw_player(roster, teams, "p3")
    assert outcome.team_id == "team-2"
    assert outcome.teams_changed
    assert outcome.teams[1].player_ids == ["p5", "p4"]
    assert outcome.teams[0].player_ids == ["p1", "p2"]
    assert not outcome.vacated


def test_inputs_are_not_modified(roster, teams):
    withdraw_player(roster, teams, "p3")
    assert roster[2].status == T
    assert teams[1].player_ids == ["p3", "p4"]


def test_empty_waitlist_leaves_vacated_slot(teams):
    roster = [_insc(1, T), _insc(2, T), _insc(3, T), _insc(4, T)]
    outcome = withdraw_player(roster, teams, "p2")
    assert outcome.promoted is None
    assert outcome.vacated
    assert outcome.teams[0].player_ids == ["p1", None]


def test_promoted_player_can_withdraw_again(roster, teams):
    first = withdraw_player(roster, teams, "p3")
    second = withdraw_player(first.inscriptions, first.teams, "p5")
    assert second.promoted.player_id == "p7"
    assert second.teams[1].player_ids == ["p7", "p4"]


def test_active_player_without_team_is_still_replaced_on_roster(roster):
    outcome = withdraw_player(roster, [], "p1")
    assert outcome.promoted.player_id == "p5"
    assert outcome.team_id is None
    assert not outcome.vacated


def test_withdrawing_a_substitute_is_rejected(roster, teams):
    with pytest.raises(InscriptionNotActiveError):
        withdraw_player(roster, teams, "p5")


def test_withdrawing_twice_is_rejected(roster, teams):
    outcome = withdraw_player(roster, teams, "p1")
    with pytest.raises(InscriptionNotActiveError):
        withdraw_player(outcome.inscriptions, outcome.teams, "p1")


def test_unknown_player_is_rejected(roster, teams):
    with pytest.raises(InscriptionNotFoundError):
        withdraw_player(roster, teams, "nobody")
    assert issubclass(InscriptionNotFoundError, SubstitutionError)
