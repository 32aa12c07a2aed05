"""
Waitlist Substitution

Roster rules for a tournament:
- The first max_titulars (courts x 2 x team size) non-withdrawn inscriptions,
  by order_index, are active (TITULAR, or PROMOVIDO once promoted).
- Everyone after that waits as SUPLENTE.
- When an active player withdraws (DESISTIU), the SUPLENTE with the lowest
  order_index is PROMOVIDO and takes the withdrawn player's slot in their team.
- With nobody waiting, the slot stays vacated (None) and the caller decides
  what to do with the short team.

Reading the roster, deciding the promotion and writing roster + team back must
be one atomic unit per tournament on the caller's side; these functions only
compute the new values.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from copapro import settings
from copapro.models.inscription import Inscription, InscriptionStatus
from copapro.models.team import Team

logger = logging.getLogger(__name__)


class SubstitutionError(Exception):
    """Base exception for roster substitution errors"""

    pass


class InscriptionNotFoundError(SubstitutionError):
    """No inscription exists for the player"""

    pass


class InscriptionNotActiveError(SubstitutionError):
    """Withdrawal requested for a player who is not an active roster member"""

    pass


@dataclass
class WithdrawalOutcome:
    inscriptions: List[Inscription]
    teams: List[Team]
    withdrawn: Inscription
    promoted: Optional[Inscription] = None
    team_id: Optional[str] = None  # team whose slot changed, if the player was on one
    vacated: bool = False  # slot left empty: no substitute available

    @property
    def teams_changed(self) -> bool:
        return self.team_id is not None


def max_titulars(courts_count: int, team_size: Optional[int] = None) -> int:
    size = team_size if team_size is not None else settings.TEAM_SIZE
    return courts_count * 2 * size


def _by_order(inscriptions: Sequence[Inscription]) -> List[Inscription]:
    return sorted(inscriptions, key=lambda i: (i.order_index, i.id))


def active_inscriptions(inscriptions: Sequence[Inscription]) -> List[Inscription]:
    return [i for i in _by_order(inscriptions) if i.is_active]


def waitlist(inscriptions: Sequence[Inscription]) -> List[Inscription]:
    """SUPLENTE entries in promotion (FIFO) order."""
    return [i for i in _by_order(inscriptions) if i.status == InscriptionStatus.SUPLENTE]


def next_substitute(inscriptions: Sequence[Inscription]) -> Optional[Inscription]:
    queue = waitlist(inscriptions)
    return queue[0] if queue else None


def assign_initial_statuses(
    inscriptions: Sequence[Inscription],
    courts_count: int,
    team_size: Optional[int] = None,
) -> List[Inscription]:
    """
    Split registrations into starters and waitlist by order_index.

    DESISTIU entries are kept as-is and do not take a starter place; PROMOVIDO
    entries inside the starter block keep their status.
    """
    limit = max_titulars(courts_count, team_size)
    result: List[Inscription] = []
    active = 0
    for inscription in _by_order(inscriptions):
        if inscription.status == InscriptionStatus.DESISTIU:
            result.append(inscription)
            continue
        if active < limit:
            active += 1
            status = (
                InscriptionStatus.PROMOVIDO
                if inscription.status == InscriptionStatus.PROMOVIDO
                else InscriptionStatus.TITULAR
            )
        else:
            status = InscriptionStatus.SUPLENTE
        result.append(inscription.model_copy(update={"status": status}))
    return result


def withdraw_player(
    inscriptions: Sequence[Inscription],
    teams: Sequence[Team],
    player_id: str,
) -> WithdrawalOutcome:
    """
    Withdraw an active player and promote the next substitute.

    Returns new inscription and team lists (input order preserved); the inputs
    are not modified.

    Raises:
        InscriptionNotFoundError: player has no inscription
        InscriptionNotActiveError: player is SUPLENTE or already DESISTIU
    """
    target = next((i for i in inscriptions if i.player_id == player_id), None)
    if target is None:
        raise InscriptionNotFoundError(f"Player {player_id} is not registered")
    if not target.is_active:
        raise InscriptionNotActiveError(
            f"Player {player_id} is not an active roster member (status {target.status.value})"
        )

    withdrawn = target.model_copy(update={"status": InscriptionStatus.DESISTIU})
    substitute = next_substitute([i for i in inscriptions if i.id != target.id])
    promoted = None
    if substitute is not None:
        promoted = substitute.model_copy(
            update={"status": InscriptionStatus.PROMOVIDO, "replaces_inscription_id": target.id}
        )

    replaced = {withdrawn.id: withdrawn}
    if promoted is not None:
        replaced[promoted.id] = promoted
    new_inscriptions = [replaced.get(i.id, i) for i in inscriptions]

    outcome = WithdrawalOutcome(
        inscriptions=new_inscriptions,
        teams=list(teams),
        withdrawn=withdrawn,
        promoted=promoted,
    )

    for idx, team in enumerate(teams):
        if not team.has_player(player_id):
            continue
        new_player_id = promoted.player_id if promoted is not None else None
        outcome.teams[idx] = team.with_player_replaced(player_id, new_player_id)
        outcome.team_id = team.id
        outcome.vacated = promoted is None
        break

    if promoted is not None:
        logger.info(
            "Player %s withdrew; promoted %s (order %d)%s",
            player_id,
            promoted.player_id,
            promoted.order_index,
            f" into team {outcome.team_id}" if outcome.team_id else "",
        )
    else:
        logger.warning(
            "Player %s withdrew with an empty waitlist%s",
            player_id,
            f"; team {outcome.team_id} has a vacated slot" if outcome.vacated else "",
        )
    return outcome
