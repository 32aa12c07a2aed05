"""
Random Team Formation
Deterministically splits a player list into fixed-size teams from a seed.
"""

import logging
from typing import List, Optional, Sequence

from copapro import settings
from copapro.models.team import Team
from copapro.utils.shuffle import seeded_shuffle

logger = logging.getLogger(__name__)


class TeamFormationError(Exception):
    """Raised when players cannot be split into full teams"""

    pass


def generate_random_teams(
    player_ids: Sequence[str],
    seed: Optional[str],
    team_size: Optional[int] = None,
    id_prefix: str = "team",
) -> List[Team]:
    """
    Shuffle players with the seed and chunk them into teams of team_size.

    Team ids are f"{id_prefix}-{n}" (1-based) and index follows creation order.
    Same players + same seed always produce the same teams.

    Raises:
        TeamFormationError: player count is not a multiple of team_size
    """
    size = team_size if team_size is not None else settings.TEAM_SIZE
    if size < 1:
        raise TeamFormationError(f"Team size must be positive, got {size}")
    if len(player_ids) % size != 0:
        raise TeamFormationError(
            f"{len(player_ids)} player(s) cannot form teams of {size}; add or remove players"
        )

    shuffled = seeded_shuffle(player_ids, seed)
    teams = [
        Team(
            id=f"{id_prefix}-{n}",
            index=n - 1,
            player_ids=shuffled[start:start + size],
            is_random_generated=True,
        )
        for n, start in enumerate(range(0, len(shuffled), size), start=1)
    ]
    logger.info("Formed %d random team(s) of %d from %d player(s)", len(teams), size, len(player_ids))
    return teams
