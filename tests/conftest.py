from typing import Callable, List

import pytest

from copapro.models.match import MatchRecord, MatchStatus, ResultType
from copapro.models.team import Team


def build_teams(n: int) -> List[Team]:
    """n doubles teams team-1..team-n with players p1..p(2n)."""
    return [
        Team(id=f"team-{i + 1}", index=i, player_ids=[f"p{2 * i + 1}", f"p{2 * i + 2}"])
        for i in range(n)
    ]


def build_match(**overrides) -> MatchRecord:
    """Finished 6-3 6-4 win for team A (p1/p2) over team B (p3/p4) unless overridden."""
    data = {
        "id": "m1",
        "team_a": Team(id="teamA", index=0, player_ids=["p1", "p2"]),
        "team_b": Team(id="teamB", index=1, player_ids=["p3", "p4"]),
        "set1_a": 6,
        "set1_b": 3,
        "set2_a": 6,
        "set2_b": 4,
        "set3_a": None,
        "set3_b": None,
        "status": MatchStatus.FINISHED,
        "result_type": ResultType.WIN_A,
    }
    data.update(overrides)
    return MatchRecord(**data)


@pytest.fixture(name="make_teams")
def make_teams_fixture() -> Callable[[int], List[Team]]:
    return build_teams


@pytest.fixture(name="make_match")
def make_match_fixture() -> Callable[..., MatchRecord]:
    return build_match
