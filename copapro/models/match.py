from enum import Enum
from typing import Optional, Tuple

from sqlmodel import Field, SQLModel

from copapro.models.team import Team

SetFields = Tuple[
    Optional[int], Optional[int], Optional[int], Optional[int], Optional[int], Optional[int]
]


class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    FINISHED = "FINISHED"


class ResultType(str, Enum):
    WIN_A = "WIN_A"
    WIN_B = "WIN_B"
    DRAW = "DRAW"
    UNDECIDED = "UNDECIDED"


class MatchRecord(SQLModel):
    id: Optional[str] = None
    tournament_id: Optional[str] = None
    round_index: Optional[int] = None  # 1-based physical round
    court_index: Optional[int] = None
    slot_index: Optional[int] = None

    team_a: Team
    team_b: Team

    # Raw set scores; range/legality is checked by match_rules, not here
    set1_a: Optional[int] = None
    set1_b: Optional[int] = None
    set2_a: Optional[int] = None
    set2_b: Optional[int] = None
    set3_a: Optional[int] = None
    set3_b: Optional[int] = None

    status: MatchStatus = Field(default=MatchStatus.SCHEDULED)
    result_type: ResultType = Field(default=ResultType.UNDECIDED)
    winner_team_id: Optional[str] = None

    @property
    def set_fields(self) -> SetFields:
        return (self.set1_a, self.set1_b, self.set2_a, self.set2_b, self.set3_a, self.set3_b)

    @property
    def is_finished(self) -> bool:
        return self.status == MatchStatus.FINISHED
