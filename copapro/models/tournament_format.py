from enum import IntEnum
from typing import Optional

from sqlmodel import Field, SQLModel

from copapro import settings


class SetsFormat(IntEnum):
    ONE_SET = 1
    TWO_SETS = 2
    BEST_OF_THREE = 3


class TournamentFormatConfig(SQLModel):
    courts_count: int = Field(gt=0)
    matches_per_pair: int = Field(default=1, ge=1, le=2)  # 1 = single RR, 2 = double RR
    number_of_sets: SetsFormat = Field(default=SetsFormat(settings.DEFAULT_SETS))
    seed: Optional[str] = None
    team_size: int = Field(default=settings.TEAM_SIZE, ge=1)
