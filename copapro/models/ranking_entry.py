from typing import Optional

from sqlmodel import Field, SQLModel


class RankingEntry(SQLModel):
    player_id: str
    season_id: Optional[str] = None
    points_total: int = Field(default=0)
    matches_played: int = Field(default=0)
    wins: int = Field(default=0)
    draws: int = Field(default=0)
    losses: int = Field(default=0)
    sets_won: int = Field(default=0)
    sets_lost: int = Field(default=0)
    sets_diff: int = Field(default=0)  # sets_won - sets_lost, recomputed on every fold
