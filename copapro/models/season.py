from typing import Optional

from sqlmodel import Field, SQLModel


class Season(SQLModel):
    id: str
    league_id: Optional[str] = None
    name: Optional[str] = None
    allow_draws: bool = Field(default=False)
