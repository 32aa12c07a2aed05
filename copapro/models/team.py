from typing import List, Optional

from sqlmodel import Field, SQLModel


class Team(SQLModel):
    id: str
    index: int = Field(default=0, ge=0)  # Stable ordinal; only used for deterministic ordering
    name: Optional[str] = None
    # Roster slots; a slot is None once vacated by a withdrawal with no substitute
    player_ids: List[Optional[str]] = Field(default_factory=list)
    is_random_generated: bool = Field(default=False)

    @property
    def active_player_ids(self) -> List[str]:
        return [pid for pid in self.player_ids if pid is not None]

    def has_player(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def with_player_replaced(self, old_player_id: str, new_player_id: Optional[str]) -> "Team":
        """Return a copy with the slot held by old_player_id given to new_player_id."""
        slots = list(self.player_ids)
        slots[slots.index(old_player_id)] = new_player_id
        return self.model_copy(update={"player_ids": slots})
