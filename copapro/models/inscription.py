from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class InscriptionStatus(str, Enum):
    TITULAR = "TITULAR"  # active starter
    SUPLENTE = "SUPLENTE"  # waitlisted
    PROMOVIDO = "PROMOVIDO"  # waitlisted, promoted to active
    DESISTIU = "DESISTIU"  # withdrawn


ACTIVE_STATUSES = frozenset({InscriptionStatus.TITULAR, InscriptionStatus.PROMOVIDO})


class Inscription(SQLModel):
    id: str
    tournament_id: Optional[str] = None
    player_id: str
    order_index: int = Field(ge=0)  # registration order
    status: InscriptionStatus = Field(default=InscriptionStatus.SUPLENTE)
    replaces_inscription_id: Optional[str] = None  # set on promotion

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
