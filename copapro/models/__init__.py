from copapro.models.inscription import ACTIVE_STATUSES, Inscription, InscriptionStatus
from copapro.models.match import MatchRecord, MatchStatus, ResultType, SetFields
from copapro.models.ranking_entry import RankingEntry
from copapro.models.season import Season
from copapro.models.team import Team
from copapro.models.tournament_format import SetsFormat, TournamentFormatConfig

__all__ = [
    "Team",
    "MatchRecord",
    "MatchStatus",
    "ResultType",
    "SetFields",
    "Season",
    "SetsFormat",
    "TournamentFormatConfig",
    "Inscription",
    "InscriptionStatus",
    "ACTIVE_STATUSES",
    "RankingEntry",
]
