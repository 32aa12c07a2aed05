import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return int(raw)


# Upper bound of a single set score (0..MAX_SET_SCORE)
MAX_SET_SCORE: int = _int_env("COPAPRO_MAX_SET_SCORE", 7)

# Players per team; 2 for doubles, 1 for singles
TEAM_SIZE: int = _int_env("COPAPRO_TEAM_SIZE", 2)

# Match format used when a tournament does not say otherwise
DEFAULT_SETS: int = _int_env("COPAPRO_DEFAULT_SETS", 3)
