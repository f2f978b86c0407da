from .core import seeded_random
from .generation import LeagueGenerator, LeagueValidator

__all__ = ["LeagueGenerator", "LeagueValidator", "seeded_random"]
