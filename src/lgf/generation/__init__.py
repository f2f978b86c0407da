from .league import (
    LeagueGenerator,
    build_distribution_report,
    derive_positioned_squad,
    derive_reputation_spread,
    derive_squad_sizes,
)
from .mapper import ReputationMetricMapper, expected_metric, map_reputation
from .players import build_squad, derive_player_age, derive_player_skill
from .validation import LeagueValidator

__all__ = [
    "LeagueGenerator",
    "LeagueValidator",
    "ReputationMetricMapper",
    "build_distribution_report",
    "build_squad",
    "derive_player_age",
    "derive_player_skill",
    "derive_positioned_squad",
    "derive_reputation_spread",
    "derive_squad_sizes",
    "expected_metric",
    "map_reputation",
]
