from .config import default_league_config, load_league_config, load_league_config_file, parse_generation_config
from .distributions import box_muller, clamp, clamp_round, gaussian, linear_interpolate, round_half_away
from .randomness import SeededRandomSource, seeded_random, unseeded_random

__all__ = [
    "SeededRandomSource",
    "box_muller",
    "clamp",
    "clamp_round",
    "default_league_config",
    "gaussian",
    "linear_interpolate",
    "load_league_config",
    "load_league_config_file",
    "parse_generation_config",
    "round_half_away",
    "seeded_random",
    "unseeded_random",
]
