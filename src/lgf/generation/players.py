from __future__ import annotations

from typing import Mapping

from lgf.contracts import GeneratedPlayer, GenerationConfig, Position, PositionCounts, RandomSource
from lgf.core.distributions import clamp_round, gaussian
from lgf.generation.mapper import expected_metric

POSITION_ORDER = (Position.GOALKEEPER, Position.DEFENDER, Position.MIDFIELDER, Position.FORWARD)


def derive_player_skill(reputation: float, config: GenerationConfig, spread: float, source: RandomSource) -> int:
    """Gaussian skill around the noiseless reputation expectation.

    ``spread`` is the only noise source; ``config.random_variation`` is not used here.
    """
    center = expected_metric(reputation, config)
    return clamp_round(gaussian(center, spread, source), config.min_value, config.max_value)


def derive_player_age(age_bands: Mapping[tuple[int, int], float], source: RandomSource) -> int:
    low, high = source.weighted_choice(age_bands)
    return source.randint(low, high)


def build_squad(
    *,
    team_id: str,
    reputation: float,
    positions: PositionCounts,
    skill_config: GenerationConfig,
    skill_spread: float,
    age_bands: Mapping[tuple[int, int], float],
    source: RandomSource,
) -> list[GeneratedPlayer]:
    players: list[GeneratedPlayer] = []
    index = 1
    for position in POSITION_ORDER:
        for _ in range(positions.count(position)):
            players.append(
                GeneratedPlayer(
                    player_id=f"{team_id}_P{index:03d}",
                    team_id=team_id,
                    position=position,
                    skill=derive_player_skill(reputation, skill_config, skill_spread, source),
                    age=derive_player_age(age_bands, source),
                )
            )
            index += 1
    return players
