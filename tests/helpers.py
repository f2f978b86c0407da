from __future__ import annotations

from lgf.contracts import GenerationConfig, MetricKind

DEFAULT_CONFIG_PAYLOAD = {
    "team_count": 12,
    "min_reputation": 40,
    "max_reputation": 85,
    "competition_balance": 0.5,
    "squad_size": {
        "min_value": 18,
        "max_value": 32,
        "average_value": 25,
        "reputation_influence": 0.6,
        "random_variation": 0.2,
    },
    "stadium_capacity": {
        "min_value": 5000,
        "max_value": 90000,
        "average_value": 25000,
        "reputation_influence": 0.8,
        "random_variation": 0.3,
    },
    "player_skill": {
        "min_value": 30,
        "max_value": 95,
        "average_value": 60,
        "reputation_influence": 0.7,
        "random_variation": 0.0,
    },
    "skill_spread": 8.0,
    "age_bands": [
        {"low": 17, "high": 20, "weight": 0.15},
        {"low": 21, "high": 28, "weight": 0.6},
        {"low": 29, "high": 36, "weight": 0.25},
    ],
}


def squad_config(
    *,
    min_value: float = 18,
    max_value: float = 32,
    average_value: float = 25,
    reputation_influence: float = 0.6,
    random_variation: float = 0.2,
) -> GenerationConfig:
    return GenerationConfig(
        min_value=min_value,
        max_value=max_value,
        average_value=average_value,
        reputation_influence=reputation_influence,
        random_variation=random_variation,
        kind=MetricKind.SQUAD_SIZE,
    )
