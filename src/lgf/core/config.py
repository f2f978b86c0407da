from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from lgf.contracts import (
    ConfigError,
    GenerationConfig,
    GenerationPolicy,
    LeagueGenerationConfig,
    MetricKind,
    PositionQuota,
)

DEFAULT_METRIC_CONFIGS: dict[MetricKind, dict[str, float]] = {
    MetricKind.SQUAD_SIZE: {
        "min_value": 18,
        "max_value": 32,
        "average_value": 25,
        "reputation_influence": 0.6,
        "random_variation": 0.2,
    },
    MetricKind.STADIUM_CAPACITY: {
        "min_value": 5_000,
        "max_value": 90_000,
        "average_value": 25_000,
        "reputation_influence": 0.8,
        "random_variation": 0.3,
    },
    MetricKind.PLAYER_SKILL: {
        "min_value": 30,
        "max_value": 95,
        "average_value": 60,
        "reputation_influence": 0.7,
        "random_variation": 0.0,
    },
}

DEFAULT_AGE_BANDS: dict[tuple[int, int], float] = {
    (17, 20): 0.14,
    (21, 24): 0.30,
    (25, 28): 0.30,
    (29, 32): 0.19,
    (33, 37): 0.07,
}

LEAGUE_FIELDS = {
    "team_count": 20,
    "min_reputation": 40,
    "max_reputation": 85,
    "competition_balance": 0.5,
    "skill_spread": 8.0,
}

METRIC_FIELDS = ("min_value", "max_value", "average_value", "reputation_influence", "random_variation")
POLICY_FIELDS = ("balance_threshold", "ramp_jitter", "deviation_threshold", "squad_floor")
QUOTA_FIELDS = ("goalkeeper", "defender", "midfielder", "forward")


def default_league_config() -> LeagueGenerationConfig:
    return load_league_config({})


def load_league_config(payload: Mapping[str, Any]) -> LeagueGenerationConfig:
    """Build a league config from nested plain data, falling back to defaults per field."""
    if not isinstance(payload, Mapping):
        raise ConfigError("league config payload must be an object", "<root>")
    unknown = sorted(
        set(payload)
        - set(LEAGUE_FIELDS)
        - {kind.value for kind in MetricKind}
        - {"policy", "position_quota", "age_bands"}
    )
    if unknown:
        raise ConfigError(f"unknown config fields: {', '.join(unknown)}", "<root>")

    metrics = {kind: parse_generation_config(payload.get(kind.value, {}), kind) for kind in MetricKind}
    return LeagueGenerationConfig(
        team_count=_int_field(payload, "team_count", LEAGUE_FIELDS["team_count"], "team_count"),
        min_reputation=_int_field(payload, "min_reputation", LEAGUE_FIELDS["min_reputation"], "min_reputation"),
        max_reputation=_int_field(payload, "max_reputation", LEAGUE_FIELDS["max_reputation"], "max_reputation"),
        competition_balance=_float_field(
            payload, "competition_balance", LEAGUE_FIELDS["competition_balance"], "competition_balance"
        ),
        squad_size=metrics[MetricKind.SQUAD_SIZE],
        stadium_capacity=metrics[MetricKind.STADIUM_CAPACITY],
        player_skill=metrics[MetricKind.PLAYER_SKILL],
        skill_spread=_float_field(payload, "skill_spread", LEAGUE_FIELDS["skill_spread"], "skill_spread"),
        position_quota=_parse_quota(payload.get("position_quota", {})),
        age_bands=_parse_age_bands(payload.get("age_bands")),
        policy=_parse_policy(payload.get("policy", {})),
    )


def load_league_config_file(path: Path) -> LeagueGenerationConfig:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc.msg}", str(path)) from exc
    return load_league_config(payload)


def parse_generation_config(payload: Mapping[str, Any], kind: MetricKind) -> GenerationConfig:
    if not isinstance(payload, Mapping):
        raise ConfigError("metric config must be an object", kind.value)
    unknown = sorted(set(payload) - set(METRIC_FIELDS))
    if unknown:
        raise ConfigError(f"unknown metric fields: {', '.join(unknown)}", kind.value)
    defaults = DEFAULT_METRIC_CONFIGS[kind]
    values = {
        name: _float_field(payload, name, defaults[name], f"{kind.value}.{name}")
        for name in METRIC_FIELDS
    }
    return GenerationConfig(kind=kind, **values)


def _parse_policy(payload: Mapping[str, Any]) -> GenerationPolicy:
    if not isinstance(payload, Mapping):
        raise ConfigError("policy must be an object", "policy")
    unknown = sorted(set(payload) - set(POLICY_FIELDS))
    if unknown:
        raise ConfigError(f"unknown policy fields: {', '.join(unknown)}", "policy")
    defaults = GenerationPolicy()
    return GenerationPolicy(
        balance_threshold=_float_field(
            payload, "balance_threshold", defaults.balance_threshold, "policy.balance_threshold"
        ),
        ramp_jitter=_int_field(payload, "ramp_jitter", defaults.ramp_jitter, "policy.ramp_jitter"),
        deviation_threshold=_float_field(
            payload, "deviation_threshold", defaults.deviation_threshold, "policy.deviation_threshold"
        ),
        squad_floor=_int_field(payload, "squad_floor", defaults.squad_floor, "policy.squad_floor"),
    )


def _parse_quota(payload: Mapping[str, Any]) -> PositionQuota:
    if not isinstance(payload, Mapping):
        raise ConfigError("position_quota must be an object", "position_quota")
    unknown = sorted(set(payload) - set(QUOTA_FIELDS))
    if unknown:
        raise ConfigError(f"unknown position_quota fields: {', '.join(unknown)}", "position_quota")
    defaults = PositionQuota()
    return PositionQuota(
        **{
            name: _float_field(payload, name, getattr(defaults, name), f"position_quota.{name}")
            for name in QUOTA_FIELDS
        }
    )


def _parse_age_bands(payload: Any) -> dict[tuple[int, int], float]:
    if payload is None:
        return dict(DEFAULT_AGE_BANDS)
    if not isinstance(payload, list):
        raise ConfigError("age_bands must be a list of {low, high, weight} objects", "age_bands")
    bands: dict[tuple[int, int], float] = {}
    for index, entry in enumerate(payload):
        path = f"age_bands[{index}]"
        if not isinstance(entry, Mapping):
            raise ConfigError("age band must be an object", path)
        for key in ("low", "high", "weight"):
            if key not in entry:
                raise ConfigError(f"age band missing '{key}'", path)
        band = (_int_field(entry, "low", 0, f"{path}.low"), _int_field(entry, "high", 0, f"{path}.high"))
        if band in bands:
            raise ConfigError(f"duplicate age band {band[0]}-{band[1]}", path)
        bands[band] = _float_field(entry, "weight", 0.0, f"{path}.weight")
    return bands


def _float_field(payload: Mapping[str, Any], name: str, default: float, field_path: str) -> float:
    raw = payload.get(name, default)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConfigError(f"expected a number, got {type(raw).__name__}", field_path)
    return float(raw)


def _int_field(payload: Mapping[str, Any], name: str, default: int, field_path: str) -> int:
    raw = payload.get(name, default)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"expected an integer, got {type(raw).__name__}", field_path)
    return raw
