from __future__ import annotations

import json
from pathlib import Path

import pytest

from lgf.contracts import ConfigError, GenerationPolicy, MetricKind
from lgf.core import default_league_config, load_league_config, load_league_config_file
from lgf.generation import LeagueGenerator
from tests.helpers import DEFAULT_CONFIG_PAYLOAD


def test_defaults_match_reference_squad_config() -> None:
    config = default_league_config()
    squad = config.squad_size
    assert (squad.min_value, squad.max_value, squad.average_value) == (18, 32, 25)
    assert (squad.reputation_influence, squad.random_variation) == (0.6, 0.2)
    assert squad.kind == MetricKind.SQUAD_SIZE
    assert config.policy == GenerationPolicy()
    assert config.policy.balance_threshold == 0.8
    assert config.policy.ramp_jitter == 5
    assert config.policy.deviation_threshold == 5.0
    assert config.policy.squad_floor == 11
    assert list(config.age_bands)[0] == (17, 20)


def test_payload_overrides_are_applied() -> None:
    config = load_league_config({**DEFAULT_CONFIG_PAYLOAD, "policy": {"deviation_threshold": 7}})
    assert config.team_count == 12
    assert config.stadium_capacity.max_value == 90000
    assert config.policy.deviation_threshold == 7.0
    assert list(config.age_bands.items()) == [((17, 20), 0.15), ((21, 28), 0.6), ((29, 36), 0.25)]


def test_partial_metric_payload_keeps_other_defaults() -> None:
    config = load_league_config({"squad_size": {"max_value": 40}})
    assert config.squad_size.max_value == 40
    assert config.squad_size.min_value == 18


def test_rejects_malformed_bounds_with_field_path() -> None:
    with pytest.raises(ConfigError) as exc_info:
        load_league_config({"squad_size": {"average_value": 40}})
    assert exc_info.value.field_path == "squad_size.average_value"


def test_rejects_wrong_types_and_unknown_fields() -> None:
    with pytest.raises(ConfigError) as exc_info:
        load_league_config({"team_count": "twenty"})
    assert exc_info.value.field_path == "team_count"
    with pytest.raises(ConfigError):
        load_league_config({"competition_balance": True})
    with pytest.raises(ConfigError):
        load_league_config({"stadium": {}})
    with pytest.raises(ConfigError):
        load_league_config({"squad_size": {"jitter": 1}})


def test_rejects_bad_age_bands() -> None:
    with pytest.raises(ConfigError):
        load_league_config({"age_bands": []})
    with pytest.raises(ConfigError):
        load_league_config({"age_bands": [{"low": 30, "high": 20, "weight": 1}]})
    with pytest.raises(ConfigError):
        load_league_config({"age_bands": [{"low": 20, "weight": 1}]})


def test_rejects_age_bands_that_cannot_be_drawn() -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_league_config({**DEFAULT_CONFIG_PAYLOAD, "age_bands": [{"low": 18, "high": 30, "weight": 0.0}]})
    assert excinfo.value.field_path == "age_bands"
    with pytest.raises(ConfigError):
        load_league_config(
            {
                "age_bands": [
                    {"low": 18, "high": 24, "weight": 0.0},
                    {"low": 25, "high": 30, "weight": 0.0},
                ]
            }
        )
    with pytest.raises(ConfigError):
        load_league_config({"age_bands": [{"low": 18, "high": 30, "weight": float("nan")}]})
    with pytest.raises(ConfigError):
        load_league_config({"age_bands": [{"low": 18, "high": 30, "weight": float("inf")}]})


@pytest.mark.parametrize("spread", [float("nan"), float("inf"), -1.0])
def test_rejects_unusable_skill_spread(spread: float) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_league_config({"skill_spread": spread})
    assert excinfo.value.field_path == "skill_spread"


def test_partially_zero_age_bands_still_generate() -> None:
    config = load_league_config(
        {
            **DEFAULT_CONFIG_PAYLOAD,
            "age_bands": [
                {"low": 17, "high": 20, "weight": 0.0},
                {"low": 21, "high": 30, "weight": 1.0},
            ],
        }
    )
    result = LeagueGenerator(config).generate(1)
    assert not result.failures
    assert all(21 <= player.age <= 30 for team in result.teams for player in team.players)


def test_rejects_bad_reputation_bounds() -> None:
    with pytest.raises(ConfigError):
        load_league_config({"min_reputation": 90, "max_reputation": 40})


def test_loads_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "league.json"
    path.write_text(json.dumps(DEFAULT_CONFIG_PAYLOAD), encoding="utf-8")
    assert load_league_config_file(path) == load_league_config(DEFAULT_CONFIG_PAYLOAD)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_league_config_file(broken)
