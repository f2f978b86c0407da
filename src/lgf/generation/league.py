from __future__ import annotations

import logging
import math
from typing import Sequence

from lgf.contracts import (
    ConfigError,
    DataError,
    EntityFailure,
    GeneratedTeam,
    GenerationConfig,
    GenerationPolicy,
    LeagueDistributionReport,
    LeagueGenerationConfig,
    LeagueGenerationResult,
    Position,
    PositionCounts,
    PositionQuota,
    RandomSource,
)
from lgf.core.distributions import clamp_round, linear_interpolate, round_half_away
from lgf.core.randomness import seeded_random
from lgf.generation.mapper import ReputationMetricMapper, map_reputation
from lgf.generation.players import build_squad
from lgf.generation.validation import LeagueValidator

_log = logging.getLogger("lgf.league")

OUTFIELD_POSITIONS = (Position.DEFENDER, Position.MIDFIELDER, Position.FORWARD)


def derive_squad_sizes(
    reputations: Sequence[float],
    config: GenerationConfig,
    source: RandomSource,
) -> list[int]:
    """One squad size per reputation, in input order."""
    return [map_reputation(reputation, config, source) for reputation in reputations]


def derive_reputation_spread(
    team_count: int,
    min_rep: int,
    max_rep: int,
    competition_balance: float,
    source: RandomSource,
    policy: GenerationPolicy | None = None,
) -> list[int]:
    """Generate one reputation per team inside ``[min_rep, max_rep]``.

    Balanced leagues (``competition_balance`` above the policy threshold) cluster
    around the midpoint within ``(1 - competition_balance) * (max_rep - min_rep)``.
    Other leagues follow a jittered linear ramp by team index. The result is
    shuffled so the ramp position does not encode a ranking.
    """
    policy = policy if policy is not None else GenerationPolicy()
    if team_count < 0:
        raise ConfigError("team_count must be non-negative", "team_count")
    if not (0 <= min_rep <= max_rep <= 100):
        raise ConfigError("reputation bounds must satisfy 0 <= min <= max <= 100", "min_reputation")
    if not (0.0 <= competition_balance <= 1.0):
        raise ConfigError("competition_balance must be in [0, 1]", "competition_balance")

    midpoint = (min_rep + max_rep) / 2.0
    values: list[int] = []
    if competition_balance > policy.balance_threshold:
        half_width = (1.0 - competition_balance) * (max_rep - min_rep)
        for _ in range(team_count):
            offset = (source.rand() - 0.5) * 2.0 * half_width
            values.append(clamp_round(midpoint + offset, min_rep, max_rep))
    else:
        for index in range(team_count):
            if team_count == 1:
                center = midpoint
            else:
                center = linear_interpolate(index / (team_count - 1), min_rep, max_rep)
            jitter = source.randint(-policy.ramp_jitter, policy.ramp_jitter)
            values.append(clamp_round(center + jitter, min_rep, max_rep))
    source.shuffle(values)
    return values


def derive_positioned_squad(
    squad_size: int,
    quota: PositionQuota | None = None,
    policy: GenerationPolicy | None = None,
    *,
    entity_id: str = "",
) -> PositionCounts:
    """Split a squad into positions, always keeping at least one goalkeeper.

    A squad below the fieldable floor is reported as a ``DataError``; it is not
    padded up to the floor.
    """
    quota = quota if quota is not None else PositionQuota()
    policy = policy if policy is not None else GenerationPolicy()
    if squad_size < policy.squad_floor:
        raise DataError(
            f"squad size {squad_size} is below the fieldable floor {policy.squad_floor}",
            entity_id=entity_id,
            error_code="SQUAD_BELOW_FLOOR",
        )

    goalkeepers = max(1, round_half_away(squad_size * quota.goalkeeper / quota.total()))
    goalkeepers = min(goalkeepers, squad_size)
    remaining = squad_size - goalkeepers
    minimum = 1 if remaining >= len(OUTFIELD_POSITIONS) else 0
    pool = remaining - minimum * len(OUTFIELD_POSITIONS)

    shares = [quota.share(position) for position in OUTFIELD_POSITIONS]
    share_total = sum(shares)
    exact = [pool * share / share_total for share in shares]
    counts = [minimum + math.floor(value) for value in exact]
    leftover = remaining - sum(counts)
    by_remainder = sorted(range(len(exact)), key=lambda i: (-(exact[i] - math.floor(exact[i])), i))
    for i in by_remainder[:leftover]:
        counts[i] += 1

    return PositionCounts(
        goalkeepers=goalkeepers,
        defenders=counts[0],
        midfielders=counts[1],
        forwards=counts[2],
    )


def build_distribution_report(values: Sequence[int]) -> LeagueDistributionReport:
    if not values:
        raise DataError("cannot summarise an empty league", entity_id="league", error_code="EMPTY_LEAGUE")
    ordered = tuple(int(v) for v in values)
    total = sum(ordered)
    low = min(ordered)
    high = max(ordered)
    return LeagueDistributionReport(
        values=ordered,
        total=total,
        average=total / len(ordered),
        min=low,
        max=high,
        spread=high - low,
    )


class LeagueGenerator:
    """Runs one full, seeded generation pass over a league.

    Every call builds its own random source from the seed, so a generator can be
    shared between callers without sharing draws. Each team draws from its own
    ``team:<id>`` substream, so a failed team never shifts its siblings' values.
    """

    def __init__(self, config: LeagueGenerationConfig, validator: LeagueValidator | None = None) -> None:
        self._config = config
        self._validator = validator if validator is not None else LeagueValidator(config.policy)
        self._squad_mapper = ReputationMetricMapper(config.squad_size)
        self._stadium_mapper = ReputationMetricMapper(config.stadium_capacity)

    @property
    def config(self) -> LeagueGenerationConfig:
        return self._config

    def generate(self, seed: int, reputations: Sequence[float] | None = None) -> LeagueGenerationResult:
        config = self._config
        source = seeded_random(seed)
        if reputations is None:
            reputations = derive_reputation_spread(
                config.team_count,
                config.min_reputation,
                config.max_reputation,
                config.competition_balance,
                source.spawn("reputation"),
                config.policy,
            )
        team_ids = [f"T{index + 1:02d}" for index in range(len(reputations))]

        teams: list[GeneratedTeam] = []
        failures: list[EntityFailure] = []
        audited_ids: list[str] = []
        audited_reputations: list[float] = []
        squad_sizes: list[int] = []
        positions: dict[str, PositionCounts] = {}

        for index, (team_id, reputation) in enumerate(zip(team_ids, reputations), start=1):
            team_source = source.spawn(f"team:{team_id}")
            try:
                squad_size = self._squad_mapper.derive(reputation, team_source, entity_id=team_id)
            except DataError as exc:
                failures.append(self._record_failure(team_id, exc))
                continue
            audited_ids.append(team_id)
            audited_reputations.append(reputation)
            squad_sizes.append(squad_size)
            try:
                counts = derive_positioned_squad(
                    squad_size, config.position_quota, config.policy, entity_id=team_id
                )
            except DataError as exc:
                failures.append(self._record_failure(team_id, exc))
                continue
            positions[team_id] = counts
            capacity = self._stadium_mapper.derive(reputation, team_source, entity_id=team_id)
            teams.append(
                GeneratedTeam(
                    team_id=team_id,
                    name=f"Team {index}",
                    reputation=int(reputation),
                    squad_size=squad_size,
                    stadium_capacity=capacity,
                    positions=counts,
                    players=build_squad(
                        team_id=team_id,
                        reputation=reputation,
                        positions=counts,
                        skill_config=config.player_skill,
                        skill_spread=config.skill_spread,
                        age_bands=config.age_bands,
                        source=team_source,
                    ),
                )
            )

        report = build_distribution_report(squad_sizes) if squad_sizes else None
        issues = self._validator.audit(
            report=report,
            team_ids=audited_ids,
            reputations=audited_reputations,
            squad_sizes=squad_sizes,
            squad_config=config.squad_size,
            positions=positions,
        )
        _log.info(
            "generated league seed=%s teams=%d failures=%d issues=%d",
            seed,
            len(teams),
            len(failures),
            len(issues),
        )
        return LeagueGenerationResult(seed=seed, teams=teams, failures=failures, report=report, issues=issues)

    def _record_failure(self, team_id: str, exc: DataError) -> EntityFailure:
        _log.warning("team %s skipped: %s", team_id, exc)
        return EntityFailure(entity_id=team_id, error_code=exc.error_code, message=str(exc))
