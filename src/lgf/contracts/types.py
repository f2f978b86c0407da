from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Mapping, Protocol, Sequence, TypeVar

T = TypeVar("T", bound=Hashable)


class MetricKind(str, Enum):
    SQUAD_SIZE = "squad_size"
    STADIUM_CAPACITY = "stadium_capacity"
    PLAYER_SKILL = "player_skill"


class Position(str, Enum):
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class IssueKind(str, Enum):
    NO_VARIATION = "no_variation"
    MISSING_GOALKEEPER = "missing_goalkeeper"
    EXCESSIVE_DEVIATION = "excessive_deviation"
    SQUAD_BELOW_FLOOR = "squad_below_floor"


class RandomSource(Protocol):
    def rand(self) -> float: ...

    def randbelow(self, n: int) -> int: ...

    def randint(self, a: int, b: int) -> int: ...

    def chance(self, probability: float) -> bool: ...

    def standard_normal(self) -> float: ...

    def weighted_choice(self, weights: Mapping[T, float]) -> T: ...

    def choice(self, items: Sequence[Any]) -> Any: ...

    def shuffle(self, items: list[Any]) -> None: ...

    def spawn(self, substream_id: str) -> RandomSource: ...


class ConfigError(ValueError):
    def __init__(self, message: str, field_path: str = "") -> None:
        super().__init__(f"{field_path}: {message}" if field_path else message)
        self.field_path = field_path


class DataError(ValueError):
    def __init__(self, message: str, *, entity_id: str = "", error_code: str = "DATA_ERROR") -> None:
        super().__init__(message)
        self.entity_id = entity_id
        self.error_code = error_code


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    min_value: float
    max_value: float
    average_value: float
    reputation_influence: float
    random_variation: float
    kind: MetricKind | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        path = self.kind.value if self.kind is not None else "generation_config"
        if self.min_value > self.max_value:
            raise ConfigError(
                f"min_value {self.min_value} is greater than max_value {self.max_value}",
                f"{path}.min_value",
            )
        if not (self.min_value <= self.average_value <= self.max_value):
            raise ConfigError(
                f"average_value {self.average_value} outside [{self.min_value}, {self.max_value}]",
                f"{path}.average_value",
            )
        if not (0.0 <= self.reputation_influence <= 1.0):
            raise ConfigError("reputation_influence must be in [0, 1]", f"{path}.reputation_influence")
        if not (0.0 <= self.random_variation <= 1.0):
            raise ConfigError("random_variation must be in [0, 1]", f"{path}.random_variation")


@dataclass(frozen=True, slots=True)
class PositionQuota:
    goalkeeper: float = 0.1
    defender: float = 0.35
    midfielder: float = 0.35
    forward: float = 0.2

    def __post_init__(self) -> None:
        for position in Position:
            if self.share(position) <= 0:
                raise ConfigError("position shares must be positive", f"position_quota.{position.value}")

    def share(self, position: Position) -> float:
        return float(getattr(self, position.value))

    def total(self) -> float:
        return sum(self.share(position) for position in Position)


@dataclass(frozen=True, slots=True)
class GenerationPolicy:
    balance_threshold: float = 0.8
    ramp_jitter: int = 5
    deviation_threshold: float = 5.0
    squad_floor: int = 11

    def __post_init__(self) -> None:
        if not (0.0 <= self.balance_threshold <= 1.0):
            raise ConfigError("balance_threshold must be in [0, 1]", "policy.balance_threshold")
        if self.ramp_jitter < 0:
            raise ConfigError("ramp_jitter must be non-negative", "policy.ramp_jitter")
        if self.deviation_threshold < 0:
            raise ConfigError("deviation_threshold must be non-negative", "policy.deviation_threshold")
        if self.squad_floor < 1:
            raise ConfigError("squad_floor must be at least 1", "policy.squad_floor")


@dataclass(frozen=True, slots=True)
class LeagueGenerationConfig:
    team_count: int
    min_reputation: int
    max_reputation: int
    competition_balance: float
    squad_size: GenerationConfig
    stadium_capacity: GenerationConfig
    player_skill: GenerationConfig
    skill_spread: float = 8.0
    position_quota: PositionQuota = field(default_factory=PositionQuota)
    age_bands: Mapping[tuple[int, int], float] = field(default_factory=dict)
    policy: GenerationPolicy = field(default_factory=GenerationPolicy)

    def __post_init__(self) -> None:
        if self.team_count < 0:
            raise ConfigError("team_count must be non-negative", "team_count")
        if not (0 <= self.min_reputation <= self.max_reputation <= 100):
            raise ConfigError("reputation bounds must satisfy 0 <= min <= max <= 100", "min_reputation")
        if not (0.0 <= self.competition_balance <= 1.0):
            raise ConfigError("competition_balance must be in [0, 1]", "competition_balance")
        if not (self.skill_spread >= 0) or math.isinf(self.skill_spread):
            raise ConfigError("skill_spread must be a finite non-negative number", "skill_spread")
        if not self.age_bands:
            raise ConfigError("at least one age band is required", "age_bands")
        for (low, high), weight in self.age_bands.items():
            if low > high:
                raise ConfigError(f"age band {low}-{high} is inverted", "age_bands")
            if not (weight >= 0) or math.isinf(weight):
                raise ConfigError(f"age band {low}-{high} weight must be a finite non-negative number", "age_bands")
        if sum(self.age_bands.values()) <= 0:
            raise ConfigError("age band weights must not all be zero", "age_bands")


@dataclass(frozen=True, slots=True)
class PositionCounts:
    goalkeepers: int
    defenders: int
    midfielders: int
    forwards: int

    @property
    def total(self) -> int:
        return self.goalkeepers + self.defenders + self.midfielders + self.forwards

    def count(self, position: Position) -> int:
        return {
            Position.GOALKEEPER: self.goalkeepers,
            Position.DEFENDER: self.defenders,
            Position.MIDFIELDER: self.midfielders,
            Position.FORWARD: self.forwards,
        }[position]


@dataclass(slots=True)
class GeneratedPlayer:
    player_id: str
    team_id: str
    position: Position
    skill: int
    age: int


@dataclass(slots=True)
class GeneratedTeam:
    team_id: str
    name: str
    reputation: int
    squad_size: int
    stadium_capacity: int
    positions: PositionCounts
    players: list[GeneratedPlayer] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class EntityFailure:
    entity_id: str
    error_code: str
    message: str


@dataclass(frozen=True, slots=True)
class LeagueDistributionReport:
    values: tuple[int, ...]
    total: int
    average: float
    min: int
    max: int
    spread: int


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    kind: IssueKind
    severity: Severity
    component_tag: str
    entity_id: str
    message: str


@dataclass(slots=True)
class LeagueGenerationResult:
    seed: int
    teams: list[GeneratedTeam]
    failures: list[EntityFailure]
    report: LeagueDistributionReport | None
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures and not any(i.severity == Severity.ERROR for i in self.issues)

    def to_payload(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "teams": [
                {
                    "team_id": team.team_id,
                    "name": team.name,
                    "reputation": team.reputation,
                    "squad_size": team.squad_size,
                    "stadium_capacity": team.stadium_capacity,
                    "positions": {position.value: team.positions.count(position) for position in Position},
                    "players": [
                        {
                            "player_id": player.player_id,
                            "position": player.position.value,
                            "skill": player.skill,
                            "age": player.age,
                        }
                        for player in team.players
                    ],
                }
                for team in self.teams
            ],
            "failures": [
                {"entity_id": f.entity_id, "error_code": f.error_code, "message": f.message}
                for f in self.failures
            ],
            "issues": [
                {
                    "kind": i.kind.value,
                    "severity": i.severity.value,
                    "component_tag": i.component_tag,
                    "entity_id": i.entity_id,
                    "message": i.message,
                }
                for i in self.issues
            ],
        }


@dataclass(slots=True)
class CalibrationRunRequest:
    sample_count: int
    seed_start: int = 0
    band_width: int = 10


@dataclass(frozen=True, slots=True)
class CalibrationBand:
    band_low: int
    samples: int
    mean_squad_size: float
    stddev_squad_size: float
    mean_stadium_capacity: float


@dataclass(slots=True)
class CalibrationRunResult:
    run_id: str
    seed_start: int
    sample_count: int
    team_samples: int
    failure_count: int
    no_variation_runs: int
    bands: list[CalibrationBand] = field(default_factory=list)
