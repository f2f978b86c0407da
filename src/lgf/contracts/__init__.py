from .types import (
    CalibrationBand,
    CalibrationRunRequest,
    CalibrationRunResult,
    ConfigError,
    DataError,
    EntityFailure,
    GeneratedPlayer,
    GeneratedTeam,
    GenerationConfig,
    GenerationPolicy,
    IssueKind,
    LeagueDistributionReport,
    LeagueGenerationConfig,
    LeagueGenerationResult,
    MetricKind,
    Position,
    PositionCounts,
    PositionQuota,
    RandomSource,
    Severity,
    ValidationIssue,
)

__all__ = [
    "CalibrationBand",
    "CalibrationRunRequest",
    "CalibrationRunResult",
    "ConfigError",
    "DataError",
    "EntityFailure",
    "GeneratedPlayer",
    "GeneratedTeam",
    "GenerationConfig",
    "GenerationPolicy",
    "IssueKind",
    "LeagueDistributionReport",
    "LeagueGenerationConfig",
    "LeagueGenerationResult",
    "MetricKind",
    "Position",
    "PositionCounts",
    "PositionQuota",
    "RandomSource",
    "Severity",
    "ValidationIssue",
]
