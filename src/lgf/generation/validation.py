from __future__ import annotations

import logging
from typing import Mapping, Sequence

from lgf.contracts import (
    GenerationConfig,
    GenerationPolicy,
    IssueKind,
    LeagueDistributionReport,
    PositionCounts,
    Severity,
    ValidationIssue,
)
from lgf.generation.mapper import expected_metric

_log = logging.getLogger("lgf.validation")


class LeagueValidator:
    """Post-generation audit. Reports anomalies as issues and never raises for them."""

    def __init__(self, policy: GenerationPolicy | None = None) -> None:
        self._policy = policy if policy is not None else GenerationPolicy()

    @property
    def policy(self) -> GenerationPolicy:
        return self._policy

    def audit(
        self,
        *,
        report: LeagueDistributionReport | None,
        team_ids: Sequence[str],
        reputations: Sequence[float],
        squad_sizes: Sequence[int],
        squad_config: GenerationConfig,
        positions: Mapping[str, PositionCounts] | None = None,
    ) -> list[ValidationIssue]:
        if not (len(team_ids) == len(reputations) == len(squad_sizes)):
            raise ValueError("team_ids, reputations and squad_sizes must be positionally aligned")
        positions = positions or {}
        issues: list[ValidationIssue] = []
        if report is not None:
            issues.extend(self.check_variation(report))
        for team_id, reputation, size in zip(team_ids, reputations, squad_sizes):
            issues.extend(self.check_squad_floor(team_id, size))
            if team_id in positions:
                issues.extend(self.check_goalkeeper(team_id, positions[team_id]))
            issues.extend(self.check_deviation(team_id, reputation, size, squad_config))
        for issue in issues:
            _log.warning("%s [%s] %s: %s", issue.kind.value, issue.severity.value, issue.entity_id, issue.message)
        return issues

    def check_variation(self, report: LeagueDistributionReport) -> list[ValidationIssue]:
        if len(report.values) < 2 or report.spread != 0:
            return []
        return [
            ValidationIssue(
                kind=IssueKind.NO_VARIATION,
                severity=Severity.WARNING,
                component_tag="league",
                entity_id="league",
                message=f"all {len(report.values)} derived squad sizes equal {report.min}",
            )
        ]

    def check_squad_floor(self, team_id: str, squad_size: int) -> list[ValidationIssue]:
        if squad_size >= self._policy.squad_floor:
            return []
        return [
            ValidationIssue(
                kind=IssueKind.SQUAD_BELOW_FLOOR,
                severity=Severity.ERROR,
                component_tag="squad_size",
                entity_id=team_id,
                message=f"squad size {squad_size} is below the fieldable floor {self._policy.squad_floor}",
            )
        ]

    def check_goalkeeper(self, team_id: str, positions: PositionCounts) -> list[ValidationIssue]:
        if positions.goalkeepers >= 1:
            return []
        return [
            ValidationIssue(
                kind=IssueKind.MISSING_GOALKEEPER,
                severity=Severity.ERROR,
                component_tag="positions",
                entity_id=team_id,
                message="squad has no goalkeeper",
            )
        ]

    def check_deviation(
        self,
        entity_id: str,
        reputation: float,
        value: int,
        config: GenerationConfig,
    ) -> list[ValidationIssue]:
        if not (0 <= reputation <= 100):
            return []
        expected = expected_metric(reputation, config)
        deviation = abs(value - expected)
        if deviation <= self._policy.deviation_threshold:
            return []
        tag = config.kind.value if config.kind is not None else "metric"
        return [
            ValidationIssue(
                kind=IssueKind.EXCESSIVE_DEVIATION,
                severity=Severity.WARNING,
                component_tag=tag,
                entity_id=entity_id,
                message=(
                    f"value {value} deviates {deviation:.2f} from expected {expected:.2f} "
                    f"(threshold {self._policy.deviation_threshold})"
                ),
            )
        ]
