from __future__ import annotations

from lgf.contracts import GenerationPolicy, IssueKind, PositionCounts, Severity
from lgf.generation import LeagueValidator, build_distribution_report
from tests.helpers import squad_config


def _audit(validator: LeagueValidator, sizes: list[int], reputations: list[int], positions=None):
    team_ids = [f"T{i + 1:02d}" for i in range(len(sizes))]
    return validator.audit(
        report=build_distribution_report(sizes),
        team_ids=team_ids,
        reputations=reputations,
        squad_sizes=sizes,
        squad_config=squad_config(reputation_influence=0.0),
        positions=positions,
    )


def test_flags_league_with_identical_squad_sizes() -> None:
    issues = _audit(LeagueValidator(), [25, 25, 25, 25], [10, 40, 70, 90])
    assert [i.kind for i in issues] == [IssueKind.NO_VARIATION]
    assert issues[0].severity == Severity.WARNING
    assert issues[0].component_tag == "league"


def test_single_team_league_is_not_flagged_for_variation() -> None:
    assert _audit(LeagueValidator(), [25], [50]) == []


def test_flags_missing_goalkeeper() -> None:
    positions = {
        "T01": PositionCounts(goalkeepers=0, defenders=8, midfielders=8, forwards=8),
        "T02": PositionCounts(goalkeepers=2, defenders=8, midfielders=8, forwards=7),
    }
    issues = _audit(LeagueValidator(), [24, 25], [50, 50], positions)
    missing = [i for i in issues if i.kind == IssueKind.MISSING_GOALKEEPER]
    assert [i.entity_id for i in missing] == ["T01"]
    assert missing[0].severity == Severity.ERROR


def test_deviation_threshold_is_strict() -> None:
    issues = _audit(LeagueValidator(), [30, 31, 19], [50, 50, 50])
    flagged = [i.entity_id for i in issues if i.kind == IssueKind.EXCESSIVE_DEVIATION]
    assert flagged == ["T02", "T03"]


def test_deviation_threshold_is_tunable() -> None:
    validator = LeagueValidator(GenerationPolicy(deviation_threshold=10.0))
    issues = _audit(validator, [31, 19], [50, 50])
    assert not any(i.kind == IssueKind.EXCESSIVE_DEVIATION for i in issues)


def test_flags_squad_below_floor() -> None:
    issues = _audit(LeagueValidator(), [10, 25], [50, 50])
    below = [i for i in issues if i.kind == IssueKind.SQUAD_BELOW_FLOOR]
    assert [i.entity_id for i in below] == ["T01"]
    assert below[0].severity == Severity.ERROR


def test_league_level_issues_come_first() -> None:
    positions = {"T01": PositionCounts(goalkeepers=0, defenders=10, midfielders=10, forwards=11)}
    issues = _audit(LeagueValidator(), [31, 31], [0, 0], positions)
    assert issues[0].kind == IssueKind.NO_VARIATION
    assert [i.kind for i in issues[1:]] == [
        IssueKind.MISSING_GOALKEEPER,
        IssueKind.EXCESSIVE_DEVIATION,
        IssueKind.EXCESSIVE_DEVIATION,
    ]


def test_audit_never_raises_for_data_anomalies() -> None:
    issues = _audit(LeagueValidator(), [0, 500], [-20, 250])
    kinds = {i.kind for i in issues}
    assert IssueKind.SQUAD_BELOW_FLOOR in kinds
    assert IssueKind.EXCESSIVE_DEVIATION not in kinds
