from __future__ import annotations

import json
from pathlib import Path

import pytest

from lgf.cli import main
from tests.helpers import DEFAULT_CONFIG_PAYLOAD


def test_cli_prints_summary(capsys) -> None:
    code = main(["--seed", "42", "--teams", "4"])
    out = capsys.readouterr().out
    assert code == 0
    assert "League seed 42: 4 teams generated, 0 failed" in out
    assert "- T04 " in out
    assert "Squad sizes:" in out


def test_cli_json_payload_is_reproducible(capsys) -> None:
    main(["--seed", "3", "--reputations", "90,70,50", "--json"])
    first = json.loads(capsys.readouterr().out)
    main(["--seed", "3", "--reputations", "90,70,50", "--json"])
    second = json.loads(capsys.readouterr().out)
    assert first == second
    assert [team["reputation"] for team in first["teams"]] == [90, 70, 50]


def test_cli_reads_config_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "league.json"
    path.write_text(json.dumps({**DEFAULT_CONFIG_PAYLOAD, "team_count": 3}), encoding="utf-8")
    assert main(["--seed", "1", "--config", str(path)]) == 0
    assert "3 teams generated" in capsys.readouterr().out


def test_cli_reports_config_errors(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"squad_size": {"min_value": 50}}), encoding="utf-8")
    assert main(["--seed", "1", "--config", str(path)]) == 2
    assert "squad_size.min_value" in capsys.readouterr().err
    assert main(["--seed", "1", "--config", str(tmp_path / "missing.json")]) == 2


def test_cli_exit_code_signals_failed_teams(capsys) -> None:
    assert main(["--seed", "1", "--reputations", "50,150"]) == 1
    assert "REPUTATION_OUT_OF_RANGE" in capsys.readouterr().out


def test_cli_rejects_unknown_log_level(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--seed", "1", "--log-level", "bogus"])
    assert excinfo.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_cli_accepts_lowercase_log_level(capsys) -> None:
    assert main(["--seed", "3", "--log-level", "debug"]) == 0
    assert "League seed 3" in capsys.readouterr().out
