from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from lgf.contracts import ConfigError, DataError, LeagueGenerationResult
from lgf.core import default_league_config, load_league_config_file
from lgf.generation import LeagueGenerator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_reputations(raw: str) -> list[int]:
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"reputations must be comma-separated integers: {raw}") from exc


def _print_summary(result: LeagueGenerationResult) -> None:
    print(f"League seed {result.seed}: {len(result.teams)} teams generated, {len(result.failures)} failed")
    for team in result.teams:
        p = team.positions
        print(
            f"- {team.team_id} rep={team.reputation} squad={team.squad_size} "
            f"(GK {p.goalkeepers} / DF {p.defenders} / MF {p.midfielders} / FW {p.forwards}) "
            f"stadium={team.stadium_capacity}"
        )
    for failure in result.failures:
        print(f"! {failure.entity_id} {failure.error_code}: {failure.message}")
    if result.report is not None:
        r = result.report
        print(f"Squad sizes: total={r.total} avg={r.average:.2f} min={r.min} max={r.max} spread={r.spread}")
    if result.issues:
        print("Issues:")
        for issue in result.issues:
            print(f"- [{issue.severity.value}] {issue.kind.value} {issue.entity_id}: {issue.message}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="League Forge: reputation-driven league dataset generator")
    parser.add_argument("--seed", type=int, required=True, help="seed for the generation run")
    parser.add_argument("--config", type=Path, default=None, help="JSON league config; defaults when omitted")
    parser.add_argument("--teams", type=int, default=None, help="override team_count from the config")
    parser.add_argument(
        "--reputations",
        type=_parse_reputations,
        default=None,
        help="comma-separated team reputations; skips reputation spread generation",
    )
    parser.add_argument("--json", action="store_true", help="print the simulation payload as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_league_config_file(args.config) if args.config else default_league_config()
        if args.teams is not None:
            config = dataclasses.replace(config, team_count=args.teams)
        result = LeagueGenerator(config).generate(args.seed, reputations=args.reputations)
    except (ConfigError, DataError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_payload(), indent=2))
    else:
        _print_summary(result)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
