from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

import duckdb

from lgf.contracts import (
    CalibrationBand,
    CalibrationRunRequest,
    CalibrationRunResult,
    IssueKind,
    LeagueGenerationConfig,
)
from lgf.generation import LeagueGenerator

_log = logging.getLogger("lgf.calibration")

SAMPLES_TABLE = "dev_calibration_samples"
RUNS_TABLE = "dev_calibration_runs"


class CalibrationService:
    """Dev-only batch harness: generate many seeded leagues and summarise the distributions in DuckDB."""

    def __init__(self, *, config: LeagueGenerationConfig, duckdb_path: Path | None = None) -> None:
        self._generator = LeagueGenerator(config)
        if duckdb_path is not None:
            duckdb_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = duckdb.connect(str(duckdb_path) if duckdb_path is not None else ":memory:")
        self._initialize_schema()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> CalibrationService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run_batch(self, request: CalibrationRunRequest) -> CalibrationRunResult:
        if request.sample_count <= 0:
            raise ValueError("sample_count must be > 0")
        if request.band_width <= 0:
            raise ValueError("band_width must be > 0")

        run_id = f"cal_{uuid4().hex[:12]}"
        rows: list[tuple[str, int, str, int, int, int, int]] = []
        failure_count = 0
        no_variation_runs = 0
        for offset in range(request.sample_count):
            seed = request.seed_start + offset
            result = self._generator.generate(seed)
            failure_count += len(result.failures)
            if any(issue.kind == IssueKind.NO_VARIATION for issue in result.issues):
                no_variation_runs += 1
            for team in result.teams:
                band = (team.reputation // request.band_width) * request.band_width
                rows.append(
                    (run_id, seed, team.team_id, team.reputation, band, team.squad_size, team.stadium_capacity)
                )

        if rows:
            self._conn.executemany(
                f"""
                INSERT INTO {SAMPLES_TABLE}(
                    run_id, seed, team_id, reputation, reputation_band, squad_size, stadium_capacity
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
        self._conn.execute(
            f"""
            INSERT INTO {RUNS_TABLE}(
                run_id, seed_start, sample_count, team_samples, failure_count, no_variation_runs
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            [run_id, request.seed_start, request.sample_count, len(rows), failure_count, no_variation_runs],
        )

        band_rows = self._conn.execute(
            f"""
            SELECT
                reputation_band,
                COUNT(*) AS samples,
                AVG(squad_size) AS mean_squad_size,
                COALESCE(STDDEV_POP(squad_size), 0.0) AS stddev_squad_size,
                AVG(stadium_capacity) AS mean_stadium_capacity
            FROM {SAMPLES_TABLE}
            WHERE run_id = ?
            GROUP BY reputation_band
            ORDER BY reputation_band
            """,
            [run_id],
        ).fetchall()
        bands = [
            CalibrationBand(
                band_low=int(band),
                samples=int(samples),
                mean_squad_size=float(mean_squad),
                stddev_squad_size=float(stddev_squad),
                mean_stadium_capacity=float(mean_capacity),
            )
            for band, samples, mean_squad, stddev_squad, mean_capacity in band_rows
        ]
        _log.info(
            "calibration run %s: %d leagues, %d team samples, %d no-variation leagues",
            run_id,
            request.sample_count,
            len(rows),
            no_variation_runs,
        )
        return CalibrationRunResult(
            run_id=run_id,
            seed_start=request.seed_start,
            sample_count=request.sample_count,
            team_samples=len(rows),
            failure_count=failure_count,
            no_variation_runs=no_variation_runs,
            bands=bands,
        )

    def export_reports(self, output_dir: Path) -> tuple[list[Path], dict[str, int]]:
        output_dir.mkdir(parents=True, exist_ok=True)
        outputs: list[Path] = []
        row_counts: dict[str, int] = {}
        for table in (RUNS_TABLE, SAMPLES_TABLE):
            count_row = self._conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
            row_counts[table] = int(count_row[0]) if count_row is not None else 0
            stem = output_dir / table
            csv_path = stem.with_suffix(".csv")
            parquet_path = stem.with_suffix(".parquet")
            self._conn.execute(f"COPY (SELECT * FROM {table}) TO '{csv_path.as_posix()}' (HEADER, DELIMITER ',')")
            self._conn.execute(f"COPY (SELECT * FROM {table}) TO '{parquet_path.as_posix()}' (FORMAT PARQUET)")
            outputs.extend([csv_path, parquet_path])
        return outputs, row_counts

    def _initialize_schema(self) -> None:
        self._conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {RUNS_TABLE} (
                run_id VARCHAR PRIMARY KEY,
                seed_start BIGINT,
                sample_count INTEGER,
                team_samples INTEGER,
                failure_count INTEGER,
                no_variation_runs INTEGER,
                recorded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        self._conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {SAMPLES_TABLE} (
                run_id VARCHAR NOT NULL,
                seed BIGINT NOT NULL,
                team_id VARCHAR NOT NULL,
                reputation INTEGER NOT NULL,
                reputation_band INTEGER NOT NULL,
                squad_size INTEGER NOT NULL,
                stadium_capacity INTEGER NOT NULL,
                PRIMARY KEY (run_id, seed, team_id)
            )
            """
        )
