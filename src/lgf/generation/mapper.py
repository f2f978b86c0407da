from __future__ import annotations

import logging

from lgf.contracts import DataError, GenerationConfig, RandomSource
from lgf.core.distributions import clamp, clamp_round

_log = logging.getLogger("lgf.mapper")

REPUTATION_MIN = 0
REPUTATION_MAX = 100


def check_reputation(reputation: float, entity_id: str = "") -> None:
    if not (REPUTATION_MIN <= reputation <= REPUTATION_MAX):
        raise DataError(
            f"reputation {reputation} outside [{REPUTATION_MIN}, {REPUTATION_MAX}]",
            entity_id=entity_id,
            error_code="REPUTATION_OUT_OF_RANGE",
        )


def expected_metric(reputation: float, config: GenerationConfig) -> float:
    """Noiseless, reputation-biased value of a metric, clamped into its bounds."""
    check_reputation(reputation)
    reputation_factor = (reputation / 100.0) * config.reputation_influence
    base = config.average_value + reputation_factor * (config.max_value - config.average_value)
    return clamp(base, config.min_value, config.max_value)


def map_reputation(reputation: float, config: GenerationConfig, source: RandomSource) -> int:
    """Derive one integer metric from a reputation.

    Noise is symmetric around the reputation-biased base and its magnitude is
    ``random_variation * average_value``, so widening ``min..max`` alone does
    not widen the noise. Exactly one uniform draw is consumed per call, even
    when ``random_variation`` is zero.
    """
    check_reputation(reputation)
    reputation_factor = (reputation / 100.0) * config.reputation_influence
    base = config.average_value + reputation_factor * (config.max_value - config.average_value)
    variation_span = config.random_variation * config.average_value
    noise = (source.rand() - 0.5) * 2.0 * variation_span
    return clamp_round(base + noise, config.min_value, config.max_value)


class ReputationMetricMapper:
    def __init__(self, config: GenerationConfig) -> None:
        self._config = config

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def label(self) -> str:
        return self._config.kind.value if self._config.kind is not None else "metric"

    def derive(self, reputation: float, source: RandomSource, *, entity_id: str = "") -> int:
        try:
            value = map_reputation(reputation, self._config, source)
        except DataError as exc:
            raise DataError(str(exc), entity_id=entity_id, error_code=exc.error_code) from exc
        _log.debug("%s %s reputation=%s -> %d", self.label, entity_id or "-", reputation, value)
        return value

    def expected(self, reputation: float) -> float:
        return expected_metric(reputation, self._config)
