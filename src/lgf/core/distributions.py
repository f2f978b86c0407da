from __future__ import annotations

import math

from lgf.contracts import RandomSource


def box_muller(u1: float, u2: float) -> tuple[float, float]:
    """Map two uniforms (``u1`` in (0, 1]) onto two independent standard-normal deviates."""
    if u1 <= 0.0:
        raise ValueError("box_muller requires u1 > 0")
    radius = math.sqrt(-2.0 * math.log(u1))
    angle = 2.0 * math.pi * u2
    return radius * math.cos(angle), radius * math.sin(angle)


def gaussian(mean: float, std_dev: float, source: RandomSource) -> float:
    return mean + std_dev * source.standard_normal()


def round_half_away(x: float) -> int:
    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))


def clamp(x: float, low: float, high: float) -> float:
    if low > high:
        raise ValueError(f"clamp bounds inverted: [{low}, {high}]")
    return max(low, min(high, x))


def clamp_round(x: float, min_value: float, max_value: float) -> int:
    low = math.ceil(min_value)
    high = math.floor(max_value)
    if low > high:
        raise ValueError(f"no integer inside [{min_value}, {max_value}]")
    return int(clamp(round_half_away(x), low, high))


def linear_interpolate(t: float, a: float, b: float) -> float:
    return a + t * (b - a)
