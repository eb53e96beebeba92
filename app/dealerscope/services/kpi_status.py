"""KPI status banding.

Variance is expressed so that a positive number is always favourable:
percentage KPIs compare in points, dollar and unit KPIs in percent of target,
and ``below`` KPIs (lower is better) have the sign flipped.

* variance >= 0: green (on target)
* -tolerance <= variance < 0: yellow (at risk)
* variance < -tolerance: red (off target)
* no actual or no target for the period: missing
"""
from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

DEFAULT_TOLERANCE = 10.0

METRIC_TYPES = ("dollar", "percentage", "unit")
TARGET_DIRECTIONS = ("above", "below")


class KpiStatus(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    MISSING = "missing"


def compute_variance(actual: float, target: float, *, metric_type: str, target_direction: str = "above") -> float:
    if metric_type == "percentage" or target == 0:
        variance = actual - target
    else:
        variance = (actual - target) / abs(target) * 100
    if target_direction == "below":
        variance = -variance
    return round(variance, 4)


def classify_variance(variance: float, *, tolerance: float = DEFAULT_TOLERANCE) -> KpiStatus:
    if variance >= 0:
        return KpiStatus.GREEN
    if variance >= -tolerance:
        return KpiStatus.YELLOW
    return KpiStatus.RED


def evaluate(
    actual: float | None,
    target: float | None,
    *,
    metric_type: str,
    target_direction: str = "above",
    tolerance: float = DEFAULT_TOLERANCE,
) -> tuple[float | None, KpiStatus]:
    if actual is None or target is None:
        return None, KpiStatus.MISSING
    variance = compute_variance(actual, target, metric_type=metric_type, target_direction=target_direction)
    return variance, classify_variance(variance, tolerance=tolerance)


def summarize(statuses: Iterable[KpiStatus]) -> dict[str, int]:
    counts = {status.value: 0 for status in KpiStatus}
    for status in statuses:
        counts[KpiStatus(status).value] += 1
    return counts
