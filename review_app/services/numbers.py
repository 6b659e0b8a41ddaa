from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

TENTH = Decimal("0.1")


def _d(x) -> Decimal:
    """Convert to Decimal safely."""
    return Decimal(str(x))


def round1(x) -> float:
    """Round to 1 decimal place, halves away from zero (2.25 -> 2.3, -1.25 -> -1.3)."""
    return float(_d(x).quantize(TENTH, rounding=ROUND_HALF_UP))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, None for an empty input."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def weighted_mean(pairs: Iterable[tuple]) -> float:
    """Σ(w·v) / Σw over (weight, value) pairs; 0 when Σw is 0."""
    pairs = list(pairs)
    total_weight = sum(w for w, _ in pairs)
    if not total_weight:
        return 0.0
    return sum(w * v for w, v in pairs) / total_weight


def round0(x) -> int:
    """Round to a whole number, halves away from zero (66.5 -> 67)."""
    return int(_d(x).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
