"""
Weight helpers for weight-priced products.

Weight labels are free text typed into the catalog ("1.5 кг", "2 kg", "≈3кг").
Only the first number matters; labels without a number count as 1 kg so an
unparseable label never blocks a sale.
"""

import math
import re

BASE_WEIGHT_PATTERN = re.compile(r"(\d+\.?\d*)")

DEFAULT_BASE_WEIGHT = 1.0
MIN_CUSTOM_WEIGHT = 2.5  # kg, smallest cake we bake to order
WEIGHT_STEP = 0.5  # kg

# Floats at or above 2**52 have no fractional part
_EXACT_STEP_LIMIT = 2.0 ** 52


def parse_base_weight(label: str | None) -> float:
    """
    Extract the base weight in kg from a weight label.

    Returns DEFAULT_BASE_WEIGHT when the label is empty or has no number.

    Examples:
        >>> parse_base_weight("1.5 кг")
        1.5
        >>> parse_base_weight("3кг")
        3.0
        >>> parse_base_weight("на заказ")
        1.0
    """
    if not label:
        return DEFAULT_BASE_WEIGHT
    match = BASE_WEIGHT_PATTERN.search(label)
    if match is None:
        return DEFAULT_BASE_WEIGHT
    return float(match.group(1))


def normalize_custom_weight(weight: float) -> float:
    """
    Snap a requested weight to the nearest WEIGHT_STEP and apply the
    MIN_CUSTOM_WEIGHT floor. Exact halves round up (2.75 -> 3.0).

    NaN and infinite inputs fall back to MIN_CUSTOM_WEIGHT.
    """
    if not math.isfinite(weight):
        return MIN_CUSTOM_WEIGHT
    if abs(weight) >= _EXACT_STEP_LIMIT:
        # Already a whole number, dividing by the step would overflow near the float maximum
        return max(weight, MIN_CUSTOM_WEIGHT)
    steps = math.floor(weight / WEIGHT_STEP + 0.5)
    return max(steps * WEIGHT_STEP, MIN_CUSTOM_WEIGHT)
